from fastapi import APIRouter, HTTPException

from app.models.user_models import (
    SaveQuestionRequest,
    UpdateBiographyRequest,
    UpdateEmailRequest,
    UpdateUserRequest,
)
from app.services import user_service
from app.ui.session import session_store
from app.utils.crypto_utils import hash_password
from app.utils.db_utils import serialize_user
from app.utils.errors import ServiceError

router = APIRouter(prefix="/user", tags=["Users"])


async def _update(username: str, updates: dict):
    try:
        user = await user_service.update_user(username, updates)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return serialize_user(user)


@router.get("/")
async def get_users():
    users = await user_service.get_users_list()
    return {"users": [serialize_user(u) for u in users]}


@router.get("/{username}")
async def get_user(username: str):
    try:
        user = await user_service.get_user_by_username(username)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return serialize_user(user)


@router.patch("/{username}/biography")
async def update_biography(username: str, data: UpdateBiographyRequest):
    return await _update(username, {"biography": data.biography})


@router.patch("/{username}/email")
async def update_email(username: str, data: UpdateEmailRequest):
    return await _update(username, {"email": data.email})


@router.patch("/{username}")
async def update_user(username: str, data: UpdateUserRequest):
    updates = data.model_dump(exclude_none=True)
    if "password" in updates:
        updates["password"] = hash_password(updates["password"])
    return await _update(username, updates)


@router.post("/{username}/saved-questions")
async def toggle_saved_question(username: str, data: SaveQuestionRequest):
    try:
        user = await user_service.toggle_saved_question(username, data.qid)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return {"savedQuestions": user.get("savedQuestions", [])}


@router.delete("/{username}")
async def delete_user(username: str):
    try:
        user = await user_service.delete_user(username)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    session_store.close_user(username)
    return {"message": "User deleted successfully", "user": serialize_user(user)}
