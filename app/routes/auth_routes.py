from fastapi import APIRouter, HTTPException

from app.models.user_models import LoginRequest, LogoutRequest, RegisterRequest, SafeUser, UserDocument
from app.services import user_service
from app.ui.session import session_store
from app.utils.crypto_utils import check_password, hash_password
from app.utils.db_utils import serialize_user
from app.utils.errors import ServiceError

router = APIRouter(prefix="/auth", tags=["Auth"])


# REGISTER USER
@router.post("/register")
async def register_user(request: RegisterRequest):
    user = UserDocument(
        username=request.username,
        password=hash_password(request.password),
        email=request.email,
        biography=request.biography,
    )
    try:
        doc = await user_service.save_user(user)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return {"message": "User registered", "user": serialize_user(doc)}


# LOGIN USER
@router.post("/login")
async def login_user(request: LoginRequest):
    user = await user_service.find_user(request.username)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if not check_password(request.password, user.get("password", "")):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    safe_user = serialize_user(user)
    session = session_store.open(SafeUser(**safe_user))
    return {"message": "Login successful", "token": session.token, "user": safe_user}


# LOGOUT USER
@router.post("/logout")
async def logout_user(request: LogoutRequest):
    if not session_store.close(request.token):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"message": "Signed out"}
