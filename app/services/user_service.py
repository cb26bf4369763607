import logging

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.config.database import user_collection
from app.models.user_models import UserDocument
from app.utils.errors import InvalidRequestError, NotFoundError, ServiceError

log = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("biography", "email", "password")


class UserServiceError(ServiceError):
    pass


async def save_user(user: UserDocument) -> dict:
    doc = user.model_dump()
    try:
        result = await user_collection.insert_one(doc)
    except DuplicateKeyError:
        log.warning("Rejected duplicate username %s", user.username)
        raise UserServiceError(f"Username {user.username} already exists", 400)
    doc["_id"] = result.inserted_id
    log.info("Created user %s", user.username)
    return doc


async def find_user(username: str) -> dict | None:
    return await user_collection.find_one({"username": username})


async def get_user_by_username(username: str) -> dict:
    user = await find_user(username)
    if not user:
        raise NotFoundError("User not found")
    return user


async def get_users_by_ids(user_ids) -> dict:
    """Resolve weak ``userId`` references to usernames in one query."""
    cursor = user_collection.find({"_id": {"$in": list(user_ids)}}, {"username": 1})
    return {doc["_id"]: doc["username"] async for doc in cursor}


async def get_users_list() -> list:
    return await user_collection.find().sort("username", 1).to_list(None)


async def update_user(username: str, updates: dict) -> dict:
    if "username" in updates:
        raise InvalidRequestError("Username cannot be changed")
    unknown = set(updates) - set(UPDATABLE_FIELDS)
    if unknown:
        raise InvalidRequestError(f"Cannot update fields: {', '.join(sorted(unknown))}")
    update_fields = {k: v for k, v in updates.items() if v is not None}
    if not update_fields:
        raise InvalidRequestError("Nothing to update")

    user = await user_collection.find_one_and_update(
        {"username": username},
        {"$set": update_fields},
        return_document=ReturnDocument.AFTER,
    )
    if not user:
        raise NotFoundError("User not found")
    log.info("Updated %s for user %s", ", ".join(sorted(update_fields)), username)
    return user


async def toggle_saved_question(username: str, qid: str) -> dict:
    user = await get_user_by_username(username)
    if qid in user.get("savedQuestions", []):
        operation = {"$pull": {"savedQuestions": qid}}
    else:
        operation = {"$addToSet": {"savedQuestions": qid}}
    return await user_collection.find_one_and_update(
        {"username": username}, operation, return_document=ReturnDocument.AFTER
    )


async def delete_user(username: str) -> dict:
    user = await user_collection.find_one_and_delete({"username": username})
    if not user:
        raise NotFoundError("User not found")
    log.info("Deleted user %s", username)
    return user
