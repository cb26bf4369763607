import logging
from datetime import datetime, timedelta

from pymongo import ASCENDING, ReturnDocument

from app.config.database import message_collection
from app.config.settings import settings
from app.models.message_models import MessageDocument
from app.services.user_service import find_user, get_users_by_ids
from app.utils.db_utils import parse_object_id, serialize_message, serialize_reactions
from app.utils.errors import NotFoundError, ServiceError
from app.utils.websocket_utils import emit

log = logging.getLogger(__name__)

DELETED_PLACEHOLDER = "Message has been deleted"


class MessageServiceError(ServiceError):
    pass


async def _require_user(username: str) -> dict:
    user = await find_user(username)
    if not user:
        raise NotFoundError("User not found")
    return user


async def _require_message(message_id: str) -> dict:
    message = await message_collection.find_one({"_id": parse_object_id(message_id)})
    if not message:
        raise NotFoundError("Message not found")
    return message


async def save_message(message: MessageDocument) -> dict:
    """Persist a message after checking that its sender exists."""
    if not await find_user(message.msgFrom):
        raise MessageServiceError("Message sender is invalid or does not exist.", 400)

    doc = message.to_document()
    result = await message_collection.insert_one(doc)
    doc["_id"] = result.inserted_id
    log.info("Saved %s message from %s", message.type, message.msgFrom)
    return doc


async def get_messages() -> list:
    cursor = message_collection.find({"type": "global"}).sort("msgDateTime", ASCENDING)
    return await cursor.to_list(None)


async def add_reaction(message_id: str, username: str, emoji: str) -> dict | None:
    """Add ``emoji`` from ``username``. Returns None if that reaction already exists."""
    user = await _require_user(username)
    message = await _require_message(message_id)

    already_reacted = any(
        r.get("emoji") == emoji and r.get("userId") == user["_id"]
        for r in message.get("reactions", [])
    )
    if already_reacted:
        return None

    updated = await message_collection.find_one_and_update(
        {"_id": message["_id"]},
        {"$push": {"reactions": {"emoji": emoji, "userId": user["_id"]}}},
        return_document=ReturnDocument.AFTER,
    )
    await emit(
        "reactionUpdate",
        {"messageId": message_id, "reactions": serialize_reactions(updated["reactions"])},
    )
    return updated


async def remove_reaction(message_id: str, username: str, emoji: str) -> dict:
    user = await _require_user(username)
    updated = await message_collection.find_one_and_update(
        {"_id": parse_object_id(message_id)},
        {"$pull": {"reactions": {"emoji": emoji, "userId": user["_id"]}}},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise NotFoundError("Message not found")
    await emit(
        "reactionUpdate",
        {"messageId": message_id, "reactions": serialize_reactions(updated.get("reactions"))},
    )
    return updated


async def get_reactions(message_id: str) -> list:
    message = await _require_message(message_id)
    reactions = message.get("reactions", [])
    usernames = await get_users_by_ids({r["userId"] for r in reactions})
    return [
        {
            "emoji": r["emoji"],
            "userId": str(r["userId"]),
            "username": usernames.get(r["userId"]),
        }
        for r in reactions
    ]


async def mark_message_as_seen(message_id: str, username: str) -> dict:
    updated = await message_collection.find_one_and_update(
        {"_id": parse_object_id(message_id)},
        {"$addToSet": {"seenBy": username}},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise NotFoundError("Message not found")
    await emit(
        "readReceiptUpdate",
        {
            "messageId": message_id,
            "seenBy": list(updated["seenBy"]),
            "seenAt": datetime.utcnow().isoformat(),
        },
    )
    return updated


async def delete_message(message_id: str, username: str) -> dict:
    """Soft-delete a message. Only its sender may do this."""
    message = await _require_message(message_id)
    if message["msgFrom"] != username:
        raise MessageServiceError("You can only delete your own messages", 403)
    if message.get("deletedAt"):
        raise MessageServiceError("Message already deleted", 400)

    # only an undeleted message may be deleted
    updated = await message_collection.find_one_and_update(
        {"_id": message["_id"], "deletedAt": None},
        {
            "$set": {
                "deletedAt": datetime.utcnow(),
                "deletedMessage": message["msg"],
                "msg": DELETED_PLACEHOLDER,
            }
        },
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise MessageServiceError("Message already deleted", 400)
    log.info("Message %s deleted by %s", message_id, username)
    await emit("messageDeleted", {"messageId": message_id, "deletedMessage": updated["msg"]})
    return updated


async def restore_message(message_id: str, now: datetime | None = None) -> dict:
    message = await message_collection.find_one({"_id": parse_object_id(message_id)})
    if not message or not message.get("deletedAt"):
        raise NotFoundError("Message not found or not deleted")

    now = now or datetime.utcnow()
    window = timedelta(minutes=settings.MESSAGE_RESTORE_WINDOW_MINUTES)
    if now - message["deletedAt"] > window:
        raise MessageServiceError("Restoration window expired", 400)

    updated = await message_collection.find_one_and_update(
        {"_id": message["_id"]},
        {
            "$set": {
                "msg": message.get("deletedMessage") or "",
                "deletedMessage": None,
                "deletedAt": None,
            }
        },
        return_document=ReturnDocument.AFTER,
    )
    log.info("Message %s restored", message_id)
    await emit("messageRestored", {"updatedMessage": serialize_message(updated)})
    return updated


async def save_file_message(file_url: str, username: str) -> dict:
    message = MessageDocument(
        msg=file_url,
        msgFrom=username,
        msgDateTime=datetime.utcnow(),
        type="direct",
    )
    return await save_message(message)
