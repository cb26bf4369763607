import logging

from pymongo import DESCENDING

from app.config.database import notification_collection, question_collection
from app.models.notification_models import NotificationDocument

log = logging.getLogger(__name__)


async def create_answer_notification(notification: NotificationDocument) -> dict:
    doc = notification.to_document()
    result = await notification_collection.insert_one(doc)
    doc["_id"] = result.inserted_id
    log.info("Notified %s of an answer by %s", notification.recipient, notification.answeredBy)
    return doc


async def get_user_notifications(username: str) -> list:
    """Newest first, each with the question title and answer text filled in."""
    cursor = notification_collection.find({"recipient": username}).sort("createdAt", DESCENDING)
    notifications = await cursor.to_list(None)

    question_ids = {n["questionId"] for n in notifications}
    titles = {
        q["_id"]: q.get("title")
        async for q in question_collection.find({"_id": {"$in": list(question_ids)}}, {"title": 1})
    }
    for n in notifications:
        n["question"] = {"_id": n["questionId"], "title": titles.get(n["questionId"])}
        n["answer"] = {"_id": n["answerId"], "text": n.get("text")}
    return notifications


async def clear_notifications(username: str) -> int:
    result = await notification_collection.delete_many({"recipient": username})
    log.info("Cleared %d notifications for %s", result.deleted_count, username)
    return result.deleted_count
