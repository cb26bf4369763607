from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from app.models.notification_models import CreateNotificationRequest, NotificationDocument
from app.services import notification_service
from app.utils.db_utils import serialize_notification
from app.utils.websocket_utils import emit

router = APIRouter(prefix="/notification", tags=["Notifications"])


@router.get("/getNotifications")
async def get_notifications(username: str = ""):
    if not username:
        raise HTTPException(status_code=400, detail="Username is required")
    notifications = await notification_service.get_user_notifications(username)
    return [serialize_notification(n) for n in notifications]


@router.delete("/clearNotifications")
async def clear_notifications(username: str = ""):
    if not username:
        raise HTTPException(status_code=400, detail="Username is required")
    await notification_service.clear_notifications(username)
    return {"message": "Notifications cleared successfully"}


@router.post("/createNotification")
async def create_notification(request: CreateNotificationRequest):
    if not all(request.model_dump().values()):
        raise HTTPException(status_code=400, detail="Missing required fields")
    try:
        notification = NotificationDocument(**request.model_dump())
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid ID format")

    doc = await notification_service.create_answer_notification(notification)
    result = serialize_notification(doc)
    await emit("notificationUpdate", {"notification": result})
    return result
