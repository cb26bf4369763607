from fastapi import APIRouter, HTTPException

from app.models.message_models import (
    AddMessageRequest,
    DeleteMessageRequest,
    MessageDocument,
    ReactionRequest,
    SeenRequest,
    UploadFileRequest,
)
from app.services import message_service
from app.utils.db_utils import serialize_message
from app.utils.errors import ServiceError
from app.utils.websocket_utils import emit

router = APIRouter(prefix="/messaging", tags=["Messaging"])


@router.post("/addMessage")
async def add_message(request: AddMessageRequest):
    message = MessageDocument(**request.messageToAdd.model_dump(), type="global")
    try:
        doc = await message_service.save_message(message)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=f"Error when adding a message: {e.message}")

    msg = serialize_message(doc)
    await emit("messageUpdate", {"msg": msg})
    return msg


@router.get("/getMessages")
async def get_messages():
    messages = await message_service.get_messages()
    return [serialize_message(m) for m in messages]


@router.post("/addReaction")
async def add_reaction(request: ReactionRequest):
    if not request.username:
        raise HTTPException(status_code=400, detail="Username is required")
    try:
        updated = await message_service.add_reaction(request.messageId, request.username, request.emoji)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=f"Error adding reaction: {e.message}")
    if updated is None:
        return {"message": "Reaction already exists"}
    return serialize_message(updated)


@router.post("/removeReaction")
async def remove_reaction(request: ReactionRequest):
    if not request.username:
        raise HTTPException(status_code=400, detail="Username is required")
    try:
        updated = await message_service.remove_reaction(request.messageId, request.username, request.emoji)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=f"Error removing reaction: {e.message}")
    return serialize_message(updated)


@router.get("/getReactions/{message_id}")
async def get_reactions(message_id: str):
    try:
        return await message_service.get_reactions(message_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=f"Error fetching reactions: {e.message}")


@router.post("/messages/{message_id}/seen")
async def mark_message_as_seen(message_id: str, request: SeenRequest):
    try:
        updated = await message_service.mark_message_as_seen(message_id, request.username)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=f"Error marking message as seen: {e.message}")
    return {"success": True, "seenBy": updated["seenBy"]}


@router.delete("/messages/{message_id}/delete")
async def delete_message(message_id: str, request: DeleteMessageRequest):
    try:
        updated = await message_service.delete_message(message_id, request.username)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=f"Error deleting message: {e.message}")
    return {"message": "Message deleted successfully.", "deletedMessage": serialize_message(updated)}


@router.put("/messages/{message_id}/restore")
async def restore_message(message_id: str):
    try:
        updated = await message_service.restore_message(message_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=f"Error restoring message: {e.message}")
    return {"message": "Message restored successfully.", "restoredMessage": serialize_message(updated)}


@router.post("/uploads")
async def upload_file(request: UploadFileRequest):
    if not request.fileUrl or not request.username:
        raise HTTPException(status_code=400, detail="fileUrl and username are required")
    try:
        doc = await message_service.save_file_message(request.fileUrl, request.username)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=f"Error saving file message: {e.message}")
    return {"message": serialize_message(doc), "fileUrl": request.fileUrl}
