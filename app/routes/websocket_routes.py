import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.utils.websocket_utils import active_connections, update_typing

router = APIRouter(prefix="/ws", tags=["WebSocket Events"])
log = logging.getLogger(__name__)


@router.websocket("/events/{username}")
async def events_websocket(websocket: WebSocket, username: str):
    await websocket.accept()

    # Close previous connection if user is reconnecting
    if username in active_connections:
        try:
            await active_connections[username].close()
        except RuntimeError:
            pass

    active_connections[username] = websocket
    log.info("%s connected", username)

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                log.warning("Ignoring malformed event from %s", username)
                continue
            if not isinstance(message, dict):
                log.warning("Ignoring non-object event from %s", username)
                continue

            if message.get("type") == "userTyping":
                await update_typing(username, True)
            elif message.get("type") == "userStoppedTyping":
                await update_typing(username, False)

    except WebSocketDisconnect:
        log.info("%s disconnected", username)
    finally:
        if active_connections.get(username) is websocket:
            active_connections.pop(username, None)
        await update_typing(username, False)
