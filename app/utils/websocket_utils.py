import json
import logging
from typing import Dict, Set

from fastapi import WebSocket

log = logging.getLogger(__name__)

active_connections: Dict[str, WebSocket] = {}
typing_users: Set[str] = set()


async def emit(event: str, payload: dict):
    """Send ``event`` to every connected client, dropping dead sockets."""
    data = json.dumps({"type": event, "payload": payload}, default=str)
    for username, conn in list(active_connections.items()):
        try:
            await conn.send_text(data)
        except Exception as e:
            log.warning("Dropping socket for %s after send failure: %s", username, e)
            active_connections.pop(username, None)


async def update_typing(username: str, is_typing: bool):
    if is_typing:
        typing_users.add(username)
    else:
        typing_users.discard(username)
    await emit("typingUpdate", {"users": sorted(typing_users)})
