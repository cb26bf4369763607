import logging
import secrets
from typing import Dict, Optional

from pydantic import BaseModel

from app.models.user_models import SafeUser

log = logging.getLogger(__name__)


class UserSession(BaseModel):
    """The signed-in user, passed explicitly to whatever renders for them."""

    token: str = ""
    current_user: Optional[SafeUser] = None


class SessionStore:
    """In-process token -> session map backing login and sign-out."""

    def __init__(self):
        self._sessions: Dict[str, UserSession] = {}

    def open(self, user: SafeUser) -> UserSession:
        session = UserSession(token=secrets.token_urlsafe(24), current_user=user)
        self._sessions[session.token] = session
        log.info("Opened session for %s", user.username)
        return session

    def get(self, token: str | None) -> UserSession:
        # unknown tokens yield an anonymous session rather than None
        return self._sessions.get(token or "", UserSession())

    def close(self, token: str) -> bool:
        session = self._sessions.pop(token, None)
        if session is None:
            return False
        log.info("Closed session for %s", session.current_user.username)
        return True

    def close_user(self, username: str):
        for token, session in list(self._sessions.items()):
            if session.current_user and session.current_user.username == username:
                del self._sessions[token]


session_store = SessionStore()
