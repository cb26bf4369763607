"""Message persistence: saving, reactions, read receipts, delete and restore."""
import asyncio
from datetime import datetime, timedelta

import pytest

from app.models.message_models import MessageDocument
from app.models.user_models import UserDocument
from app.services import message_service, user_service
from app.utils.errors import InvalidRequestError, NotFoundError


@pytest.fixture
def users(mongo):
    for name in ("alice", "bob"):
        asyncio.run(user_service.save_user(UserDocument(username=name, password="pw")))
    return mongo


def _send(text: str, sender: str = "alice", when: datetime | None = None, msg_type: str = "global") -> dict:
    message = MessageDocument(
        msg=text,
        msgFrom=sender,
        msgDateTime=when or datetime(2024, 5, 1, 9, 0),
        type=msg_type,
    )
    return asyncio.run(message_service.save_message(message))


def test_save_message_defaults(users) -> None:
    doc = _send("hello")
    stored = asyncio.run(users["Message"].find_one({"_id": doc["_id"]}))
    assert stored["useMarkdown"] is False
    assert stored["seenBy"] == []
    assert stored["reactions"] == []
    assert stored["type"] == "global"


def test_save_message_unknown_sender(users) -> None:
    with pytest.raises(message_service.MessageServiceError) as exc:
        _send("hi", sender="ghost")
    assert "does not exist" in exc.value.message


def test_get_messages_only_global_in_time_order(users) -> None:
    _send("second", when=datetime(2024, 5, 1, 10, 0))
    _send("first", when=datetime(2024, 5, 1, 8, 0))
    _send("private", msg_type="direct")
    messages = asyncio.run(message_service.get_messages())
    assert [m["msg"] for m in messages] == ["first", "second"]


def test_add_reaction_once_per_user_and_emoji(users) -> None:
    message_id = str(_send("react to me")["_id"])
    updated = asyncio.run(message_service.add_reaction(message_id, "bob", "👍"))
    assert len(updated["reactions"]) == 1

    assert asyncio.run(message_service.add_reaction(message_id, "bob", "👍")) is None

    updated = asyncio.run(message_service.add_reaction(message_id, "bob", "🎉"))
    assert [r["emoji"] for r in updated["reactions"]] == ["👍", "🎉"]


def test_get_reactions_resolves_usernames(users) -> None:
    message_id = str(_send("react")["_id"])
    asyncio.run(message_service.add_reaction(message_id, "bob", "👍"))
    reactions = asyncio.run(message_service.get_reactions(message_id))
    assert reactions[0]["emoji"] == "👍"
    assert reactions[0]["username"] == "bob"


def test_remove_reaction(users) -> None:
    message_id = str(_send("react")["_id"])
    asyncio.run(message_service.add_reaction(message_id, "bob", "👍"))
    asyncio.run(message_service.add_reaction(message_id, "alice", "👍"))
    updated = asyncio.run(message_service.remove_reaction(message_id, "bob", "👍"))
    assert len(updated["reactions"]) == 1


def test_reaction_requires_known_user(users) -> None:
    message_id = str(_send("react")["_id"])
    with pytest.raises(NotFoundError):
        asyncio.run(message_service.add_reaction(message_id, "ghost", "👍"))


def test_invalid_message_id(users) -> None:
    with pytest.raises(InvalidRequestError):
        asyncio.run(message_service.get_reactions("not-an-id"))


def test_mark_seen_is_a_set(users) -> None:
    message_id = str(_send("read me")["_id"])
    asyncio.run(message_service.mark_message_as_seen(message_id, "bob"))
    updated = asyncio.run(message_service.mark_message_as_seen(message_id, "bob"))
    assert updated["seenBy"] == ["bob"]


def test_only_sender_can_delete(users) -> None:
    message_id = str(_send("mine")["_id"])
    with pytest.raises(message_service.MessageServiceError) as exc:
        asyncio.run(message_service.delete_message(message_id, "bob"))
    assert exc.value.status_code == 403


def test_delete_then_restore(users) -> None:
    message_id = str(_send("oops")["_id"])
    deleted = asyncio.run(message_service.delete_message(message_id, "alice"))
    assert deleted["msg"] == message_service.DELETED_PLACEHOLDER
    assert deleted["deletedMessage"] == "oops"

    restored = asyncio.run(message_service.restore_message(message_id))
    assert restored["msg"] == "oops"
    assert restored["deletedAt"] is None


def test_restore_window_expired(users) -> None:
    message_id = str(_send("gone")["_id"])
    deleted = asyncio.run(message_service.delete_message(message_id, "alice"))
    later = deleted["deletedAt"] + timedelta(minutes=16)
    with pytest.raises(message_service.MessageServiceError, match="window expired"):
        asyncio.run(message_service.restore_message(message_id, now=later))


def test_restore_requires_deleted_message(users) -> None:
    message_id = str(_send("still here")["_id"])
    with pytest.raises(NotFoundError):
        asyncio.run(message_service.restore_message(message_id))


def test_file_message_is_direct(users) -> None:
    doc = asyncio.run(message_service.save_file_message("https://files/cat.png", "alice"))
    assert doc["type"] == "direct"
    assert doc["msg"] == "https://files/cat.png"


def test_second_delete_keeps_original_text(users) -> None:
    message_id = str(_send("first draft")["_id"])
    asyncio.run(message_service.delete_message(message_id, "alice"))
    with pytest.raises(message_service.MessageServiceError) as exc:
        asyncio.run(message_service.delete_message(message_id, "alice"))
    assert exc.value.status_code == 400

    restored = asyncio.run(message_service.restore_message(message_id))
    assert restored["msg"] == "first draft"
