"""User and Message document shapes: defaults and enum constraints."""
from datetime import datetime

import pytest
from bson import ObjectId
from pydantic import ValidationError

from app.models.message_models import MessageDocument
from app.models.user_models import UpdateUserRequest, UserDocument


def _message(**overrides) -> MessageDocument:
    data = {
        "msg": "hello",
        "msgFrom": "alice",
        "msgDateTime": datetime(2024, 1, 1, 12, 0),
        "type": "global",
    }
    data.update(overrides)
    return MessageDocument(**data)


def test_user_defaults() -> None:
    user = UserDocument(username="alice", password="hashed")
    assert user.biography == ""
    assert user.email == ""
    assert user.savedQuestions == []
    assert isinstance(user.dateJoined, datetime)


def test_user_requires_username() -> None:
    with pytest.raises(ValidationError):
        UserDocument(username="", password="pw")


def test_message_defaults() -> None:
    message = _message()
    assert message.useMarkdown is False
    assert message.seenBy == []
    assert message.reactions == []


@pytest.mark.parametrize("message_type", ["global", "direct"])
def test_message_accepts_known_types(message_type) -> None:
    assert _message(type=message_type).type == message_type


@pytest.mark.parametrize("message_type", ["private", "GLOBAL", ""])
def test_message_rejects_other_types(message_type) -> None:
    with pytest.raises(ValidationError):
        _message(type=message_type)


@pytest.mark.parametrize("field", ["msg", "msgFrom"])
def test_message_rejects_empty_required_text(field) -> None:
    with pytest.raises(ValidationError):
        _message(**{field: ""})


def test_message_requires_timestamp() -> None:
    with pytest.raises(ValidationError):
        MessageDocument(msg="hi", msgFrom="alice", type="global")


def test_reaction_user_id_stored_as_object_id() -> None:
    user_id = ObjectId()
    message = _message(reactions=[{"emoji": "👍", "userId": str(user_id)}])
    doc = message.to_document()
    assert doc["reactions"] == [{"emoji": "👍", "userId": user_id}]


def test_reaction_rejects_non_object_id() -> None:
    with pytest.raises(ValidationError):
        _message(reactions=[{"emoji": "👍", "userId": "alice"}])


def test_update_request_keeps_username_for_rejection() -> None:
    data = UpdateUserRequest(username="mallory", biography="hi")
    assert data.model_dump(exclude_none=True) == {"username": "mallory", "biography": "hi"}


def test_settings_read_dotenv_with_defaults() -> None:
    from app.config.settings import Settings

    assert Settings.model_config["env_file"] == ".env"
    assert Settings.model_fields["MESSAGE_RESTORE_WINDOW_MINUTES"].default == 15
    assert Settings.model_fields["LOG_LEVEL"].default == "INFO"


def test_update_request_rejects_empty_password() -> None:
    with pytest.raises(ValidationError):
        UpdateUserRequest(password="")
