from datetime import datetime
from typing import Literal

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator


class NotificationDocument(BaseModel):
    """Persisted shape of a row in the ``Notification`` collection.

    Only answers notify for now, so ``type`` is always ``ANSWER``.
    """

    type: Literal["ANSWER"] = "ANSWER"
    recipient: str = Field(..., min_length=1)
    questionId: str
    answerId: str
    answeredBy: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    createdAt: datetime = Field(default_factory=datetime.utcnow)
    read: bool = False

    @field_validator("questionId", "answerId")
    @classmethod
    def check_object_id(cls, value: str) -> str:
        if not ObjectId.is_valid(value):
            raise ValueError("Invalid ID format")
        return value

    def to_document(self) -> dict:
        doc = self.model_dump()
        doc["questionId"] = ObjectId(self.questionId)
        doc["answerId"] = ObjectId(self.answerId)
        return doc


class CreateNotificationRequest(BaseModel):
    recipient: str = ""
    questionId: str = ""
    answerId: str = ""
    answeredBy: str = ""
    text: str = ""
