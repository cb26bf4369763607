from datetime import datetime
from typing import List, Literal, Optional

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator

MessageType = Literal["global", "direct"]


class Reaction(BaseModel):
    emoji: str
    userId: str

    @field_validator("userId")
    @classmethod
    def check_object_id(cls, value: str) -> str:
        if not ObjectId.is_valid(value):
            raise ValueError("userId must be a User id")
        return value


class MessageDocument(BaseModel):
    """Persisted shape of a row in the ``Message`` collection.

    ``type`` is set once at creation and only ever ``global`` or ``direct``.
    ``useMarkdown`` only tells the web client how to render ``msg``.
    """

    msg: str = Field(..., min_length=1)
    msgFrom: str = Field(..., min_length=1)
    msgDateTime: datetime
    type: MessageType
    useMarkdown: bool = False
    reactions: List[Reaction] = Field(default_factory=list)
    seenBy: List[str] = Field(default_factory=list)
    deletedAt: Optional[datetime] = None
    deletedMessage: Optional[str] = None

    def to_document(self) -> dict:
        doc = self.model_dump()
        doc["reactions"] = [
            {"emoji": r.emoji, "userId": ObjectId(r.userId)} for r in self.reactions
        ]
        return doc


class NewMessage(BaseModel):
    msg: str = Field(..., min_length=1)
    msgFrom: str = Field(..., min_length=1)
    msgDateTime: datetime
    useMarkdown: bool = False


class AddMessageRequest(BaseModel):
    messageToAdd: NewMessage


class ReactionRequest(BaseModel):
    messageId: str
    emoji: str
    username: str = ""


class SeenRequest(BaseModel):
    username: str


class DeleteMessageRequest(BaseModel):
    username: str


class UploadFileRequest(BaseModel):
    fileUrl: str = ""
    username: str = ""
