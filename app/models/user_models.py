from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UserDocument(BaseModel):
    """Persisted shape of a row in the ``User`` collection.

    ``username`` is unique (see ``ensure_indexes``) and never rewritten once
    stored. ``password`` is persisted as handed in; hashing is the caller's job.
    ``savedQuestions`` holds question ids without any referential check.
    """

    username: str = Field(..., min_length=1)
    password: str
    dateJoined: datetime = Field(default_factory=datetime.utcnow)
    biography: str = ""
    savedQuestions: List[str] = Field(default_factory=list)
    email: str = ""


class SafeUser(BaseModel):
    id: str
    username: str
    dateJoined: Optional[datetime] = None
    biography: str = ""
    savedQuestions: List[str] = []
    email: str = ""


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    email: str = ""
    biography: str = ""

    @model_validator(mode="after")
    def strip_username(self):
        self.username = self.username.strip()
        if not self.username:
            raise ValueError("Username cannot be blank")
        return self


class LoginRequest(BaseModel):
    username: str
    password: str


class LogoutRequest(BaseModel):
    token: str


class UpdateBiographyRequest(BaseModel):
    biography: str


class UpdateEmailRequest(BaseModel):
    email: str


class UpdateUserRequest(BaseModel):
    # extra keys are kept so an attempted username change can be rejected
    model_config = ConfigDict(extra="allow")

    biography: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(None, min_length=1)


class SaveQuestionRequest(BaseModel):
    qid: str
