from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

OrderType = Literal["newest", "unanswered", "mostViewed", "saved", "trending"]


class Vote(BaseModel):
    username: str
    timestamp: datetime


def _normalize_tags(tags: List[str]) -> List[str]:
    names = []
    for tag in tags:
        name = tag.strip().lower()
        if name and name not in names:
            names.append(name)
    return names


class QuestionDocument(BaseModel):
    title: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    askedBy: str = Field(..., min_length=1)
    askDateTime: datetime = Field(default_factory=datetime.utcnow)
    views: List[str] = Field(default_factory=list)
    upVotes: List[Vote] = Field(default_factory=list)
    downVotes: List[Vote] = Field(default_factory=list)
    answers: List[str] = Field(default_factory=list)
    useMarkdown: bool = False
    anonymous: bool = False

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: List[str]) -> List[str]:
        return _normalize_tags(value)


class AddQuestionRequest(BaseModel):
    title: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    tags: List[str] = []
    askedBy: str = Field(..., min_length=1)
    askDateTime: Optional[datetime] = None
    useMarkdown: bool = False
    anonymous: bool = False


class VoteRequest(BaseModel):
    qid: str
    username: str = Field(..., min_length=1)
