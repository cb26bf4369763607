from datetime import datetime

from bson import ObjectId

from app.utils.errors import InvalidRequestError


def parse_object_id(value: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise InvalidRequestError(f"Invalid id: {value}")
    return ObjectId(value)


def _iso(value):
    return value.isoformat() if isinstance(value, datetime) else value


def serialize_user(doc: dict) -> dict:
    """Safe projection of a user document; the password never leaves the service."""
    return {
        "id": str(doc["_id"]),
        "username": doc.get("username"),
        "dateJoined": _iso(doc.get("dateJoined")),
        "biography": doc.get("biography", ""),
        "savedQuestions": list(doc.get("savedQuestions", [])),
        "email": doc.get("email", ""),
    }


def serialize_reactions(reactions) -> list:
    return [
        {"emoji": r.get("emoji"), "userId": str(r.get("userId"))}
        for r in reactions or []
    ]


def serialize_message(doc: dict) -> dict:
    return {
        "id": str(doc["_id"]),
        "msg": doc.get("msg"),
        "msgFrom": doc.get("msgFrom"),
        "msgDateTime": _iso(doc.get("msgDateTime")),
        "type": doc.get("type"),
        "useMarkdown": doc.get("useMarkdown", False),
        "reactions": serialize_reactions(doc.get("reactions")),
        "seenBy": list(doc.get("seenBy", [])),
        "deletedAt": _iso(doc.get("deletedAt")),
    }


def serialize_votes(votes) -> list:
    return [
        {"username": v.get("username"), "timestamp": _iso(v.get("timestamp"))}
        for v in votes or []
    ]


def serialize_question(doc: dict) -> dict:
    return {
        "id": str(doc["_id"]),
        "title": doc.get("title"),
        "text": doc.get("text"),
        "tags": list(doc.get("tags", [])),
        "askedBy": doc.get("askedBy"),
        "askDateTime": _iso(doc.get("askDateTime")),
        "views": list(doc.get("views", [])),
        "upVotes": serialize_votes(doc.get("upVotes")),
        "downVotes": serialize_votes(doc.get("downVotes")),
        "answers": list(doc.get("answers", [])),
        "useMarkdown": doc.get("useMarkdown", False),
        "anonymous": doc.get("anonymous", False),
    }


def serialize_notification(doc: dict) -> dict:
    data = {
        "id": str(doc["_id"]),
        "type": doc.get("type"),
        "recipient": doc.get("recipient"),
        "questionId": str(doc.get("questionId")),
        "answerId": str(doc.get("answerId")),
        "answeredBy": doc.get("answeredBy"),
        "createdAt": _iso(doc.get("createdAt")),
        "read": doc.get("read", False),
    }
    if "question" in doc:
        data["questionId"] = {"_id": str(doc["question"]["_id"]), "title": doc["question"]["title"]}
        data["answerId"] = {"_id": str(doc["answer"]["_id"]), "text": doc["answer"]["text"]}
    return data
