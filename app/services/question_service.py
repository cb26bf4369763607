import logging
from datetime import datetime
from typing import Literal

from pymongo import ReturnDocument

from app.config.database import question_collection
from app.models.question_models import OrderType, QuestionDocument
from app.services.user_service import find_user
from app.utils.db_utils import parse_object_id, serialize_votes
from app.utils.errors import NotFoundError
from app.utils.search_utils import filter_questions_by_search
from app.utils.sort_utils import (
    sort_questions_by_most_views,
    sort_questions_by_newest,
    sort_questions_by_saved,
    sort_questions_by_trending,
    sort_questions_by_unanswered,
)
from app.utils.websocket_utils import emit

log = logging.getLogger(__name__)


async def save_question(question: QuestionDocument) -> dict:
    doc = question.model_dump()
    result = await question_collection.insert_one(doc)
    doc["_id"] = result.inserted_id
    log.info("Question %s asked by %s", result.inserted_id, question.askedBy)
    return doc


async def get_questions_by_saved(qlist: list, username: str | None) -> list:
    """Questions the user saved, newest first; unknown users have none."""
    user = await find_user(username) if username else None
    if not user:
        return []
    return sort_questions_by_saved(qlist, user.get("savedQuestions", []))


async def get_questions_by_order(
    order: OrderType,
    username: str | None = None,
    asked_by: str | None = None,
    search: str = "",
) -> list:
    qlist = await question_collection.find().to_list(None)
    if asked_by:
        qlist = [q for q in qlist if q.get("askedBy") == asked_by]
    if search:
        qlist = filter_questions_by_search(qlist, search)

    if order == "saved":
        return await get_questions_by_saved(qlist, username)
    if order == "unanswered":
        return sort_questions_by_unanswered(qlist)
    if order == "trending":
        return sort_questions_by_trending(qlist)
    if order == "mostViewed":
        return sort_questions_by_most_views(qlist)
    return sort_questions_by_newest(qlist)


async def fetch_and_increment_views(qid: str, username: str) -> dict:
    question = await question_collection.find_one_and_update(
        {"_id": parse_object_id(qid)},
        {"$addToSet": {"views": username}},
        return_document=ReturnDocument.AFTER,
    )
    if not question:
        raise NotFoundError("Question not found")
    return question


async def _apply_vote(oid, username: str, same: str, other: str) -> dict | None:
    now = datetime.utcnow()
    # repeat vote: refresh its timestamp
    question = await question_collection.find_one_and_update(
        {"_id": oid, f"{same}.username": username},
        {"$set": {f"{same}.$.timestamp": now}, "$pull": {other: {"username": username}}},
        return_document=ReturnDocument.AFTER,
    )
    if question:
        return question
    # first vote of this kind: append it and drop any opposite vote
    return await question_collection.find_one_and_update(
        {"_id": oid, f"{same}.username": {"$ne": username}},
        {"$push": {same: {"username": username, "timestamp": now}}, "$pull": {other: {"username": username}}},
        return_document=ReturnDocument.AFTER,
    )


async def add_vote(qid: str, username: str, vote_type: Literal["upvote", "downvote"]) -> dict:
    """Record an up- or downvote.

    Voting again the same way keeps the vote and refreshes its timestamp. The
    opposite vote replaces the earlier one. Each step is a single-document
    update, so concurrent votes from different users never overwrite each other.
    """
    oid = parse_object_id(qid)
    same, other = ("upVotes", "downVotes") if vote_type == "upvote" else ("downVotes", "upVotes")

    question = await _apply_vote(oid, username, same, other)
    if question is None:
        # the same user's vote may have landed between the two updates
        question = await _apply_vote(oid, username, same, other)
    if question is None:
        raise NotFoundError("Question not found!")

    if any(v["username"] == username for v in question.get(same, [])):
        msg = f"Question {vote_type}d successfully"
    else:
        msg = f"{vote_type.capitalize()} cancelled successfully"

    result = {
        "msg": msg,
        "upVotes": serialize_votes(question.get("upVotes")),
        "downVotes": serialize_votes(question.get("downVotes")),
    }
    await emit("voteUpdate", {"qid": qid, "upVotes": result["upVotes"], "downVotes": result["downVotes"]})
    log.info("%s on question %s by %s", vote_type, qid, username)
    return result
