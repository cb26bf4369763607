from datetime import datetime

from fastapi import APIRouter, HTTPException

from app.models.question_models import AddQuestionRequest, OrderType, QuestionDocument, VoteRequest
from app.services import question_service
from app.utils.db_utils import serialize_question
from app.utils.errors import ServiceError
from app.utils.websocket_utils import emit

router = APIRouter(prefix="/question", tags=["Questions"])


@router.post("/addQuestion")
async def add_question(request: AddQuestionRequest):
    data = request.model_dump()
    data["askDateTime"] = data["askDateTime"] or datetime.utcnow()
    doc = await question_service.save_question(QuestionDocument(**data))
    question = serialize_question(doc)
    await emit("questionUpdate", question)
    return question


@router.get("/getQuestion")
async def get_questions(
    order: OrderType = "newest",
    username: str | None = None,
    askedBy: str | None = None,
    search: str = "",
):
    questions = await question_service.get_questions_by_order(
        order, username=username, asked_by=askedBy, search=search
    )
    return [serialize_question(q) for q in questions]


@router.get("/getQuestionById/{qid}")
async def get_question_by_id(qid: str, username: str):
    try:
        question = await question_service.fetch_and_increment_views(qid, username)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    result = serialize_question(question)
    await emit("viewsUpdate", result)
    return result


async def _vote(request: VoteRequest, vote_type: str):
    try:
        return await question_service.add_vote(request.qid, request.username, vote_type)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/upvoteQuestion")
async def upvote_question(request: VoteRequest):
    return await _vote(request, "upvote")


@router.post("/downvoteQuestion")
async def downvote_question(request: VoteRequest):
    return await _vote(request, "downvote")
