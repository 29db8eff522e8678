"""
Question API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from core.errors import QuestionNotFoundError
from core.moderation import ProfanityModerator, get_moderator
from core.pagination import extract_pagination

from . import service
from .schemas import NewQuestion, Question, UpdateQuestion

router = APIRouter()


@router.get("/questions", response_model=list[Question])
async def get_questions(request: Request) -> list[Question]:
    pagination = extract_pagination(dict(request.query_params))
    return await service.list_questions(pagination)


@router.post("/questions", response_model=Question)
async def add_question(
    new_question: NewQuestion,
    moderator: ProfanityModerator = Depends(get_moderator),
) -> Question:
    return await service.add_question(new_question, moderator=moderator)


@router.put("/questions/{question_id}", response_model=Question)
async def update_question(
    question_id: int,
    question: UpdateQuestion,
    moderator: ProfanityModerator = Depends(get_moderator),
) -> Question:
    return await service.update_question(question_id, question, moderator=moderator)


@router.delete("/questions/{question_id}", response_class=PlainTextResponse)
async def delete_question(question_id: int) -> str:
    if not await service.delete_question(question_id):
        raise QuestionNotFoundError(question_id)
    return f"Question {question_id} deleted"
