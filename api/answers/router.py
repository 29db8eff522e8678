"""
Answer API endpoints.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Form
from fastapi.responses import PlainTextResponse

from . import repository
from .schemas import NewAnswer

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/comments", response_class=PlainTextResponse)
async def add_answer(new_answer: Annotated[NewAnswer, Form()]) -> str:
    answer = await repository.create_answer(
        content=new_answer.content,
        question_id=new_answer.question_id,
    )
    logger.info("answer_created id=%s question_id=%s", answer.id, answer.question_id)
    return "Answer added"
