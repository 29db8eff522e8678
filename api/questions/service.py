"""
Question write flow: moderate free-text fields, then persist.

Title and content are sent to the moderator concurrently; the first failure
aborts the write before anything reaches the store.
"""

from __future__ import annotations

import logging

from core.moderation import ProfanityModerator
from core.pagination import Pagination

from . import repository
from .schemas import NewQuestion, Question, UpdateQuestion

logger = logging.getLogger(__name__)


async def list_questions(pagination: Pagination) -> list[Question]:
    return await repository.list_questions(pagination)


async def add_question(new_question: NewQuestion, *, moderator: ProfanityModerator) -> Question:
    title, content = await moderator.moderate_all(new_question.title, new_question.content)
    question = await repository.create_question(title=title, content=content, tags=new_question.tags)
    logger.info("question_created id=%s", question.id)
    return question


async def update_question(
    question_id: int,
    question: UpdateQuestion,
    *,
    moderator: ProfanityModerator,
) -> Question:
    title, content = await moderator.moderate_all(question.title, question.content)
    updated = await repository.update_question(
        question_id,
        title=title,
        content=content,
        tags=question.tags,
    )
    logger.info("question_updated id=%s", updated.id)
    return updated


async def delete_question(question_id: int) -> bool:
    deleted = await repository.delete_question(question_id)
    if deleted:
        logger.info("question_deleted id=%s", question_id)
    return deleted
