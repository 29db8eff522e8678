"""
Question persistence (raw SQL).

Identifiers come from the `questions.id` SERIAL column; callers never supply
them. Row order of `list_questions` is the table's natural order.
"""

from __future__ import annotations

from typing import Any

from core import db
from core.errors import QuestionNotFoundError
from core.pagination import Pagination

from .schemas import Question


def _to_question(row: dict[str, Any]) -> Question:
    return Question(
        id=int(row["id"]),
        title=str(row["title"]),
        content=str(row["content"]),
        tags=list(row["tags"]) if row.get("tags") is not None else None,
    )


async def list_questions(pagination: Pagination) -> list[Question]:
    rows = await db.fetch_all(
        """
        SELECT id, title, content, tags
        FROM questions
        LIMIT $1
        OFFSET $2
        """,
        pagination.limit,
        pagination.offset,
    )
    return [_to_question(row) for row in rows]


async def create_question(*, title: str, content: str, tags: list[str] | None) -> Question:
    row = await db.fetch_one(
        """
        INSERT INTO questions (title, content, tags)
        VALUES ($1, $2, $3)
        RETURNING id, title, content, tags
        """,
        title,
        content,
        tags,
    )
    if row is None:
        raise RuntimeError("Failed to create question.")
    return _to_question(row)


async def update_question(
    question_id: int,
    *,
    title: str,
    content: str,
    tags: list[str] | None,
) -> Question:
    # No int4 column can hold such an id, so no row matches it.
    if not db.fits_int4(question_id):
        raise QuestionNotFoundError(question_id)
    row = await db.fetch_one(
        """
        UPDATE questions
        SET title = $1, content = $2, tags = $3
        WHERE id = $4
        RETURNING id, title, content, tags
        """,
        title,
        content,
        tags,
        question_id,
    )
    if row is None:
        raise QuestionNotFoundError(question_id)
    return _to_question(row)


async def delete_question(question_id: int) -> bool:
    """
    Return False when no row had this id.
    """
    if not db.fits_int4(question_id):
        return False
    row = await db.fetch_one(
        """
        DELETE FROM questions
        WHERE id = $1
        RETURNING id
        """,
        question_id,
    )
    return row is not None
