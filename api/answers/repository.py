"""
Answer persistence (raw SQL).
"""

from __future__ import annotations

from core import db

from .schemas import Answer


async def create_answer(*, content: str, question_id: int) -> Answer:
    # question_id is stored as given; there is no existence check here.
    row = await db.fetch_one(
        """
        INSERT INTO answers (content, question_id)
        VALUES ($1, $2)
        RETURNING id, content, question_id
        """,
        content,
        question_id,
    )
    if row is None:
        raise RuntimeError("Failed to create answer.")
    return Answer(id=int(row["id"]), content=str(row["content"]), question_id=int(row["question_id"]))
