"""
Pydantic schemas for answer endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from core.db import INT4_MAX


class Answer(BaseModel):
    id: int
    content: str
    question_id: int


class NewAnswer(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: str = Field(..., min_length=1)
    question_id: int = Field(..., ge=1, le=INT4_MAX)
