"""
Pydantic schemas for question endpoints.

Request bodies reject unknown fields, `id` included: identifiers are assigned
by the store on create and taken from the path on update.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Question(BaseModel):
    id: int
    title: str
    content: str
    tags: list[str] | None = None


class NewQuestion(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    tags: list[str] | None = None


class UpdateQuestion(NewQuestion):
    pass
