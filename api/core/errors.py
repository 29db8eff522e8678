"""
Domain error taxonomy.

Components raise these; only `core.error_handlers` turns them into HTTP
responses. Server-side kinds carry context for logs, never for clients.
"""

from __future__ import annotations


class DomainError(Exception):
    message = "Domain error"

    def __str__(self) -> str:
        return self.message


class MissingParametersError(DomainError):
    message = "Missing parameters"


class ParseIntError(DomainError):
    def __init__(self, field: str, cause: Exception | None = None) -> None:
        super().__init__(field, cause)
        self.field = field
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return f"Cannot parse parameter {self.field}"
        return f"Cannot parse parameter {self.field}: {self.cause}"


class DatabaseQueryError(DomainError):
    message = "Database query error"

    def __init__(self, operation: str = "") -> None:
        super().__init__(operation)
        self.operation = operation


class NotFoundError(DomainError):
    message = "Not found"


class QuestionNotFoundError(NotFoundError):
    def __init__(self, question_id: int) -> None:
        super().__init__(question_id)
        self.question_id = question_id

    def __str__(self) -> str:
        return f"Question {self.question_id} not found"


class ModerationError(DomainError):
    message = "Moderation error"


class ModerationTransportError(ModerationError):
    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"External API error: {self.detail}"


class ModerationDecodeError(ModerationTransportError):
    def __str__(self) -> str:
        return f"External API returned an undecodable body: {self.detail}"


class _UpstreamStatusError(ModerationError):
    kind = "API layer"

    def __init__(self, status: int, message: str) -> None:
        super().__init__(status, message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind} error: Status: {self.status}, Message: {self.message}"


class ModerationClientError(_UpstreamStatusError):
    kind = "API layer client"


class ModerationServerError(_UpstreamStatusError):
    kind = "API layer server"
