"""
Tests for the storage boundary in `core.db`.
"""

import logging

import asyncpg
import pytest

from core import db
from core.errors import DatabaseQueryError


class TestSanitizeDatabaseUrl:
    def test_strips_sslmode(self) -> None:
        url = "postgresql://u:p@host:5432/app?sslmode=require&application_name=qa"
        assert db._sanitize_database_url(url) == "postgresql://u:p@host:5432/app?application_name=qa"

    def test_url_without_query_untouched(self) -> None:
        url = "postgresql://u:p@host:5432/app"
        assert db._sanitize_database_url(url) == url

    def test_missing_database_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(RuntimeError):
            db.database_url()


class TestStorageBoundary:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            asyncpg.exceptions.UndefinedTableError('relation "questions" does not exist'),
            asyncpg.exceptions.UniqueViolationError("duplicate key value"),
            ConnectionRefusedError("connection refused"),
            TimeoutError(),
        ],
    )
    async def test_storage_faults_become_database_query_error(
        self,
        fake_pool,
        caplog: pytest.LogCaptureFixture,
        error: BaseException,
    ) -> None:
        fake_pool.error = error
        with caplog.at_level(logging.ERROR, logger="core.db"):
            with pytest.raises(DatabaseQueryError) as excinfo:
                await db.fetch_all("SELECT id, title, content, tags FROM questions LIMIT $1 OFFSET $2", None, 0)

        assert excinfo.value.__cause__ is error
        assert str(excinfo.value) == "Database query error"
        assert any("db_query_failed" in record.getMessage() for record in caplog.records)

    @pytest.mark.asyncio
    async def test_fetch_one_returns_none_when_no_row(self, fake_pool) -> None:
        row = await db.fetch_one("DELETE FROM questions WHERE id = $1 RETURNING id", 99)
        assert row is None

    def test_pool_not_initialized(self) -> None:
        with pytest.raises(RuntimeError):
            db.pool()
