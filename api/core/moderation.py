"""
Profanity moderation client (APILayer "bad words" endpoint).

Used endpoint:
- POST /bad_words?censor_character=*  (header `apikey`, plain-text body)
  -> {"content", "bad_words_total", "bad_words_list": [...], "censored_content"}
  non-2xx -> {"message": "..."}

Transport failures and transient statuses are retried with exponential
backoff according to an explicit `RetryPolicy`. Definitive client errors are
returned immediately and classified.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable

import backoff
import httpx
from pydantic import BaseModel, Field, ValidationError

from . import config
from .errors import (
    ModerationClientError,
    ModerationDecodeError,
    ModerationServerError,
    ModerationTransportError,
)

logger = logging.getLogger(__name__)

BAD_WORDS_PATH = "/bad_words"
CENSOR_CHARACTER = "*"


def is_transient_status(status_code: int) -> bool:
    return status_code >= 500 or status_code in (408, 429)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Exponential backoff: attempt n waits up to `factor * base ** n` seconds,
    capped at `max_delay_s`, with full jitter when `jitter` is set.
    """

    max_retries: int = 3
    base: float = 2.0
    factor: float = 0.5
    max_delay_s: float | None = 8.0
    jitter: bool = True
    retryable_status: Callable[[int], bool] = field(default=is_transient_status)

    @property
    def max_tries(self) -> int:
        return self.max_retries + 1


class BadWord(BaseModel):
    original: str
    word: str
    deviations: int
    info: int
    replaced_len: int = Field(alias="replacedLen")


class BadWordsResponse(BaseModel):
    content: str
    bad_words_total: int
    bad_words_list: list[BadWord]
    censored_content: str


class _TransientStatus(Exception):
    def __init__(self, response: httpx.Response) -> None:
        super().__init__(response.status_code)
        self.response = response


def _upstream_message(resp: httpx.Response) -> str:
    try:
        data: Any = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    # Avoid dumping huge bodies; include a small snippet.
    return resp.text[:500]


class ProfanityModerator:
    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        retry_policy: RetryPolicy | None = None,
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.retry_policy = retry_policy or RetryPolicy()
        self.timeout_s = timeout_s
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_s,
            transport=self._transport,
        )

    async def _send_once(self, client: httpx.AsyncClient, text: str) -> httpx.Response:
        resp = await client.post(
            BAD_WORDS_PATH,
            params={"censor_character": CENSOR_CHARACTER},
            headers={"apikey": self.api_key, "Content-Type": "text/plain; charset=utf-8"},
            content=text.encode("utf-8"),
        )
        if not resp.is_success and self.retry_policy.retryable_status(resp.status_code):
            raise _TransientStatus(resp)
        return resp

    async def _send(self, text: str) -> httpx.Response:
        policy = self.retry_policy
        send = backoff.on_exception(
            backoff.expo,
            (httpx.TransportError, _TransientStatus),
            max_tries=policy.max_tries,
            jitter=backoff.full_jitter if policy.jitter else None,
            logger=logger,
            base=policy.base,
            factor=policy.factor,
            max_value=policy.max_delay_s,
        )(self._send_once)

        async with self._client() as client:
            try:
                return await send(client, text)
            except _TransientStatus as exc:
                # Retries exhausted on a transient status; classify it below.
                return exc.response
            except httpx.TransportError as exc:
                logger.error(
                    "moderation_transport_failed attempts=%s error=%r",
                    policy.max_tries,
                    exc,
                )
                raise ModerationTransportError(f"{type(exc).__name__}: {exc}") from exc

    async def moderate(self, text: str) -> str:
        """
        Return `text` with flagged words censored.
        """
        resp = await self._send(text)

        if not resp.is_success:
            message = _upstream_message(resp)
            if resp.is_client_error:
                raise ModerationClientError(resp.status_code, message)
            raise ModerationServerError(resp.status_code, message)

        try:
            result = BadWordsResponse.model_validate_json(resp.content)
        except ValidationError as exc:
            raise ModerationDecodeError(str(exc)) from exc

        if result.bad_words_total:
            logger.info("moderation_censored bad_words_total=%s", result.bad_words_total)
        return result.censored_content

    async def moderate_all(self, *texts: str) -> list[str]:
        """
        Moderate several fields concurrently.

        The first failure is raised as-is and the remaining calls are
        cancelled; simultaneous failures are not aggregated.
        """
        tasks = [asyncio.ensure_future(self.moderate(text)) for text in texts]
        try:
            return list(await asyncio.gather(*tasks))
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()


def moderator_from_env() -> ProfanityModerator:
    return ProfanityModerator(
        base_url=config.moderation_api_url(),
        api_key=config.moderation_api_key(),
        timeout_s=config.moderation_timeout_s(),
        retry_policy=RetryPolicy(
            max_retries=config.moderation_max_retries(),
            factor=config.moderation_backoff_factor_s(),
            max_delay_s=config.moderation_backoff_max_s(),
        ),
    )


@lru_cache(maxsize=1)
def get_moderator() -> ProfanityModerator:
    """
    FastAPI dependency; one moderator per process.
    """
    return moderator_from_env()
