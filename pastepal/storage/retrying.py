"""
Bounded retry and timeout for document store calls.

Wraps any `DocumentStore`. Only `StoreUnavailableError` (and timeouts, which
are converted into it) is retried; every other failure propagates on the
first attempt.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pastepal.storage.base import DocumentStore, StoreUnavailableError

logger = logging.getLogger(__name__)


class RetryingDocumentStore(DocumentStore):
    """Document store decorator adding retry with exponential backoff."""

    def __init__(
        self,
        inner: DocumentStore,
        attempts: int = 3,
        wait_seconds: float = 0.5,
        timeout_seconds: float | None = None,
    ):
        self.inner = inner
        self.attempts = max(1, attempts)
        self.wait_seconds = wait_seconds
        self.timeout_seconds = timeout_seconds

    async def _call(self, op: Callable[[], Awaitable[Any]]) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_exponential(multiplier=self.wait_seconds, max=10),
            retry=retry_if_exception_type(StoreUnavailableError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._with_timeout(op())

    async def _with_timeout(self, coro: Awaitable[Any]) -> Any:
        if self.timeout_seconds is None:
            return await coro
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            raise StoreUnavailableError(
                f"Store call timed out after {self.timeout_seconds}s"
            )

    async def put(self, collection: str, id: str, data: dict[str, Any]) -> None:
        await self._call(lambda: self.inner.put(collection, id, data))

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        return await self._call(lambda: self.inner.get(collection, id))

    async def query(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: str,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        return await self._call(
            lambda: self.inner.query(collection, field, value, order_by, descending)
        )
