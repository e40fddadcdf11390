"""
Tests for the in-memory document store and the retry wrapper.
"""

import asyncio

import pytest

from pastepal.storage import (
    DocumentStoreError,
    InMemoryDocumentStore,
    RetryingDocumentStore,
    StoreUnavailableError,
)
from tests._helpers import FlakyDocumentStore


class TestInMemoryDocumentStore:
    @pytest.mark.asyncio
    async def test_put_get(self):
        store = InMemoryDocumentStore()
        await store.put("c", "1", {"a": 1})
        assert await store.get("c", "1") == {"a": 1}
        assert await store.get("c", "2") is None
        assert await store.get("other", "1") is None

    @pytest.mark.asyncio
    async def test_documents_are_copied(self):
        store = InMemoryDocumentStore()
        data = {"tags": ["x"]}
        await store.put("c", "1", data)
        data["tags"].append("y")

        fetched = await store.get("c", "1")
        fetched["tags"].append("z")

        assert (await store.get("c", "1"))["tags"] == ["x"]

    @pytest.mark.asyncio
    async def test_query_filters_and_orders(self):
        store = InMemoryDocumentStore()
        await store.put("c", "1", {"owner": "a", "n": 2})
        await store.put("c", "2", {"owner": "b", "n": 3})
        await store.put("c", "3", {"owner": "a", "n": 1})
        await store.put("c", "4", {"owner": "a", "n": 5})

        asc = await store.query("c", "owner", "a", order_by="n")
        desc = await store.query("c", "owner", "a", order_by="n", descending=True)

        assert [d["n"] for d in asc] == [1, 2, 5]
        assert [d["n"] for d in desc] == [5, 2, 1]

    @pytest.mark.asyncio
    async def test_query_excludes_documents_without_order_field(self):
        store = InMemoryDocumentStore()
        await store.put("c", "1", {"owner": "a", "n": 1})
        await store.put("c", "2", {"owner": "a"})

        assert await store.query("c", "owner", "a", order_by="n") == [{"owner": "a", "n": 1}]

    @pytest.mark.asyncio
    async def test_query_unknown_collection(self):
        assert await InMemoryDocumentStore().query("c", "f", "v", order_by="n") == []


class TestRetryingDocumentStore:
    @pytest.mark.asyncio
    async def test_retries_transient_failures(self):
        inner = FlakyDocumentStore(failures=2)
        await inner.put("c", "1", {"a": 1})
        store = RetryingDocumentStore(inner, attempts=3, wait_seconds=0)

        assert await store.get("c", "1") == {"a": 1}
        assert inner.calls == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_attempts(self):
        inner = FlakyDocumentStore(failures=5)
        store = RetryingDocumentStore(inner, attempts=2, wait_seconds=0)

        with pytest.raises(StoreUnavailableError):
            await store.get("c", "1")
        assert inner.calls == 2

    @pytest.mark.asyncio
    async def test_permanent_failures_not_retried(self):
        inner = FlakyDocumentStore(failures=5, error=DocumentStoreError("permission denied"))
        store = RetryingDocumentStore(inner, attempts=3, wait_seconds=0)

        with pytest.raises(DocumentStoreError):
            await store.get("c", "1")
        assert inner.calls == 1

    @pytest.mark.asyncio
    async def test_timeout_becomes_unavailable(self):
        class SlowStore(InMemoryDocumentStore):
            async def get(self, collection, id):
                await asyncio.sleep(1)

        store = RetryingDocumentStore(SlowStore(), attempts=1, timeout_seconds=0.01)

        with pytest.raises(StoreUnavailableError, match="timed out"):
            await store.get("c", "1")

    @pytest.mark.asyncio
    async def test_put_and_query_delegate(self):
        store = RetryingDocumentStore(InMemoryDocumentStore(), attempts=2, wait_seconds=0)
        await store.put("c", "1", {"owner": "a", "n": 1})
        assert await store.query("c", "owner", "a", order_by="n") == [{"owner": "a", "n": 1}]
