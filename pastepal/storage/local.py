"""
Local storage implementation for development and tests.

Works without any external services.
"""

from __future__ import annotations

import copy
from typing import Any

from pastepal.storage.base import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """In-memory document storage."""

    def __init__(self):
        self._data: dict[str, dict[str, dict[str, Any]]] = {}

    async def put(self, collection: str, id: str, data: dict[str, Any]) -> None:
        if collection not in self._data:
            self._data[collection] = {}
        self._data[collection][id] = copy.deepcopy(data)

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        doc = self._data.get(collection, {}).get(id)
        return copy.deepcopy(doc) if doc is not None else None

    async def query(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: str,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        if collection not in self._data:
            return []

        results = [
            doc for doc in self._data[collection].values()
            if doc.get(field) == value and doc.get(order_by) is not None
        ]
        results.sort(key=lambda doc: doc[order_by], reverse=descending)
        return copy.deepcopy(results)
