"""
Storage abstraction layer.

All paste and profile persistence goes through `DocumentStore`, a minimal
document interface: put a document, get one by id, and query a collection by
a single equality filter with a single ordering field. This allows swapping
implementations (in-memory -> Firestore, DynamoDB, ...) without changing
application code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# =============================================================================
# Errors
# =============================================================================


class DocumentStoreError(Exception):
    """A store operation failed."""
    pass


class StoreUnavailableError(DocumentStoreError):
    """Transient failure (timeout, connection loss). Safe to retry."""
    pass


# =============================================================================
# Storage Interface
# =============================================================================


class DocumentStore(ABC):
    """
    Storage for structured documents (user profiles, pastes).

    Single-document writes are assumed atomic. No multi-document
    transactions are offered.
    """

    @abstractmethod
    async def put(self, collection: str, id: str, data: dict[str, Any]) -> None:
        """Create or overwrite a document."""
        pass

    @abstractmethod
    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        """Get a document by ID, None if it does not exist."""
        pass

    @abstractmethod
    async def query(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: str,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Documents whose `field` equals `value`, sorted on `order_by`.

        Documents lacking the `order_by` field are not returned.
        """
        pass


# =============================================================================
# Collection Names
# =============================================================================


class Collections:
    """Standard collection names."""

    USERS = "users"
    PASTES = "pastes"
