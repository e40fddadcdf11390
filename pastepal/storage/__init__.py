"""
Storage abstractions.

Integration points:
- DocumentStore -> Firestore, DynamoDB, PostgreSQL JSONB, ...
"""

from pastepal.storage.base import (
    DocumentStore,
    DocumentStoreError,
    StoreUnavailableError,
    Collections,
)
from pastepal.storage.local import InMemoryDocumentStore
from pastepal.storage.retrying import RetryingDocumentStore

__all__ = [
    "DocumentStore",
    "DocumentStoreError",
    "StoreUnavailableError",
    "Collections",
    "InMemoryDocumentStore",
    "RetryingDocumentStore",
]
