"""
Paste service - create, fetch and list pastes.

Content normalization is delegated to the codec and read access to the
guard's `authorize_read`. Create returns the paste in storage form; Get and
List return it decoded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from pastepal.auth.context import AuthContext
from pastepal.auth.policies import authorize_read
from pastepal.core import codec
from pastepal.core.errors import (
    DeserializationError,
    InvalidContentType,
    NotFound,
    PersistenceError,
)
from pastepal.core.models import ContentKind, Paste
from pastepal.core.utils import generate_id, utc_now
from pastepal.storage.base import Collections, DocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)


@dataclass
class PasteListing:
    """Result of listing a user's pastes."""
    pastes: list[Paste] = field(default_factory=list)
    skipped: int = 0  # documents that could not be deserialized


class PasteService:
    """Paste lifecycle."""

    def __init__(self, documents: DocumentStore):
        self.documents = documents

    async def create(
        self,
        owner_id: str,
        title: str,
        content: str,
        content_type: str,
        mime_type: str | None = None,
        is_public: bool = False,
    ) -> Paste:
        """
        Store a new paste owned by `owner_id`.

        Raises:
            InvalidContentType: content_type is not "text" or "image"
            InvalidContentEncoding: image content is not valid base64 / data URL
            PersistenceError: the document could not be written
        """
        try:
            kind = ContentKind(content_type)
        except ValueError:
            raise InvalidContentType()

        content, mime_type = codec.encode(kind, content, mime_type)

        now = utc_now()
        paste = Paste(
            id=generate_id(),
            user_id=owner_id,
            title=title,
            content=content,
            content_type=kind,
            mime_type=mime_type,
            created_at=now,
            updated_at=now,
            is_public=is_public,
        )

        try:
            await self.documents.put(Collections.PASTES, paste.id, paste.to_document())
        except DocumentStoreError as e:
            logger.error(f"Error storing paste {paste.id}: {e}")
            raise PersistenceError("Failed to store paste", detail=str(e))

        logger.info(f"Paste {paste.id} created by {owner_id} ({kind.value})")
        return paste

    async def get(self, paste_id: str, caller: AuthContext) -> Paste:
        """Fetch one paste, decoded, if the caller may read it."""
        try:
            doc = await self.documents.get(Collections.PASTES, paste_id)
        except DocumentStoreError as e:
            logger.error(f"Error retrieving paste {paste_id}: {e}")
            raise PersistenceError("Failed to retrieve paste", detail=str(e))
        if doc is None:
            raise NotFound()

        try:
            paste = Paste.model_validate(doc)
        except ValidationError as e:
            logger.error(f"Error converting document to paste {paste_id}: {e}")
            raise DeserializationError()

        authorize_read(paste, caller)
        return codec.decoded(paste)

    async def list_for_owner(self, owner_id: str) -> PasteListing:
        """All pastes of `owner_id`, newest first."""
        try:
            docs = await self.documents.query(
                Collections.PASTES,
                field="user_id",
                value=owner_id,
                order_by="created_at",
                descending=True,
            )
        except DocumentStoreError as e:
            logger.error(f"Error querying pastes of {owner_id}: {e}")
            raise PersistenceError("Failed to list pastes", detail=str(e))

        listing = PasteListing()
        for doc in docs:
            try:
                paste = Paste.model_validate(doc)
            except ValidationError as e:
                logger.warning(f"Skipping undecodable paste {doc.get('id')!r}: {e}")
                listing.skipped += 1
                continue
            listing.pastes.append(codec.decoded(paste))

        return listing
