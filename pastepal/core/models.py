"""
Core data models.

Pastes and the request/response shapes of the auth flow. Field names match
the JSON wire format.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from pastepal.core.utils import generate_id, utc_now


# =============================================================================
# Enums
# =============================================================================


class ContentKind(str, Enum):
    """What a paste holds."""

    TEXT = "text"
    IMAGE = "image"  # base64 payload, see mime_type


class Visibility(str, Enum):
    PUBLIC = "public"
    OWNER_ONLY = "owner_only"


# =============================================================================
# Paste
# =============================================================================


class Paste(BaseModel):
    """
    A stored paste.

    Image content is kept as raw base64 with the mime type alongside;
    callers reading a paste get it back as a data URL.
    """

    id: str = Field(default_factory=generate_id)
    user_id: str
    title: str = ""
    content: str = ""
    content_type: ContentKind
    mime_type: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    is_public: bool = False

    @property
    def visibility(self) -> Visibility:
        return Visibility.PUBLIC if self.is_public else Visibility.OWNER_ONLY

    def to_document(self) -> dict:
        """Representation handed to the document store."""
        return self.model_dump()

    def to_response(self) -> dict:
        """JSON body; mime_type is omitted when absent."""
        return self.model_dump(mode="json", exclude_none=True)


class CreatePasteRequest(BaseModel):
    title: str = ""
    content: str = ""
    content_type: str = ""  # validated by the paste service
    mime_type: str | None = None
    is_public: bool = False


# =============================================================================
# Accounts
# =============================================================================


class UserSummary(BaseModel):
    """User data returned to client (no sensitive fields)."""

    id: str
    email: str
    created_at: datetime


class RegistrationRequest(BaseModel):
    email: str = Field(min_length=1)
    password_hash: str = Field(min_length=1)
    encrypted_symmetric_key: str


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password_hash: str


class LoginResponse(BaseModel):
    user: UserSummary
    auth_token: str
    encrypted_symmetric_key: str
