"""
Core domain: paste models, the content codec and the error taxonomy.
"""

from pastepal.core.models import (
    ContentKind,
    Visibility,
    Paste,
    CreatePasteRequest,
    UserSummary,
    RegistrationRequest,
    LoginRequest,
    LoginResponse,
)
from pastepal.core.errors import (
    PastePalError,
    MalformedRequest,
    InvalidContentType,
    InvalidContentEncoding,
    MalformedContent,
    InvalidEncoding,
    Unauthorized,
    InvalidFormat,
    InvalidToken,
    Forbidden,
    NotFound,
    ProviderError,
    PersistenceError,
    TokenError,
    IncompleteProfile,
    DeserializationError,
)
from pastepal.core.utils import generate_id, utc_now

__all__ = [
    # Models
    "ContentKind",
    "Visibility",
    "Paste",
    "CreatePasteRequest",
    "UserSummary",
    "RegistrationRequest",
    "LoginRequest",
    "LoginResponse",
    # Errors
    "PastePalError",
    "MalformedRequest",
    "InvalidContentType",
    "InvalidContentEncoding",
    "MalformedContent",
    "InvalidEncoding",
    "Unauthorized",
    "InvalidFormat",
    "InvalidToken",
    "Forbidden",
    "NotFound",
    "ProviderError",
    "PersistenceError",
    "TokenError",
    "IncompleteProfile",
    "DeserializationError",
    # Utils
    "generate_id",
    "utc_now",
]
