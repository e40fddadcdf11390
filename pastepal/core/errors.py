"""
Error taxonomy.

Every failure the services can report is a `PastePalError` carrying the HTTP
status it maps to. The client-facing `message` is kept apart from the
internal `detail` (usually the text of an underlying store error) so the API
layer can decide whether to expose the latter.
"""

from __future__ import annotations


class PastePalError(Exception):
    """Base class for all service errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, detail: str | None = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.public_message(expose_detail=True))

    def public_message(self, expose_detail: bool = True) -> str:
        """Message returned to the client."""
        if expose_detail and self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


# =============================================================================
# Client errors
# =============================================================================


class MalformedRequest(PastePalError):
    """Body could not be parsed or does not match the schema."""

    status_code = 400
    default_message = "Invalid request body"


class InvalidContentType(MalformedRequest):
    default_message = "Invalid content type"


class InvalidContentEncoding(PastePalError):
    """Image content is neither a base64 data URL nor raw base64."""

    status_code = 400
    default_message = "Invalid image format"


class MalformedContent(InvalidContentEncoding):
    """Data URL does not have the `data:<mime>;base64,<payload>` shape."""


class InvalidEncoding(InvalidContentEncoding):
    """Payload is not valid base64."""

    default_message = "Invalid base64 encoding"


class Unauthorized(PastePalError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidFormat(Unauthorized):
    default_message = "Invalid authorization format"


class InvalidToken(Unauthorized):
    default_message = "Invalid token"


class Forbidden(PastePalError):
    status_code = 403
    default_message = "Unauthorized to access this paste"


class NotFound(PastePalError):
    status_code = 404
    default_message = "Paste not found"


# =============================================================================
# Dependency errors
# =============================================================================


class ProviderError(PastePalError):
    default_message = "Failed to create user"


class PersistenceError(PastePalError):
    default_message = "Failed to store data"


class TokenError(PastePalError):
    default_message = "Failed to create token"


class IncompleteProfile(PastePalError):
    default_message = "User data incomplete"


class DeserializationError(PastePalError):
    default_message = "Error processing paste data"
