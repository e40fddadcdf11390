"""
Content codec.

Translates paste payloads between the wire form callers submit and read
(text, or an image as a `data:<mime>;base64,<payload>` URL) and the storage
form (raw base64 plus a separate mime type).

Only the envelope is checked. The decoded image bytes are never inspected.
"""

from __future__ import annotations

import base64
import binascii

from pastepal.core.errors import InvalidEncoding, MalformedContent
from pastepal.core.models import ContentKind, Paste

DATA_URL_PREFIX = "data:"
DEFAULT_IMAGE_MIME = "image/png"


def _validate_base64(payload: str) -> None:
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(detail=str(e))


def parse_data_url(content: str) -> tuple[str, str]:
    """
    Split a base64 data URL into (mime type, payload).

    The URL must split on "," into header and payload, the header on ":"
    into exactly two parts, and the media part on ";" into exactly two parts
    ending in "base64".
    """
    parts = content.split(",")
    if len(parts) != 2:
        raise MalformedContent()
    header, payload = parts

    mime_info = header.split(":")
    if len(mime_info) != 2:
        raise MalformedContent()

    media = mime_info[1].split(";")
    if len(media) != 2 or media[1] != "base64":
        raise MalformedContent("Only base64 encoded images are supported")

    return media[0], payload


def encode(
    kind: ContentKind,
    content: str,
    mime_type: str | None = None,
) -> tuple[str, str | None]:
    """
    Normalize submitted content into storage form.

    Returns (content, mime type). Text passes through untouched with no mime
    type. Images are reduced to their raw base64 payload.

    Raises:
        MalformedContent: data URL with the wrong shape
        InvalidEncoding: payload is not valid base64
    """
    if kind == ContentKind.TEXT:
        return content, None

    if content.startswith(DATA_URL_PREFIX):
        mime_type, payload = parse_data_url(content)
        _validate_base64(payload)
        return payload, mime_type

    _validate_base64(content)
    return content, mime_type or DEFAULT_IMAGE_MIME


def decode(paste: Paste) -> str:
    """Caller-facing content of a stored paste."""
    if paste.content_type != ContentKind.IMAGE:
        return paste.content
    if paste.content.startswith(DATA_URL_PREFIX):
        return paste.content
    return f"data:{paste.mime_type or ''};base64,{paste.content}"


def decoded(paste: Paste) -> Paste:
    """Copy of the paste with its content in caller-facing form."""
    return paste.model_copy(update={"content": decode(paste)})
