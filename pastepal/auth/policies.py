"""
Policies - the authorization guard used by route handlers.

Two FastAPI dependencies resolve to an `AuthContext`:

- `require_auth`: a valid bearer token is mandatory; failures are 401.
- `optional_auth`: no token yields an anonymous context. A bad token does
  not fail the request by itself; it is kept on the context and surfaced by
  `authorize_read` only if the paste is private.

Both share `authenticate`, so verification logic exists once.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header, Request

from pastepal.auth.context import AuthContext
from pastepal.auth.credentials import CredentialStore, CredentialStoreError
from pastepal.core.errors import Forbidden, InvalidFormat, InvalidToken, Unauthorized
from pastepal.core.models import Paste
from pastepal.integrations.sentry import set_user

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


# =============================================================================
# Token Handling
# =============================================================================


def extract_bearer_token(authorization: str | None) -> str:
    """
    Pull the token out of an Authorization header value.

    The prefix must be exactly "Bearer " and the token non-empty.
    """
    if not authorization:
        raise Unauthorized("Authorization header required")

    if not authorization.startswith(BEARER_PREFIX):
        raise InvalidFormat()

    token = authorization[len(BEARER_PREFIX):]
    if not token:
        raise InvalidFormat()
    return token


async def authenticate(
    authorization: str | None,
    credentials: CredentialStore,
) -> AuthContext:
    """Verify the bearer token and build the caller context."""
    token = extract_bearer_token(authorization)

    try:
        identity = await credentials.verify_token(token)
    except CredentialStoreError as e:
        logger.info(f"Token verification failed: {e}")
        raise InvalidToken(detail=str(e))

    set_user(identity.uid)
    return AuthContext(user_id=identity.uid, user_email=identity.email)


def authorize_read(paste: Paste, ctx: AuthContext) -> None:
    """
    Raise unless the caller may read the paste.

    Public pastes are readable by anyone. Private pastes only by their owner.
    """
    if paste.is_public:
        return

    if ctx.auth_error is not None:
        raise ctx.auth_error

    if not ctx.is_owner_of(paste.user_id):
        raise Forbidden()


# =============================================================================
# FastAPI Dependencies
# =============================================================================


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credentials


async def require_auth(
    authorization: str | None = Header(default=None),
    credentials: CredentialStore = Depends(get_credential_store),
) -> AuthContext:
    """Mandatory authentication."""
    return await authenticate(authorization, credentials)


async def optional_auth(
    authorization: str | None = Header(default=None),
    credentials: CredentialStore = Depends(get_credential_store),
) -> AuthContext:
    """Authentication that tolerates an absent or failing token."""
    if authorization is None:
        return AuthContext.anonymous()

    try:
        return await authenticate(authorization, credentials)
    except Unauthorized as e:
        return AuthContext.anonymous(auth_error=e)
