"""
Auth context - who is calling, for the lifetime of one request.

This is the lightweight object the guard hands to route handlers and that
handlers pass down to the services. It is the only carrier of the caller
identity.
"""

from __future__ import annotations

from dataclasses import dataclass

from pastepal.core.errors import Unauthorized


@dataclass(frozen=True)
class AuthContext:
    """
    Authorization context for a request.

    Usage in routes:
        async def my_route(ctx: AuthContext = Depends(require_auth)):
            print(f"User {ctx.user_id} creating a paste")
    """

    user_id: str | None = None
    user_email: str | None = None

    # Set on the optional-auth path when a token was sent but did not verify.
    # Raised only if the operation turns out to need the identity.
    auth_error: Unauthorized | None = None

    @property
    def is_authenticated(self) -> bool:
        """Is there a verified user?"""
        return self.user_id is not None

    def is_owner_of(self, owner_id: str) -> bool:
        return self.user_id is not None and self.user_id == owner_id

    @classmethod
    def anonymous(cls, auth_error: Unauthorized | None = None) -> AuthContext:
        """Create an anonymous context (no user)."""
        return cls(auth_error=auth_error)
