"""
Authentication and authorization.

- `CredentialStore`: the identity provider interface (see `local` for the
  in-process implementation)
- `require_auth` / `optional_auth`: FastAPI dependencies resolving the
  caller's `AuthContext`
- `authorize_read`: public/owner visibility check for pastes
"""

from pastepal.auth.context import AuthContext
from pastepal.auth.credentials import CredentialStore, CredentialStoreError, Identity
from pastepal.auth.local import LocalCredentialStore
from pastepal.auth.policies import (
    authenticate,
    authorize_read,
    extract_bearer_token,
    optional_auth,
    require_auth,
)

__all__ = [
    "AuthContext",
    "CredentialStore",
    "CredentialStoreError",
    "Identity",
    "LocalCredentialStore",
    "authenticate",
    "authorize_read",
    "extract_bearer_token",
    "optional_auth",
    "require_auth",
]
