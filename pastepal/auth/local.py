# =============================================================================
# Local Credential Store
# =============================================================================
#
# In-memory identity provider for development and tests:
#   - Accounts keyed by generated uid, unique case-sensitive email
#   - Provider password stored as a PBKDF2 digest
#   - Session tokens are HS256 JWTs (PyJWT)
#
# =============================================================================

from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import timedelta

import jwt

from pastepal.auth.credentials import CredentialStore, CredentialStoreError, Identity
from pastepal.config import Settings, get_settings
from pastepal.core.utils import generate_id, utc_now

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """
    Hash a password using PBKDF2-SHA256.

    Returns: salt:hash format string
    """
    salt = secrets.token_hex(16)
    hash_bytes = hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt.encode('utf-8'),
        iterations=100_000
    )
    return f"{salt}:{hash_bytes.hex()}"


class LocalCredentialStore(CredentialStore):
    """Identity provider kept in process memory."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._accounts: dict[str, Identity] = {}
        self._password_hashes: dict[str, str] = {}
        self._uid_by_email: dict[str, str] = {}

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    async def create_account(self, email: str, password: str) -> Identity:
        if not email:
            raise CredentialStoreError("email must be a non-empty string")
        if not password:
            raise CredentialStoreError("password must be a non-empty string")
        if email in self._uid_by_email:
            raise CredentialStoreError("user with the provided email already exists")

        identity = Identity(uid=generate_id(), email=email)
        self._accounts[identity.uid] = identity
        self._password_hashes[identity.uid] = hash_password(password)
        self._uid_by_email[email] = identity.uid
        logger.debug(f"Account created: {identity.uid}")
        return identity

    async def get_account_by_email(self, email: str) -> Identity:
        uid = self._uid_by_email.get(email)
        if uid is None:
            raise CredentialStoreError(f"no user exists with the email: {email!r}")
        return self._accounts[uid]

    async def delete_account(self, uid: str) -> None:
        identity = self._accounts.pop(uid, None)
        if identity is None:
            raise CredentialStoreError(f"no user exists with the uid: {uid!r}")
        self._password_hashes.pop(uid, None)
        self._uid_by_email.pop(identity.email, None)
        logger.debug(f"Account deleted: {uid}")

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    async def issue_token(self, uid: str) -> str:
        if uid not in self._accounts:
            raise CredentialStoreError(f"no user exists with the uid: {uid!r}")

        now = utc_now()
        payload = {
            "sub": uid,
            "iat": now,
            "exp": now + timedelta(minutes=self.settings.token_expire_minutes),
            "jti": secrets.token_hex(8),
        }
        return jwt.encode(
            payload,
            self.settings.jwt_secret_key,
            algorithm=self.settings.jwt_algorithm,
        )

    async def verify_token(self, token: str) -> Identity:
        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret_key,
                algorithms=[self.settings.jwt_algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise CredentialStoreError("token has expired")
        except jwt.InvalidTokenError as e:
            raise CredentialStoreError(f"malformed token: {e}")

        identity = self._accounts.get(payload["sub"])
        if identity is None:
            raise CredentialStoreError("token subject no longer exists")
        return identity
