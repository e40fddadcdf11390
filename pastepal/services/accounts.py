"""
Account service - registration and login.

Registration creates the identity with the provider, mirrors it as a profile
document (encrypted symmetric key + credential hash), and issues a session
token. Login looks the identity up by email, reads the profile back and
issues a fresh token.

The credential hash arrives pre-hashed from the client and the symmetric key
arrives encrypted; neither is ever transformed here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pastepal.auth.credentials import CredentialStore, CredentialStoreError
from pastepal.core.errors import (
    IncompleteProfile,
    PersistenceError,
    ProviderError,
    TokenError,
    Unauthorized,
)
from pastepal.core.models import UserSummary
from pastepal.core.utils import utc_now
from pastepal.integrations.sentry import capture_exception
from pastepal.storage.base import Collections, DocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    token: str
    user: UserSummary
    encrypted_symmetric_key: str


class AccountService:
    """Registration and login flows."""

    def __init__(
        self,
        credentials: CredentialStore,
        documents: DocumentStore,
        reject_credential_mismatch: bool = False,
    ):
        self.credentials = credentials
        self.documents = documents
        self.reject_credential_mismatch = reject_credential_mismatch

    async def register(
        self,
        email: str,
        password_hash: str,
        encrypted_symmetric_key: str,
    ) -> str:
        """
        Register a new account and return its session token.

        If the profile cannot be stored, the provider account is deleted
        again so the two stores stay in step.

        Raises:
            ProviderError: provider refused the account (e.g. duplicate email)
            PersistenceError: profile document could not be written
            TokenError: account exists but no token could be issued
        """
        try:
            identity = await self.credentials.create_account(email, password_hash)
        except CredentialStoreError as e:
            logger.warning(f"Provider error creating user: {e}")
            raise ProviderError(detail=str(e))

        profile = {
            "email": email,
            "encrypted_symmetric_key": encrypted_symmetric_key,
            "password_hash": password_hash,
            "created_at": utc_now(),
        }
        try:
            await self.documents.put(Collections.USERS, identity.uid, profile)
        except DocumentStoreError as e:
            logger.error(f"Failed to store profile for {identity.uid}: {e}")
            await self._rollback_account(identity.uid)
            raise PersistenceError("Failed to store user data", detail=str(e))

        try:
            token = await self.credentials.issue_token(identity.uid)
        except CredentialStoreError as e:
            logger.error(f"Failed to issue token for {identity.uid}: {e}")
            raise TokenError(detail=str(e))

        logger.info(f"User registered: {identity.uid}")
        return token

    async def _rollback_account(self, uid: str) -> None:
        """Best-effort removal of a half-registered provider account."""
        try:
            await self.credentials.delete_account(uid)
        except CredentialStoreError as e:
            logger.error(f"Rollback of account {uid} failed: {e}")
            capture_exception(e, uid=uid, action="register_rollback")

    async def login(self, email: str, password_hash: str) -> LoginResult:
        """
        Log in and return a token, user summary and the stored key blob.

        Raises:
            Unauthorized: unknown email (reported generically)
            PersistenceError: profile could not be read
            IncompleteProfile: profile lacks a required field
            TokenError: no token could be issued
        """
        try:
            identity = await self.credentials.get_account_by_email(email)
        except CredentialStoreError as e:
            logger.info(f"Login lookup failed: {e}")
            raise Unauthorized("Authentication failed")

        try:
            profile = await self.documents.get(Collections.USERS, identity.uid)
        except DocumentStoreError as e:
            logger.error(f"Failed to read profile for {identity.uid}: {e}")
            raise PersistenceError("Failed to retrieve user data")
        if profile is None:
            logger.error(f"Profile missing for {identity.uid}")
            raise PersistenceError("Failed to retrieve user data")

        stored_hash = _profile_field(profile, "password_hash")
        if password_hash != stored_hash:
            # Known gap: the hash is compared but, unless configured, not enforced
            logger.warning(f"Password hash mismatch for {identity.uid}")
            if self.reject_credential_mismatch:
                raise Unauthorized("Authentication failed")

        try:
            token = await self.credentials.issue_token(identity.uid)
        except CredentialStoreError as e:
            logger.error(f"Failed to issue token for {identity.uid}: {e}")
            raise TokenError(detail=str(e))

        encrypted_symmetric_key = _profile_field(profile, "encrypted_symmetric_key")

        return LoginResult(
            token=token,
            user=UserSummary(
                id=identity.uid,
                email=identity.email,
                created_at=utc_now(),
            ),
            encrypted_symmetric_key=encrypted_symmetric_key,
        )


def _profile_field(profile: dict[str, Any], name: str) -> str:
    value = profile.get(name)
    if not isinstance(value, str):
        logger.error(f"Profile field {name} missing or not a string")
        raise IncompleteProfile()
    return value
