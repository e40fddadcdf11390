"""
Credential store interface.

The identity provider is opaque to the services: it creates accounts, looks
them up, and issues and verifies session tokens. Implementations raise
`CredentialStoreError` on any failure; the message is passed on to callers
as the internal error detail.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel


class Identity(BaseModel):
    """An account as known to the identity provider."""
    uid: str
    email: str


class CredentialStoreError(Exception):
    """Identity provider operation failed."""
    pass


class CredentialStore(ABC):
    """Identity provider capability consumed by the services."""

    @abstractmethod
    async def create_account(self, email: str, password: str) -> Identity:
        """Create an account. Fails if the email is already registered."""
        pass

    @abstractmethod
    async def get_account_by_email(self, email: str) -> Identity:
        pass

    @abstractmethod
    async def delete_account(self, uid: str) -> None:
        pass

    @abstractmethod
    async def issue_token(self, uid: str) -> str:
        """Issue a session token for an existing account."""
        pass

    @abstractmethod
    async def verify_token(self, token: str) -> Identity:
        """Verify a session token and return the identity it names."""
        pass
