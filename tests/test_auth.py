"""
Tests for the authorization guard and the local credential store.
"""

from datetime import timedelta

import jwt
import pytest

from pastepal.auth.context import AuthContext
from pastepal.auth.credentials import CredentialStoreError
from pastepal.auth.policies import authenticate, authorize_read, extract_bearer_token
from pastepal.core.errors import Forbidden, InvalidFormat, InvalidToken, Unauthorized
from pastepal.core.models import ContentKind, Paste
from pastepal.core.utils import utc_now


def make_paste(is_public, owner="owner"):
    return Paste(user_id=owner, content="x", content_type=ContentKind.TEXT, is_public=is_public)


# =============================================================================
# Bearer Parsing
# =============================================================================


class TestExtractBearerToken:
    def test_valid(self):
        assert extract_bearer_token("Bearer abc.def") == "abc.def"

    def test_missing_header(self):
        with pytest.raises(Unauthorized) as exc:
            extract_bearer_token(None)
        assert exc.value.message == "Authorization header required"
        assert not isinstance(exc.value, InvalidFormat)

    @pytest.mark.parametrize("value", ["abc.def", "bearer abc", "Basic dXNlcjpwYXNz", "Bearer"])
    def test_missing_prefix(self, value):
        with pytest.raises(InvalidFormat):
            extract_bearer_token(value)

    def test_empty_token(self):
        with pytest.raises(InvalidFormat):
            extract_bearer_token("Bearer ")


# =============================================================================
# Authenticate
# =============================================================================


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_valid_token(self, credentials):
        identity = await credentials.create_account("a@x.com", "h1")
        token = await credentials.issue_token(identity.uid)

        ctx = await authenticate(f"Bearer {token}", credentials)

        assert ctx.user_id == identity.uid
        assert ctx.user_email == "a@x.com"
        assert ctx.is_authenticated

    @pytest.mark.asyncio
    async def test_invalid_token_carries_store_error(self, credentials):
        with pytest.raises(InvalidToken) as exc:
            await authenticate("Bearer not-a-jwt", credentials)
        assert exc.value.status_code == 401
        assert exc.value.public_message().startswith("Invalid token: ")

    @pytest.mark.asyncio
    async def test_format_checked_before_verification(self, credentials):
        with pytest.raises(InvalidFormat):
            await authenticate("Token abc", credentials)


# =============================================================================
# Authorize Read
# =============================================================================


class TestAuthorizeRead:
    def test_public_readable_by_anyone(self):
        paste = make_paste(is_public=True)
        authorize_read(paste, AuthContext.anonymous())
        authorize_read(paste, AuthContext(user_id="someone-else"))
        authorize_read(paste, AuthContext.anonymous(auth_error=InvalidToken()))

    def test_private_readable_by_owner(self):
        authorize_read(make_paste(is_public=False), AuthContext(user_id="owner"))

    def test_private_forbidden_for_other_user(self):
        with pytest.raises(Forbidden):
            authorize_read(make_paste(is_public=False), AuthContext(user_id="intruder"))

    def test_private_forbidden_for_anonymous(self):
        with pytest.raises(Forbidden):
            authorize_read(make_paste(is_public=False), AuthContext.anonymous())

    def test_private_with_bad_token_reports_token_error(self):
        error = InvalidToken(detail="expired")
        with pytest.raises(InvalidToken):
            authorize_read(make_paste(is_public=False), AuthContext.anonymous(auth_error=error))


# =============================================================================
# Local Credential Store
# =============================================================================


class TestLocalCredentialStore:
    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, credentials):
        await credentials.create_account("a@x.com", "h1")
        with pytest.raises(CredentialStoreError):
            await credentials.create_account("a@x.com", "h2")

    @pytest.mark.asyncio
    async def test_email_is_case_sensitive(self, credentials):
        await credentials.create_account("a@x.com", "h1")
        other = await credentials.create_account("A@x.com", "h1")
        assert (await credentials.get_account_by_email("A@x.com")).uid == other.uid

    @pytest.mark.asyncio
    async def test_empty_password_rejected(self, credentials):
        with pytest.raises(CredentialStoreError):
            await credentials.create_account("a@x.com", "")

    @pytest.mark.asyncio
    async def test_unknown_email(self, credentials):
        with pytest.raises(CredentialStoreError):
            await credentials.get_account_by_email("nobody@x.com")

    @pytest.mark.asyncio
    async def test_deleted_account_frees_email_and_invalidates_tokens(self, credentials):
        identity = await credentials.create_account("a@x.com", "h1")
        token = await credentials.issue_token(identity.uid)

        await credentials.delete_account(identity.uid)

        with pytest.raises(CredentialStoreError):
            await credentials.verify_token(token)
        with pytest.raises(CredentialStoreError):
            await credentials.get_account_by_email("a@x.com")
        await credentials.create_account("a@x.com", "h1")

    @pytest.mark.asyncio
    async def test_token_for_unknown_uid(self, credentials):
        with pytest.raises(CredentialStoreError):
            await credentials.issue_token("missing")

    @pytest.mark.asyncio
    async def test_expired_token(self, credentials, settings):
        identity = await credentials.create_account("a@x.com", "h1")
        past = utc_now() - timedelta(hours=2)
        token = jwt.encode(
            {"sub": identity.uid, "iat": past, "exp": past + timedelta(minutes=1)},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(CredentialStoreError, match="expired"):
            await credentials.verify_token(token)

    @pytest.mark.asyncio
    async def test_token_signed_with_other_key(self, credentials):
        identity = await credentials.create_account("a@x.com", "h1")
        token = jwt.encode(
            {"sub": identity.uid, "iat": utc_now(), "exp": utc_now() + timedelta(minutes=5)},
            "some-other-secret-key-of-enough-length",
            algorithm="HS256",
        )
        with pytest.raises(CredentialStoreError):
            await credentials.verify_token(token)

    @pytest.mark.asyncio
    async def test_password_not_kept_in_clear(self, credentials):
        identity = await credentials.create_account("a@x.com", "h1")
        stored = credentials._password_hashes[identity.uid]
        assert "h1" not in stored.split(":")
