"""
Shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from pastepal.api.app import create_app
from pastepal.auth.local import LocalCredentialStore
from pastepal.config import Settings
from pastepal.services import AccountService, PasteService
from pastepal.storage import InMemoryDocumentStore
from tests._helpers import register_user


# =============================================================================
# Backends
# =============================================================================


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        environment="test",
        jwt_secret_key="test-secret-key-with-enough-length",
        sentry_dsn="",
        cors_origins="*",
        reject_credential_mismatch=False,
        expose_internal_errors=True,
        store_retry_attempts=1,
        store_timeout_seconds=None,
    )


@pytest.fixture
def credentials(settings):
    return LocalCredentialStore(settings)


@pytest.fixture
def documents():
    return InMemoryDocumentStore()


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def account_service(credentials, documents):
    return AccountService(credentials, documents)


@pytest.fixture
def paste_service(documents):
    return PasteService(documents)


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def app(settings, credentials, documents):
    return create_app(settings, credentials=credentials, documents=documents)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_header(client):
    """Authorization header of a freshly registered user."""
    return {"Authorization": register_user(client)}
