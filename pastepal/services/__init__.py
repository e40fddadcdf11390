"""
Services - business logic behind the HTTP routes.
"""

from pastepal.services.accounts import AccountService, LoginResult
from pastepal.services.pastes import PasteService, PasteListing

__all__ = [
    "AccountService",
    "LoginResult",
    "PasteService",
    "PasteListing",
]
