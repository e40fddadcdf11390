"""
FastAPI dependencies resolving the per-app services.

Services are built once in `create_app` and kept on `app.state`.
"""

from __future__ import annotations

from fastapi import Request

from pastepal.services import AccountService, PasteService


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_paste_service(request: Request) -> PasteService:
    return request.app.state.paste_service
