"""
Paste routes.

Create and list require a bearer token. Reading a single paste does not;
the guard still resolves the caller when a token is sent so private pastes
can be shown to their owner.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pastepal.api.dependencies import get_paste_service
from pastepal.auth.context import AuthContext
from pastepal.auth.policies import optional_auth, require_auth
from pastepal.core.models import CreatePasteRequest
from pastepal.services import PasteService

router = APIRouter(prefix="/api/pastes", tags=["pastes"])

SKIPPED_HEADER = "X-Skipped-Pastes"


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_paste(
    request: CreatePasteRequest,
    ctx: AuthContext = Depends(require_auth),
    pastes: PasteService = Depends(get_paste_service),
):
    """Create a paste. The response carries the stored (encoded) content."""
    paste = await pastes.create(
        owner_id=ctx.user_id,
        title=request.title,
        content=request.content,
        content_type=request.content_type,
        mime_type=request.mime_type,
        is_public=request.is_public,
    )
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=paste.to_response())


@router.get("")
async def list_pastes(
    ctx: AuthContext = Depends(require_auth),
    pastes: PasteService = Depends(get_paste_service),
):
    """List the caller's pastes, newest first."""
    listing = await pastes.list_for_owner(ctx.user_id)

    headers = {}
    if listing.skipped:
        headers[SKIPPED_HEADER] = str(listing.skipped)

    return JSONResponse(
        content=[paste.to_response() for paste in listing.pastes],
        headers=headers,
    )


@router.get("/{paste_id}")
async def get_paste(
    paste_id: str,
    ctx: AuthContext = Depends(optional_auth),
    pastes: PasteService = Depends(get_paste_service),
):
    """Get a paste by ID."""
    paste = await pastes.get(paste_id, ctx)
    return JSONResponse(content=paste.to_response())
