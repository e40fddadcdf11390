# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST /api/auth/register - Create account, token in Authorization header
#   POST /api/auth/login    - Get token, user summary and encrypted key
#
# =============================================================================

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pastepal.api.dependencies import get_account_service
from pastepal.auth.policies import BEARER_PREFIX
from pastepal.core.models import LoginRequest, LoginResponse, RegistrationRequest
from pastepal.services import AccountService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    data: RegistrationRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Create a new account.

    The session token is returned in the Authorization header.
    """
    token = await accounts.register(
        email=data.email,
        password_hash=data.password_hash,
        encrypted_symmetric_key=data.encrypted_symmetric_key,
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "User registered successfully"},
        headers={"Authorization": BEARER_PREFIX + token},
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Authenticate and get a token.
    """
    result = await accounts.login(data.email, data.password_hash)
    response = LoginResponse(
        user=result.user,
        auth_token=result.token,
        encrypted_symmetric_key=result.encrypted_symmetric_key,
    )
    return JSONResponse(
        content=response.model_dump(mode="json"),
        headers={"Authorization": BEARER_PREFIX + result.token},
    )
