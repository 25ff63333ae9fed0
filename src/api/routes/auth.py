"""Login and current-user routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_auth_service
from api.schemas.auth import LoginRequest, TokenResponse
from api.schemas.common import ErrorResponse
from api.schemas.user import UserDetailResponse, UserResponse
from core.rate_limit import limiter
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserDetailResponse,
    summary="Get the authenticated user",
    responses={
        200: {"description": "The user the token was issued for"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> UserDetailResponse:
    """Get the authenticated user, without the password hash."""
    account = await service.get_user(user.id)
    return UserDetailResponse(data=UserResponse.model_validate(account))


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        200: {"description": "Signed token"},
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Exchange email and password for a token.

    Send the token back in the `x-auth-token` header.
    """
    token = await service.login(email=body.email, password=body.password)
    return TokenResponse(token=token)
