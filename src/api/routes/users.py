"""User registration routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.services import get_auth_service
from api.schemas.common import ErrorResponse, MessageResponse
from api.schemas.user import UserRegister
from core.rate_limit import limiter
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=MessageResponse,
    summary="Register a user",
    responses={
        200: {"description": "User registered"},
        400: {"model": ErrorResponse, "description": "Validation error or email taken"},
    },
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def register_user(
    request: Request,
    body: UserRegister,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Register a new account.

    The avatar is derived from the email address via Gravatar.
    """
    await service.register(email=body.email, name=body.name, password=body.password)
    return MessageResponse(message="User registered successfully")
