"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.ids import EducationId, ExperienceId, UserId
from api.dependencies.services import get_profile_service
from api.schemas.common import ErrorResponse, MessageResponse
from api.schemas.profile import (
    EducationIn,
    EducationResponse,
    ExperienceIn,
    ExperienceResponse,
    GitHubReposResponse,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileOwner,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import limiter
from domain.entities.profile import Education, Experience, Profile
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])

_NOT_FOUND = {"model": ErrorResponse, "description": "Profile or entry not found"}
_UNAUTHORIZED = {"model": ErrorResponse, "description": "Missing or invalid token"}


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile."""
    profile = await service.get_mine(user.id)
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List all profiles",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get every profile with its owner's name and avatar."""
    profiles = await service.list_all()
    return ProfileListResponse(data=[_build_profile_response(p) for p in profiles])


@router.get(
    "/user/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get a user's profile",
    responses={400: _NOT_FOUND},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: UserId,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the profile owned by a user. A malformed id reads as no profile."""
    profile = await service.get_by_user(user_id)
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.get(
    "/github/{username}",
    response_model=GitHubReposResponse,
    summary="List a GitHub user's repositories",
    responses={404: {"model": ErrorResponse, "description": "No GitHub profile found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> GitHubReposResponse:
    """Proxy the five oldest public repositories of a GitHub user."""
    repos = await service.get_github_repos(username)
    return GitHubReposResponse(data=repos)


@router.post(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update my profile",
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: _UNAUTHORIZED,
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """
    Create the authenticated user's profile, or update it if one exists.

    Only fields present in the body are changed on update.
    `skills` accepts a comma-separated string or a list.
    """
    profile = await service.upsert(user.id, body.model_dump(exclude_unset=True))
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete my account",
    responses={401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """
    Delete the authenticated user's profile and account.

    Posts and comments written by the user are kept.
    """
    await service.delete_account(user.id)
    return MessageResponse(message="User deleted")


@router.post(
    "/experience",
    response_model=ProfileDetailResponse,
    summary="Add an experience entry",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceIn,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Append an experience entry to the authenticated user's profile."""
    profile = await service.add_experience(user.id, Experience(**body.model_dump()))
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.put(
    "/experience/{exp_id}",
    response_model=ProfileDetailResponse,
    summary="Replace an experience entry",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_experience(
    request: Request,
    exp_id: ExperienceId,
    body: ExperienceIn,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Replace an experience entry, keeping its id and position."""
    profile = await service.update_experience(user.id, exp_id, body.model_dump())
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileDetailResponse,
    summary="Delete an experience entry",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_experience(
    request: Request,
    exp_id: ExperienceId,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an experience entry from the authenticated user's profile."""
    profile = await service.remove_experience(user.id, exp_id)
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.post(
    "/education",
    response_model=ProfileDetailResponse,
    summary="Add an education entry",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationIn,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Append an education entry to the authenticated user's profile."""
    profile = await service.add_education(user.id, Education(**body.model_dump()))
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.put(
    "/education/{edu_id}",
    response_model=ProfileDetailResponse,
    summary="Replace an education entry",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_education(
    request: Request,
    edu_id: EducationId,
    body: EducationIn,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Replace an education entry, keeping its id and position."""
    profile = await service.update_education(user.id, edu_id, body.model_dump())
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileDetailResponse,
    summary="Delete an education entry",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_education(
    request: Request,
    edu_id: EducationId,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an education entry from the authenticated user's profile."""
    profile = await service.remove_education(user.id, edu_id)
    return ProfileDetailResponse(data=_build_profile_response(profile))


def _build_profile_response(profile: Profile) -> ProfileResponse:
    """Build a ProfileResponse from a Profile entity."""
    return ProfileResponse(
        id=profile.id,
        user=ProfileOwner(
            id=profile.user_id,
            name=profile.owner_name,
            avatar=profile.owner_avatar,
        ),
        status=profile.status,
        skills=profile.skills,
        handle=profile.handle,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        github_username=profile.github_username,
        social=profile.social.to_dict(),
        experience=[ExperienceResponse.model_validate(e) for e in profile.experience],
        education=[EducationResponse.model_validate(e) for e in profile.education],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )
