"""Post API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.ids import CommentId, PostId
from api.dependencies.services import get_post_service
from api.schemas.common import ErrorResponse, MessageResponse
from api.schemas.post import (
    CommentCreate,
    LikeRequest,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
)
from core.rate_limit import limiter
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])

_NOT_FOUND = {"model": ErrorResponse, "description": "Post or comment not found"}
_UNAUTHORIZED = {"model": ErrorResponse, "description": "Missing or invalid token"}


@router.get(
    "",
    response_model=PostListResponse,
    summary="List my posts",
    responses={401: _UNAUTHORIZED},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_my_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Get the authenticated user's posts, newest first."""
    posts = await service.list_for_user(user.id)
    return PostListResponse(data=[PostResponse.model_validate(p) for p in posts])


@router.get(
    "/all",
    response_model=PostListResponse,
    summary="List all posts",
    responses={401: _UNAUTHORIZED},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_all_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Get every post, newest first."""
    posts = await service.list_all()
    return PostListResponse(data=[PostResponse.model_validate(p) for p in posts])


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: PostId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Get a post by id."""
    post = await service.get(post_id)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.post(
    "",
    response_model=PostDetailResponse,
    summary="Create a post",
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: _UNAUTHORIZED,
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Create a post. The author's current name and avatar are copied onto it."""
    post = await service.create(user.id, body.text)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.put(
    "/{post_id}/like",
    response_model=PostDetailResponse,
    summary="Like a post",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: PostId,
    user: CurrentUser,
    body: LikeRequest | None = None,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """
    Like a post.

    Liking twice leaves the post unchanged and returns an informational message.
    """
    target = body.user if body and body.user else user.id
    outcome = await service.like(post_id, target)
    message = "Post liked" if outcome.changed else "Post has already been liked"
    return PostDetailResponse(data=PostResponse.model_validate(outcome.post), message=message)


@router.put(
    "/{post_id}/unlike",
    response_model=PostDetailResponse,
    summary="Unlike a post",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: PostId,
    user: CurrentUser,
    body: LikeRequest | None = None,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """
    Remove a like from a post.

    Unliking a post that was not liked returns it unchanged.
    """
    target = body.user if body and body.user else user.id
    outcome = await service.unlike(post_id, target)
    message = "Post unliked" if outcome.changed else "Post has already been unliked"
    return PostDetailResponse(data=PostResponse.model_validate(outcome.post), message=message)


@router.post(
    "/{post_id}/comment",
    response_model=PostDetailResponse,
    summary="Comment on a post",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: PostId,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Append a comment to a post."""
    post = await service.add_comment(post_id, user.id, body.text)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.delete(
    "/{post_id}/comment/{comment_id}",
    response_model=PostDetailResponse,
    summary="Delete a comment",
    responses={400: _NOT_FOUND, 401: _UNAUTHORIZED},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    post_id: PostId,
    comment_id: CommentId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Delete a comment from a post."""
    post = await service.remove_comment(post_id, comment_id)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        400: _NOT_FOUND,
        401: _UNAUTHORIZED,
        403: {"model": ErrorResponse, "description": "Not the author"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: PostId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete a post. Only its author may do so."""
    await service.delete(post_id, user.id)
    return MessageResponse(message="Post removed")
