"""Path parameter parsing.

Ids that are not valid UUIDs are reported as the corresponding not-found
error rather than a validation error.
"""

from typing import Annotated, Callable
from uuid import UUID

from fastapi import Depends

from core.exceptions import (
    CommentNotFoundError,
    EducationNotFoundError,
    ExperienceNotFoundError,
    NotFoundError,
    PostNotFoundError,
    ProfileNotFoundError,
)


def _parse(raw: str, not_found: Callable[[str], NotFoundError]) -> UUID:
    try:
        return UUID(raw)
    except ValueError as exc:
        raise not_found(raw) from exc


def post_id_param(post_id: str) -> UUID:
    return _parse(post_id, PostNotFoundError)


def comment_id_param(comment_id: str) -> UUID:
    return _parse(comment_id, CommentNotFoundError)


def user_id_param(user_id: str) -> UUID:
    # An unknown owner reads as "no profile for this user"
    return _parse(user_id, ProfileNotFoundError)


def exp_id_param(exp_id: str) -> UUID:
    return _parse(exp_id, ExperienceNotFoundError)


def edu_id_param(edu_id: str) -> UUID:
    return _parse(edu_id, EducationNotFoundError)


PostId = Annotated[UUID, Depends(post_id_param)]
CommentId = Annotated[UUID, Depends(comment_id_param)]
UserId = Annotated[UUID, Depends(user_id_param)]
ExperienceId = Annotated[UUID, Depends(exp_id_param)]
EducationId = Annotated[UUID, Depends(edu_id_param)]
