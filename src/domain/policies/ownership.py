"""Ownership rules for mutating user-owned resources.

Profiles and accounts need no rule here: every profile or account operation
is keyed by the caller's own identity, so there is no target to check.
"""

from uuid import UUID

from core.exceptions import AuthorizationError
from domain.entities.post import Post


def can_mutate_post(user_id: UUID, post: Post) -> bool:
    """Only the author may mutate (delete) a post."""
    return post.user_id == user_id


def require_post_author(user_id: UUID, post: Post) -> None:
    """Raise AuthorizationError unless ``user_id`` authored ``post``."""
    if not can_mutate_post(user_id, post):
        raise AuthorizationError("Post cannot be deleted: you are not the author")
