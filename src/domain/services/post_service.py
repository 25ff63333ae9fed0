"""Post service layer with business logic."""

import logging
from collections.abc import Callable
from uuid import UUID

from core.exceptions import CommentNotFoundError, PostNotFoundError, UserNotFoundError
from domain.entities.post import Comment, LikeOutcome, Post
from domain.policies.ownership import require_post_author
from domain.repositories.unit_of_work import IUnitOfWork

logger = logging.getLogger(__name__)


class PostService:
    """Service layer for Post business logic.

    Likes and comments are open to any authenticated user; deleting a post
    is reserved to its author.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            post = Post(user_id=user_id, text=text, name=user.name, avatar=user.avatar)
            created = await uow.posts.create(post)
            await uow.commit()
            return created  # type: ignore[no-any-return]

    async def list_all(self) -> list[Post]:
        """Every post, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def list_for_user(self, user_id: UUID) -> list[Post]:
        """The user's own posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all_for_user(user_id)  # type: ignore[no-any-return]

    async def get(self, post_id: UUID) -> Post:
        """Get a post by id."""
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def like(self, post_id: UUID, user_id: UUID) -> LikeOutcome:
        """Like a post. A repeated like leaves the post unchanged."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.like(user_id):
                return LikeOutcome(post=post, changed=False)
            saved = await uow.posts.update(post)
            await uow.commit()
            return LikeOutcome(post=saved, changed=True)

    async def unlike(self, post_id: UUID, user_id: UUID) -> LikeOutcome:
        """Remove a like. Unliking a post that was not liked is a no-op."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.unlike(user_id):
                return LikeOutcome(post=post, changed=False)
            saved = await uow.posts.update(post)
            await uow.commit()
            return LikeOutcome(post=saved, changed=True)

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> Post:
        """Append a comment, snapshotting the commenter's name and avatar."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            post.add_comment(
                Comment(user_id=user_id, text=text, name=user.name, avatar=user.avatar)
            )
            saved = await uow.posts.update(post)
            await uow.commit()
            return saved  # type: ignore[no-any-return]

    async def remove_comment(self, post_id: UUID, comment_id: UUID) -> Post:
        """Delete a comment from a post."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.remove_comment(comment_id):
                raise CommentNotFoundError(str(comment_id))
            saved = await uow.posts.update(post)
            await uow.commit()
            return saved  # type: ignore[no-any-return]

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            require_post_author(user_id, post)
            await uow.posts.delete(post_id)
            await uow.commit()
        logger.info("User %s deleted post %s", user_id, post_id)

    async def _require_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post
