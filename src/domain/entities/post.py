"""Post domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Comment:
    """A comment on a post. Author name/avatar are snapshots taken at creation."""

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a Post.

    ``name`` and ``avatar`` snapshot the author at creation time and are not
    kept in sync with later profile edits. ``likes`` holds each identity at
    most once, in the order the likes arrived.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    likes: list[UUID] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def is_liked_by(self, user_id: UUID) -> bool:
        return user_id in self.likes

    def like(self, user_id: UUID) -> bool:
        """Add a like. Returns False when the identity already liked the post."""
        if self.is_liked_by(user_id):
            return False
        self.likes.append(user_id)
        return True

    def unlike(self, user_id: UUID) -> bool:
        """Remove a like. Returns False when there was nothing to remove."""
        if not self.is_liked_by(user_id):
            return False
        self.likes.remove(user_id)
        return True

    def add_comment(self, comment: Comment) -> None:
        self.comments.append(comment)

    def remove_comment(self, comment_id: UUID) -> bool:
        """Remove a comment by id. Returns False when it does not exist."""
        for index, comment in enumerate(self.comments):
            if comment.id == comment_id:
                del self.comments[index]
                return True
        return False


@dataclass(frozen=True, slots=True)
class LikeOutcome:
    """Read-only value object: a post after a like/unlike, and whether it changed."""

    post: Post
    changed: bool
