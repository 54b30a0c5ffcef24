"""Post domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A user's like on a post. At most one per (post, user)."""

    user_id: UUID
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Comment:
    """A comment on a post.

    ``name`` and ``avatar`` are a snapshot of the author taken when the
    comment was written; they are not updated afterwards.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    date: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a Post.

    ``name`` and ``avatar`` snapshot the author at creation time.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    date: datetime = field(default_factory=datetime.utcnow)
    # Newest first
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)

    def is_liked_by(self, user_id: UUID) -> bool:
        """Check whether the user already liked this post."""
        return any(like.user_id == user_id for like in self.likes)

    def find_comment(self, comment_id: UUID) -> Comment | None:
        """Find a comment by its id."""
        return next((c for c in self.comments if c.id == comment_id), None)
