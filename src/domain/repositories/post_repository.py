"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Comment, Like, Post


class IPostRepository(Protocol):
    """Repository interface for Post entities and their sub-records.

    Like and comment mutations are single statements so that concurrent
    callers never overwrite each other's changes.
    """

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID, with likes and comments."""
        ...

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post with its likes and comments."""
        ...

    async def delete_all_by_user(self, user_id: UUID) -> int:
        """Delete a user's posts, likes and comments. Returns posts deleted."""
        ...

    async def get_likes(self, post_id: UUID) -> list[Like]:
        """Get the likes of a post, newest first."""
        ...

    async def add_like(self, post_id: UUID, like: Like) -> bool:
        """Insert a like. False if the user already liked the post."""
        ...

    async def remove_like(self, post_id: UUID, user_id: UUID) -> bool:
        """Delete a user's like. False if there was none."""
        ...

    async def get_comments(self, post_id: UUID) -> list[Comment]:
        """Get the comments of a post, newest first."""
        ...

    async def add_comment(self, post_id: UUID, comment: Comment) -> None:
        """Insert a comment."""
        ...

    async def remove_comment(self, post_id: UUID, comment_id: UUID) -> bool:
        """Delete a comment by id. False if it was not there."""
        ...
