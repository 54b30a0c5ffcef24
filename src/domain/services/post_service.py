"""Post service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyLikedError,
    AuthorizationError,
    CommentNotFoundError,
    NotLikedError,
    PostNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.ownership import is_owner
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        text = self._require_text(text, "Text is required")
        async with self._uow_factory() as uow:
            author = await self._get_user(uow, user_id)
            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar_url,
            )
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
        return created

    async def get_all(self) -> list[Post]:
        """Get all posts, most recent first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get_by_id(self, post_id: UUID) -> Post:
        """Get a post by id."""
        async with self._uow_factory() as uow:
            return await self._get_post(uow, post_id)

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._get_post(uow, post_id)
            if not is_owner(post, user_id):
                raise AuthorizationError("User not authorized to delete post")

            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id), user_id=str(user_id))

    async def like(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Like a post. Each user may like a post once."""
        async with self._uow_factory() as uow:
            await self._get_user(uow, user_id)
            post = await self._get_post(uow, post_id)
            if post.is_liked_by(user_id):
                raise AlreadyLikedError(str(post_id))

            # The store enforces uniqueness too, for likes racing this check
            if not await uow.posts.add_like(post_id, Like(user_id=user_id)):
                raise AlreadyLikedError(str(post_id))

            likes = await uow.posts.get_likes(post_id)
            await uow.commit()
            return likes  # type: ignore[no-any-return]

    async def unlike(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Remove the caller's like from a post."""
        async with self._uow_factory() as uow:
            post = await self._get_post(uow, post_id)
            if not post.is_liked_by(user_id):
                raise NotLikedError(str(post_id))

            if not await uow.posts.remove_like(post_id, user_id):
                raise NotLikedError(str(post_id))

            likes = await uow.posts.get_likes(post_id)
            await uow.commit()
            return likes  # type: ignore[no-any-return]

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> list[Comment]:
        """Comment on a post, snapshotting the commenter's name and avatar."""
        text = self._require_text(text, "Comment text is required")
        async with self._uow_factory() as uow:
            author = await self._get_user(uow, user_id)
            await self._get_post(uow, post_id)

            comment = Comment(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar_url,
            )
            await uow.posts.add_comment(post_id, comment)
            comments = await uow.posts.get_comments(post_id)
            await uow.commit()

        logger.info("comment_added", post_id=str(post_id), comment_id=str(comment.id))
        return comments  # type: ignore[no-any-return]

    async def remove_comment(self, post_id: UUID, comment_id: UUID, user_id: UUID) -> None:
        """Delete a comment by its id. Only the comment's author may do so."""
        async with self._uow_factory() as uow:
            post = await self._get_post(uow, post_id)

            comment = post.find_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if not is_owner(comment, user_id):
                raise AuthorizationError("User not authorized to delete comment")

            if not await uow.posts.remove_comment(post_id, comment_id):
                raise CommentNotFoundError(str(comment_id))
            await uow.commit()

        logger.info("comment_removed", post_id=str(post_id), comment_id=str(comment_id))

    @staticmethod
    def _require_text(text: str | None, message: str) -> str:
        stripped = (text or "").strip()
        if not stripped:
            raise ValidationError("text", message)
        return stripped

    async def _get_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def _get_user(self, uow: IUnitOfWork, user_id: UUID) -> User:
        user = await uow.users.get(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user
