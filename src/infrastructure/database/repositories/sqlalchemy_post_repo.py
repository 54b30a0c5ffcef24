"""SQLAlchemy implementation of Post repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.exceptions import PostNotFoundError
from domain.entities.post import Comment, Like, Post
from infrastructure.database.models import PostCommentModel, PostLikeModel, PostModel

# PostgreSQL names the constraint; SQLite lists its columns
_DUPLICATE_LIKE_MARKERS = ("uq_post_likes_post_user", "post_likes.post_id, post_likes.user_id")


def _is_duplicate_like(error: IntegrityError) -> bool:
    message = str(error.orig)
    return any(marker in message for marker in _DUPLICATE_LIKE_MARKERS)


def _is_foreign_key_violation(error: IntegrityError) -> bool:
    return "foreign key" in str(error.orig).lower()


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _select(self):  # type: ignore[no-untyped-def]
        return select(PostModel).options(
            selectinload(PostModel.likes),
            selectinload(PostModel.comments),
        )

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        stmt = self._select().where(PostModel.id == id).execution_options(
            populate_existing=True
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        stmt = self._select().order_by(PostModel.date.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = PostModel(
            id=post.id,
            user_id=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            date=post.date,
            likes=[],
            comments=[],
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a post together with its likes and comments."""
        stmt = self._select().where(PostModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_all_by_user(self, user_id: UUID) -> int:
        """Delete a user's posts, and the likes and comments they left elsewhere."""
        await self._session.execute(delete(PostLikeModel).where(PostLikeModel.user_id == user_id))
        await self._session.execute(
            delete(PostCommentModel).where(PostCommentModel.user_id == user_id)
        )

        stmt = self._select().where(PostModel.user_id == user_id)
        result = await self._session.execute(stmt)
        models = list(result.scalars())
        for model in models:
            await self._session.delete(model)
        await self._session.flush()
        return len(models)

    async def get_likes(self, post_id: UUID) -> list[Like]:
        """Get the likes of a post, newest first."""
        stmt = (
            select(PostLikeModel)
            .where(PostLikeModel.post_id == post_id)
            .order_by(PostLikeModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._like_to_entity(model) for model in result.scalars()]

    async def add_like(self, post_id: UUID, like: Like) -> bool:
        """Insert a like; the unique (post_id, user_id) constraint rejects duplicates.

        Returns False for a duplicate. A post deleted since it was read
        fails the foreign key instead and raises PostNotFoundError.
        """
        self._session.add(
            PostLikeModel(post_id=post_id, user_id=like.user_id, created_at=like.created_at)
        )
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._session.rollback()
            if _is_duplicate_like(e):
                return False
            if _is_foreign_key_violation(e):
                raise PostNotFoundError(str(post_id)) from e
            raise
        return True

    async def remove_like(self, post_id: UUID, user_id: UUID) -> bool:
        """Delete a user's like with a single conditional statement."""
        stmt = delete(PostLikeModel).where(
            PostLikeModel.post_id == post_id,
            PostLikeModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def get_comments(self, post_id: UUID) -> list[Comment]:
        """Get the comments of a post, newest first."""
        stmt = (
            select(PostCommentModel)
            .where(PostCommentModel.post_id == post_id)
            .order_by(PostCommentModel.date.desc())
        )
        result = await self._session.execute(stmt)
        return [self._comment_to_entity(model) for model in result.scalars()]

    async def add_comment(self, post_id: UUID, comment: Comment) -> None:
        """Insert a comment."""
        self._session.add(
            PostCommentModel(
                id=comment.id,
                post_id=post_id,
                user_id=comment.user_id,
                text=comment.text,
                name=comment.name,
                avatar=comment.avatar,
                date=comment.date,
            )
        )
        await self._session.flush()

    async def remove_comment(self, post_id: UUID, comment_id: UUID) -> bool:
        """Delete a comment by its id, scoped to the post."""
        stmt = delete(PostCommentModel).where(
            PostCommentModel.id == comment_id,
            PostCommentModel.post_id == post_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _like_to_entity(self, model: PostLikeModel) -> Like:
        return Like(user_id=model.user_id, created_at=model.created_at)

    def _comment_to_entity(self, model: PostCommentModel) -> Comment:
        return Comment(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            date=model.date,
        )

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            date=model.date,
            likes=[self._like_to_entity(like) for like in model.likes],
            comments=[self._comment_to_entity(c) for c in model.comments],
        )
