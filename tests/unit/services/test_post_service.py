"""Unit tests for PostService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AlreadyLikedError,
    AppException,
    AuthorizationError,
    CommentNotFoundError,
    NotLikedError,
    PostNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.services.post_service import PostService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PostService:
    return PostService(lambda: uow)


def _post(user_id: UUID, **kwargs) -> Post:
    return Post(user_id=user_id, text="Hello", name="Ada Lovelace", **kwargs)


# --- create ---


class TestCreate:
    @pytest.mark.asyncio
    async def test_snapshots_author_name_and_avatar(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, author: User
    ):
        uow.users.get.return_value = author
        uow.posts.create.side_effect = lambda post: post

        result = await service.create(user_id, "  Hello world  ")

        assert result.text == "Hello world"
        assert result.name == "Ada Lovelace"
        assert result.avatar == "https://avatars.example.com/ada.png"
        assert result.user_id == user_id
        assert result.likes == []
        assert result.comments == []
        assert uow.committed

    @pytest.mark.asyncio
    async def test_blank_text_creates_nothing(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        with pytest.raises(ValidationError) as exc_info:
            await service.create(user_id, "   ")

        assert exc_info.value.status_code == 422
        assert exc_info.value.details == [{"field": "text", "message": "Text is required"}]
        uow.posts.create.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_unknown_user(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.create(user_id, "Hello")

        uow.posts.create.assert_not_called()


# --- get ---


class TestGet:
    @pytest.mark.asyncio
    async def test_get_all(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        posts = [_post(user_id), _post(user_id)]
        uow.posts.get_all.return_value = posts

        result = await service.get_all()

        assert result == posts

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, service: PostService, uow: FakeUnitOfWork):
        uow.posts.get.return_value = None
        post_id = uuid4()

        with pytest.raises(PostNotFoundError) as exc_info:
            await service.get_by_id(post_id)

        assert exc_info.value.status_code == 404
        assert exc_info.value.details == {"post_id": str(post_id)}


# --- delete ---


class TestDelete:
    @pytest.mark.asyncio
    async def test_author_deletes(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        post = _post(user_id)
        uow.posts.get.return_value = post

        await service.delete(post.id, user_id)

        uow.posts.delete.assert_called_once_with(post.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_non_author_forbidden(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        post = _post(user_id)
        uow.posts.get.return_value = post

        with pytest.raises(AuthorizationError) as exc_info:
            await service.delete(post.id, other_id)

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "User not authorized to delete post"
        uow.posts.delete.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_missing_post(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.delete(uuid4(), user_id)


# --- like / unlike ---


class TestLike:
    @pytest.mark.asyncio
    async def test_like_returns_likes(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        post = _post(other_id)
        uow.posts.get.return_value = post
        uow.posts.add_like.return_value = True
        uow.posts.get_likes.return_value = [Like(user_id=user_id)]

        result = await service.like(post.id, user_id)

        assert [like.user_id for like in result] == [user_id]
        added_like = uow.posts.add_like.call_args.args[1]
        assert added_like.user_id == user_id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_like_twice_conflicts(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        post = _post(other_id, likes=[Like(user_id=user_id)])
        uow.posts.get.return_value = post

        with pytest.raises(AlreadyLikedError) as exc_info:
            await service.like(post.id, user_id)

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "Post already liked"
        uow.posts.add_like.assert_not_called()

    @pytest.mark.asyncio
    async def test_like_rejected_by_store(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        """A concurrent like that slipped past the check is still rejected."""
        post = _post(other_id)
        uow.posts.get.return_value = post
        uow.posts.add_like.return_value = False

        with pytest.raises(AlreadyLikedError):
            await service.like(post.id, user_id)

        assert not uow.committed

    @pytest.mark.asyncio
    async def test_like_missing_post(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.like(uuid4(), user_id)

    @pytest.mark.asyncio
    async def test_like_by_unknown_user(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        uow.users.get.return_value = None
        uow.posts.get.return_value = _post(other_id)

        with pytest.raises(UserNotFoundError) as exc_info:
            await service.like(uuid4(), user_id)

        assert exc_info.value.status_code == 404
        uow.posts.add_like.assert_not_called()

    @pytest.mark.asyncio
    async def test_unlike_removes_like(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        post = _post(other_id, likes=[Like(user_id=user_id), Like(user_id=other_id)])
        uow.posts.get.return_value = post
        uow.posts.remove_like.return_value = True
        uow.posts.get_likes.return_value = [Like(user_id=other_id)]

        result = await service.unlike(post.id, user_id)

        uow.posts.remove_like.assert_called_once_with(post.id, user_id)
        assert [like.user_id for like in result] == [other_id]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_unlike_without_like_conflicts(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        uow.posts.get.return_value = _post(other_id, likes=[Like(user_id=other_id)])

        with pytest.raises(NotLikedError) as exc_info:
            await service.unlike(uuid4(), user_id)

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "Post has not been liked"
        uow.posts.remove_like.assert_not_called()

    @pytest.mark.asyncio
    async def test_unlike_lost_race(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        uow.posts.get.return_value = _post(other_id, likes=[Like(user_id=user_id)])
        uow.posts.remove_like.return_value = False

        with pytest.raises(NotLikedError):
            await service.unlike(uuid4(), user_id)

        assert not uow.committed


# --- comments ---


class TestAddComment:
    @pytest.mark.asyncio
    async def test_adds_comment_with_author_snapshot(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        other_id: UUID,
        author: User,
    ):
        post = _post(other_id)
        uow.users.get.return_value = author
        uow.posts.get.return_value = post
        uow.posts.get_comments.return_value = []

        await service.add_comment(post.id, user_id, " Nice post ")

        post_id, comment = uow.posts.add_comment.call_args.args
        assert post_id == post.id
        assert comment.text == "Nice post"
        assert comment.name == "Ada Lovelace"
        assert comment.avatar == "https://avatars.example.com/ada.png"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_blank_comment(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        with pytest.raises(ValidationError) as exc_info:
            await service.add_comment(uuid4(), user_id, "")

        assert exc_info.value.message == "Comment text is required"
        uow.posts.add_comment.assert_not_called()

    @pytest.mark.asyncio
    async def test_comment_on_missing_post(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, author: User
    ):
        uow.users.get.return_value = author
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.add_comment(uuid4(), user_id, "Hi")

        uow.posts.add_comment.assert_not_called()


class TestRemoveComment:
    @pytest.mark.asyncio
    async def test_removes_only_the_addressed_comment(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        mine = Comment(user_id=user_id, text="mine", name="Ada")
        theirs = Comment(user_id=other_id, text="theirs", name="Linus")
        post = _post(other_id, comments=[theirs, mine])
        uow.posts.get.return_value = post
        uow.posts.remove_comment.return_value = True

        await service.remove_comment(post.id, mine.id, user_id)

        uow.posts.remove_comment.assert_called_once_with(post.id, mine.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_non_author_forbidden(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        theirs = Comment(user_id=other_id, text="theirs", name="Linus")
        uow.posts.get.return_value = _post(other_id, comments=[theirs])

        with pytest.raises(AuthorizationError) as exc_info:
            await service.remove_comment(uuid4(), theirs.id, user_id)

        assert exc_info.value.message == "User not authorized to delete comment"
        uow.posts.remove_comment.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_comment(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.get.return_value = _post(user_id)

        with pytest.raises(CommentNotFoundError) as exc_info:
            await service.remove_comment(uuid4(), uuid4(), user_id)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_comment_deleted_concurrently(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        mine = Comment(user_id=user_id, text="mine", name="Ada")
        uow.posts.get.return_value = _post(user_id, comments=[mine])
        uow.posts.remove_comment.return_value = False

        with pytest.raises(AppException) as exc_info:
            await service.remove_comment(uuid4(), mine.id, user_id)

        assert exc_info.value.error_code == "COMMENT_NOT_FOUND"
        assert not uow.committed
