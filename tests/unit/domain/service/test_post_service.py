"""Unit tests for PostService."""

from uuid import uuid4

import pytest

from agora.domain.error import NotFoundError, ValidationError
from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import PostId, UserId, VotableType
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _author(env):
    user_repo = await env.get(UserRepository)
    return await user_repo.save(make_user())


class TestCreatePost:
    """Tests for create_post."""

    @pytest.mark.asyncio
    async def test_create_post(self, unit_env):
        """A new post starts with no votes and matching timestamps."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = await _author(unit_env)

        # Act
        post = await post_service.create_post(author.id, "Title", "Body")

        # Assert
        assert post.votes == 0
        assert post.author_id == author.id
        assert post.created_at == post.updated_at
        assert await post_repo.find_by_id(post.id) == post

    @pytest.mark.asyncio
    async def test_unknown_author_rejected(self, unit_env):
        """Posts need an existing author."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.create_post(UserId(uuid4()), "Title", "Body")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title,content", [("", "Body"), ("Title", "  ")])
    async def test_blank_fields_rejected(self, unit_env, title, content):
        """Title and content are both required."""
        post_service = await unit_env.get(PostService)
        author = await _author(unit_env)

        with pytest.raises(ValidationError):
            await post_service.create_post(author.id, title, content)


class TestGetPost:
    """Tests for get_post and list_posts."""

    @pytest.mark.asyncio
    async def test_get_post_enriched(self, unit_env):
        """A fetched post carries its author, comment count and the viewer's vote."""
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        author = await _author(unit_env)
        viewer_id = UserId(uuid4())

        post = await post_service.create_post(author.id, "Title", "Body")
        root = await comment_service.create_comment(post.id, author.id, "Root")
        await comment_service.create_reply(root.id, author.id, "Reply")
        await vote_service.vote_on(post.id, viewer_id, -1, VotableType.POST)

        # Act
        view = await post_service.get_post(post.id, viewer_id)

        # Assert
        assert view.author.username == author.username
        assert view.comment_count == 2
        assert view.user_vote == -1
        assert view.votes == -1

    @pytest.mark.asyncio
    async def test_get_missing_post(self, unit_env):
        """Fetching an unknown post raises NotFoundError."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.get_post(PostId(uuid4()))

    @pytest.mark.asyncio
    async def test_list_posts_newest_first(self, unit_env):
        """Posts are listed newest first, up to the limit."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = await _author(unit_env)
        posts = [
            await post_repo.save(make_post(author.id, title=f"Post {i}", minutes=i))
            for i in range(3)
        ]

        # Act
        listed = await post_service.list_posts(limit=2)

        # Assert
        assert [view.id for view in listed] == [posts[2].id, posts[1].id]


class TestUpdatePost:
    """Tests for update_post."""

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, unit_env):
        """Only the provided fields change."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = await _author(unit_env)
        original = await post_repo.save(make_post(author.id, title="Old title"))

        # Act
        updated = await post_service.update_post(original.id, content="New body")

        # Assert
        assert updated.title == "Old title"
        assert updated.content == "New body"
        assert updated.updated_at > original.updated_at

    @pytest.mark.asyncio
    async def test_blank_title_rejected(self, unit_env):
        """A provided title must not be blank."""
        post_service = await unit_env.get(PostService)
        author = await _author(unit_env)
        post = await post_service.create_post(author.id, "Title", "Body")

        with pytest.raises(ValidationError):
            await post_service.update_post(post.id, title=" ")

    @pytest.mark.asyncio
    async def test_update_missing_post(self, unit_env):
        """Editing an unknown post raises NotFoundError."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.update_post(PostId(uuid4()), title="Title")


class TestDeletePost:
    """Tests for delete_post."""

    @pytest.mark.asyncio
    async def test_delete_post_cascades(self, unit_env):
        """Deleting a post removes its comments and every related vote."""
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)
        author = await _author(unit_env)
        voter = UserId(uuid4())

        post = await post_service.create_post(author.id, "Title", "Body")
        root = await comment_service.create_comment(post.id, author.id, "Root")
        await comment_service.create_reply(root.id, author.id, "Reply")
        await vote_service.vote_on(post.id, voter, 1, VotableType.POST)
        await vote_service.vote_on(root.id, voter, 1, VotableType.COMMENT)

        # Act
        removed = await post_service.delete_post(post.id)

        # Assert
        assert removed == 2
        assert await post_repo.find_by_id(post.id) is None
        assert await comment_repo.count_by_post(post.id) == 0
        assert (
            await vote_repo.find_by_user_and_target(voter, VotableType.POST, post.id)
            is None
        )
        assert (
            await vote_repo.find_by_user_and_target(voter, VotableType.COMMENT, root.id)
            is None
        )

    @pytest.mark.asyncio
    async def test_delete_missing_post(self, unit_env):
        """Deleting an unknown post raises NotFoundError."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.delete_post(PostId(uuid4()))
