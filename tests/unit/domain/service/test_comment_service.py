"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from agora.domain.error import (
    DepthExceededError,
    NotFoundError,
    ParentNotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from agora.domain.service import (
    CommentService,
    ThreadingService,
    UserService,
    VoteService,
)
from agora.domain.value import CommentId, UserId, VotableType
from agora.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryStore,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from tests.conftest import make_comment, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _post_with_author(env):
    user_repo = await env.get(UserRepository)
    post_repo = await env.get(PostRepository)
    author = await user_repo.save(make_user())
    post = await post_repo.save(make_post(author.id))
    return author, post


class _FailingCommentRepository(InMemoryCommentRepository):
    """Comment store whose bulk reads fail."""

    async def find_by_post(self, post_id):
        raise StorageUnavailableError("loading comments", "connection refused")


class _ReadOnlyCommentRepository(InMemoryCommentRepository):
    """Comment store that serves reads but fails every write."""

    async def save(self, comment):
        raise StorageUnavailableError("saving comment", "connection refused")

    async def delete(self, comment_id):
        raise StorageUnavailableError("deleting comment", "connection refused")


def _service_over(
    store: InMemoryStore, comments: InMemoryCommentRepository
) -> CommentService:
    posts = InMemoryPostRepository(store)
    return CommentService(
        comment_repository=comments,
        post_repository=posts,
        user_service=UserService(InMemoryUserRepository(store)),
        vote_service=VoteService(InMemoryVoteRepository(store), posts, comments),
        threading_service=ThreadingService(),
    )


def _service_with_failing_store() -> CommentService:
    store = InMemoryStore()
    return _service_over(store, _FailingCommentRepository(store))


def _seeded_read_only_service():
    """Service over a store holding one root comment, with writes failing."""
    store = InMemoryStore()
    author = make_user()
    post = make_post(author.id)
    root = make_comment(post.id, author.id)
    store.users[author.id] = author
    store.posts[post.id] = post
    store.comments[root.id] = root
    return _service_over(store, _ReadOnlyCommentRepository(store)), store, root


class TestCreateComment:
    """Tests for create_comment."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        """A new comment is stored without a parent and with no votes."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _post_with_author(unit_env)

        # Act
        result = await comment_service.create_comment(post.id, author.id, "First!")

        # Assert
        assert result.parent_id is None
        assert result.post_id == post.id
        assert result.votes == 0
        assert await comment_repo.find_by_id(result.id) == result

    @pytest.mark.asyncio
    async def test_comment_on_missing_post(self, unit_env):
        """Commenting on a post that doesn't exist raises NotFoundError."""
        comment_service = await unit_env.get(CommentService)
        author, post = await _post_with_author(unit_env)

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(uuid4(), author.id, "Hello")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "x" * 10001])
    async def test_invalid_content_rejected(self, unit_env, content):
        """Blank or oversized content is a validation error."""
        comment_service = await unit_env.get(CommentService)
        author, post = await _post_with_author(unit_env)

        with pytest.raises(ValidationError):
            await comment_service.create_comment(post.id, author.id, content)


class TestCreateReply:
    """Tests for create_reply."""

    @pytest.mark.asyncio
    async def test_reply_inherits_post(self, unit_env):
        """A reply belongs to its parent's post."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author, post = await _post_with_author(unit_env)
        parent = await comment_service.create_comment(post.id, author.id, "Parent")

        # Act
        reply = await comment_service.create_reply(parent.id, author.id, "Reply")

        # Assert
        assert reply.parent_id == parent.id
        assert reply.post_id == post.id

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent(self, unit_env):
        """Replying to a comment that doesn't exist raises ParentNotFoundError."""
        comment_service = await unit_env.get(CommentService)
        author, _ = await _post_with_author(unit_env)

        with pytest.raises(ParentNotFoundError):
            await comment_service.create_reply(CommentId(uuid4()), author.id, "Hi")

    @pytest.mark.asyncio
    async def test_reply_depth_limit(self, unit_env):
        """The sixth level accepts no replies, the fifth still does."""
        # Arrange: root -> r1 -> r2 -> r3 -> r4 -> r5
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _post_with_author(unit_env)

        chain = [await comment_service.create_comment(post.id, author.id, "root")]
        for i in range(1, 6):
            chain.append(
                await comment_service.create_reply(chain[-1].id, author.id, f"r{i}")
            )

        # Act / Assert
        with pytest.raises(DepthExceededError) as exc_info:
            await comment_service.create_reply(chain[5].id, author.id, "too deep")
        assert exc_info.value.max_depth == 6
        assert await comment_repo.count_by_post(post.id) == 6

        reply = await comment_service.create_reply(chain[4].id, author.id, "fits")
        assert reply.parent_id == chain[4].id


class TestReadComments:
    """Tests for the enriched read paths."""

    @pytest.mark.asyncio
    async def test_comments_carry_author_and_viewer_vote(self, unit_env):
        """Each comment comes with its author and the viewer's own vote."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        author, post = await _post_with_author(unit_env)
        viewer_id = UserId(uuid4())
        liked = await comment_service.create_comment(post.id, author.id, "Liked")
        await comment_service.create_comment(post.id, author.id, "Ignored")
        await vote_service.vote_on(liked.id, viewer_id, 1, VotableType.COMMENT)

        # Act
        views = await comment_service.get_comments_by_post_with_user_votes(
            post.id, viewer_id
        )

        # Assert
        assert len(views) == 2
        by_id = {view.id: view for view in views}
        assert by_id[liked.id].user_vote == 1
        assert by_id[liked.id].votes == 1
        assert all(view.author.username == author.username for view in views)
        assert sum(view.user_vote for view in views) == 1

    @pytest.mark.asyncio
    async def test_anonymous_viewer_sees_no_votes(self, unit_env):
        """Without a viewer every user_vote is 0."""
        comment_service = await unit_env.get(CommentService)
        author, post = await _post_with_author(unit_env)
        await comment_service.create_comment(post.id, author.id, "Hello")

        views = await comment_service.get_comments_by_post_with_user_votes(post.id)

        assert [view.user_vote for view in views] == [0]

    @pytest.mark.asyncio
    async def test_flat_read_is_newest_first(self, unit_env):
        """The flat read lists comments by creation time, newest first."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _post_with_author(unit_env)
        oldest = make_comment(post.id, author.id, minutes=0)
        middle = make_comment(post.id, author.id, parent_id=oldest.id, minutes=1)
        newest = make_comment(post.id, author.id, minutes=2)
        for comment in (middle, newest, oldest):
            await comment_repo.save(comment)

        # Act
        views = await comment_service.get_comments_by_post_with_user_votes(post.id)

        # Assert
        assert [view.id for view in views] == [newest.id, middle.id, oldest.id]

    @pytest.mark.asyncio
    async def test_missing_author_shown_as_deleted(self, unit_env):
        """Comments whose author no longer exists get a placeholder author."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        _, post = await _post_with_author(unit_env)
        ghost_id = UserId(uuid4())
        await comment_repo.save(make_comment(post.id, ghost_id))

        # Act
        views = await comment_service.get_comments_by_post_with_user_votes(post.id)

        # Assert
        assert views[0].author.id == ghost_id
        assert views[0].author.username.root == "deleted"

    @pytest.mark.asyncio
    async def test_comment_tree(self, unit_env):
        """The tree endpoint nests replies under their parents."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author, post = await _post_with_author(unit_env)
        root = await comment_service.create_comment(post.id, author.id, "Root")
        reply = await comment_service.create_reply(root.id, author.id, "Reply")

        # Act
        tree = await comment_service.get_comment_tree(post.id)

        # Assert
        assert [node.id for node in tree] == [root.id]
        assert [node.id for node in tree[0].replies] == [reply.id]
        assert tree[0].replies[0].depth == 1

    @pytest.mark.asyncio
    async def test_storage_failure_degrades_to_empty(self):
        """A failing store yields empty reads rather than an error."""
        comment_service = _service_with_failing_store()

        assert await comment_service.get_comments_by_post_with_user_votes(uuid4()) == []
        assert await comment_service.get_comment_tree(uuid4()) == []

    @pytest.mark.asyncio
    async def test_get_missing_comment(self, unit_env):
        """Fetching an unknown comment raises NotFoundError."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.get_comment(CommentId(uuid4()))


class TestUpdateComment:
    """Tests for update_comment."""

    @pytest.mark.asyncio
    async def test_update_content(self, unit_env):
        """Editing replaces the content and moves updated_at."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _post_with_author(unit_env)
        original = await comment_repo.save(make_comment(post.id, author.id))

        # Act
        updated = await comment_service.update_comment(original.id, "Edited")

        # Assert
        assert updated.content == "Edited"
        assert updated.updated_at > original.updated_at
        assert updated.created_at == original.created_at

    @pytest.mark.asyncio
    async def test_update_missing_comment(self, unit_env):
        """Editing an unknown comment raises NotFoundError."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.update_comment(CommentId(uuid4()), "Edited")


class TestDeleteComment:
    """Tests for the cascade delete."""

    @pytest.mark.asyncio
    async def test_delete_removes_whole_subtree(self, unit_env):
        """Deleting a comment removes it and all descendants, nothing else."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _post_with_author(unit_env)

        target = await comment_service.create_comment(post.id, author.id, "Target")
        sibling = await comment_service.create_comment(post.id, author.id, "Sibling")
        child_a = await comment_service.create_reply(target.id, author.id, "A")
        await comment_service.create_reply(target.id, author.id, "B")
        await comment_service.create_reply(child_a.id, author.id, "A1")

        # Act
        removed = await comment_service.delete_comment(target.id)

        # Assert
        assert removed == 4
        remaining = await comment_repo.find_by_post(post.id)
        assert [comment.id for comment in remaining] == [sibling.id]

    @pytest.mark.asyncio
    async def test_delete_purges_votes_on_removed_comments(self, unit_env):
        """Votes on deleted comments are removed from the ledger."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author, post = await _post_with_author(unit_env)
        voter = UserId(uuid4())

        parent = await comment_service.create_comment(post.id, author.id, "Parent")
        child = await comment_service.create_reply(parent.id, author.id, "Child")
        await vote_service.vote_on(parent.id, voter, 1, VotableType.COMMENT)
        await vote_service.vote_on(child.id, voter, -1, VotableType.COMMENT)

        # Act
        await comment_service.delete_comment(parent.id)

        # Assert
        for comment_id in (parent.id, child.id):
            assert (
                await vote_repo.find_by_user_and_target(
                    voter, VotableType.COMMENT, comment_id
                )
                is None
            )

    @pytest.mark.asyncio
    async def test_delete_missing_comment(self, unit_env):
        """Deleting an unknown comment raises NotFoundError."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(uuid4()))

    @pytest.mark.asyncio
    async def test_delete_comments_for_post_includes_orphans(self, unit_env):
        """Every comment of the post goes, including replies to lost parents."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _post_with_author(unit_env)
        _, other_post = await _post_with_author(unit_env)

        root = await comment_service.create_comment(post.id, author.id, "Root")
        await comment_service.create_reply(root.id, author.id, "Reply")
        await comment_repo.save(
            make_comment(post.id, author.id, parent_id=CommentId(uuid4()))
        )
        kept = await comment_service.create_comment(other_post.id, author.id, "Kept")

        # Act
        removed = await comment_service.delete_comments_for_post(post.id)

        # Assert
        assert removed == 3
        assert await comment_repo.count_by_post(post.id) == 0
        assert await comment_repo.find_by_id(kept.id) is not None


class TestWriteFailures:
    """Storage failures on writes reach the caller."""

    @pytest.mark.asyncio
    async def test_reply_propagates_storage_failure(self):
        """A reply that can't be stored raises instead of returning nothing."""
        comment_service, store, root = _seeded_read_only_service()

        with pytest.raises(StorageUnavailableError):
            await comment_service.create_reply(root.id, root.author_id, "Lost")

        assert list(store.comments) == [root.id]

    @pytest.mark.asyncio
    async def test_delete_propagates_storage_failure(self):
        """A delete that can't reach the store raises and keeps the comment."""
        comment_service, store, root = _seeded_read_only_service()

        with pytest.raises(StorageUnavailableError):
            await comment_service.delete_comment(root.id)

        assert root.id in store.comments
