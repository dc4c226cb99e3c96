"""End-to-end tests for vote endpoints."""

from uuid import uuid4

import pytest


@pytest.fixture
def post_id(client, login):
    """A post created by alice."""
    _, cookies = login("alice")
    response = client.post(
        "/posts", json={"title": "Vote on me", "content": "Please"}, cookies=cookies
    )
    return response.json()["id"]


class TestVoteEndpoints:
    """End-to-end tests for vote API endpoints."""

    def test_vote_requires_auth(self, client, post_id):
        """Should return 401 when not authenticated."""
        response = client.post(f"/posts/{post_id}/vote", json={"voteType": 1})

        assert response.status_code == 401

    def test_vote_with_invalid_token(self, client, post_id):
        """Should return 401 with an invalid token."""
        response = client.post(
            f"/posts/{post_id}/vote",
            json={"voteType": 1},
            cookies={"auth_token": "invalid-token"},
        )

        assert response.status_code == 401

    def test_upvote_and_toggle_off(self, client, login, post_id):
        """Voting the same way twice withdraws the vote."""
        # Arrange
        _, cookies = login("bob")

        # Act
        first = client.post(
            f"/posts/{post_id}/vote", json={"voteType": 1}, cookies=cookies
        )
        second = client.post(
            f"/posts/{post_id}/vote", json={"voteType": 1}, cookies=cookies
        )

        # Assert
        assert first.status_code == 200
        assert first.json() == {
            "targetType": "post",
            "targetId": post_id,
            "votes": 1,
            "userVote": 1,
        }
        assert second.json()["votes"] == 0
        assert second.json()["userVote"] == 0

    def test_viewer_sees_own_vote(self, client, login, post_id):
        """The post view reflects the viewer's vote and the tally."""
        # Arrange
        _, bob = login("bob")
        _, carol = login("carol")

        # Act
        client.post(f"/posts/{post_id}/vote", json={"voteType": 1}, cookies=bob)
        client.post(f"/posts/{post_id}/vote", json={"voteType": -1}, cookies=carol)
        client.post(f"/posts/{post_id}/vote", json={"voteType": -1}, cookies=bob)

        # Assert
        post = client.get(f"/posts/{post_id}", cookies=carol).json()
        assert post["votes"] == -2
        assert post["userVote"] == -1

    @pytest.mark.parametrize("vote_type", [2, "up", True, 1.0])
    def test_invalid_vote_type(self, client, login, post_id, vote_type):
        """Only the integers -1, 0 and 1 are accepted."""
        _, cookies = login("bob")

        response = client.post(
            f"/posts/{post_id}/vote", json={"voteType": vote_type}, cookies=cookies
        )

        assert response.status_code in (400, 422)

    def test_vote_on_comment(self, client, login, post_id):
        """Comment votes show up on the comment in the tree."""
        # Arrange
        _, cookies = login("bob")
        comment = client.post(
            f"/posts/{post_id}/comments", json={"content": "Nice"}, cookies=cookies
        ).json()

        # Act
        response = client.post(
            f"/comments/{comment['id']}/vote", json={"voteType": -1}, cookies=cookies
        )

        # Assert
        assert response.status_code == 200
        tree = client.get(f"/posts/{post_id}/comments/tree", cookies=cookies).json()
        assert tree["comments"][0]["votes"] == -1
        assert tree["comments"][0]["userVote"] == -1

    def test_vote_on_missing_comment(self, client, login):
        """Should return 404 when the target doesn't exist."""
        _, cookies = login("bob")

        response = client.post(
            f"/comments/{uuid4()}/vote", json={"voteType": 1}, cookies=cookies
        )

        assert response.status_code == 404
