"""
Follow toggle and the home feed built from it.
"""
from app.modules.follows.models.follow import UserFollow


def _edges(db_session, follower_id, following_id):
    return db_session.query(UserFollow).filter(
        UserFollow.follower_id == follower_id,
        UserFollow.following_id == following_id,
    ).count()


class TestFollowToggle:

    def test_follow_then_unfollow(self, alice, bob, db_session):
        alice_client, alice_account = alice
        _, bob_account = bob

        followed = alice_client.post(f"/api/users/follow/{bob_account['id']}")
        assert followed.status_code == 200
        assert followed.json() == {"message": "Followed successfully", "following": True}
        assert _edges(db_session, alice_account["id"], bob_account["id"]) == 1

        unfollowed = alice_client.post(f"/api/users/follow/{bob_account['id']}")
        assert unfollowed.json() == {"message": "Unfollowed successfully", "following": False}
        assert _edges(db_session, alice_account["id"], bob_account["id"]) == 0

    def test_follow_is_one_directional(self, alice, bob, db_session):
        alice_client, alice_account = alice
        _, bob_account = bob

        alice_client.post(f"/api/users/follow/{bob_account['id']}")

        assert _edges(db_session, bob_account["id"], alice_account["id"]) == 0

    def test_cannot_follow_self(self, alice, db_session):
        alice_client, account = alice

        response = alice_client.post(f"/api/users/follow/{account['id']}")

        assert response.status_code == 400
        assert response.json()["message"] == "You cannot follow/unfollow yourself"
        assert db_session.query(UserFollow).count() == 0

    def test_unknown_target(self, alice):
        alice_client, _ = alice
        response = alice_client.post("/api/users/follow/does-not-exist")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_needs_session(self, client, bob):
        _, bob_account = bob
        assert client.post(f"/api/users/follow/{bob_account['id']}").status_code == 401


class TestHomeFeed:

    def test_empty_when_following_nobody(self, alice, bob):
        alice_client, _ = alice
        bob_client, _ = bob
        bob_client.post("/api/posts/create", json={"text": "anyone there?"})

        response = alice_client.get("/api/posts/feed")

        assert response.status_code == 200
        assert response.json() == []

    def test_followed_posts_newest_first(self, alice, bob):
        alice_client, _ = alice
        bob_client, bob_account = bob
        alice_client.post(f"/api/users/follow/{bob_account['id']}")

        bob_client.post("/api/posts/create", json={"text": "first"})
        bob_client.post("/api/posts/create", json={"text": "second"})
        alice_client.post("/api/posts/create", json={"text": "my own"})

        feed = alice_client.get("/api/posts/feed").json()

        assert [item["text"] for item in feed] == ["second", "first"]
        assert all(item["posted_by_id"] == bob_account["id"] for item in feed)
        assert feed[0]["posted_by_username"] == "bob"

    def test_unfollow_empties_feed(self, alice, bob):
        alice_client, _ = alice
        bob_client, bob_account = bob
        alice_client.post(f"/api/users/follow/{bob_account['id']}")
        bob_client.post("/api/posts/create", json={"text": "hello"})
        assert len(alice_client.get("/api/posts/feed").json()) == 1

        alice_client.post(f"/api/users/follow/{bob_account['id']}")

        assert alice_client.get("/api/posts/feed").json() == []

    def test_feed_carries_like_count_and_replies(self, alice, bob):
        alice_client, _ = alice
        bob_client, bob_account = bob
        alice_client.post(f"/api/users/follow/{bob_account['id']}")
        post_id = bob_client.post("/api/posts/create", json={"text": "like me"}).json()["post"]["id"]

        alice_client.post(f"/api/posts/like/{post_id}")
        bob_client.post(f"/api/posts/like/{post_id}")
        alice_client.post(f"/api/posts/reply/{post_id}", json={"text": "nice"})

        item = alice_client.get("/api/posts/feed").json()[0]

        assert item["like_count"] == 2
        assert [reply["text"] for reply in item["replies"]] == ["nice"]
        assert item["replies"][0]["username"] == "alice"
