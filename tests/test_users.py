"""
Signup, login, logout and profile endpoints.
"""
from unittest.mock import patch

from app.core.config import settings
from app.core.security import decode_access_token
from app.modules.user_management.models.user import User


class TestSignup:

    def test_signup_creates_user_and_session(self, client, db_session):
        response = client.post("/api/users/signup", json={
            "name": "Alice", "username": "alice",
            "email": "Alice@Example.com", "password": "secret123",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "alice"
        assert body["email"] == "alice@example.com"
        assert "password" not in body and "password_hash" not in body

        token = response.cookies[settings.AUTH_COOKIE_NAME]
        assert decode_access_token(token) == body["id"]

        user = db_session.query(User).filter(User.username == "alice").one()
        assert user.password_hash != "secret123"

    def test_duplicate_username_or_email(self, client, make_client, register):
        register(client, "alice")

        other = make_client()
        by_username = other.post("/api/users/signup", json={
            "name": "A", "username": "alice", "email": "new@example.com", "password": "secret123",
        })
        by_email = other.post("/api/users/signup", json={
            "name": "A", "username": "alice2", "email": "alice@example.com", "password": "secret123",
        })

        assert by_username.status_code == 400
        assert by_username.json()["message"] == "User already exists"
        assert by_email.status_code == 400

    def test_short_password_is_validation_error(self, client):
        response = client.post("/api/users/signup", json={
            "name": "A", "username": "a", "email": "a@example.com", "password": "123",
        })
        assert response.status_code == 400
        assert "message" in response.json()

    def test_bad_email(self, client):
        response = client.post("/api/users/signup", json={
            "name": "A", "username": "a", "email": "not-an-email", "password": "secret123",
        })
        assert response.status_code == 400


class TestLoginLogout:

    def test_login(self, client, make_client, register):
        account = register(client, "alice")

        fresh = make_client()
        response = fresh.post("/api/users/login", json={"username": "alice", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["id"] == account["id"]
        assert fresh.get("/api/posts/feed").status_code == 200

    def test_wrong_password(self, client, make_client, register):
        register(client, "alice")
        response = make_client().post("/api/users/login", json={"username": "alice", "password": "nope123"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username or password"

    def test_unknown_user(self, client):
        response = client.post("/api/users/login", json={"username": "ghost", "password": "secret123"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username or password"

    def test_logout_clears_cookie_but_token_stays_valid(self, alice, make_client):
        alice_client, _ = alice
        token = alice_client.cookies[settings.AUTH_COOKIE_NAME]

        response = alice_client.post("/api/users/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"
        assert "Max-Age=0" in response.headers["set-cookie"]
        assert alice_client.get("/api/posts/feed").status_code == 401

        # No revocation: the old token still works until it expires
        replay = make_client().get(
            "/api/posts/feed", headers={"Cookie": f"{settings.AUTH_COOKIE_NAME}={token}"}
        )
        assert replay.status_code == 200


class TestProfile:

    def test_get_profile(self, alice, bob):
        alice_client, _ = alice
        _, bob_account = bob

        response = alice_client.get("/api/users/profile/bob")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == bob_account["id"]
        assert body["bio"] == ""
        assert "created_at" in body
        assert "password_hash" not in body

    def test_get_unknown_profile(self, alice):
        alice_client, _ = alice
        response = alice_client.get("/api/users/profile/ghost")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_profile_needs_session(self, client):
        assert client.get("/api/users/profile/alice").status_code == 401


class TestUpdate:

    def test_update_trims_and_keeps_blank_fields(self, alice):
        alice_client, account = alice

        response = alice_client.post(f"/api/users/update/{account['id']}", json={
            "bio": "  hello there  ", "name": "   ", "profile_pic": "https://img/alice.png",
        })

        assert response.status_code == 200
        body = response.json()
        assert body["bio"] == "hello there"
        assert body["name"] == account["name"]
        assert body["profile_pic"] == "https://img/alice.png"

    def test_password_change(self, alice, make_client):
        alice_client, account = alice
        alice_client.post(f"/api/users/update/{account['id']}", json={"password": " newsecret "})

        fresh = make_client()
        assert fresh.post("/api/users/login", json={"username": "alice", "password": "secret123"}).status_code == 401
        assert fresh.post("/api/users/login", json={"username": "alice", "password": "newsecret"}).status_code == 200

    def test_cannot_update_someone_else(self, alice, bob):
        alice_client, _ = alice
        _, bob_account = bob

        response = alice_client.post(f"/api/users/update/{bob_account['id']}", json={"bio": "pwned"})

        assert response.status_code == 403
        assert response.json()["message"] == "You are not authorized to update this user."

    def test_username_taken(self, alice, bob):
        alice_client, account = alice
        response = alice_client.post(f"/api/users/update/{account['id']}", json={"username": "bob"})
        assert response.status_code == 400

    def test_update_refreshes_updated_at(self, alice, db_session):
        alice_client, account = alice
        before = db_session.query(User).filter(User.id == account["id"]).one().updated_at
        db_session.expire_all()

        alice_client.post(f"/api/users/update/{account['id']}", json={"bio": "changed"})

        after = db_session.query(User).filter(User.id == account["id"]).one().updated_at
        assert after > before

    def test_username_too_long(self, alice, db_session):
        alice_client, account = alice

        response = alice_client.post(f"/api/users/update/{account['id']}", json={"username": "u" * 51})

        assert response.status_code == 400
        assert db_session.query(User).filter(User.id == account["id"]).one().username == "alice"

    def test_invalid_email(self, alice, db_session):
        alice_client, account = alice

        response = alice_client.post(f"/api/users/update/{account['id']}", json={"email": "not-an-email"})

        assert response.status_code == 400
        assert db_session.query(User).filter(User.id == account["id"]).one().email == "alice@example.com"

    def test_email_is_lowercased(self, alice):
        alice_client, account = alice
        response = alice_client.post(f"/api/users/update/{account['id']}", json={"email": " New@Example.COM "})
        assert response.status_code == 200
        assert response.json()["email"] == "new@example.com"

    def test_email_taken_in_other_case(self, alice, bob):
        bob_client, bob_account = bob

        response = bob_client.post(f"/api/users/update/{bob_account['id']}", json={"email": "ALICE@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Email is already taken"

    def test_short_password(self, alice):
        alice_client, account = alice
        response = alice_client.post(f"/api/users/update/{account['id']}", json={"password": "123"})
        assert response.status_code == 400

    def test_username_claimed_between_check_and_commit(self, alice, bob):
        """The unique constraint still answers 400 when the lookup misses the clash"""
        alice_client, account = alice

        with patch("app.modules.user_management.services.user.get_user_by_username", return_value=None):
            response = alice_client.post(f"/api/users/update/{account['id']}", json={"username": "bob"})

        assert response.status_code == 400
        assert response.json()["message"] == "Username or email is already taken"
        assert alice_client.get("/api/users/profile/alice").status_code == 200
