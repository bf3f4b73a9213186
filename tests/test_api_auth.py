"""HTTP tests for users, login, refresh and revoke."""

from argon2 import PasswordHasher

import api.users
import utils.refresh_tokens
from utils.exceptions import HashingError, RandomSourceError
from utils.security import password_needs_rehash


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


class TestUsers:
    def test_create_user(self, client):
        resp = client.post("/api/users", json={"email": "A@B.com ", "password": "pw123456"})
        data = resp.get_json()

        assert resp.status_code == 201
        assert data["email"] == "a@b.com"
        assert data["is_chirpy_red"] is False
        assert set(data) == {"id", "created_at", "updated_at", "email", "is_chirpy_red"}

    def test_duplicate_email(self, client, register):
        register()
        resp = client.post("/api/users", json={"email": "a@b.com", "password": "pw123456"})

        assert resp.status_code == 409

    def test_invalid_input(self, client):
        resp = client.post("/api/users", json={"email": "not-an-email", "password": "short"})
        data = resp.get_json()

        assert resp.status_code == 422
        assert data["error"] == "VALIDATION_ERROR"
        assert set(data["details"]) == {"email", "password"}

    def test_update_user(self, client, register, login):
        register()
        tokens = login()

        resp = client.put(
            "/api/users",
            json={"email": "new@b.com", "password": "newpass123"},
            headers=bearer(tokens["token"]),
        )

        assert resp.status_code == 200
        assert resp.get_json()["email"] == "new@b.com"
        assert client.post("/api/login", json={"email": "a@b.com", "password": "pw123456"}).status_code == 401
        login("new@b.com", "newpass123")

    def test_update_user_requires_token(self, client, register):
        register()
        resp = client.put("/api/users", json={"email": "new@b.com", "password": "newpass123"})

        assert resp.status_code == 401

    def test_update_user_email_taken(self, client, register, login):
        register()
        register("c@d.com")
        tokens = login()

        resp = client.put(
            "/api/users",
            json={"email": "c@d.com", "password": "newpass123"},
            headers=bearer(tokens["token"]),
        )

        assert resp.status_code == 409


class TestLogin:
    def test_login_returns_tokens(self, register, login):
        user = register()
        data = login()

        assert data["id"] == user["id"]
        assert data["email"] == "a@b.com"
        assert data["token"]
        assert len(data["refresh_token"]) == 64
        assert "hashed_password" not in data

    def test_wrong_password_and_unknown_email_look_the_same(self, client, register):
        register()
        wrong_password = client.post("/api/login", json={"email": "a@b.com", "password": "wrong-pass"})
        unknown_email = client.post("/api/login", json={"email": "x@y.com", "password": "pw123456"})

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.get_json() == unknown_email.get_json()

    def test_login_upgrades_weak_hash(self, client, storage, register, login):
        register()
        user = storage.get_user_by_email("a@b.com")
        weak = PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1).hash("pw123456")
        storage.set_password_hash(user, weak)

        login()

        storage.get_session().expire_all()
        stored = storage.get_user_by_email("a@b.com").hashed_password
        assert stored != weak
        assert password_needs_rehash(stored) is False

    def test_non_ascii_stored_hash_is_a_failed_login(self, client, storage, register):
        register()
        storage.set_password_hash(storage.get_user_by_email("a@b.com"), "héllo not a hash")

        resp = client.post("/api/login", json={"email": "a@b.com", "password": "pw123456"})

        assert resp.status_code == 401

    def test_no_random_source_is_a_server_error(self, client, register, monkeypatch):
        register()

        def no_random():
            raise RandomSourceError("No secure random source available")

        monkeypatch.setattr(utils.refresh_tokens, "generate_refresh_token", no_random)

        resp = client.post("/api/login", json={"email": "a@b.com", "password": "pw123456"})

        assert resp.status_code == 500
        assert resp.get_json()["error"] == "INTERNAL_ERROR"
        assert "refresh_token" not in resp.get_json()


class TestServerErrors:
    def test_hashing_failure_on_signup(self, client, monkeypatch):
        def broken_hash(password):
            raise HashingError("Could not hash password")

        monkeypatch.setattr(api.users, "hash_password", broken_hash)

        resp = client.post("/api/users", json={"email": "a@b.com", "password": "pw123456"})

        assert resp.status_code == 500
        assert resp.get_json()["error"] == "INTERNAL_ERROR"
        assert resp.get_json()["message"] == "An unexpected error occurred"


class TestRefreshAndRevoke:
    def test_refresh_returns_new_access_token(self, client, register, login):
        register()
        tokens = login()

        resp = client.post("/api/refresh", headers=bearer(tokens["refresh_token"]))

        assert resp.status_code == 200
        new_token = resp.get_json()["token"]
        assert client.post("/api/chirps", json={"body": "hi"}, headers=bearer(new_token)).status_code == 201

    def test_refresh_without_header(self, client):
        assert client.post("/api/refresh").status_code == 401

    def test_refresh_with_unknown_token(self, client):
        resp = client.post("/api/refresh", headers=bearer("0" * 64))

        assert resp.status_code == 401

    def test_access_token_is_not_a_refresh_token(self, client, register, login):
        register()
        tokens = login()

        assert client.post("/api/refresh", headers=bearer(tokens["token"])).status_code == 401

    def test_revoke(self, client, register, login):
        register()
        tokens = login()

        resp = client.post("/api/revoke", headers=bearer(tokens["refresh_token"]))

        assert resp.status_code == 204
        assert client.post("/api/refresh", headers=bearer(tokens["refresh_token"])).status_code == 401

    def test_revoke_twice(self, client, register, login):
        register()
        tokens = login()

        assert client.post("/api/revoke", headers=bearer(tokens["refresh_token"])).status_code == 204
        assert client.post("/api/revoke", headers=bearer(tokens["refresh_token"])).status_code == 204

    def test_revoke_unknown_token(self, client):
        assert client.post("/api/revoke", headers=bearer("0" * 64)).status_code == 401

    def test_access_token_survives_revoke(self, client, register, login):
        register()
        tokens = login()
        client.post("/api/revoke", headers=bearer(tokens["refresh_token"]))

        # access tokens are stateless and live until they expire
        resp = client.post("/api/chirps", json={"body": "still here"}, headers=bearer(tokens["token"]))
        assert resp.status_code == 201


def test_end_to_end(client):
    resp = client.post("/api/users", json={"email": "a@b.com", "password": "pw123456"})
    assert resp.status_code == 201

    resp = client.post("/api/login", json={"email": "a@b.com", "password": "pw123456"})
    assert resp.status_code == 200
    access_token = resp.get_json()["token"]
    refresh_token = resp.get_json()["refresh_token"]

    resp = client.post("/api/chirps", json={"body": "hello world"}, headers=bearer(access_token))
    assert resp.status_code == 201

    resp = client.post("/api/chirps", json={"body": "hello world"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "UNAUTHORIZED"

    assert client.post("/api/revoke", headers=bearer(refresh_token)).status_code == 204
    assert client.post("/api/refresh", headers=bearer(refresh_token)).status_code == 401
