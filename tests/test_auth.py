"""
Tests for auth.py and the /auth endpoints.
"""

import pytest
from sqlalchemy import false
from sqlmodel import select

from jobly import config
from jobly.accounts.db import authenticate_user, register_user, seed_admin
from jobly.auth import create_access_token, current_user, decode_token
from jobly.errors import ConflictError


class TestTokens:
    def test_round_trip_claims(self):
        payload = decode_token(create_access_token("u1", True))
        assert payload["sub"] == "u1"
        assert payload["is_admin"] is True
        assert payload["exp"] > payload["iat"]

    def test_garbage_token(self):
        assert decode_token("not-a-token") is None

    def test_expired_token(self, monkeypatch):
        monkeypatch.setattr(config, "ACCESS_TOKEN_EXPIRE_SECONDS", -10)
        assert decode_token(create_access_token("u1", False)) is None

    @pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer abc"])
    def test_anonymous_headers(self, header):
        assert current_user(header) is None

    def test_bearer_header(self, admin_token):
        user = current_user(f"Bearer {admin_token}")
        assert user.username == "admin"
        assert user.is_admin


class TestAccounts:
    def test_authenticate(self, engine):
        acct = authenticate_user(engine, "u1", "password1")
        assert acct is not None
        assert acct.is_admin is False

    def test_wrong_password(self, engine):
        assert authenticate_user(engine, "u1", "wrong") is None

    def test_unknown_user(self, engine):
        assert authenticate_user(engine, "nobody", "password1") is None

    def test_duplicate_username(self, engine):
        with pytest.raises(ConflictError):
            register_user(engine, "u1", "whatever")

    def test_duplicate_username_after_check(self, engine, monkeypatch):
        """The unique constraint catches a user registered after the lookup."""
        monkeypatch.setattr("jobly.accounts.db.select", lambda model: select(model).where(false()))
        with pytest.raises(ConflictError):
            register_user(engine, "u1", "whatever")
        monkeypatch.undo()
        assert authenticate_user(engine, "u1", "password1") is not None

    def test_seed_admin(self, bare_engine, monkeypatch):
        monkeypatch.setattr(config, "ADMIN_USERNAME", "root")
        monkeypatch.setattr(config, "ADMIN_PASSWORD", "rootpass")
        seed_admin(bare_engine)
        seed_admin(bare_engine)
        assert authenticate_user(bare_engine, "root", "rootpass").is_admin

    def test_seed_admin_needs_both_settings(self, bare_engine, monkeypatch):
        monkeypatch.setattr(config, "ADMIN_USERNAME", "root")
        monkeypatch.setattr(config, "ADMIN_PASSWORD", "")
        seed_admin(bare_engine)
        assert authenticate_user(bare_engine, "root", "") is None


class TestAuthRoutes:
    def test_login(self, client):
        resp = client.post("/auth/token", json={"username": "admin", "password": "password2"})
        assert resp.status_code == 200
        assert decode_token(resp.json()["token"])["is_admin"] is True

    def test_login_bad_password(self, client):
        resp = client.post("/auth/token", json={"username": "admin", "password": "nope"})
        assert resp.status_code == 401
        assert resp.json()["error"]["status"] == 401

    def test_login_missing_fields(self, client):
        resp = client.post("/auth/token", json={"username": "admin"})
        assert resp.status_code == 400

    def test_register(self, client):
        resp = client.post("/auth/register", json={"username": "new", "password": "password"})
        assert resp.status_code == 201
        payload = decode_token(resp.json()["token"])
        assert payload["sub"] == "new"
        assert payload["is_admin"] is False

    def test_register_duplicate(self, client):
        resp = client.post("/auth/register", json={"username": "u1", "password": "password"})
        assert resp.status_code == 409

    def test_me(self, client, u1_token):
        resp = client.get("/auth/me", headers={"authorization": f"Bearer {u1_token}"})
        assert resp.json() == {"user": {"username": "u1", "isAdmin": False}}

    def test_me_anon(self, client):
        resp = client.get("/auth/me")
        assert resp.status_code == 401


def test_health(client):
    assert client.get("/health").json() == {"ok": True}
