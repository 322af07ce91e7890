"""Tests for the bearer token gate.

Covers authenticate_request() and the @auth_required decorator on a
standalone Flask app, so the gate is tested apart from the todo routes.
"""

import jwt as pyjwt
import pytest
from flask import Flask, g, jsonify

from todo_core.auth.decorators import auth_required
from todo_core.auth.schemas import UserResponse
from todo_core.auth.token import generate_access_token
from todo_core.config import settings
from todo_core.main import register_error_handlers
from todo_core.utils import isodatetime


@pytest.fixture
def gate_client():
    """App with a single protected route that echoes the identity."""
    test_app = Flask(__name__)
    test_app.config["TESTING"] = True
    register_error_handlers(test_app)

    @test_app.get("/protected")
    @auth_required
    def protected():
        return jsonify({"user_id": g.user_id, "email": g.email})

    return test_app.test_client()


@pytest.fixture
def token():
    user = UserResponse(id=7, email="ada@example.com", created_at=isodatetime.now())
    return generate_access_token(user)


class TestAuthRequired:
    """Tests for @auth_required."""

    def test_valid_token_sets_identity(self, gate_client, token):
        """A valid token should reach the view with g populated."""
        response = gate_client.get("/protected", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.get_json() == {"user_id": 7, "email": "ada@example.com"}

    def test_lowercase_scheme_accepted(self, gate_client, token):
        """The Bearer scheme is matched case-insensitively."""
        response = gate_client.get("/protected", headers={"Authorization": f"bearer {token}"})

        assert response.status_code == 200

    def test_missing_header_is_401(self, gate_client):
        """No Authorization header should be rejected before the view runs."""
        response = gate_client.get("/protected")
        data = response.get_json()

        assert response.status_code == 401
        assert data["error"]["type"] == "AuthenticationError"
        assert data["error"]["details"]["code"] == "missing_auth"

    @pytest.mark.parametrize("header", ["Bearer", "Bearer ", "Basic dXNlcjpwdw==", "token-without-scheme"])
    def test_header_without_bearer_token_is_401(self, gate_client, header):
        """A header that carries no bearer token counts as absent."""
        response = gate_client.get("/protected", headers={"Authorization": header})

        assert response.status_code == 401

    def test_invalid_token_is_403(self, gate_client):
        """A token that fails verification should be rejected as invalid."""
        response = gate_client.get("/protected", headers={"Authorization": "Bearer not-a-jwt"})
        data = response.get_json()

        assert response.status_code == 403
        assert data["error"]["type"] == "InvalidCredentialError"
        assert data["error"]["details"]["code"] == "invalid_token"

    def test_forged_token_is_403(self, gate_client, token):
        """A token signed with another secret should be rejected."""
        claims = pyjwt.decode(token, options={"verify_signature": False})
        forged = pyjwt.encode(claims, "attacker-secret", algorithm="HS256")

        response = gate_client.get("/protected", headers={"Authorization": f"Bearer {forged}"})

        assert response.status_code == 403

    def test_expired_token_is_403(self, gate_client):
        """An expired token should be rejected with its own code."""
        past_ts = isodatetime.now_unix() - 60
        expired = pyjwt.encode(
            {"sub": "7", "email": "ada@example.com", "iat": past_ts - 60, "exp": past_ts},
            settings.jwt_secret_key,
            algorithm="HS256",
        )

        response = gate_client.get("/protected", headers={"Authorization": f"Bearer {expired}"})

        assert response.status_code == 403
        assert response.get_json()["error"]["details"]["code"] == "token_expired"
