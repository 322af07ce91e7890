"""Authentication API endpoints for todo-core.

- POST /api/register - Create account and return a token
- POST /api/login    - Check credentials and return a token

Both endpoints are public. Everything under /api/todos requires the
returned token in an 'Authorization: Bearer <token>' header.
"""

import logging

from flask import Blueprint, jsonify

from ..api.validation import validate_request
from ..db import get_core
from . import service, token
from .schemas import TokenResponse, UserCredentials

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register")
@validate_request
def register(data: UserCredentials):
    """
    Register a user and return a JWT token.

    Example request:
    ```json
    {"email": "ada@example.com", "password": "SecurePass123"}
    ```

    Example response:
    ```json
    {"token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."}
    ```

    Error Responses:
        400: Missing email or password, or email already registered
    """
    with get_core(atomic=True) as core:
        user = service.create_user(core, data)

    logger.info(f"Registration successful for user {user.id}")

    return jsonify(TokenResponse(token=token.generate_access_token(user)).model_dump())


@auth_bp.post("/login")
@validate_request
def login(data: UserCredentials):
    """
    Authenticate a user and return a JWT token.

    Error Responses:
        400: Missing email or password
        401: User not found, or invalid password
    """
    core = get_core()
    try:
        user = service.authenticate(core, data.email, data.password)
    finally:
        core.close()

    logger.info(f"Successful login for user {user.id}")

    return jsonify(TokenResponse(token=token.generate_access_token(user)).model_dump())
