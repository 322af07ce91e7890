"""Tests for Flask application initialization and configuration."""

import logging

import pytest
from flask import Flask

from todo_core.config import settings
from todo_core.db import EXTENSION_KEY, Database
from todo_core.main import create_app


class TestAppInitialization:
    """Test Flask application initialization."""

    def test_create_app_returns_flask(self, app):
        """create_app should return a Flask application."""
        assert isinstance(app, Flask)

    def test_app_in_testing_mode_when_configured(self, app):
        """App should respect TESTING configuration."""
        assert app.config['TESTING'] is True

    def test_database_attached_and_open(self, app, tmp_path):
        """The store handle should be attached to the app and open."""
        database = app.extensions[EXTENSION_KEY]
        assert isinstance(database, Database)
        assert database.closed is False
        assert database.path == str(tmp_path / "test.db")

    def test_routes_registered(self, app):
        """Auth and todo routes should be registered under the API prefix."""
        rules = {rule.rule for rule in app.url_map.iter_rules()}
        assert "/api/register" in rules
        assert "/api/login" in rules
        assert "/api/todos" in rules
        assert "/api/todos/<int:todo_id>" in rules

    def test_init_db_cli_command(self, app):
        """init-db should be idempotent on an initialized database."""
        runner = app.test_cli_runner()
        result = runner.invoke(args=["init-db"])
        assert result.exit_code == 0
        assert "Database initialized" in result.output
        assert "schema 20261019" in result.output

    def test_init_db_reset_cli_command(self, app, client, register_user):
        """init-db --reset should wipe users in development."""
        register_user("alice@example.com")

        runner = app.test_cli_runner()
        result = runner.invoke(args=["init-db", "--reset"])
        assert result.exit_code == 0
        assert "Database reset" in result.output

        response = client.post(
            "/api/login",
            json={"email": "alice@example.com", "password": "TestPass123"}
        )
        assert response.status_code == 401


class TestCORSConfiguration:
    """Test CORS middleware configuration."""

    def test_cors_headers_present(self, client):
        """CORS headers should be present for an allowed origin."""
        response = client.get("/health", headers={"Origin": "http://localhost:3000"})
        assert "Access-Control-Allow-Origin" in response.headers

    def test_cors_preflight_options_request(self, client):
        """OPTIONS preflight request should be handled."""
        response = client.options(
            "/api/todos",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET"
            }
        )
        assert response.status_code in (200, 204)


class TestStaticClient:
    """Test serving the built web client."""

    @pytest.fixture
    def static_client(self, tmp_path, monkeypatch):
        build = tmp_path / "build"
        build.mkdir()
        (build / "index.html").write_text("<html>todo app</html>")
        (build / "app.js").write_text("console.log('hi');")
        monkeypatch.setattr(settings, "static_dir", str(build))

        app = create_app(str(tmp_path / "static.db"))
        app.config["TESTING"] = True
        with app.test_client() as client:
            yield client

    def test_serves_existing_file(self, static_client):
        response = static_client.get("/app.js")
        assert response.status_code == 200
        assert b"console.log" in response.data

    def test_unknown_path_falls_back_to_index(self, static_client):
        response = static_client.get("/some/client/route")
        assert response.status_code == 200
        assert b"todo app" in response.data

    def test_api_paths_are_not_shadowed(self, static_client):
        """Unknown API paths should stay JSON 404s."""
        response = static_client.get("/api/unknown")
        assert response.status_code == 404
        assert response.get_json()["error"]["type"] == "NotFound"

    def test_no_static_routes_by_default(self, client):
        response = client.get("/")
        assert response.status_code == 404


class TestLoggingConfiguration:
    """Test logging configuration."""

    def test_logger_exists(self):
        """App logger should exist."""
        logger = logging.getLogger("todo_core.main")
        assert logger is not None
