"""Flask application entry point."""

import logging
import sqlite3
from pathlib import Path

import click
from flask import Flask, abort, current_app, jsonify, send_from_directory
from flask.cli import with_appcontext
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import settings
from .db import EXTENSION_KEY, Database
from .exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    InvalidCredentialError,
    ResourceNotFound,
    TodoCoreError,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# ============================================================================
# Error handlers
# ============================================================================


def _error_response(error: TodoCoreError, status: int):
    response = {
        "error": {
            "type": error.__class__.__name__,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response), status


def handle_validation_error(error):
    """Handle ValidationError exceptions."""
    return _error_response(error, 400)


def handle_conflict(error):
    """Handle ConflictError exceptions (duplicate email)."""
    return _error_response(error, 400)


def handle_authentication_error(error):
    """Handle AuthenticationError exceptions."""
    return _error_response(error, 401)


def handle_invalid_credential(error):
    """Handle InvalidCredentialError exceptions (bad or expired token)."""
    return _error_response(error, 403)


def handle_not_found(error):
    """Handle ResourceNotFound exceptions."""
    return _error_response(error, 404)


def handle_database_error(error):
    """Handle DatabaseError and raw sqlite3 errors.

    Details stay in the server log; the client gets a generic message.
    """
    logger.error(f"Database error: {error}", exc_info=error)
    return jsonify({
        "error": {
            "type": "DatabaseError",
            "message": "A database error occurred"
        }
    }), 500


def handle_todo_core_error(error):
    """Handle generic TodoCoreError exceptions."""
    logger.error(f"Unhandled {error.__class__.__name__}: {error.message}")
    return _error_response(error, 500)


def handle_http_exception(error):
    """Render werkzeug HTTP errors (404, 405, ...) as JSON."""
    return jsonify({
        "error": {
            "type": error.name.replace(" ", ""),
            "message": error.description
        }
    }), error.code


def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error}", exc_info=error)
    return jsonify({
        "error": {
            "type": "InternalServerError",
            "message": "An internal error occurred"
        }
    }), 500


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(ConflictError, handle_conflict)
    app.register_error_handler(AuthenticationError, handle_authentication_error)
    app.register_error_handler(InvalidCredentialError, handle_invalid_credential)
    app.register_error_handler(ResourceNotFound, handle_not_found)
    app.register_error_handler(DatabaseError, handle_database_error)
    app.register_error_handler(sqlite3.Error, handle_database_error)
    app.register_error_handler(TodoCoreError, handle_todo_core_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_internal_error)


# ============================================================================
# Static web client
# ============================================================================


def register_static_client(app: Flask, static_dir: str) -> None:
    """Serve the built web client for every non-API GET path.

    Unknown paths fall back to index.html so client-side routing works.
    """
    root = Path(static_dir).resolve()
    api_prefix = settings.api_prefix.strip("/")

    @app.get("/", defaults={"path": ""})
    @app.get("/<path:path>")
    def serve_client(path: str):
        if api_prefix and (path == api_prefix or path.startswith(f"{api_prefix}/")):
            abort(404)
        if path and (root / path).is_file():
            return send_from_directory(root, path)
        return send_from_directory(root, "index.html")


# ============================================================================
# CLI
# ============================================================================


@click.command("init-db")
@click.option("--reset", is_flag=True, help="Drop and recreate all tables (not in production).")
@with_appcontext
def init_db_command(reset: bool):
    """Create the database schema, optionally wiping existing data."""
    database: Database = current_app.extensions[EXTENSION_KEY]
    if reset:
        database.reset_schema(settings.environment)
        action = "reset"
    else:
        database.init_schema()
        action = "initialized"
    click.echo(f"Database {action} at {database.path} (schema {database.get_schema_version()})")


# ============================================================================
# Application factory
# ============================================================================


def create_app(database_path: str | None = None) -> Flask:
    """Create and configure the Flask app.

    Args:
        database_path: SQLite file to use. Defaults to settings.database_path.
    """
    app = Flask(__name__, static_folder=None)

    # CORS configuration
    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    # Open the store; it lives as long as the app
    database = Database(database_path or settings.database_path)
    try:
        database.open()
    except (sqlite3.Error, OSError) as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    app.extensions[EXTENSION_KEY] = database

    register_error_handlers(app)

    @app.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok"})

    # Register API blueprints
    from .api import todos_bp
    from .auth.api import auth_bp

    app.register_blueprint(auth_bp, url_prefix=settings.api_prefix)
    app.register_blueprint(todos_bp, url_prefix=f"{settings.api_prefix}/todos")

    if settings.static_dir:
        register_static_client(app, settings.static_dir)

    app.cli.add_command(init_db_command)

    return app


def main() -> None:
    """Run the development server on settings.host:settings.port."""
    app = create_app()
    database: Database = app.extensions[EXTENSION_KEY]
    logger.info(f"Server starting on port {settings.port}")
    try:
        app.run(host=settings.host, port=settings.port, debug=not settings.is_production)
    finally:
        database.close()


if __name__ == "__main__":
    main()
