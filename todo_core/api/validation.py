"""Request body validation for Flask views.

Usage:

    @todos_bp.post("")
    @validate_request
    def create_todo(data: TodoCreate):
        ...

The decorator looks at the view's type hints. Every parameter annotated
with a pydantic model is filled from the request body (JSON, or form data
for HTML forms). Path parameters pass through unchanged.
"""

from functools import wraps
from typing import Any, get_type_hints

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

# Fields never echoed back in error details
REDACTED_FIELDS = {"password"}


def _model_params(f) -> dict[str, type[BaseModel]]:
    hints = get_type_hints(f)
    return {
        name: hint
        for name, hint in hints.items()
        if name != "return" and isinstance(hint, type) and issubclass(hint, BaseModel)
    }


def _read_body() -> Any:
    data = request.get_json(silent=True)
    if data is None and request.form:
        data = request.form.to_dict()
    return data


def _redact(data: dict) -> dict:
    return {k: ("***" if k in REDACTED_FIELDS else v) for k, v in data.items()}


def _format_errors(exc: PydanticValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "expected_type": error["type"],
        }
        for error in exc.errors()
    ]


def validate_request(f):
    """Validate the request body against the view's pydantic parameters.

    Raises:
        ValidationError: If the body is missing, not an object, or does not
            match the model
    """
    model_params = _model_params(f)

    @wraps(f)
    def wrapper(*args, **kwargs):
        for name, model in model_params.items():
            data = _read_body()
            if data is None:
                raise ValidationError(
                    "Request body is required",
                    {"model": model.__name__}
                )
            if not isinstance(data, dict):
                raise ValidationError(
                    "Request body must be an object",
                    {"model": model.__name__}
                )

            try:
                kwargs[name] = model.model_validate(data)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid request data",
                    {
                        "model": model.__name__,
                        "received": _redact(data),
                        "errors": _format_errors(e),
                    }
                )

        return f(*args, **kwargs)

    return wrapper
