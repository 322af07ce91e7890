"""Todo schemas for API validation."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


def _blank_to_none(value):
    # HTML date inputs send "" when left empty
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TodoCreate(BaseModel):
    """Request body for POST /api/todos."""

    description: str = Field(..., min_length=1, description="What needs doing")
    deadline: datetime | None = Field(default=None, description="Optional ISO 8601 deadline")

    @field_validator("deadline", mode="before")
    @classmethod
    def blank_deadline_is_none(cls, value):
        return _blank_to_none(value)


class TodoUpdate(BaseModel):
    """Request body for PUT /api/todos/<id>.

    All fields optional. Only fields present in the body are changed;
    an explicit null deadline clears it.
    """

    description: str | None = Field(default=None, min_length=1)
    completed: bool | None = None
    deadline: datetime | None = None

    @field_validator("deadline", mode="before")
    @classmethod
    def blank_deadline_is_none(cls, value):
        return _blank_to_none(value)


class TodoResponse(BaseModel):
    """Todo as returned by the API."""

    id: int
    owner_id: int
    description: str
    completed: bool
    deadline: datetime | None = None
    created_at: datetime

    @classmethod
    def from_row(cls, row) -> "TodoResponse":
        """Build a response from a todos table row."""
        return cls(
            id=row["id"],
            owner_id=row["user_id"],
            description=row["description"],
            completed=bool(row["completed"]),
            deadline=row["deadline"],
            created_at=row["created_at"],
        )
