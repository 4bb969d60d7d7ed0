from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel


def _is_blank(value: Any) -> bool:
    """True for the values that mean "no due time": null, empty string, false, zero."""
    if value is None:
        return True
    return isinstance(value, (str, bool, int, float)) and not value


# PUBLIC_INTERFACE
def parse_datetime(value: str) -> datetime:
    """
    Parse an ISO 8601 date or datetime string into an aware UTC datetime.

    - Full datetimes are parsed with datetime.fromisoformat (a trailing 'Z' is accepted).
    - Date-only strings are promoted to midnight.
    - Naive values are interpreted as UTC; offset values are converted to UTC.

    Raises:
        ValueError: if the value is not a string or not valid ISO 8601.
    """
    if not isinstance(value, str):
        raise ValueError("Invalid dueAt; expected an ISO 8601 date-time string.")

    s = value.strip()
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        try:
            d = date.fromisoformat(s)
        except ValueError as e:
            raise ValueError(
                "Invalid dueAt date-time format. Use ISO 8601 (e.g., '2030-01-31' or '2030-01-31T13:45:00Z')."
            ) from e
        parsed = datetime(d.year, d.month, d.day)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_due_at(value: Any) -> Optional[datetime]:
    if _is_blank(value):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return parse_datetime(value)


class _CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel)


# PUBLIC_INTERFACE
class TodoCreate(_CamelModel):
    """
    Schema for creating a new Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "dueAt": "2030-02-01T18:00:00Z",
            }
        }
    )

    title: StrictStr = Field(..., description="Short title for the todo item", min_length=1)
    description: Optional[StrictStr] = Field(default="", description="Optional detailed description")
    due_at: Optional[datetime] = Field(
        default=None,
        description="Optional due date/time as ISO 8601; empty or null means no due time",
    )

    @field_validator("description")
    @classmethod
    def default_description(cls, v: Optional[str]) -> str:
        return v or ""

    @field_validator("due_at", mode="before")
    @classmethod
    def parse_due_at(cls, v: Any) -> Optional[datetime]:
        """
        Normalize dueAt to an aware datetime, treating empty values as "not provided".
        """
        return _parse_due_at(v)


# PUBLIC_INTERFACE
class TodoUpdate(_CamelModel):
    """
    Schema for partially updating an existing Todo item.
    Only fields present in the request body are applied; see model_fields_set.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries and supplies",
                "done": True,
                "dueAt": "",
            }
        }
    )

    title: Optional[StrictStr] = Field(default=None, description="New title; must be non-empty", min_length=1)
    description: Optional[StrictStr] = Field(default=None, description="New description, stored as given")
    due_at: Optional[datetime] = Field(
        default=None,
        description="New due date/time as ISO 8601; an empty value clears it",
    )
    done: Optional[bool] = Field(default=None, description="Completion flag, coerced by truthiness")

    @field_validator("title", mode="before")
    @classmethod
    def reject_null_title(cls, v: Any) -> Any:
        # Validators only run for provided fields, so None here was sent explicitly.
        if v is None:
            raise ValueError("Title must be a non-empty string when provided.")
        return v

    @field_validator("description")
    @classmethod
    def null_description_to_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    @field_validator("due_at", mode="before")
    @classmethod
    def parse_due_at(cls, v: Any) -> Optional[datetime]:
        return _parse_due_at(v)

    @field_validator("done", mode="before")
    @classmethod
    def coerce_done(cls, v: Any) -> bool:
        return bool(v)


# PUBLIC_INTERFACE
class TodoOut(_CamelModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "dueAt": "2030-02-01T18:00:00Z",
                "done": False,
                "createdAt": "2026-10-19T10:15:30.123456Z",
                "updatedAt": "2026-10-19T10:15:30.123456Z",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    description: str = Field(default="", description="Detailed description")
    due_at: Optional[datetime] = Field(default=None, description="Due date/time, or null")
    done: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


# PUBLIC_INTERFACE
class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status indicator")
    timestamp: datetime = Field(..., description="Current server time")


# PUBLIC_INTERFACE
class ErrorOut(BaseModel):
    """Error body returned for 4xx responses."""

    error: str = Field(..., description="Error kind, e.g. ValidationError or NotFound")
    message: str = Field(..., description="Human readable description")
    detail: Optional[Any] = Field(default=None, description="Extra error context")
