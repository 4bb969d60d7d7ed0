from __future__ import annotations

from typing import Any, Optional, Union


class TodoAPIError(Exception):
    """
    Base class for errors raised by the todo service.

    Subclasses set `status_code` and `error`; handlers in main.py turn them
    into JSON bodies of the form {"error": ..., "message": ..., "detail": ...}.
    """

    status_code: int = 500
    error: str = "InternalError"

    def __init__(self, message: str, detail: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


# PUBLIC_INTERFACE
class ValidationError(TodoAPIError):
    """Malformed or missing required input."""

    status_code = 400
    error = "ValidationError"


# PUBLIC_INTERFACE
class NotFoundError(TodoAPIError):
    """Referenced todo id does not exist."""

    status_code = 404
    error = "NotFound"

    def __init__(self, todo_id: Union[int, str]) -> None:
        super().__init__("Todo not found.", detail={"id": todo_id})
        self.todo_id = todo_id
