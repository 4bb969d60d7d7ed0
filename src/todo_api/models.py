from __future__ import annotations

from datetime import datetime
from typing import Optional, TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight record representing a Todo item held by the in-memory store.

    Fields:
    - id: Unique integer identifier, never reused within a process
    - title: Non-empty title
    - description: Free text, empty string when not given
    - due_at: Optional due datetime (aware, UTC)
    - done: Completion flag
    - created_at: Creation timestamp (aware, UTC)
    - updated_at: Last mutation timestamp (aware, UTC)
    """

    id: int
    title: str
    description: str
    due_at: Optional[datetime]
    done: bool
    created_at: datetime
    updated_at: datetime
