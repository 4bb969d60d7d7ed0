from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from threading import RLock
from typing import Callable, List, Optional

from .errors import NotFoundError, ValidationError
from .models import TodoEntity
from .schemas import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def create(self, data: TodoCreate) -> TodoEntity:
        """Create and return a new TodoEntity."""

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return all TodoEntities in insertion order."""

    @abstractmethod
    def get(self, todo_id: int) -> TodoEntity:
        """Return a TodoEntity by id. Raises NotFoundError if absent."""

    @abstractmethod
    def update(self, todo_id: int, data: TodoUpdate) -> TodoEntity:
        """Apply the provided fields of `data`. Raises NotFoundError if absent."""

    @abstractmethod
    def delete(self, todo_id: int) -> TodoEntity:
        """Remove and return a TodoEntity. Raises NotFoundError if absent."""

    @abstractmethod
    def mark_done(self, todo_id: int) -> TodoEntity:
        """Set done=True and return the TodoEntity. Raises NotFoundError if absent."""

    @abstractmethod
    def list_remaining(self) -> List[TodoEntity]:
        """
        Return todos that are not done and whose due time, if any, has not passed,
        preserving insertion order.
        """

    @abstractmethod
    def now(self) -> datetime:
        """Current time according to the repository's clock."""


class InMemoryRepository(Repository):
    """
    In-memory repository keeping todos in an ordered list.

    Records never leave the repository by reference: every method returns copies.
    Ids come from a counter that is never decremented, so deleted ids are not reused.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._lock = RLock()
        self._items: List[TodoEntity] = []
        self._next_id = 1
        self._clock: Clock = clock or utc_now

    def now(self) -> datetime:
        return self._clock()

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def _index_of(self, todo_id: int) -> int:
        for index, item in enumerate(self._items):
            if item["id"] == todo_id:
                return index
        raise NotFoundError(todo_id)

    @staticmethod
    def _check_title(title: object) -> None:
        if not isinstance(title, str) or not title:
            raise ValidationError("Title is required and must be a non-empty string.")

    def create(self, data: TodoCreate) -> TodoEntity:
        self._check_title(data.title)
        now = self.now()
        with self._lock:
            entity: TodoEntity = {
                "id": self._allocate_id(),
                "title": data.title,
                "description": data.description or "",
                "due_at": data.due_at,
                "done": False,
                "created_at": now,
                "updated_at": now,
            }
            self._items.append(entity)
        logger.info("Created todo id=%s", entity["id"])
        return entity.copy()

    def list(self) -> List[TodoEntity]:
        with self._lock:
            return [t.copy() for t in self._items]

    def get(self, todo_id: int) -> TodoEntity:
        with self._lock:
            return self._items[self._index_of(todo_id)].copy()

    def update(self, todo_id: int, data: TodoUpdate) -> TodoEntity:
        provided = data.model_fields_set
        with self._lock:
            item = self._items[self._index_of(todo_id)]
            if "title" in provided:
                self._check_title(data.title)
                item["title"] = data.title
            if "description" in provided:
                item["description"] = data.description or ""
            if "due_at" in provided:
                # An explicit empty dueAt arrives as None and clears the due time
                item["due_at"] = data.due_at
            if "done" in provided:
                item["done"] = bool(data.done)
            item["updated_at"] = self.now()
            logger.info("Updated todo id=%s fields=%s", todo_id, sorted(provided))
            return item.copy()

    def delete(self, todo_id: int) -> TodoEntity:
        with self._lock:
            removed = self._items.pop(self._index_of(todo_id))
        logger.info("Deleted todo id=%s", todo_id)
        return removed

    def mark_done(self, todo_id: int) -> TodoEntity:
        with self._lock:
            item = self._items[self._index_of(todo_id)]
            item["done"] = True
            item["updated_at"] = self.now()
            logger.info("Marked todo id=%s done", todo_id)
            return item.copy()

    def list_remaining(self) -> List[TodoEntity]:
        now = self.now()
        with self._lock:
            return [
                t.copy()
                for t in self._items
                if not t["done"] and (t["due_at"] is None or t["due_at"] >= now)
            ]


# PUBLIC_INTERFACE
def get_repository(clock: Optional[Clock] = None) -> Repository:
    """
    Factory returning a fresh, empty repository. The app creates one at startup
    and shares it across requests.
    """
    return InMemoryRepository(clock=clock)
