from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status

from ..errors import NotFoundError
from ..models import TodoEntity
from ..repositories import Repository
from ..schemas import ErrorOut, TodoCreate, TodoOut, TodoUpdate

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)

remaining_router = APIRouter(tags=["todos"])

_NOT_FOUND = {404: {"model": ErrorOut, "description": "Todo not found"}}
_INVALID = {400: {"model": ErrorOut, "description": "Validation error"}}


def get_repo(request: Request) -> Repository:
    """
    Dependency returning the repository owned by the running application.
    """
    return request.app.state.repository


def resolve_todo_id(todo_id: str) -> int:
    """
    Parse the path id. Anything that is not an integer cannot name a todo, so it is a 404.
    """
    try:
        return int(todo_id)
    except ValueError:
        raise NotFoundError(todo_id) from None


def get_existing_todo(
    todo_id: int = Depends(resolve_todo_id),
    repo: Repository = Depends(get_repo),
) -> TodoEntity:
    """
    Resolve the addressed todo. Dependencies run before the request body is validated,
    so a missing todo answers 404 even when the body is invalid.
    """
    return repo.get(todo_id)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={201: {"description": "Todo created successfully"}, **_INVALID},
)
def create_todo(payload: TodoCreate, repo: Repository = Depends(get_repo)) -> TodoOut:
    """
    Create a new Todo.
    """
    return TodoOut(**repo.create(payload))


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="List all todos in the order they were created.",
)
def list_todos(repo: Repository = Depends(get_repo)) -> List[TodoOut]:
    return [TodoOut(**it) for it in repo.list()]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={200: {"description": "Todo found"}, **_NOT_FOUND},
)
def get_todo(todo: TodoEntity = Depends(get_existing_todo)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    return TodoOut(**todo)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description=(
        "Partially update a Todo item. Only fields present in the body are changed; "
        "an empty dueAt clears the due time."
    ),
    responses={200: {"description": "Todo updated"}, **_NOT_FOUND, **_INVALID},
)
def update_todo(
    payload: Optional[TodoUpdate] = None,
    todo: TodoEntity = Depends(get_existing_todo),
    repo: Repository = Depends(get_repo),
) -> TodoOut:
    """
    Partial update of a Todo item. A request without a body only refreshes updatedAt.
    """
    return TodoOut(**repo.update(todo["id"], payload or TodoUpdate()))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Delete Todo",
    description="Delete a Todo item by ID and return the removed item.",
    responses={200: {"description": "Todo deleted"}, **_NOT_FOUND},
)
def delete_todo(todo_id: int = Depends(resolve_todo_id), repo: Repository = Depends(get_repo)) -> TodoOut:
    return TodoOut(**repo.delete(todo_id))


# PUBLIC_INTERFACE
@router.post(
    "/{todo_id}/done",
    response_model=TodoOut,
    summary="Mark Todo Done",
    description="Mark a Todo item as done. Marking an already done item succeeds.",
    responses={200: {"description": "Todo marked done"}, **_NOT_FOUND},
)
def mark_todo_done(todo_id: int = Depends(resolve_todo_id), repo: Repository = Depends(get_repo)) -> TodoOut:
    return TodoOut(**repo.mark_done(todo_id))


# PUBLIC_INTERFACE
@remaining_router.get(
    "/todos-remaining",
    response_model=List[TodoOut],
    summary="List Remaining Todos",
    description="List todos that are not done and whose due time, if any, has not passed yet.",
)
def list_remaining_todos(repo: Repository = Depends(get_repo)) -> List[TodoOut]:
    return [TodoOut(**it) for it in repo.list_remaining()]
