from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from ..errors import DomainError
from ..schemas import ErrorOut, TodoCreate, TodoOut, TodoUpdate, ValidationErrorOut
from ..services import TodoServicePort
from .errors import to_http_exception

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={400: {"model": ValidationErrorOut, "description": "Malformed request"}},
)


def _get_service(request: Request) -> TodoServicePort:
    """
    Dependency returning the TodoService wired by the composition root.
    """
    return request.app.state.todo_service


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"model": ErrorOut, "description": "Invalid todo title or malformed body"},
    },
)
@router.post("/", response_model=TodoOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_todo(payload: TodoCreate, service: TodoServicePort = Depends(_get_service)) -> TodoOut:
    """
    Create a new Todo. New todos always start not completed.
    """
    try:
        created = service.create_todo(payload.title, payload.description)
    except DomainError as e:
        raise to_http_exception(e, "Todo") from e
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="List all todos. Order is not guaranteed.",
)
@router.get("/", response_model=List[TodoOut], include_in_schema=False)
def list_todos(service: TodoServicePort = Depends(_get_service)) -> List[TodoOut]:
    """
    List all todos.
    """
    try:
        items = service.list_todos()
    except DomainError as e:
        raise to_http_exception(e, "Todo") from e
    return [TodoOut(**it) for it in items]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"model": ErrorOut, "description": "Todo not found"},
    },
)
def get_todo(todo_id: int, service: TodoServicePort = Depends(_get_service)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    try:
        item = service.get_todo(todo_id)
    except DomainError as e:
        raise to_http_exception(e, "Todo") from e
    return TodoOut(**item)


_UPDATE_RESPONSES = {
    200: {"description": "Todo updated"},
    400: {"model": ErrorOut, "description": "Invalid todo title or malformed body"},
    404: {"model": ErrorOut, "description": "Todo not found"},
    409: {"model": ErrorOut, "description": "Todo is already completed"},
}


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description=(
        "Partially update a Todo item. Omitted or empty fields are left unchanged. "
        "Marking an already completed todo as completed is rejected with 409."
    ),
    responses=_UPDATE_RESPONSES,
)
@router.patch(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Patch Todo",
    description="Same partial update semantics as PUT.",
    responses=_UPDATE_RESPONSES,
)
def update_todo(
    todo_id: int, payload: TodoUpdate, service: TodoServicePort = Depends(_get_service)
) -> TodoOut:
    """
    Partial update of a Todo item.
    """
    try:
        updated = service.update_todo(todo_id, payload)
    except DomainError as e:
        raise to_http_exception(e, "Todo") from e
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"model": ErrorOut, "description": "Todo not found"},
    },
)
def delete_todo(todo_id: int, service: TodoServicePort = Depends(_get_service)) -> Response:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    try:
        service.delete_todo(todo_id)
    except DomainError as e:
        raise to_http_exception(e, "Todo") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
