from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from ..errors import DomainError
from ..schemas import ErrorOut, UserCreate, UserOut, UserUpdate, ValidationErrorOut
from ..services import UserServicePort
from .errors import to_http_exception

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={400: {"model": ValidationErrorOut, "description": "Malformed request"}},
)


def _get_service(request: Request) -> UserServicePort:
    """
    Dependency returning the UserService wired by the composition root.
    """
    return request.app.state.user_service


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Register a new user. Usernames are unique and cannot be changed later.",
    responses={
        201: {"description": "User created successfully"},
        400: {"model": ErrorOut, "description": "Invalid username or malformed body"},
        409: {"model": ErrorOut, "description": "Username already exists"},
    },
)
@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_user(payload: UserCreate, service: UserServicePort = Depends(_get_service)) -> UserOut:
    try:
        created = service.create_user(payload.username, payload.email, payload.name)
    except DomainError as e:
        raise to_http_exception(e, "User") from e
    return UserOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[UserOut],
    summary="List Users",
    description="List all users. Order is not guaranteed.",
)
@router.get("/", response_model=List[UserOut], include_in_schema=False)
def list_users(service: UserServicePort = Depends(_get_service)) -> List[UserOut]:
    try:
        items = service.list_users()
    except DomainError as e:
        raise to_http_exception(e, "User") from e
    return [UserOut(**it) for it in items]


# PUBLIC_INTERFACE
@router.get(
    "/{user_id}",
    response_model=UserOut,
    summary="Get User",
    description="Get a single user by ID.",
    responses={404: {"model": ErrorOut, "description": "User not found"}},
)
def get_user(user_id: int, service: UserServicePort = Depends(_get_service)) -> UserOut:
    try:
        item = service.get_user(user_id)
    except DomainError as e:
        raise to_http_exception(e, "User") from e
    return UserOut(**item)


_UPDATE_RESPONSES = {
    200: {"description": "User updated"},
    400: {"model": ErrorOut, "description": "Malformed body"},
    404: {"model": ErrorOut, "description": "User not found"},
}


# PUBLIC_INTERFACE
@router.put(
    "/{user_id}",
    response_model=UserOut,
    summary="Update User",
    description="Update email and/or name. Empty or omitted fields are left unchanged.",
    responses=_UPDATE_RESPONSES,
)
@router.patch(
    "/{user_id}",
    response_model=UserOut,
    summary="Patch User",
    description="Same partial update semantics as PUT.",
    responses=_UPDATE_RESPONSES,
)
def update_user(
    user_id: int, payload: UserUpdate, service: UserServicePort = Depends(_get_service)
) -> UserOut:
    """
    Update a user's email and/or name. The username never changes.
    """
    try:
        updated = service.update_user(user_id, payload)
    except DomainError as e:
        raise to_http_exception(e, "User") from e
    return UserOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete User",
    description="Delete a user by ID.",
    responses={404: {"model": ErrorOut, "description": "User not found"}},
)
def delete_user(user_id: int, service: UserServicePort = Depends(_get_service)) -> Response:
    try:
        service.delete_user(user_id)
    except DomainError as e:
        raise to_http_exception(e, "User") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
