"""
Business rules for todos and users.

Services are stateless: every call loads what it needs from its repository,
applies validation and state-transition guards, and writes the result back.
Repository errors (NotFoundError) propagate unchanged; validation failures are
raised as fresh domain errors. Translating either into a transport response is
the HTTP layer's job.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List

from .errors import (
    InvalidTitleError,
    InvalidUsernameError,
    NotFoundError,
    TodoAlreadyCompletedError,
    UsernameDuplicateError,
)
from .models import TodoEntity, UserEntity
from .repositories import TodoRepository, UserRepository
from .schemas import TodoUpdate, UserUpdate

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoServicePort(ABC):
    """Business operations on todos consumed by the HTTP layer."""

    @abstractmethod
    def create_todo(self, title: str, description: str = "") -> TodoEntity:
        """Validate and persist a new, not yet completed todo."""

    @abstractmethod
    def get_todo(self, todo_id: int) -> TodoEntity:
        """Return a todo by id."""

    @abstractmethod
    def list_todos(self) -> List[TodoEntity]:
        """Return all todos."""

    @abstractmethod
    def update_todo(self, todo_id: int, patch: TodoUpdate) -> TodoEntity:
        """Apply a partial update and return the updated todo."""

    @abstractmethod
    def delete_todo(self, todo_id: int) -> None:
        """Delete a todo by id."""


# PUBLIC_INTERFACE
class UserServicePort(ABC):
    """Business operations on users consumed by the HTTP layer."""

    @abstractmethod
    def create_user(self, username: str, email: str, name: str) -> UserEntity:
        """Validate and persist a new user with a unique username."""

    @abstractmethod
    def get_user(self, user_id: int) -> UserEntity:
        """Return a user by id."""

    @abstractmethod
    def list_users(self) -> List[UserEntity]:
        """Return all users."""

    @abstractmethod
    def update_user(self, user_id: int, patch: UserUpdate) -> UserEntity:
        """Update email and/or name and return the updated user."""

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """Delete a user by id."""


class TodoService(TodoServicePort):
    """
    Todo rules:
    - titles must not be empty or whitespace-only
    - new todos start with completed=False
    - completing an already completed todo is rejected; un-completing is allowed
    """

    def __init__(self, repo: TodoRepository) -> None:
        self._repo = repo

    def create_todo(self, title: str, description: str = "") -> TodoEntity:
        if not title.strip():
            logger.warning("Rejected todo with empty title")
            raise InvalidTitleError()

        todo: TodoEntity = {
            "id": 0,
            "title": title,
            "description": description,
            "completed": False,
        }
        self._repo.create(todo)
        logger.info("Created todo %s", todo["id"])
        return todo

    def get_todo(self, todo_id: int) -> TodoEntity:
        return self._repo.get_by_id(todo_id)

    def list_todos(self) -> List[TodoEntity]:
        return self._repo.list()

    def update_todo(self, todo_id: int, patch: TodoUpdate) -> TodoEntity:
        todo = self._repo.get_by_id(todo_id)

        if patch.title:
            if not patch.title.strip():
                logger.warning("Rejected update of todo %s: empty title", todo_id)
                raise InvalidTitleError()
            todo["title"] = patch.title

        if patch.description:
            todo["description"] = patch.description

        if patch.completed is not None:
            if patch.completed and todo["completed"]:
                logger.warning("Rejected update of todo %s: already completed", todo_id)
                raise TodoAlreadyCompletedError()
            todo["completed"] = patch.completed

        self._repo.update(todo)
        logger.info("Updated todo %s", todo_id)
        return todo

    def delete_todo(self, todo_id: int) -> None:
        self._repo.delete(todo_id)
        logger.info("Deleted todo %s", todo_id)


class UserService(UserServicePort):
    """
    User rules:
    - usernames must not be empty and must be unique
    - the username cannot be changed after creation
    """

    def __init__(self, repo: UserRepository) -> None:
        self._repo = repo

    def create_user(self, username: str, email: str, name: str) -> UserEntity:
        if not username.strip():
            logger.warning("Rejected user with empty username")
            raise InvalidUsernameError()

        try:
            self._repo.get_by_username(username)
        except NotFoundError:
            pass
        else:
            logger.warning("Rejected duplicate username %r", username)
            raise UsernameDuplicateError()

        user: UserEntity = {
            "id": 0,
            "username": username,
            "email": email,
            "name": name,
        }
        self._repo.create(user)
        logger.info("Created user %s (%s)", user["id"], username)
        return user

    def get_user(self, user_id: int) -> UserEntity:
        return self._repo.get_by_id(user_id)

    def list_users(self) -> List[UserEntity]:
        return self._repo.list()

    def update_user(self, user_id: int, patch: UserUpdate) -> UserEntity:
        user = self._repo.get_by_id(user_id)

        if patch.email:
            user["email"] = patch.email
        if patch.name:
            user["name"] = patch.name

        self._repo.update(user)
        logger.info("Updated user %s", user_id)
        return user

    def delete_user(self, user_id: int) -> None:
        self._repo.delete(user_id)
        logger.info("Deleted user %s", user_id)
