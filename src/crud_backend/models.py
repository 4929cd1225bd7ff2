from __future__ import annotations

from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain record representing a Todo item.

    Fields:
    - id: Unique integer identifier, assigned by the store on create (0 until then)
    - title: Short title, never empty or whitespace-only
    - description: Optional detailed description ("" when absent)
    - completed: Boolean completion flag
    """

    id: int
    title: str
    description: str
    completed: bool


# PUBLIC_INTERFACE
class UserEntity(TypedDict):
    """
    A lightweight domain record representing a User.

    Fields:
    - id: Unique integer identifier, assigned by the store on create (0 until then)
    - username: Non-empty, unique across all users, immutable after creation
    - email: Contact email address
    - name: Display name
    """

    id: int
    username: str
    email: str
    name: str
