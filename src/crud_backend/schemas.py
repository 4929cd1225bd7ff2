from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    Title emptiness is a business rule and is checked by the service layer,
    so whitespace-only titles pass schema validation and fail with a domain error.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
            }
        }
    )

    title: str = Field(..., description="Short title for the todo item")
    description: str = Field(default="", description="Optional detailed description")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for updating an existing Todo item.
    All fields are optional; empty strings and omitted fields leave the stored value unchanged.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries and supplies",
                "description": "Milk, eggs, bread, and paper towels",
                "completed": True,
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Short title for the todo item")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    completed: Optional[bool] = Field(default=None, description="Completion status flag")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "completed": False,
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    description: str = Field(default="", description="Optional detailed description")
    completed: bool = Field(..., description="Completion status flag")


# PUBLIC_INTERFACE
class UserCreate(BaseModel):
    """
    Schema for creating a new User. All fields are required.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "johndoe",
                "email": "john@example.com",
                "name": "John Doe",
            }
        }
    )

    username: str = Field(..., description="Unique login name; cannot be changed later")
    email: str = Field(..., description="Contact email address")
    name: str = Field(..., description="Display name")


# PUBLIC_INTERFACE
class UserUpdate(BaseModel):
    """
    Schema for updating an existing User.
    Only email and name can change; the username is immutable.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "john.new@example.com",
                "name": "John Smith",
            }
        }
    )

    email: Optional[str] = Field(default=None, description="New contact email address")
    name: Optional[str] = Field(default=None, description="New display name")


# PUBLIC_INTERFACE
class UserOut(BaseModel):
    """
    Schema returned by the API for a User.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "username": "johndoe",
                "email": "john@example.com",
                "name": "John Doe",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the user")
    username: str = Field(..., description="Unique login name")
    email: str = Field(..., description="Contact email address")
    name: str = Field(..., description="Display name")


# PUBLIC_INTERFACE
class ErrorOut(BaseModel):
    """
    Error body returned for domain errors and unexpected failures.
    """

    error: str = Field(..., description="Public, human-readable error message")


# PUBLIC_INTERFACE
class ValidationErrorOut(BaseModel):
    """
    Error body returned when a request body or path parameter cannot be decoded.
    """

    error: str = Field(default="ValidationError")
    message: str = Field(default="Request validation failed")
    detail: List[Any] = Field(default_factory=list, description="pydantic/fastapi error details")
