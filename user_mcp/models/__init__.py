"""Pydantic models for the user tools server."""

from .enums import ToolName, UserRole
from .responses import HealthResponse, ReadyResponse
from .user import CreateUserParams, GetUserParams, ListUsersParams, User

__all__ = [
    # Enums
    "ToolName",
    "UserRole",
    # Entity
    "User",
    # Tool parameters
    "ListUsersParams",
    "GetUserParams",
    "CreateUserParams",
    # HTTP responses
    "HealthResponse",
    "ReadyResponse",
]
