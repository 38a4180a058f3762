"""Enumeration types for the user tools server."""

from enum import StrEnum


class ToolName(StrEnum):
    """Available tools."""

    LIST_USERS = "list_users"
    GET_USER = "get_user"
    CREATE_USER = "create_user"


class UserRole(StrEnum):
    """Roles used by the default seed rows.

    The role column itself is free text; any string is accepted on create.
    """

    ADMIN = "admin"
    USER = "user"
