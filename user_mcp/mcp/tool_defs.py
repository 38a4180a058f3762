"""Tool definitions for the user tools server.

``build_registry`` is the only place tools are declared. It is called once
at startup and the frozen result is handed to the dispatcher.
"""

from ..engine.handlers import handle_create_user, handle_get_user, handle_list_users
from ..models import CreateUserParams, GetUserParams, ListUsersParams, ToolName
from .registry import ToolRegistry

TOOL_DESCRIPTIONS: dict[str, str] = {
    ToolName.LIST_USERS: "List all users",
    ToolName.GET_USER: "Get a user by ID",
    ToolName.CREATE_USER: "Create a new user",
}


def build_registry() -> ToolRegistry:
    """Register the user tools in discovery order and freeze the registry."""
    registry = ToolRegistry()
    registry.register(
        ToolName.LIST_USERS.value,
        TOOL_DESCRIPTIONS[ToolName.LIST_USERS],
        ListUsersParams,
        handle_list_users,
    )
    registry.register(
        ToolName.GET_USER.value,
        TOOL_DESCRIPTIONS[ToolName.GET_USER],
        GetUserParams,
        handle_get_user,
    )
    registry.register(
        ToolName.CREATE_USER.value,
        TOOL_DESCRIPTIONS[ToolName.CREATE_USER],
        CreateUserParams,
        handle_create_user,
    )
    return registry.freeze()
