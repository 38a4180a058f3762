"""Exception hierarchy for the user tools server."""

from typing import Any


class UserMCPError(Exception):
    """Base class for all server errors."""


class StoreError(UserMCPError):
    """Raised when the persistence layer fails."""


class DuplicateToolError(UserMCPError):
    """Raised when a tool name is registered twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool already registered: {name}")


class RegistryFrozenError(UserMCPError):
    """Raised when registering a tool after startup has completed."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Registry is frozen, cannot register tool: {name}")


class ArgumentValidationError(UserMCPError):
    """Tool arguments did not match the declared parameter schema.

    Attributes:
        field: Dotted path of the offending field ("arguments" for the whole object)
        expected_type: JSON schema type the field should have
        received: "missing" or the JSON type name of the value that was sent
    """

    def __init__(self, field: str, expected_type: str, received: str, reason: str | None = None):
        self.field = field
        self.expected_type = expected_type
        self.received = received
        self.reason = reason or f"expected {expected_type}, received {received}"
        super().__init__(f"{field}: {self.reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "expected_type": self.expected_type,
            "received": self.received,
        }


class ToolNotFoundError(UserMCPError):
    """Raised when a tool name is not in the registry."""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class JSONRPCError(UserMCPError):
    """A routing or params failure to be reported with a JSON-RPC error code."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(message)
