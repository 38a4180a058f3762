"""Tool registry.

Maps tool names to their description, parameter model and handler. The
registry is filled during startup, frozen, and then only read.
"""

from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from ..errors import DuplicateToolError, RegistryFrozenError

# Handlers take validated params plus the handler context and return a
# JSON-compatible value or a pydantic model.
ToolHandler = Callable[[Any, Any], Coroutine[Any, Any, Any]]


@dataclass(frozen=True)
class ToolDefinition:
    """A registered tool."""

    name: str
    description: str
    params_model: type[BaseModel]
    handler: ToolHandler

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the parameters as advertised by tools/list."""
        schema = self.params_model.model_json_schema()
        schema.pop("title", None)
        schema.setdefault("properties", {})
        return schema

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass
class ToolRegistry:
    """Ordered, freeze-able mapping of tool name to ToolDefinition."""

    _tools: dict[str, ToolDefinition] = field(init=False, default_factory=dict)
    _frozen: bool = field(init=False, default=False)

    def register(
        self,
        name: str,
        description: str,
        params_model: type[BaseModel],
        handler: ToolHandler,
    ) -> ToolDefinition:
        """Add a tool.

        Raises:
            DuplicateToolError: if a tool with this name exists
            RegistryFrozenError: if called after freeze()
        """
        if self._frozen:
            raise RegistryFrozenError(name)
        if name in self._tools:
            raise DuplicateToolError(name)
        tool = ToolDefinition(
            name=name, description=description, params_model=params_model, handler=handler
        )
        self._tools[name] = tool
        return tool

    def freeze(self) -> "ToolRegistry":
        """End the startup phase. Further register() calls fail."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def list_all(self) -> list[dict[str, Any]]:
        """Tool descriptions in registration order."""
        return [tool.describe() for tool in self._tools.values()]

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
