"""JSON-RPC request dispatcher.

Single entry point for protocol traffic. A request moves through
Received -> MethodRouted -> Validated -> Invoked -> Completed, or is
Rejected with an error envelope at any step. Every request that reaches
``dispatch`` produces exactly one response envelope carrying its id.
"""

import logging
from collections.abc import Callable, Coroutine
from typing import Any

from pydantic_core import to_jsonable_python

from ..engine.handlers import HandlerContext
from ..errors import ArgumentValidationError, JSONRPCError, ToolNotFoundError
from .content import wrap_content_blocks
from .jsonrpc import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    SERVER_ERROR,
    EnvelopeError,
    decode_request,
    jsonrpc_error,
    jsonrpc_response,
)
from .registry import ToolRegistry
from .validation import validate_arguments

logger = logging.getLogger(__name__)

MCP_PROTOCOL_VERSION = "2024-11-05"

MethodHandler = Callable[[dict[str, Any]], Coroutine[Any, Any, Any]]


def normalize_method(method: str) -> str:
    """Reduce a method name to its conventional slash form.

    A leading ``mcp/`` namespace is dropped and dots are read as slashes,
    so ``mcp/tools.call`` becomes ``tools/call``. Case is preserved.
    """
    normalized = method.replace(".", "/")
    if normalized.startswith("mcp/"):
        normalized = normalized[len("mcp/") :]
    return normalized


def error_message(error: Exception) -> str:
    """Human-readable reason for an unexpected failure, without traceback."""
    return str(error) or error.__class__.__name__


class Dispatcher:
    """Routes decoded requests to method handlers and builds envelopes."""

    def __init__(
        self,
        registry: ToolRegistry,
        context: HandlerContext,
        *,
        server_name: str = "User Tools MCP Server",
        server_version: str = "1.0.0",
        wrap_tool_results: bool = False,
    ):
        self.registry = registry
        self.context = context
        self.server_name = server_name
        self.server_version = server_version
        self.wrap_tool_results = wrap_tool_results
        self._methods: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "get_tools": self._list_tools,
            "tools/call": self._call_tool,
            "invoke_tool": self._call_tool,
            "ping": self._ping,
        }

    @property
    def methods(self) -> list[str]:
        return list(self._methods)

    # ============ ENTRY POINTS ============

    async def handle(self, body: Any) -> dict | list[dict]:
        """Dispatch a parsed body: a single request or a batch (list)."""
        if isinstance(body, list):
            if not body:
                return jsonrpc_error(None, INVALID_REQUEST, "Invalid Request: empty batch")
            return [await self.dispatch(item) for item in body]
        return await self.dispatch(body)

    async def dispatch(self, body: Any) -> dict:
        """Dispatch one request object and return its response envelope."""
        try:
            id, method, params = decode_request(body)
        except EnvelopeError as e:
            logger.debug(f"Rejected envelope: {e}")
            return jsonrpc_error(e.id, e.code, str(e))

        logger.debug(f"Received {method!r} id={id!r}")
        handler = self._methods.get(normalize_method(method))
        if handler is None:
            logger.debug(f"Rejected {method!r} id={id!r}: method not found")
            return jsonrpc_error(id, METHOD_NOT_FOUND, f"Method not found: {method}")

        try:
            result = await handler(params or {})
        except JSONRPCError as e:
            logger.debug(f"Rejected {method!r} id={id!r}: {e.message}")
            return jsonrpc_error(id, e.code, e.message)
        except Exception as e:
            logger.error(f"Internal error handling {method!r} id={id!r}: {e}", exc_info=True)
            return jsonrpc_error(id, SERVER_ERROR, error_message(e))

        logger.debug(f"Completed {method!r} id={id!r}")
        return jsonrpc_response(id, result)

    async def call_tool(self, name: Any, arguments: Any) -> Any:
        """Look up, validate and run a tool, returning JSON-compatible data.

        Raises:
            ToolNotFoundError: the name is not registered
            ArgumentValidationError: the arguments do not fit the schema
            Exception: anything the handler or store raises, unchanged
        """
        tool = self.registry.lookup(name) if isinstance(name, str) else None
        if tool is None:
            raise ToolNotFoundError(name)

        params = validate_arguments(tool.params_model, arguments)
        logger.debug(f"Invoking tool {name!r}")
        result = await tool.handler(params, self.context)
        return to_jsonable_python(result)

    # ============ METHOD HANDLERS ============

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "protocolVersion": MCP_PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self.server_name, "version": self.server_version},
            "tools": self.registry.list_all(),
        }

    async def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": self.registry.list_all()}

    async def _ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    async def _call_tool(self, params: dict[str, Any]) -> Any:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise JSONRPCError(INVALID_PARAMS, "Invalid params: 'name' must be a tool name string")

        # "args" is the older spelling of "arguments"
        arguments = params["arguments"] if "arguments" in params else params.get("args")

        try:
            result = await self.call_tool(name, arguments)
        except ToolNotFoundError as e:
            raise JSONRPCError(METHOD_NOT_FOUND, str(e)) from e
        except ArgumentValidationError as e:
            raise JSONRPCError(INVALID_PARAMS, f"Invalid params for tool '{name}': {e}") from e

        if self.wrap_tool_results:
            return wrap_content_blocks(result)
        return result
