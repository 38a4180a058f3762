"""MCP (Model Context Protocol) JSON-RPC layer.

This module contains:
- JSON-RPC 2.0 envelope codec and error codes
- Tool registry and the user tool definitions
- Argument validation
- The request dispatcher
"""

from .content import wrap_content_blocks
from .dispatcher import Dispatcher, normalize_method
from .jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    SERVER_ERROR,
    EnvelopeError,
    decode_request,
    decode_response,
    encode_response,
    jsonrpc_error,
    jsonrpc_response,
    parse_body,
)
from .registry import ToolDefinition, ToolRegistry
from .tool_defs import build_registry
from .validation import validate_arguments

__all__ = [
    # Dispatch
    "Dispatcher",
    "normalize_method",
    # Registry
    "ToolDefinition",
    "ToolRegistry",
    "build_registry",
    # Validation
    "validate_arguments",
    # Presentation
    "wrap_content_blocks",
    # JSON-RPC helpers
    "EnvelopeError",
    "jsonrpc_response",
    "jsonrpc_error",
    "parse_body",
    "decode_request",
    "encode_response",
    "decode_response",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR",
]
