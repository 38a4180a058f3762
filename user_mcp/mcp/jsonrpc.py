"""JSON-RPC 2.0 envelope codec.

This module provides utility functions for creating JSON-RPC 2.0
responses and errors, and for moving envelopes to and from JSON text.

See: https://www.jsonrpc.org/specification
"""

import json
import math
from typing import Any

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_ERROR = -32000  # Base for application-specific errors


class EnvelopeError(ValueError):
    """Raised when text cannot be decoded into an envelope.

    Attributes:
        code: JSON-RPC error code to answer with
        id: Request id if one could be read, else None
    """

    def __init__(self, code: int, message: str, id: Any = None):
        self.code = code
        self.id = id
        super().__init__(message)


def jsonrpc_response(id: Any, result: Any) -> dict:
    """Create a JSON-RPC 2.0 success response.

    Args:
        id: Request ID (must match the request)
        result: The result payload

    Returns:
        JSON-RPC 2.0 response dict
    """
    return {"jsonrpc": JSONRPC_VERSION, "id": id, "result": result}


def jsonrpc_error(id: Any, code: int, message: str) -> dict:
    """Create a JSON-RPC 2.0 error response.

    Standard error codes:
        -32700: Parse error
        -32600: Invalid request
        -32601: Method not found
        -32602: Invalid params
        -32603: Internal error
        -32000 to -32099: Server errors (application-specific)

    Args:
        id: Request ID (can be None for parse errors)
        code: Error code (negative integer)
        message: Human-readable error message

    Returns:
        JSON-RPC 2.0 error response dict
    """
    return {"jsonrpc": JSONRPC_VERSION, "id": id, "error": {"code": code, "message": message}}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} is out of range")
    return value


def parse_body(text: str | bytes) -> Any:
    """Parse raw request text. Raises EnvelopeError(PARSE_ERROR) on bad JSON.

    NaN, Infinity and floats that overflow to infinity are rejected: they
    cannot be echoed back in a JSON response.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, TypeError) as e:
        raise EnvelopeError(PARSE_ERROR, "Parse error") from e


def decode_request(body: Any) -> tuple[Any, str, dict | None]:
    """Split a parsed request object into (id, method, params).

    Raises:
        EnvelopeError: INVALID_REQUEST when the object is not a request
            envelope, INVALID_PARAMS when params is present but not an object.
    """
    if not isinstance(body, dict):
        raise EnvelopeError(INVALID_REQUEST, "Invalid Request: envelope must be an object")

    id = body.get("id")
    method = body.get("method")
    if not isinstance(method, str) or not method:
        raise EnvelopeError(INVALID_REQUEST, "Invalid Request: 'method' must be a string", id)

    version = body.get("jsonrpc", JSONRPC_VERSION)
    if version != JSONRPC_VERSION:
        raise EnvelopeError(
            INVALID_REQUEST, f"Invalid Request: unsupported jsonrpc version {version!r}", id
        )

    params = body.get("params")
    if params is not None and not isinstance(params, dict):
        raise EnvelopeError(INVALID_PARAMS, "Invalid params: 'params' must be an object", id)

    return id, method, params


def encode_response(response: dict | list[dict]) -> str:
    """Serialize a response envelope (or batch) to JSON text."""
    return json.dumps(response, default=str)


def decode_response(text: str | bytes) -> dict | list[dict]:
    """Parse JSON text into a response envelope (or batch).

    Raises:
        EnvelopeError: if the text is not JSON or an envelope has both or
            neither of ``result`` and ``error``.
    """
    data = parse_body(text)
    for envelope in data if isinstance(data, list) else [data]:
        if not isinstance(envelope, dict) or ("result" in envelope) == ("error" in envelope):
            raise EnvelopeError(
                INVALID_REQUEST, "Response must carry exactly one of 'result' or 'error'"
            )
    return data
