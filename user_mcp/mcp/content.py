"""MCP content-block presentation for tool results.

Some MCP clients expect ``tools/call`` results as a list of content blocks
rather than raw JSON. This adapter is applied at the edge when enabled.
"""

import json
from typing import Any


def wrap_content_blocks(result: Any) -> dict[str, Any]:
    """Wrap a JSON-compatible result as a single MCP text content block."""
    return {
        "content": [{"type": "text", "text": json.dumps(result, indent=2, default=str)}],
    }
