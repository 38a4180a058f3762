"""User tools MCP server.

Exposes list/get/create operations on users as MCP tools over JSON-RPC 2.0.
"""

__version__ = "1.0.0"
