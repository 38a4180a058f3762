"""Tool execution engine: handler context and tool handlers."""
