"""ASGI middleware for the FastAPI application."""

from .request_tracing import RequestTracingMiddleware

__all__ = [
    "RequestTracingMiddleware",
]
