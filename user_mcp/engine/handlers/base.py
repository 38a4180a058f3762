"""Base infrastructure for tool handlers.

Each handler receives its validated parameter model and a HandlerContext
holding the shared dependencies, and returns a JSON-compatible result.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Coroutine

if TYPE_CHECKING:
    from ...store import UserStore


@dataclass(frozen=True)
class HandlerContext:
    """Context object passed to all handlers.

    Built once at startup and shared read-only across requests.
    """

    store: "UserStore"

    # Log a warning for emails that look malformed (never blocks creation)
    warn_on_invalid_email: bool = True


# Type alias for handler functions
HandlerFunc = Callable[[Any, HandlerContext], Coroutine[Any, Any, Any]]
