"""FastAPI MCP server for user tools."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import settings
from .engine.handlers import HandlerContext
from .errors import ArgumentValidationError, ToolNotFoundError
from .mcp import PARSE_ERROR, Dispatcher, EnvelopeError, build_registry, jsonrpc_error, parse_body
from .mcp.dispatcher import error_message
from .middleware import RequestTracingMiddleware
from .models import HealthResponse, ReadyResponse, ToolName
from .store import InMemoryUserStore, UserStore, seed_default_users

logger = logging.getLogger(__name__)


async def _open_store() -> UserStore:
    """Create the configured store backend."""
    if settings.store_backend == "memory":
        logger.warning("Using in-memory user store; data is lost on restart")
        return InMemoryUserStore()

    from .db import PrismaUserStore, get_db

    await get_db()  # Fail fast if the database is unreachable
    return PrismaUserStore()


async def _close_store(store: UserStore) -> None:
    if getattr(store, "backend", None) == "prisma":
        from .db import close_db

        await close_db()


def create_app(store: UserStore | None = None, seed: bool | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        store: Store to serve from. When None the backend named by
            ``settings.store_backend`` is opened on startup and closed on shutdown.
        seed: Insert default users into an empty store on startup.
            Defaults to ``settings.seed_on_startup``.
    """
    registry = build_registry()
    should_seed = settings.seed_on_startup if seed is None else seed

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        logger.info(f"Starting {settings.server_name} v{__version__}")

        if not settings.debug and settings.cors_allowed_origins == "*":
            logger.warning(
                "SECURITY WARNING: CORS is configured to allow all origins ('*'). "
                "Set CORS_ALLOWED_ORIGINS to specific domains in production."
            )

        active_store = store if store is not None else await _open_store()
        if should_seed:
            await seed_default_users(active_store)

        app.state.store = active_store
        app.state.dispatcher = Dispatcher(
            registry,
            HandlerContext(
                store=active_store,
                warn_on_invalid_email=settings.warn_on_invalid_email,
            ),
            server_name=settings.server_name,
            server_version=__version__,
            wrap_tool_results=settings.wrap_tool_results,
        )
        logger.info(f"MCP endpoint ready with tools: {', '.join(registry.names())}")

        yield
        # Shutdown
        if store is None:
            await _close_store(active_store)

    app = FastAPI(
        title=settings.server_name,
        description="MCP endpoint exposing list/get/create user tools over JSON-RPC 2.0",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestTracingMiddleware, hsts=not settings.debug)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    _register_exception_handlers(app)
    _register_routes(app)
    return app


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


def request_id(request: Request) -> str:
    """Id assigned by RequestTracingMiddleware, or "-" outside it."""
    return getattr(request.state, "request_id", "-")


# ============ EXCEPTION HANDLERS ============


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with consistent response format."""
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with sanitized error messages."""
        logger.error(f"[{request_id(request)}] Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "An internal server error occurred. Please try again."},
        )


# ============ ROUTES ============


async def _run_tool(dispatcher: Dispatcher, name: str, arguments: Any) -> JSONResponse:
    """Run a tool for the REST endpoints and map failures to HTTP statuses."""
    try:
        result = await dispatcher.call_tool(name, arguments)
    except ToolNotFoundError as e:
        return JSONResponse(status_code=404, content={"error": str(e)})
    except ArgumentValidationError as e:
        return JSONResponse(status_code=422, content={"error": str(e), **e.to_dict()})
    except Exception as e:
        logger.error(f"Tool {name} failed: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": error_message(e)})
    return JSONResponse(content=result)


def _register_routes(app: FastAPI) -> None:
    DispatcherDep = Annotated[Dispatcher, Depends(get_dispatcher)]

    # ============ HEALTH ENDPOINTS ============

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint (lightweight liveness check)."""
        return HealthResponse(status="healthy", version=__version__, timestamp=datetime.now(UTC))

    @app.get("/ready", tags=["Health"])
    async def readiness_check(request: Request):
        """Readiness check: the store must answer a query."""
        store = request.app.state.store
        backend = getattr(store, "backend", type(store).__name__)
        try:
            users = await store.list_all()
        except Exception as e:
            logger.warning(f"Readiness check failed: {e}")
            return JSONResponse(
                status_code=503,
                content=ReadyResponse(ready=False, store=backend, error=error_message(e)).model_dump(),
            )
        return ReadyResponse(ready=True, store=backend, users=len(users))

    # ============ MCP JSON-RPC ENDPOINT ============

    @app.post("/mcp", tags=["MCP"])
    @app.post("/mcp/", include_in_schema=False)
    async def mcp_endpoint(request: Request, dispatcher: DispatcherDep):
        """
        MCP JSON-RPC endpoint.

        Accepts a single request object or a batch array. Protocol errors
        are returned as error envelopes with HTTP 200.
        """
        raw = await request.body()
        try:
            body = parse_body(raw)
        except EnvelopeError:
            logger.debug(f"[{request_id(request)}] Unparseable MCP request body")
            return JSONResponse(jsonrpc_error(None, PARSE_ERROR, "Parse error"))

        logger.debug(f"[{request_id(request)}] MCP request: {body}")
        return JSONResponse(await dispatcher.handle(body))

    # ============ REST TOOL ENDPOINTS ============

    @app.get("/tools/list_users", tags=["Tools"])
    async def list_users(dispatcher: DispatcherDep):
        """List all users."""
        return await _run_tool(dispatcher, ToolName.LIST_USERS, {})

    @app.get("/tools/get_user/{user_id}", tags=["Tools"])
    async def get_user(user_id: int, dispatcher: DispatcherDep):
        """Get a user by id; the body is null when there is no such user."""
        return await _run_tool(dispatcher, ToolName.GET_USER, {"id": user_id})

    @app.post("/tools/create_user", tags=["Tools"])
    async def create_user(request: Request, dispatcher: DispatcherDep):
        """Create a user from a JSON body with name, email and role."""
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content={"error": "Body must be JSON"})
        return await _run_tool(dispatcher, ToolName.CREATE_USER, body)


app = create_app()


# ============ MAIN ============


def main():
    """Run the server with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "user_mcp.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
