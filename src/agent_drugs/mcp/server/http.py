"""HTTP transport for the tool protocol (FastAPI).

Routes:
    POST /mcp     One protocol request per call. Hard failures return HTTP 500
                  with ``{"error": "internal_error", "message": ...}``.
    GET  /health  Plain ``OK``.

Optional ``X-Agent-Drugs-User`` / ``X-Agent-Drugs-Agent`` headers select the
scope of a request. They are trusted as given; there is no authentication.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
import structlog

from agent_drugs.bootstrap import open_store
from agent_drugs.config.models import AgentDrugsConfig
from agent_drugs.core.errors import AgentDrugsError
from agent_drugs.core.types import Clock, utc_now
from agent_drugs.mcp.server.dispatcher import Dispatcher
from agent_drugs.mcp.types import HARD_ERROR_CODE, MCPRequest
from agent_drugs.modifiers.models import ScopeKey
from agent_drugs.persistence.store import ModifierStore

log = structlog.get_logger(__name__)

USER_HEADER = "X-Agent-Drugs-User"
AGENT_HEADER = "X-Agent-Drugs-Agent"


def _hard_error(message: str) -> JSONResponse:
    return JSONResponse({"error": HARD_ERROR_CODE, "message": message}, status_code=500)


def _request_scope(default: ScopeKey, user_id: str | None, agent_id: str | None) -> ScopeKey:
    if not user_id and not agent_id:
        return default
    return ScopeKey(user_id=user_id or default.user_id, agent_id=agent_id or default.agent_id)


def create_app(
    config: AgentDrugsConfig,
    store: ModifierStore | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Application configuration.
        store: An initialized store. When None, the app opens one from
            ``config`` on startup and closes it on shutdown.
        clock: Time source for request handling. Defaults to UTC wall clock.

    Returns:
        The configured application.
    """
    default_scope = config.scope.to_key()
    clock = clock or utc_now

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if store is not None:
            yield
            return

        owned = await open_store(config)
        app.state.dispatcher = Dispatcher.for_store(
            owned, default_scope=default_scope, clock=clock
        )
        log.info("http.server.started", host=config.server.host, port=config.server.port)
        try:
            yield
        finally:
            await owned.close()
            log.info("http.server.stopped")

    app = FastAPI(title="agent-drugs", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if store is not None:
        app.state.dispatcher = Dispatcher.for_store(
            store, default_scope=default_scope, clock=clock
        )

    @app.post("/mcp")
    async def mcp_endpoint(
        request: Request,
        user_id: str | None = Header(default=None, alias=USER_HEADER),
        agent_id: str | None = Header(default=None, alias=AGENT_HEADER),
    ) -> Any:
        dispatcher: Dispatcher = request.app.state.dispatcher
        try:
            body = await request.json()
        except ValueError as e:
            log.warning("http.request.invalid_json", error=str(e))
            return _hard_error(f"Invalid JSON body: {e}")

        try:
            scope = _request_scope(default_scope, user_id, agent_id)
            response = await dispatcher.handle(MCPRequest.from_dict(body), scope)
        except AgentDrugsError as e:
            log.warning("http.request.failed", error=str(e), error_type=type(e).__name__)
            return _hard_error(str(e))
        except Exception as e:
            log.exception("http.request.crashed", error=str(e))
            return _hard_error(str(e))

        return response.to_dict()

    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        return "OK"

    return app
