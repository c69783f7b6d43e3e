"""Request dispatcher for the agent-drugs tool protocol.

Routes a decoded ``MCPRequest`` to the tool catalog or to a tool handler and
builds the response envelope. Transports (HTTP, CLI, stdio) share this one
routing path.

Error tiers:
    - Soft: unknown method, unknown tool and tool-level domain errors come
      back as ``{"result": {"error": code, "message": text}}``.
    - Hard: malformed requests raise ``MCPProtocolError`` and store failures
      raise ``PersistenceError``; the transport decides how to report them.
"""

from typing import Any

import structlog

from agent_drugs.core.types import Clock, utc_now
from agent_drugs.mcp.errors import MCPProtocolError
from agent_drugs.mcp.server.protocol import ToolCallContext
from agent_drugs.mcp.tools.catalog import catalog_payload
from agent_drugs.mcp.tools.definitions import create_tool_handlers
from agent_drugs.mcp.tools.registry import ToolRegistry
from agent_drugs.mcp.types import MCPRequest, MCPResponse, SoftErrorCode
from agent_drugs.modifiers.models import ScopeKey
from agent_drugs.observability.logging import bind_context, unbind_context
from agent_drugs.persistence.store import ModifierStore

log = structlog.get_logger(__name__)

TOOLS_LIST = "tools/list"
TOOLS_CALL = "tools/call"

_CONTEXT_KEYS = ("method", "tool", "user_id", "agent_id")


class Dispatcher:
    """Dispatches protocol requests for one store.

    Example:
        dispatcher = Dispatcher(registry, default_scope=ScopeKey("u", "a"))
        response = await dispatcher.handle(
            MCPRequest(method="tools/call", params={"name": "list_drugs"})
        )
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        default_scope: ScopeKey,
        clock: Clock = utc_now,
    ) -> None:
        self._registry = registry
        self._default_scope = default_scope
        self._clock = clock

    @classmethod
    def for_store(
        cls,
        store: ModifierStore,
        *,
        default_scope: ScopeKey,
        clock: Clock = utc_now,
    ) -> "Dispatcher":
        """Build a dispatcher with the four tool handlers bound to ``store``."""
        registry = ToolRegistry()
        registry.register_all(create_tool_handlers(store))
        return cls(registry, default_scope=default_scope, clock=clock)

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def default_scope(self) -> ScopeKey:
        return self._default_scope

    async def handle(self, request: MCPRequest, scope: ScopeKey | None = None) -> MCPResponse:
        """Handle one request.

        Args:
            request: The decoded request.
            scope: Scope for this request; the default scope when None.

        Returns:
            The response envelope, possibly carrying a soft error.

        Raises:
            MCPProtocolError: If a tools/call request is malformed.
            PersistenceError: If the store fails.
        """
        scope = scope or self._default_scope
        bind_context(method=request.method, user_id=scope.user_id, agent_id=scope.agent_id)
        try:
            log.debug("dispatcher.request.received")
            if request.method == TOOLS_LIST:
                return MCPResponse(result=catalog_payload())
            if request.method == TOOLS_CALL:
                return await self._call_tool(request, scope)

            log.info("dispatcher.request.unknown_method")
            return MCPResponse.soft_error(
                SoftErrorCode.UNKNOWN_METHOD,
                f"Unknown method: {request.method}",
            )
        finally:
            unbind_context(*_CONTEXT_KEYS)

    async def _call_tool(self, request: MCPRequest, scope: ScopeKey) -> MCPResponse:
        params = request.params
        if params is None:
            raise MCPProtocolError("Missing params", method=request.method)

        name = params.get("name")
        if not isinstance(name, str):
            raise MCPProtocolError("Missing tool name", method=request.method)
        bind_context(tool=name)

        arguments: Any = params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, dict):
            raise MCPProtocolError(
                "Tool arguments must be an object",
                method=request.method,
                tool_name=name,
            )

        context = ToolCallContext(scope=scope, now=self._clock())
        result = await self._registry.call(name, arguments, context)
        if result.is_err:
            error = result.error
            log.info("dispatcher.tool.soft_error", code=error.code.value)
            return MCPResponse.soft_error(error.code, error.message)

        log.debug("dispatcher.tool.completed")
        return MCPResponse(result=result.value.to_payload())
