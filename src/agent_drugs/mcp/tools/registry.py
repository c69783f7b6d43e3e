"""Tool registry for agent-drugs handlers.

Maps tool names to handlers in registration order, so ``list_tools`` matches
the advertised catalog order.
"""

from collections.abc import Sequence
from typing import Any

import structlog

from agent_drugs.core.types import Result
from agent_drugs.mcp.errors import MCPToolError
from agent_drugs.mcp.server.protocol import ToolCallContext, ToolHandler
from agent_drugs.mcp.types import MCPToolDefinition, MCPToolResult, SoftErrorCode

log = structlog.get_logger(__name__)


class ToolRegistry:
    """Registry for tool handlers.

    Example:
        registry = ToolRegistry()
        registry.register_all(create_tool_handlers(store))

        tools = registry.list_tools()
        result = await registry.call("take_drug", {"name": "focus"}, context)
    """

    def __init__(self) -> None:
        self._handlers: dict[str, ToolHandler] = {}

    @property
    def tool_count(self) -> int:
        """Return the number of registered tools."""
        return len(self._handlers)

    def register(self, handler: ToolHandler) -> None:
        """Register a tool handler.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        name = handler.definition.name

        if name in self._handlers:
            msg = f"Tool already registered: {name}"
            raise ValueError(msg)

        self._handlers[name] = handler
        log.debug("mcp.registry.tool_registered", tool=name)

    def register_all(self, handlers: Sequence[ToolHandler]) -> None:
        """Register multiple tool handlers, preserving their order."""
        for handler in handlers:
            self.register(handler)

    def get(self, name: str) -> ToolHandler | None:
        return self._handlers.get(name)

    def list_tools(self) -> Sequence[MCPToolDefinition]:
        """List registered tool definitions in registration order."""
        return tuple(h.definition for h in self._handlers.values())

    async def call(
        self,
        name: str,
        arguments: dict[str, Any],
        context: ToolCallContext,
    ) -> Result[MCPToolResult, MCPToolError]:
        """Call a registered tool.

        An unknown tool name is a soft ``unknown_tool`` error. Exceptions
        raised by the handler (malformed arguments, store failures)
        propagate to the caller unchanged.

        Args:
            name: Name of the tool to call.
            arguments: Arguments object for the tool.
            context: Scope and reference time for this call.

        Returns:
            Result containing the tool result or a soft tool error.
        """
        handler = self.get(name)
        if handler is None:
            log.info("mcp.registry.unknown_tool", tool=name)
            return Result.err(
                MCPToolError(
                    f"Unknown tool: {name}",
                    code=SoftErrorCode.UNKNOWN_TOOL,
                    tool_name=name,
                )
            )

        log.debug("mcp.registry.calling_tool", tool=name)
        return await handler.handle(arguments, context)
