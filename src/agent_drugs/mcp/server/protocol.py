"""MCP server protocol definitions.

Defines the per-call context handed to tool handlers and the protocol every
tool handler implements.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from agent_drugs.core.types import Result
from agent_drugs.mcp.errors import MCPToolError
from agent_drugs.mcp.types import MCPToolDefinition, MCPToolResult
from agent_drugs.modifiers.models import ScopeKey


@dataclass(frozen=True, slots=True)
class ToolCallContext:
    """Per-request inputs that are not tool arguments.

    Attributes:
        scope: The actor the call applies to.
        now: Reference time, read once per request by the dispatcher.
    """

    scope: ScopeKey
    now: datetime


class ToolHandler(Protocol):
    """Protocol for tool handler implementations.

    A handler validates its arguments, runs one lifecycle operation and
    renders the outcome as text. Expected negative outcomes come back as
    ``Result.err(MCPToolError)``; malformed arguments raise MCPProtocolError
    and store failures raise PersistenceError.

    Example:
        @dataclass
        class EchoHandler:
            @property
            def definition(self) -> MCPToolDefinition:
                return MCPToolDefinition(name="echo", description="Echo input")

            async def handle(
                self, arguments: dict[str, Any], context: ToolCallContext
            ) -> Result[MCPToolResult, MCPToolError]:
                return Result.ok(MCPToolResult.text(str(arguments)))
    """

    @property
    def definition(self) -> MCPToolDefinition:
        """Return the tool definition."""
        ...

    async def handle(
        self,
        arguments: dict[str, Any],
        context: ToolCallContext,
    ) -> Result[MCPToolResult, MCPToolError]:
        """Handle a tool call.

        Args:
            arguments: The arguments object from the request.
            context: Scope and reference time for this call.

        Returns:
            Result containing the tool result or a soft tool error.
        """
        ...
