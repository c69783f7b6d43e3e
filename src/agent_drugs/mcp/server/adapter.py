"""MCP stdio server adapter.

Exposes the four tools to MCP clients through the MCP SDK (FastMCP). Every
call goes through the same Dispatcher as the HTTP transport, so soft and hard
errors behave identically: soft errors come back as tool text, hard errors
raise and FastMCP reports them as an MCP error result.
"""

from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP
import structlog

from agent_drugs.mcp.server.dispatcher import TOOLS_CALL, Dispatcher
from agent_drugs.mcp.types import MCPRequest, MCPToolDefinition

log = structlog.get_logger(__name__)


class MCPServerAdapter:
    """Serves a Dispatcher over the MCP stdio transport.

    Example:
        dispatcher = Dispatcher.for_store(store, default_scope=scope)
        server = MCPServerAdapter(dispatcher)
        await server.serve()
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        name: str = "agent-drugs",
    ) -> None:
        self._dispatcher = dispatcher
        self._name = name
        self._mcp_server: FastMCP | None = None

    @property
    def name(self) -> str:
        return self._name

    def list_tools(self) -> Sequence[MCPToolDefinition]:
        return self._dispatcher.registry.list_tools()

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> str:
        """Call a tool and return its text.

        Soft errors are returned as their message text.

        Raises:
            MCPProtocolError: If the arguments are malformed.
            PersistenceError: If the store fails.
        """
        response = await self._dispatcher.handle(
            MCPRequest(method=TOOLS_CALL, params={"name": name, "arguments": arguments})
        )
        if response.is_soft_error:
            return str(response.result["message"])
        return "\n".join(item["text"] for item in response.result["content"])

    def build(self) -> FastMCP:
        """Create the FastMCP server with every tool registered."""
        server = FastMCP(self._name)

        for definition in self.list_tools():

            def _make_tool_wrapper(tool_name: str) -> Any:
                async def tool_wrapper(**kwargs: Any) -> str:
                    # FastMCP infers a single "kwargs" parameter from a **kwargs
                    # signature, so clients may send {"kwargs": {...}}.
                    if (
                        "kwargs" in kwargs
                        and len(kwargs) == 1
                        and isinstance(kwargs["kwargs"], dict)
                    ):
                        kwargs = kwargs["kwargs"]
                    return await self.call_tool(tool_name, kwargs)

                return tool_wrapper

            server.tool(
                name=definition.name,
                description=definition.description,
            )(_make_tool_wrapper(definition.name))

        self._mcp_server = server
        return server

    async def serve(self) -> None:
        """Serve MCP requests over stdio until the client disconnects."""
        server = self._mcp_server or self.build()
        log.info(
            "mcp.server.starting",
            name=self._name,
            tools=self._dispatcher.registry.tool_count,
        )
        await server.run_stdio_async()
