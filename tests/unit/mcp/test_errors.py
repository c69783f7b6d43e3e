"""Unit tests for agent_drugs.mcp.errors module."""

from agent_drugs.core.errors import AgentDrugsError
from agent_drugs.mcp.errors import MCPError, MCPProtocolError, MCPToolError
from agent_drugs.mcp.types import SoftErrorCode


class TestMCPErrorHierarchy:
    def test_protocol_error_is_package_error(self) -> None:
        error = MCPProtocolError("Missing params", method="tools/call")

        assert isinstance(error, MCPError)
        assert isinstance(error, AgentDrugsError)
        assert error.method == "tools/call"
        assert error.tool_name is None
        assert str(error) == "Missing params"

    def test_tool_error_carries_code(self) -> None:
        error = MCPToolError("Unknown tool: x", code=SoftErrorCode.UNKNOWN_TOOL, tool_name="x")

        assert error.code is SoftErrorCode.UNKNOWN_TOOL
        assert error.tool_name == "x"
        assert error.message == "Unknown tool: x"
