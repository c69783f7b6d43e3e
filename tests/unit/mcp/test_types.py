"""Unit tests for agent_drugs.mcp.types module."""

import pytest

from agent_drugs.mcp.errors import MCPProtocolError
from agent_drugs.mcp.types import (
    MCPRequest,
    MCPResponse,
    MCPToolDefinition,
    MCPToolParameter,
    MCPToolResult,
    SoftErrorCode,
    ToolInputType,
)


class TestMCPToolDefinition:
    def test_input_schema_without_parameters(self) -> None:
        definition = MCPToolDefinition(name="detox", description="Remove all")

        assert definition.to_input_schema() == {
            "type": "object",
            "properties": {},
            "required": [],
        }

    def test_to_dict(self) -> None:
        definition = MCPToolDefinition(
            name="take_drug",
            description="Take one",
            parameters=(
                MCPToolParameter(
                    name="name",
                    type=ToolInputType.STRING,
                    description="Name of the drug to take",
                ),
            ),
        )

        assert definition.to_dict() == {
            "name": "take_drug",
            "description": "Take one",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Name of the drug to take"},
                },
                "required": ["name"],
            },
        }

    def test_optional_parameter_not_required(self) -> None:
        definition = MCPToolDefinition(
            name="t",
            description="d",
            parameters=(MCPToolParameter(name="x", type=ToolInputType.INTEGER, required=False),),
        )

        assert definition.to_input_schema()["required"] == []


class TestMCPToolResult:
    def test_text_result_payload(self) -> None:
        result = MCPToolResult.text("hello", count=2)

        assert result.to_payload() == {"content": [{"type": "text", "text": "hello"}]}
        assert result.text_content == "hello"
        assert result.meta == {"count": 2}


class TestMCPRequest:
    def test_from_dict_with_params(self) -> None:
        request = MCPRequest.from_dict({"method": "tools/call", "params": {"name": "detox"}})

        assert request.method == "tools/call"
        assert request.params == {"name": "detox"}

    def test_from_dict_without_params(self) -> None:
        assert MCPRequest.from_dict({"method": "tools/list"}).params is None

    @pytest.mark.parametrize(
        "body",
        [
            [],
            "tools/list",
            {},
            {"method": 5},
            {"method": "tools/call", "params": ["detox"]},
        ],
    )
    def test_from_dict_rejects_malformed(self, body: object) -> None:
        with pytest.raises(MCPProtocolError):
            MCPRequest.from_dict(body)


class TestMCPResponse:
    def test_success_envelope(self) -> None:
        response = MCPResponse(result={"tools": []})

        assert response.to_dict() == {"result": {"tools": []}}
        assert response.is_soft_error is False

    def test_soft_error_envelope(self) -> None:
        response = MCPResponse.soft_error(SoftErrorCode.NOT_FOUND, "Drug not found: x")

        assert response.is_soft_error is True
        assert response.to_dict() == {
            "result": {"error": "not_found", "message": "Drug not found: x"},
        }
