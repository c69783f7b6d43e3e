"""MCP types for agent-drugs.

Frozen dataclasses for the wire-level data structures: tool definitions,
tool results, and the request/response envelope of the tool protocol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ToolInputType(StrEnum):
    """JSON Schema types for tool input parameters."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    OBJECT = "object"


class ContentType(StrEnum):
    """Type of content in a tool result."""

    TEXT = "text"


class SoftErrorCode(StrEnum):
    """Codes for domain outcomes returned inside a success envelope."""

    UNKNOWN_METHOD = "unknown_method"
    UNKNOWN_TOOL = "unknown_tool"
    NOT_FOUND = "not_found"


HARD_ERROR_CODE = "internal_error"


@dataclass(frozen=True, slots=True)
class MCPToolParameter:
    """A single parameter for a tool.

    Attributes:
        name: Parameter name.
        type: JSON Schema type of the parameter.
        description: Human-readable description.
        required: Whether the parameter is required.
    """

    name: str
    type: ToolInputType
    description: str = ""
    required: bool = True


@dataclass(frozen=True, slots=True)
class MCPToolDefinition:
    """Definition of a tool as advertised by tools/list.

    Attributes:
        name: Unique tool name.
        description: Human-readable description.
        parameters: Tool parameters, in declaration order.
    """

    name: str
    description: str
    parameters: tuple[MCPToolParameter, ...] = field(default_factory=tuple)

    def to_input_schema(self) -> dict[str, Any]:
        """Convert the parameters to a JSON Schema object."""
        properties: dict[str, Any] = {}
        required: list[str] = []

        for param in self.parameters:
            properties[param.name] = {
                "type": param.type.value,
                "description": param.description,
            }
            if param.required:
                required.append(param.name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
        }

    def to_dict(self) -> dict[str, Any]:
        """Return the tools/list descriptor for this tool."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.to_input_schema(),
        }


@dataclass(frozen=True, slots=True)
class MCPContentItem:
    """A single content item in a tool result."""

    type: ContentType
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "text": self.text}


@dataclass(frozen=True, slots=True)
class MCPToolResult:
    """Result of a successful tool invocation.

    Attributes:
        content: Content items produced by the tool.
        meta: Structured data alongside the text; not sent on the wire.
    """

    content: tuple[MCPContentItem, ...] = field(default_factory=tuple)
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def text(cls, text: str, **meta: Any) -> MCPToolResult:
        """Build a result holding a single text item."""
        return cls(content=(MCPContentItem(type=ContentType.TEXT, text=text),), meta=meta)

    @property
    def text_content(self) -> str:
        """Return all text items joined with newlines."""
        return "\n".join(item.text for item in self.content if item.type == ContentType.TEXT)

    def to_payload(self) -> dict[str, Any]:
        """Return the ``result`` payload for the response envelope."""
        return {"content": [item.to_dict() for item in self.content]}


@dataclass(frozen=True, slots=True)
class MCPRequest:
    """A decoded protocol request.

    Attributes:
        method: The protocol method ("tools/list" or "tools/call").
        params: Method parameters; None when the request carried none.
    """

    method: str
    params: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> MCPRequest:
        """Decode a request from a parsed JSON body.

        Raises:
            MCPProtocolError: If the body is not an object with a string
                method, or params is present but not an object.
        """
        from agent_drugs.mcp.errors import MCPProtocolError

        if not isinstance(data, dict):
            raise MCPProtocolError("Request body must be a JSON object")
        method = data.get("method")
        if not isinstance(method, str):
            raise MCPProtocolError("Request is missing a string 'method'")
        params = data.get("params")
        if params is not None and not isinstance(params, dict):
            raise MCPProtocolError("Request 'params' must be an object", method=method)
        return cls(method=method, params=params)


@dataclass(frozen=True, slots=True)
class MCPResponse:
    """A successful protocol response: ``{"result": ...}``."""

    result: dict[str, Any]

    @classmethod
    def soft_error(cls, code: SoftErrorCode, message: str) -> MCPResponse:
        """Build a success envelope whose payload reports a domain error."""
        return cls(result={"error": code.value, "message": message})

    @property
    def is_soft_error(self) -> bool:
        return "error" in self.result

    def to_dict(self) -> dict[str, Any]:
        return {"result": self.result}
