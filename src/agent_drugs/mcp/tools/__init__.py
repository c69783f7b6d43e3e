"""MCP tools package.

Public API:
    ToolRegistry: Registry for managing tool handlers
    TOOL_CATALOG: The four advertised tool definitions
    create_tool_handlers: Handlers bound to a modifier store
"""

from agent_drugs.mcp.tools.catalog import TOOL_CATALOG, catalog_payload
from agent_drugs.mcp.tools.definitions import (
    ActiveDrugsHandler,
    DetoxHandler,
    ListDrugsHandler,
    TakeDrugHandler,
    create_tool_handlers,
)
from agent_drugs.mcp.tools.registry import ToolRegistry

__all__ = [
    "TOOL_CATALOG",
    "ActiveDrugsHandler",
    "DetoxHandler",
    "ListDrugsHandler",
    "TakeDrugHandler",
    "ToolRegistry",
    "catalog_payload",
    "create_tool_handlers",
]
