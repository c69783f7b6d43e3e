"""Static tool catalog.

The four tool descriptors advertised by ``tools/list``. Pure data: the order
is fixed and nothing here depends on store contents.
"""

from agent_drugs.mcp.types import MCPToolDefinition, MCPToolParameter, ToolInputType

LIST_DRUGS = MCPToolDefinition(
    name="list_drugs",
    description="List all available digital drugs that can modify agent behavior",
)

TAKE_DRUG = MCPToolDefinition(
    name="take_drug",
    description="Take a digital drug to modify your behavior. Each drug has a fixed duration.",
    parameters=(
        MCPToolParameter(
            name="name",
            type=ToolInputType.STRING,
            description="Name of the drug to take",
            required=True,
        ),
    ),
)

ACTIVE_DRUGS = MCPToolDefinition(
    name="active_drugs",
    description="List currently active drugs and their remaining duration",
)

DETOX = MCPToolDefinition(
    name="detox",
    description="Remove all active drugs and return to standard behavior",
)

TOOL_CATALOG: tuple[MCPToolDefinition, ...] = (LIST_DRUGS, TAKE_DRUG, ACTIVE_DRUGS, DETOX)


def catalog_payload() -> dict[str, list[dict[str, object]]]:
    """Return the ``tools/list`` result payload."""
    return {"tools": [tool.to_dict() for tool in TOOL_CATALOG]}
