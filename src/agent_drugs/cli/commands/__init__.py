"""CLI command implementations for agent-drugs.

- serve: Run the HTTP or stdio transport
- tools, call: Inspect and call tools in process
- seed: Populate the modifier catalog
- hook: Agent host hook output
- config: Manage configuration
"""
