"""blockbench-mcp - MCP tools for driving the Blockbench model editor."""

__version__ = "0.1.0"
