"""CLI formatters for the tool registry."""

import json

from .types import ToolDescriptor


def format_tool_list(tools: list[ToolDescriptor]) -> str:
    """Format tool list for CLI display.

    Args:
        tools: List of tools to format

    Returns:
        Formatted string for CLI output
    """
    if not tools:
        return "No tools found."

    lines = [f"Found {len(tools)} tool(s):\n"]
    for tool in tools:
        hints = tool.annotations
        flag = "ro" if hints.read_only else ("!!" if hints.destructive else "  ")
        status_label = f"[{tool.status.value}]"
        summary = tool.description.split(". ")[0]
        lines.append(f"  {flag} {tool.name:28} {status_label:15} {summary}")

    return "\n".join(lines)


def format_tool_detail(tool: ToolDescriptor) -> str:
    """Format tool detail for CLI display.

    Args:
        tool: Tool to format

    Returns:
        Formatted string for CLI output
    """
    lines = [f"Tool: {tool.name}", "=" * 60]

    if tool.annotations.title:
        lines.append(f"Title:       {tool.annotations.title}")
    lines.append(f"Description: {tool.description}")
    lines.append(f"Status:      {tool.status.value}")

    hints = [k for k, v in tool.annotations.to_mcp().items() if v is True]
    if hints:
        lines.append(f"Hints:       {', '.join(hints)}")

    lines.append("\nInput Schema:")
    lines.append(json.dumps(tool.input_schema, indent=2))

    return "\n".join(lines)
