"""Tool registry types."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

from blockbench_mcp.types import ToolStatus


class ToolArguments(BaseModel):
    """Base for tool input models.

    Undeclared arguments are rejected and values are not coerced across
    types, so ``"true"`` is not a boolean.
    """

    model_config = ConfigDict(extra="forbid", strict=True)


class NoArguments(ToolArguments):
    """Input model for tools without parameters."""


ToolHandler = Callable[[Any], Awaitable[str]]


@dataclass(frozen=True)
class ToolAnnotations:
    """Behaviour hints shown to the agent."""

    title: str | None = None
    read_only: bool = False
    destructive: bool = False
    open_world: bool = False

    def to_mcp(self) -> dict[str, Any]:
        """Convert to MCP ``annotations`` (only hints that are set)."""
        hints: dict[str, Any] = {}
        if self.title:
            hints["title"] = self.title
        if self.read_only:
            hints["readOnlyHint"] = True
        if self.destructive:
            hints["destructiveHint"] = True
        if self.open_world:
            hints["openWorldHint"] = True
        return hints


@dataclass(frozen=True)
class ToolDescriptor:
    """Complete tool definition.

    Never mutated after registration.
    """

    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler
    annotations: ToolAnnotations = field(default_factory=ToolAnnotations)
    status: ToolStatus = ToolStatus.STABLE

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()

    def to_mcp_tool(self) -> dict[str, Any]:
        """Convert to MCP tool format for exposure.

        Returns:
            MCP tool dict with name, description, schema and annotations
        """
        tool: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }
        annotations = self.annotations.to_mcp()
        if annotations:
            tool["annotations"] = annotations
        return tool
