"""Tool Registry - the process-wide table of callable tools."""

import asyncio
import time
from collections.abc import Iterable
from typing import Any

import pydantic
from pydantic import BaseModel

from blockbench_mcp.errors import ErrorFactory, create_error, get_error_factory
from blockbench_mcp.logging import BBLogger
from blockbench_mcp.telemetry import (
    instrument_tool_call,
    record_registered_tools,
    record_tool_result,
)
from blockbench_mcp.types import LogLevel, ToolStatus, ValidationIssue

from .types import ToolDescriptor

DEFAULT_ENABLED_STATUSES = frozenset({ToolStatus.STABLE, ToolStatus.EXPERIMENTAL})


class ToolRegistry:
    """Central registry of tools.

    Provides:
    - Registration (once, at startup; duplicate names are rejected)
    - Argument validation against each tool's input model
    - Serialized invocation: one handler runs at a time
    """

    def __init__(
        self,
        logger: BBLogger | None = None,
        enabled_statuses: Iterable[ToolStatus] | None = None,
        error_factory: ErrorFactory | None = None,
    ):
        """Initialize tool registry.

        Args:
            logger: Optional logger
            enabled_statuses: Statuses that are exposed and invocable
            error_factory: Factory used to wrap handler failures
        """
        self._tools: dict[str, ToolDescriptor] = {}
        self._logger = logger
        self._enabled = (
            frozenset(enabled_statuses)
            if enabled_statuses is not None
            else DEFAULT_ENABLED_STATUSES
        )
        self._errors = error_factory or get_error_factory()
        self._lock = asyncio.Lock()

    def _log(self, level: LogLevel, message: str, **context: Any) -> None:
        """Log message if logger available."""
        if self._logger:
            self._logger._log(level, "registry", message, context or None)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def register(self, descriptor: ToolDescriptor) -> None:
        """Add a tool.

        Args:
            descriptor: Tool definition

        Raises:
            DuplicateToolError: A tool with the same name exists
        """
        if descriptor.name in self._tools:
            raise create_error("TOOL_DUPLICATE", tool_name=descriptor.name)
        self._tools[descriptor.name] = descriptor
        self._log(
            LogLevel.DEBUG,
            f"Registered tool '{descriptor.name}'",
            status=descriptor.status.value,
        )
        record_registered_tools(len(self._tools))

    def get(self, name: str) -> ToolDescriptor | None:
        """Get tool by name."""
        return self._tools.get(name)

    def list_tools(self, status: ToolStatus | None = None) -> list[ToolDescriptor]:
        """List tools in registration order, optionally filtered by status."""
        tools = list(self._tools.values())
        if status is not None:
            tools = [t for t in tools if t.status == status]
        return tools

    def is_enabled(self, descriptor: ToolDescriptor) -> bool:
        return descriptor.status in self._enabled

    def get_for_mcp_exposure(self) -> list[dict[str, Any]]:
        """Get enabled tools formatted for MCP ``tools/list``."""
        return [t.to_mcp_tool() for t in self._tools.values() if self.is_enabled(t)]

    def validate_arguments(
        self, descriptor: ToolDescriptor, raw_args: dict[str, Any] | None
    ) -> BaseModel:
        """Validate raw arguments against the tool's input model.

        Args:
            descriptor: Tool definition
            raw_args: Arguments as received from the agent

        Returns:
            Validated model instance with defaults applied

        Raises:
            ValidationError: PARAM_INVALID with one issue per offending field
        """
        if raw_args is not None and not isinstance(raw_args, dict):
            raise create_error(
                "PARAM_INVALID",
                tool_name=descriptor.name,
                issues=[ValidationIssue(path="<root>", message="Arguments must be an object")],
            )
        try:
            return descriptor.input_model.model_validate(raw_args or {})
        except pydantic.ValidationError as e:
            issues = [
                ValidationIssue(
                    path=".".join(str(part) for part in err["loc"]) or "<root>",
                    message=err["msg"],
                )
                for err in e.errors()
            ]
            raise create_error(
                "PARAM_INVALID",
                tool_name=descriptor.name,
                detail="; ".join(f"{i.path}: {i.message}" for i in issues),
                issues=issues,
            ) from e

    async def invoke(self, name: str, raw_args: dict[str, Any] | None = None) -> str:
        """Validate arguments and run a tool's handler.

        Args:
            name: Tool name
            raw_args: Raw arguments

        Returns:
            The handler's result string, unchanged

        Raises:
            UnknownToolError: No such tool
            ToolUnavailableError: Tool status is not enabled
            ValidationError: Arguments do not match the input model
            ToolExecutionError: The handler raised; the structured cause is attached
        """
        descriptor = self._tools.get(name)
        if descriptor is None:
            raise create_error("TOOL_NOT_FOUND", tool_name=name)
        if not self.is_enabled(descriptor):
            raise create_error(
                "TOOL_NOT_AVAILABLE", tool_name=name, status=descriptor.status.value
            )

        args = self.validate_arguments(descriptor, raw_args)

        async with self._lock:
            tool_log = self._logger.tool(name) if self._logger else None
            if tool_log:
                tool_log.calling(args.model_dump())

            start = time.perf_counter()
            async with instrument_tool_call(name) as telemetry_result:
                try:
                    result = await descriptor.handler(args)
                except Exception as e:
                    wrapped = self._errors.wrap_tool_failure(e, name)
                    record_tool_result(
                        telemetry_result,
                        success=False,
                        error_code=wrapped.cause.code if wrapped.cause else wrapped.code,
                    )
                    if tool_log:
                        tool_log.error(wrapped, int((time.perf_counter() - start) * 1000))
                    raise wrapped from e

            if tool_log:
                tool_log.result(result, int((time.perf_counter() - start) * 1000))
            return result
