"""Unit tests for ToolRegistry."""

import asyncio
import io
import json

import pytest
from pydantic import Field

from blockbench_mcp.errors import (
    DuplicateToolError,
    ToolExecutionError,
    ToolUnavailableError,
    UnknownToolError,
    ValidationError,
    create_error,
)
from blockbench_mcp.logging import BBLogger, LogConfig
from blockbench_mcp.registry import (
    NoArguments,
    ToolAnnotations,
    ToolArguments,
    ToolDescriptor,
    ToolRegistry,
    format_tool_detail,
    format_tool_list,
)
from blockbench_mcp.types import LogFormat, ToolStatus


class EchoArguments(ToolArguments):
    text: str = Field(description="Text to echo back.")
    shout: bool = Field(False, description="Upper-case the text.")


async def echo(args: EchoArguments) -> str:
    return args.text.upper() if args.shout else args.text


def echo_tool(name: str = "echo", status: ToolStatus = ToolStatus.STABLE) -> ToolDescriptor:
    return ToolDescriptor(
        name=name,
        description="Echo the text argument.",
        input_model=EchoArguments,
        handler=echo,
        annotations=ToolAnnotations(title="Echo", read_only=True),
        status=status,
    )


class TestRegistration:
    """Tests for register/list."""

    def test_register_and_get(self):
        registry = ToolRegistry()
        registry.register(echo_tool())
        assert "echo" in registry
        assert len(registry) == 1
        assert registry.get("echo").description == "Echo the text argument."

    def test_duplicate_is_rejected(self):
        registry = ToolRegistry()
        registry.register(echo_tool())
        with pytest.raises(DuplicateToolError):
            registry.register(echo_tool())
        assert len(registry) == 1

    def test_list_by_status(self):
        registry = ToolRegistry()
        registry.register(echo_tool("a"))
        registry.register(echo_tool("b", ToolStatus.EXPERIMENTAL))
        assert [t.name for t in registry.list_tools()] == ["a", "b"]
        assert [t.name for t in registry.list_tools(ToolStatus.EXPERIMENTAL)] == ["b"]

    def test_mcp_exposure_hides_disabled(self):
        registry = ToolRegistry(enabled_statuses=[ToolStatus.STABLE])
        registry.register(echo_tool("a"))
        registry.register(echo_tool("b", ToolStatus.DEPRECATED))
        exposed = registry.get_for_mcp_exposure()
        assert [t["name"] for t in exposed] == ["a"]
        assert exposed[0]["annotations"] == {"title": "Echo", "readOnlyHint": True}
        schema = exposed[0]["inputSchema"]
        assert schema["required"] == ["text"]
        assert schema["additionalProperties"] is False


class TestInvoke:
    """Tests for validation and invocation."""

    def setup_method(self):
        self.registry = ToolRegistry()
        self.registry.register(echo_tool())

    @pytest.mark.asyncio
    async def test_defaults_applied(self):
        assert await self.registry.invoke("echo", {"text": "hi"}) == "hi"
        assert await self.registry.invoke("echo", {"text": "hi", "shout": True}) == "HI"

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        with pytest.raises(UnknownToolError) as exc_info:
            await self.registry.invoke("nope", {})
        assert exc_info.value.message == "Unknown tool: nope"

    @pytest.mark.asyncio
    async def test_missing_required(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.registry.invoke("echo", {})
        assert [i.path for i in exc_info.value.issues] == ["text"]

    @pytest.mark.asyncio
    async def test_extra_argument_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.registry.invoke("echo", {"text": "a", "volume": 11})
        assert [i.path for i in exc_info.value.issues] == ["volume"]

    @pytest.mark.asyncio
    async def test_no_type_coercion(self):
        with pytest.raises(ValidationError):
            await self.registry.invoke("echo", {"text": "a", "shout": "true"})

    @pytest.mark.asyncio
    async def test_non_object_arguments(self):
        with pytest.raises(ValidationError):
            await self.registry.invoke("echo", ["text"])  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_none_arguments_for_parameterless_tool(self):
        async def ok(args: NoArguments) -> str:
            return "ok"

        self.registry.register(
            ToolDescriptor(name="ok", description="", input_model=NoArguments, handler=ok)
        )
        assert await self.registry.invoke("ok", None) == "ok"

    @pytest.mark.asyncio
    async def test_disabled_tool(self):
        registry = ToolRegistry(enabled_statuses=[ToolStatus.STABLE])
        registry.register(echo_tool("old", ToolStatus.DEPRECATED))
        with pytest.raises(ToolUnavailableError):
            await registry.invoke("old", {"text": "x"})

    @pytest.mark.asyncio
    async def test_handler_failure_is_wrapped(self):
        async def broken(args: NoArguments) -> str:
            raise create_error("NO_ACTIVE_PROJECT")

        self.registry.register(
            ToolDescriptor(name="broken", description="", input_model=NoArguments, handler=broken)
        )
        with pytest.raises(ToolExecutionError) as exc_info:
            await self.registry.invoke("broken", {})
        error = exc_info.value
        assert error.message == "No project is currently open. Create or open a project first."
        assert error.cause.code == "NO_ACTIVE_PROJECT"
        assert error.tool_name == "broken"

    @pytest.mark.asyncio
    async def test_plain_exception_is_wrapped(self):
        async def crash(args: NoArguments) -> str:
            raise KeyError("uuid")

        self.registry.register(
            ToolDescriptor(name="crash", description="", input_model=NoArguments, handler=crash)
        )
        with pytest.raises(ToolExecutionError) as exc_info:
            await self.registry.invoke("crash", {})
        assert exc_info.value.cause.code == "INTERNAL_ERROR"

    @pytest.mark.asyncio
    async def test_invocations_are_serialized(self):
        active = 0
        peak = 0

        async def slow(args: NoArguments) -> str:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return "done"

        self.registry.register(
            ToolDescriptor(name="slow", description="", input_model=NoArguments, handler=slow)
        )
        results = await asyncio.gather(*(self.registry.invoke("slow", {}) for _ in range(5)))
        assert results == ["done"] * 5
        assert peak == 1


class TestLogging:
    """Registry logs calls through the tool logger."""

    @pytest.mark.asyncio
    async def test_call_and_result_logged(self):
        output = io.StringIO()
        logger = BBLogger(LogConfig(format=LogFormat.JSON, output=output))
        registry = ToolRegistry(logger=logger)
        registry.register(echo_tool())
        await registry.invoke("echo", {"text": "hi"})
        events = [json.loads(line).get("event") for line in output.getvalue().splitlines()]
        assert "tool_calling" in events
        assert "tool_result" in events


class TestFormatters:
    """Tests for CLI output."""

    def test_tool_list(self):
        text = format_tool_list([echo_tool("a"), echo_tool("b", ToolStatus.EXPERIMENTAL)])
        assert text.startswith("Found 2 tool(s):")
        assert "[experimental]" in text
        assert "Echo the text argument." in text

    def test_tool_detail_lists_parameters(self):
        text = format_tool_detail(echo_tool())
        assert "text" in text
        assert "shout" in text
