"""Unit tests for structured errors, the registry and the factory."""

import json

import pytest

from blockbench_mcp.errors import (
    BlockbenchError,
    CapabilityUnavailableError,
    ErrorCategory,
    ErrorFactory,
    ErrorRegistry,
    FileAccessError,
    HostUnavailableError,
    ProjectStateError,
    ToolExecutionError,
    UnknownToolError,
    create_error,
)
from blockbench_mcp.types import ValidationIssue


class TestErrorRegistry:
    """Tests for template-based error creation."""

    def setup_method(self):
        self.registry = ErrorRegistry()

    def test_create_interpolates_message(self):
        error = self.registry.create("TOOL_NOT_FOUND", {"tool_name": "explode"})
        assert isinstance(error, UnknownToolError)
        assert error.message == "Unknown tool: explode"
        assert error.category == ErrorCategory.TOOL

    def test_create_uses_template_class(self):
        error = self.registry.create("PROJECT_NOT_FOUND", {"identifier": "abc"})
        assert isinstance(error, ProjectStateError)
        assert "Project not found: abc" in error.message
        assert "list_open_projects" in error.message

    def test_format_not_found_lists_available_formats(self):
        error = self.registry.create(
            "FORMAT_NOT_FOUND", {"format_id": "nope", "available": "free, bedrock"}
        )
        assert isinstance(error, CapabilityUnavailableError)
        assert error.message == 'Format "nope" is not available. Available formats: free, bedrock'

    def test_missing_context_keeps_template(self):
        error = self.registry.create("HOST_UNAVAILABLE")
        assert error.message == "Blockbench host unreachable at {url}"

    def test_explicit_message_overrides_template(self):
        error = self.registry.create("PARAM_INVALID", {"message": "Tool name is required"})
        assert error.message == "Tool name is required"

    def test_unknown_code_raises_value_error(self):
        with pytest.raises(ValueError, match="Unknown error code"):
            self.registry.create("DOES_NOT_EXIST")

    def test_retryable_defaults_from_template(self):
        assert self.registry.create("HOST_TIMEOUT", {"timeout_seconds": 5}).retryable is True
        assert self.registry.create("FILE_NOT_FOUND", {"path": "x"}).retryable is False

    def test_issues_are_carried(self):
        issues = [ValidationIssue(path="format", message="bad")]
        error = self.registry.create("PARAM_INVALID", {"tool_name": "t", "issues": issues})
        assert error.issues == issues

    def test_list_codes_contains_taxonomy(self):
        codes = self.registry.list_codes()
        for code in (
            "TOOL_NOT_FOUND",
            "TOOL_DUPLICATE",
            "PARAM_INVALID",
            "CAPABILITY_UNAVAILABLE",
            "DIRECTORY_INVALID",
            "NO_ACTIVE_PROJECT",
            "PROJECT_FORMAT_UNSET",
            "HOST_UNAVAILABLE",
            "TOOL_FAILED",
        ):
            assert code in codes


class TestBlockbenchError:
    """Tests for error serialization."""

    def test_kind_is_class_name(self):
        error = create_error("NO_ACTIVE_PROJECT")
        assert error.kind == "ProjectStateError"
        assert str(error) == error.message

    def test_to_dict_is_json_serializable(self):
        error = create_error(
            "PARAM_INVALID",
            tool_name="switch_project",
            issues=[ValidationIssue(path="identifier", message="Field required")],
        )
        data = error.to_dict()
        assert data["code"] == "PARAM_INVALID"
        assert data["tool_name"] == "switch_project"
        assert data["issues"][0]["path"] == "identifier"
        json.dumps(data)

    def test_cause_chain_depth_is_limited(self):
        root = create_error("FILE_NOT_FOUND", path="a")
        for _ in range(5):
            wrapper = create_error("INTERNAL_ERROR", error_type="X", detail="y")
            wrapper.cause = root
            root = wrapper
        data = root.to_dict()
        depth = 0
        while "cause" in data:
            data = data["cause"]
            depth += 1
        assert depth == 3

    def test_with_context_keeps_class(self):
        error = create_error("FILE_NOT_FOUND", path="a.json")
        copy = error.with_context(tool_name="open_project")
        assert isinstance(copy, FileAccessError)
        assert copy.tool_name == "open_project"
        assert error.tool_name is None


class TestErrorFactory:
    """Tests for converting arbitrary exceptions."""

    def setup_method(self):
        self.factory = ErrorFactory()

    def test_structured_error_passes_through(self):
        original = create_error("NO_ACTIVE_PROJECT")
        converted = self.factory.from_exception(original, tool_name="to_geo_json")
        assert converted.code == "NO_ACTIVE_PROJECT"
        assert converted.tool_name == "to_geo_json"

    def test_file_not_found_is_matched(self):
        error = FileNotFoundError(2, "No such file", "/tmp/missing.json")
        converted = self.factory.from_exception(error)
        assert converted.code == "FILE_NOT_FOUND"
        assert "/tmp/missing.json" in converted.message

    def test_timeout_is_retryable(self):
        converted = self.factory.from_exception(TimeoutError())
        assert converted.code == "HOST_TIMEOUT"
        assert isinstance(converted, HostUnavailableError)
        assert converted.retryable is True

    def test_unknown_exception_becomes_internal_error(self):
        converted = self.factory.from_exception(RuntimeError("kaboom"))
        assert converted.code == "INTERNAL_ERROR"
        assert converted.message == "Unexpected RuntimeError: kaboom"
        assert type(converted) is BlockbenchError

    def test_wrap_tool_failure_keeps_cause(self):
        cause = create_error("FORMAT_NOT_FOUND", format_id="x", available="free")
        wrapped = self.factory.wrap_tool_failure(cause, "convert_format")
        assert isinstance(wrapped, ToolExecutionError)
        assert wrapped.code == "TOOL_FAILED"
        assert wrapped.message == cause.message
        assert wrapped.cause is not None
        assert wrapped.cause.code == "FORMAT_NOT_FOUND"
        assert wrapped.tool_name == "convert_format"

    def test_wrap_tool_failure_inherits_retryable(self):
        wrapped = self.factory.wrap_tool_failure(TimeoutError(), "to_geo_json")
        assert wrapped.retryable is True
