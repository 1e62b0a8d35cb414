"""Structured error types for blockbench-mcp."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from blockbench_mcp.types import ValidationIssue


class ErrorCategory(str, Enum):
    """Error source categories."""

    TOOL = "TOOL"
    VALIDATION = "VALIDATION"
    HOST = "HOST"
    FILESYSTEM = "FILESYSTEM"
    SYSTEM = "SYSTEM"


@dataclass
class BlockbenchError(Exception):
    """Structured error with context. Base exception for all blockbench-mcp errors."""

    # Identity
    code: str  # e.g., "CAPABILITY_UNAVAILABLE"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    # Context
    retryable: bool = False  # Is retry potentially useful?
    tool_name: str | None = None  # Which tool failed
    issues: list[ValidationIssue] = field(default_factory=list)  # Per-field problems

    # Error chain (max depth 3)
    cause: "BlockbenchError | None" = None

    # Metadata
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    @property
    def kind(self) -> str:
        """Machine-distinguishable error kind (the exception class name)."""
        return type(self).__name__

    def to_dict(self, depth: int = 0) -> dict[str, Any]:
        """Serialize for MCP responses.

        Args:
            depth: Current nesting depth of the cause chain

        Returns:
            Dictionary representation of the error
        """
        data: dict[str, Any] = {
            "kind": self.kind,
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "retryable": self.retryable,
            "tool_name": self.tool_name,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.issues:
            data["issues"] = [issue.to_dict() for issue in self.issues]
        if self.cause is not None and depth < 3:
            data["cause"] = self.cause.to_dict(depth + 1)
        return data

    def with_context(self, tool_name: str | None = None) -> "BlockbenchError":
        """Return a copy (same class) with additional context.

        Args:
            tool_name: Optional tool name

        Returns:
            New error instance with updated context
        """
        return replace(self, tool_name=tool_name or self.tool_name)


class ValidationError(BlockbenchError):
    """Tool arguments did not match the declared input schema."""


class UnknownToolError(BlockbenchError):
    """No tool is registered under the requested name."""


class DuplicateToolError(BlockbenchError):
    """A tool with the same name is already registered."""


class ToolUnavailableError(BlockbenchError):
    """The tool exists but its status is not enabled."""


class CapabilityUnavailableError(BlockbenchError):
    """A required host feature (codec, format) is absent."""


class InvalidDirectoryError(BlockbenchError):
    """A folder argument is missing or not a directory."""


class FileAccessError(BlockbenchError):
    """A file could not be found, read, parsed or written."""


class ProjectStateError(BlockbenchError):
    """The host's project state does not allow the operation."""


class HostUnavailableError(BlockbenchError):
    """The host application could not be reached or answered with an error."""


class ToolExecutionError(BlockbenchError):
    """Wrapper for any failure raised inside a tool handler. Always carries a cause."""


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Project '{identifier}' not found"
    detail_template: str | None = None
    suggestion_template: str | None = None
    default_retryable: bool = False
    error_class: type[BlockbenchError] = BlockbenchError


@dataclass
class MatchResult:
    """Result of matching an exception."""

    code: str
    context: dict[str, Any]
    retryable: bool | None = None  # None = use template default


class ErrorMatcher(ABC):
    """Base class for exception matchers."""

    @abstractmethod
    def matches(self, error: Exception) -> bool:
        """Check if this matcher handles the error.

        Args:
            error: Exception to check

        Returns:
            True if this matcher can handle the error
        """

    @abstractmethod
    def extract(self, error: Exception) -> MatchResult:
        """Extract error info from the exception.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with error code and context
        """
