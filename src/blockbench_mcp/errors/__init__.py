"""Error handling - structured errors with context."""

from .errors import (
    BlockbenchError,
    CapabilityUnavailableError,
    DuplicateToolError,
    ErrorCategory,
    ErrorMatcher,
    ErrorTemplate,
    FileAccessError,
    HostUnavailableError,
    InvalidDirectoryError,
    MatchResult,
    ProjectStateError,
    ToolExecutionError,
    ToolUnavailableError,
    UnknownToolError,
    ValidationError,
)
from .factory import ErrorFactory, create_error, get_error_factory
from .matchers import ErrorMatcherChain
from .registry import ErrorRegistry

__all__ = [
    # Core error types
    "BlockbenchError",
    "ErrorCategory",
    "ErrorTemplate",
    "MatchResult",
    # Taxonomy
    "ValidationError",
    "UnknownToolError",
    "DuplicateToolError",
    "ToolUnavailableError",
    "CapabilityUnavailableError",
    "InvalidDirectoryError",
    "FileAccessError",
    "ProjectStateError",
    "HostUnavailableError",
    "ToolExecutionError",
    # Registry and factory
    "ErrorRegistry",
    "ErrorFactory",
    "ErrorMatcherChain",
    "ErrorMatcher",
    # Convenience functions
    "get_error_factory",
    "create_error",
]
