"""Error factory for creating structured errors from any exception type."""

from typing import Any

from .errors import BlockbenchError, ToolExecutionError
from .matchers import ErrorMatcherChain
from .registry import ErrorRegistry


class ErrorFactory:
    """Creates BlockbenchErrors from any exception type."""

    def __init__(
        self,
        registry: ErrorRegistry | None = None,
        matcher_chain: ErrorMatcherChain | None = None,
    ):
        """Initialize error factory.

        Args:
            registry: Error registry (defaults to new ErrorRegistry())
            matcher_chain: Matcher chain (defaults to new ErrorMatcherChain())
        """
        self.registry = registry or ErrorRegistry()
        self.matcher_chain = matcher_chain or ErrorMatcherChain()
        self._max_cause_depth = 3

    def from_exception(
        self,
        error: Exception,
        tool_name: str | None = None,
    ) -> BlockbenchError:
        """Convert any exception to a BlockbenchError.

        Args:
            error: Exception to convert
            tool_name: Optional tool name

        Returns:
            BlockbenchError instance
        """
        # If already structured, just add context
        if isinstance(error, BlockbenchError):
            return error.with_context(tool_name=tool_name)

        match_result = self.matcher_chain.match(error)

        context = match_result.context.copy()
        if tool_name:
            context["tool_name"] = tool_name

        structured = self.registry.create(code=match_result.code, context=context)

        # Override retryable if specified in match result
        if match_result.retryable is not None:
            structured.retryable = match_result.retryable

        return structured

    def wrap_tool_failure(self, error: Exception, tool_name: str) -> ToolExecutionError:
        """Wrap a handler failure as ToolExecutionError with a structured cause.

        Args:
            error: Exception raised by the handler
            tool_name: Tool whose handler failed

        Returns:
            ToolExecutionError whose cause is the structured original error
        """
        cause = self._truncate_chain(self.from_exception(error, tool_name=tool_name))
        wrapped = self.registry.create(
            "TOOL_FAILED",
            context={"tool_name": tool_name, "reason": cause.message},
            cause=cause,
        )
        wrapped.retryable = cause.retryable
        return wrapped  # type: ignore[return-value]

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> BlockbenchError:
        """Create BlockbenchError directly from code.

        Args:
            code: Error code
            context: Context variables for template interpolation
            **kwargs: Additional context variables

        Returns:
            BlockbenchError instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        return self.registry.create(code=code, context=merged_context)

    def _truncate_chain(self, error: BlockbenchError) -> BlockbenchError:
        """Cut the cause chain below the maximum depth."""
        node = error
        for _ in range(self._max_cause_depth - 1):
            if node.cause is None:
                return error
            node = node.cause
        node.cause = None
        return error


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton.

    Returns:
        Default ErrorFactory instance
    """
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> BlockbenchError:
    """Convenience function to create error.

    Args:
        code: Error code
        **context: Context variables for template interpolation

    Returns:
        BlockbenchError instance
    """
    return get_error_factory().create(code, context)
