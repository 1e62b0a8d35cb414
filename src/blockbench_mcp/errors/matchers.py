"""Error matchers for converting exceptions to structured errors."""

import asyncio
import json
from typing import Any

from .errors import ErrorMatcher, MatchResult


class FileNotFoundMatcher(ErrorMatcher):
    """Matches missing file errors."""

    def matches(self, error: Exception) -> bool:
        return isinstance(error, FileNotFoundError)

    def extract(self, error: Exception) -> MatchResult:
        path = getattr(error, "filename", None) or str(error)
        return MatchResult(code="FILE_NOT_FOUND", context={"path": path})


class JSONDecodeMatcher(ErrorMatcher):
    """Matches JSON parse errors."""

    def matches(self, error: Exception) -> bool:
        return isinstance(error, json.JSONDecodeError)

    def extract(self, error: Exception) -> MatchResult:
        return MatchResult(
            code="FILE_PARSE_FAILED",
            context={"path": "<content>", "detail": str(error)},
        )


class PermissionMatcher(ErrorMatcher):
    """Matches permission errors raised while writing files."""

    def matches(self, error: Exception) -> bool:
        return isinstance(error, PermissionError)

    def extract(self, error: Exception) -> MatchResult:
        path = getattr(error, "filename", None) or "<unknown>"
        return MatchResult(code="FILE_WRITE_FAILED", context={"path": path, "detail": str(error)})


class TimeoutErrorMatcher(ErrorMatcher):
    """Matches timeout errors."""

    def matches(self, error: Exception) -> bool:
        return isinstance(error, (asyncio.TimeoutError, TimeoutError))

    def extract(self, error: Exception) -> MatchResult:
        return MatchResult(
            code="HOST_TIMEOUT",
            context={"timeout_seconds": "unknown"},
            retryable=True,
        )


class GenericErrorMatcher(ErrorMatcher):
    """Fallback matcher for any exception."""

    def matches(self, error: Exception) -> bool:
        """Always matches."""
        return True

    def extract(self, error: Exception) -> MatchResult:
        """Extract generic error info.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with INTERNAL_ERROR code
        """
        context: dict[str, Any] = {
            "detail": str(error) or repr(error),
            "error_type": type(error).__name__,
        }
        return MatchResult(code="INTERNAL_ERROR", context=context, retryable=False)


class ErrorMatcherChain:
    """Ordered chain of matchers. First match wins."""

    def __init__(self) -> None:
        """Initialize matcher chain with built-in matchers."""
        self.matchers: list[ErrorMatcher] = []
        self._load_builtin_matchers()

    def match(self, error: Exception) -> MatchResult:
        """Find first matching matcher and extract result.

        Args:
            error: Exception to match

        Returns:
            MatchResult from first matching matcher
        """
        for matcher in self.matchers:
            if matcher.matches(error):
                return matcher.extract(error)

        # Should never reach here due to GenericErrorMatcher
        return MatchResult(code="INTERNAL_ERROR", context={"detail": str(error)})

    def _load_builtin_matchers(self) -> None:
        """Load built-in matchers in priority order."""
        # Order matters - more specific matchers first
        self.matchers = [
            FileNotFoundMatcher(),
            JSONDecodeMatcher(),
            PermissionMatcher(),
            TimeoutErrorMatcher(),
            GenericErrorMatcher(),  # Fallback - must be last
        ]
