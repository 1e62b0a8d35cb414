"""Shared validation types for blockbench-mcp."""

from dataclasses import dataclass, field


@dataclass
class ValidationIssue:
    """Single validation issue (error or warning).

    Used by:
    - ConfigLoader (config validation)
    - ToolRegistry (tool argument validation)
    """

    path: str  # e.g., "format" or "host.timeout"
    message: str  # Human-readable description
    severity: str = "error"  # "error" | "warning"

    def to_dict(self) -> dict[str, str]:
        """Serialize for error payloads."""
        return {"path": self.path, "message": self.message, "severity": self.severity}


@dataclass
class ValidationResult:
    """Result of validation.

    Used by:
    - ConfigLoader.validate()
    """

    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Ensure valid is False if there are errors."""
        if self.errors:
            self.valid = False
