"""Error registry for creating errors from templates."""

from typing import Any

from .errors import (
    BlockbenchError,
    CapabilityUnavailableError,
    DuplicateToolError,
    ErrorCategory,
    ErrorTemplate,
    FileAccessError,
    HostUnavailableError,
    InvalidDirectoryError,
    ProjectStateError,
    ToolExecutionError,
    ToolUnavailableError,
    UnknownToolError,
    ValidationError,
)


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def register(self, template: ErrorTemplate) -> None:
        """Add or replace a template."""
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: BlockbenchError | None = None,
    ) -> BlockbenchError:
        """Create error instance from template + context.

        Explicit ``message``, ``detail`` or ``suggestion`` keys in the
        context take precedence over the interpolated templates.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional cause error

        Returns:
            Error instance of the template's class

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = context.get("message") or self._interpolate(template.message_template, context)
        detail = context.get("detail") or self._interpolate(template.detail_template, context)
        suggestion = context.get("suggestion") or self._interpolate(
            template.suggestion_template, context
        )

        if message is None:
            message = f"Error {code}"

        return template.error_class(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            retryable=template.default_retryable,
            tool_name=context.get("tool_name"),
            issues=list(context.get("issues") or []),
            cause=cause,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except KeyError:
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # TOOL Errors
        self._templates["TOOL_NOT_FOUND"] = ErrorTemplate(
            code="TOOL_NOT_FOUND",
            category=ErrorCategory.TOOL,
            message_template="Unknown tool: {tool_name}",
            detail_template="No tool is registered under this name",
            suggestion_template="Call tools/list to see the registered tools",
            error_class=UnknownToolError,
        )

        self._templates["TOOL_DUPLICATE"] = ErrorTemplate(
            code="TOOL_DUPLICATE",
            category=ErrorCategory.TOOL,
            message_template="Tool '{tool_name}' is already registered",
            detail_template="Tool names must be unique within a registry",
            suggestion_template="Register each tool exactly once at startup",
            error_class=DuplicateToolError,
        )

        self._templates["TOOL_NOT_AVAILABLE"] = ErrorTemplate(
            code="TOOL_NOT_AVAILABLE",
            category=ErrorCategory.TOOL,
            message_template="Tool '{tool_name}' is not enabled",
            detail_template="Tools with status '{status}' are disabled by configuration",
            suggestion_template="Add the status to tools.enabled_statuses to enable it",
            error_class=ToolUnavailableError,
        )

        self._templates["TOOL_FAILED"] = ErrorTemplate(
            code="TOOL_FAILED",
            category=ErrorCategory.TOOL,
            message_template="{reason}",
            detail_template="Tool '{tool_name}' encountered an error during execution",
            suggestion_template="Check the cause and the server logs for more details",
            error_class=ToolExecutionError,
        )

        # VALIDATION Errors
        self._templates["PARAM_INVALID"] = ErrorTemplate(
            code="PARAM_INVALID",
            category=ErrorCategory.VALIDATION,
            message_template="Invalid parameters for tool '{tool_name}'",
            detail_template="The tool parameters do not match the expected schema",
            suggestion_template="Check the tool schema and provide valid parameters",
            error_class=ValidationError,
        )

        # HOST Errors
        self._templates["CAPABILITY_UNAVAILABLE"] = ErrorTemplate(
            code="CAPABILITY_UNAVAILABLE",
            category=ErrorCategory.HOST,
            message_template="{capability} is not available.",
            detail_template="The host application does not expose this feature",
            suggestion_template="Install or enable the matching Blockbench plugin",
            error_class=CapabilityUnavailableError,
        )

        self._templates["FORMAT_NOT_FOUND"] = ErrorTemplate(
            code="FORMAT_NOT_FOUND",
            category=ErrorCategory.HOST,
            message_template=(
                'Format "{format_id}" is not available. Available formats: {available}'
            ),
            suggestion_template="Use the 'list_formats' tool to see all available format IDs",
            error_class=CapabilityUnavailableError,
        )

        self._templates["NO_ACTIVE_PROJECT"] = ErrorTemplate(
            code="NO_ACTIVE_PROJECT",
            category=ErrorCategory.HOST,
            message_template="No project is currently open. Create or open a project first.",
            error_class=ProjectStateError,
        )

        self._templates["NO_PROJECTS_OPEN"] = ErrorTemplate(
            code="NO_PROJECTS_OPEN",
            category=ErrorCategory.HOST,
            message_template="No projects are currently open.",
            error_class=ProjectStateError,
        )

        self._templates["PROJECT_NOT_FOUND"] = ErrorTemplate(
            code="PROJECT_NOT_FOUND",
            category=ErrorCategory.HOST,
            message_template=(
                "Project not found: {identifier}. "
                "Use 'list_open_projects' to see available projects."
            ),
            detail_template="No open project matches this UUID or index; nothing was changed",
            error_class=ProjectStateError,
        )

        self._templates["PROJECT_CLOSE_REFUSED"] = ErrorTemplate(
            code="PROJECT_CLOSE_REFUSED",
            category=ErrorCategory.HOST,
            message_template="Project '{name}' was not closed",
            detail_template="The project has unsaved changes",
            suggestion_template="Save the project first or pass force=true",
            error_class=ProjectStateError,
        )

        self._templates["PROJECT_FORMAT_UNSET"] = ErrorTemplate(
            code="PROJECT_FORMAT_UNSET",
            category=ErrorCategory.HOST,
            message_template="No format is set for the current project.",
            error_class=ProjectStateError,
        )

        self._templates["COMPILE_FAILED"] = ErrorTemplate(
            code="COMPILE_FAILED",
            category=ErrorCategory.HOST,
            message_template="Failed to compile model to geometry JSON format.",
            error_class=ProjectStateError,
        )

        self._templates["HOST_UNAVAILABLE"] = ErrorTemplate(
            code="HOST_UNAVAILABLE",
            category=ErrorCategory.HOST,
            message_template="Blockbench host unreachable at {url}",
            suggestion_template="Check that Blockbench is running with the bridge plugin enabled",
            default_retryable=True,
            error_class=HostUnavailableError,
        )

        self._templates["HOST_TIMEOUT"] = ErrorTemplate(
            code="HOST_TIMEOUT",
            category=ErrorCategory.HOST,
            message_template="Blockbench host did not answer within {timeout_seconds}s",
            suggestion_template="Increase host.timeout or check if the editor is busy",
            default_retryable=True,
            error_class=HostUnavailableError,
        )

        self._templates["HOST_ERROR"] = ErrorTemplate(
            code="HOST_ERROR",
            category=ErrorCategory.HOST,
            message_template="Blockbench host reported an error: {reason}",
            error_class=HostUnavailableError,
        )

        # FILESYSTEM Errors
        self._templates["FILE_NOT_FOUND"] = ErrorTemplate(
            code="FILE_NOT_FOUND",
            category=ErrorCategory.FILESYSTEM,
            message_template="File not found: {path}",
            error_class=FileAccessError,
        )

        self._templates["FILE_PARSE_FAILED"] = ErrorTemplate(
            code="FILE_PARSE_FAILED",
            category=ErrorCategory.FILESYSTEM,
            message_template="Failed to parse file as JSON: {path}",
            error_class=FileAccessError,
        )

        self._templates["FILE_READ_FAILED"] = ErrorTemplate(
            code="FILE_READ_FAILED",
            category=ErrorCategory.FILESYSTEM,
            message_template="Failed to read file: {path}",
            suggestion_template="Check that the path is a readable file",
            error_class=FileAccessError,
        )

        self._templates["FILE_WRITE_FAILED"] = ErrorTemplate(
            code="FILE_WRITE_FAILED",
            category=ErrorCategory.FILESYSTEM,
            message_template="Failed to write file: {path}",
            suggestion_template="Check file permissions and disk space",
            error_class=FileAccessError,
        )

        self._templates["DIRECTORY_INVALID"] = ErrorTemplate(
            code="DIRECTORY_INVALID",
            category=ErrorCategory.FILESYSTEM,
            message_template="{reason}: {path}",
            error_class=InvalidDirectoryError,
        )

        # SYSTEM Errors
        self._templates["INTERNAL_ERROR"] = ErrorTemplate(
            code="INTERNAL_ERROR",
            category=ErrorCategory.SYSTEM,
            message_template="Unexpected {error_type}: {detail}",
            detail_template="An unexpected error occurred",
            suggestion_template="Check the logs and report this issue",
        )

        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.SYSTEM,
            message_template="Invalid configuration",
            detail_template="The blockbench-mcp configuration is invalid",
            suggestion_template="Check the configuration file and fix errors",
        )
