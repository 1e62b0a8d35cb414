"""blockbench-mcp configuration loader."""

import os
import re
import typing
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from blockbench_mcp.errors import create_error
from blockbench_mcp.types import (
    HostType,
    LogFormat,
    LogLevel,
    ToolStatus,
    ValidationIssue,
    ValidationResult,
)

from .models import BlockbenchMCPConfig

CONFIG_PATH_ENV = "BBMCP_CONFIG_PATH"
LOCAL_CONFIG_NAME = "blockbench-mcp.yaml"


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        BlockbenchError: If required var not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        raise create_error(
            "CONFIG_INVALID",
            detail=f"Required environment variable {var_name} not set",
        )

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    if isinstance(data, str):
        return resolve_env_vars(data)
    return data


def _enum_values(enum_type: type[Enum]) -> set[str]:
    return {member.value for member in enum_type}


class ConfigLoader:
    """Load and validate blockbench-mcp configuration."""

    VALID_KEYS = {"mcp", "host", "tools", "logging", "telemetry"}

    def __init__(self, logger: Any = None):
        """Initialize config loader.

        Args:
            logger: Optional BBLogger instance
        """
        self._config: BlockbenchMCPConfig | None = None
        self._config_path: Path | None = None
        self._logger = logger

    @property
    def config_path(self) -> Path | None:
        """Path of the last loaded file, None when running on defaults."""
        return self._config_path

    def load(
        self, path: str | Path | None = None, use_defaults: bool = True
    ) -> BlockbenchMCPConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. BBMCP_CONFIG_PATH environment variable
        2. ./blockbench-mcp.yaml
        3. ~/.blockbench-mcp/config.yaml
        4. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found

        Returns:
            Loaded BlockbenchMCPConfig instance

        Raises:
            BlockbenchError: If file not found (when use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                if self._logger:
                    self._logger.info("host", "No config file found, using default configuration")
                return self.load_defaults()
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration root must be a mapping: {config_path}",
            )

        data = _resolve_env_vars_recursive(data)
        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> BlockbenchMCPConfig:
        """Load default configuration without a file."""
        return self.load_from_dict({})

    def load_from_dict(
        self, data: dict[str, Any], config_path: Path | None = None
    ) -> BlockbenchMCPConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded BlockbenchMCPConfig instance

        Raises:
            BlockbenchError: If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.path}: {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
                issues=validation.errors,
            )

        if self._logger:
            for issue in validation.warnings:
                self._logger.warning("host", issue.message, path=issue.path)

        try:
            config = self._dict_to_config(data)
        except (TypeError, ValueError) as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Failed to parse configuration: {e}",
            ) from e

        self._config = config
        self._config_path = config_path

        if self._logger:
            self._logger.debug(
                "host", "Configuration loaded", path=str(config_path or "<defaults>")
            )

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for key in data:
            if key not in self.VALID_KEYS:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        for section in self.VALID_KEYS:
            if section in data and not isinstance(data[section], dict):
                errors.append(
                    ValidationIssue(path=section, message=f"{section} must be a dictionary")
                )

        host = data.get("host")
        if isinstance(host, dict):
            if "type" in host and host["type"] not in _enum_values(HostType):
                errors.append(
                    ValidationIssue(
                        path="host.type",
                        message=f"type must be one of {sorted(_enum_values(HostType))}",
                    )
                )
            if "timeout" in host:
                timeout = host["timeout"]
                if isinstance(timeout, bool) or not isinstance(timeout, int | float):
                    timeout = 0
                if timeout <= 0:
                    errors.append(
                        ValidationIssue(
                            path="host.timeout", message="timeout must be a positive number"
                        )
                    )
            if "url" in host and not isinstance(host["url"], str):
                errors.append(ValidationIssue(path="host.url", message="url must be a string"))

        tools = data.get("tools")
        if isinstance(tools, dict):
            extensions = tools.get("project_extensions")
            if extensions is not None and (
                not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions)
            ):
                errors.append(
                    ValidationIssue(
                        path="tools.project_extensions",
                        message="project_extensions must be a list of strings",
                    )
                )
            statuses = tools.get("enabled_statuses")
            if statuses is not None:
                valid_statuses = _enum_values(ToolStatus)
                if not isinstance(statuses, list) or any(s not in valid_statuses for s in statuses):
                    errors.append(
                        ValidationIssue(
                            path="tools.enabled_statuses",
                            message="enabled_statuses must be a list drawn from "
                            f"{sorted(valid_statuses)}",
                        )
                    )

        logging_section = data.get("logging")
        if isinstance(logging_section, dict):
            level = logging_section.get("level", LogLevel.INFO.value)
            if level not in _enum_values(LogLevel):
                errors.append(
                    ValidationIssue(
                        path="logging.level",
                        message=f"level must be one of {sorted(_enum_values(LogLevel))}",
                    )
                )
            if "format" in logging_section and logging_section["format"] not in _enum_values(
                LogFormat
            ):
                errors.append(
                    ValidationIssue(
                        path="logging.format",
                        message=f"format must be one of {sorted(_enum_values(LogFormat))}",
                    )
                )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def get(self) -> BlockbenchMCPConfig:
        """Get current configuration.

        Raises:
            BlockbenchError: If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def _resolve_config_path(self) -> Path:
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)

        local_path = Path(LOCAL_CONFIG_NAME)
        if local_path.exists():
            return local_path

        home_path = Path.home() / ".blockbench-mcp" / "config.yaml"
        if home_path.exists():
            return home_path

        # Not found - use local path so load() falls back to defaults
        return local_path

    def _dict_to_config(self, data: dict[str, Any]) -> BlockbenchMCPConfig:
        kwargs: dict[str, Any] = {}
        for f in fields(BlockbenchMCPConfig):
            if f.name in data:
                kwargs[f.name] = self._convert_field(f.type, data[f.name])
        return BlockbenchMCPConfig(**kwargs)

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Convert a raw YAML value to the declared field type.

        Args:
            field_type: Expected field type
            value: Value to convert

        Returns:
            Converted value
        """
        if value is None:
            return None

        origin = typing.get_origin(field_type)

        if origin is list:
            if not isinstance(value, list):
                return value
            args = typing.get_args(field_type)
            if args:
                return [self._convert_field(args[0], item) for item in value]
            return value

        if origin is dict:
            if not isinstance(value, dict):
                return value
            args = typing.get_args(field_type)
            if args and len(args) == 2:
                return {k: self._convert_field(args[1], v) for k, v in value.items()}
            return value

        if hasattr(field_type, "__dataclass_fields__"):
            if isinstance(value, dict):
                kwargs = {}
                for f in fields(field_type):
                    if f.name in value:
                        kwargs[f.name] = self._convert_field(f.type, value[f.name])
                return field_type(**kwargs)
            return value

        if isinstance(field_type, type) and issubclass(field_type, Enum):
            if isinstance(value, str):
                return field_type(value)
            return value

        if field_type is float and isinstance(value, int):
            return float(value)

        return value


# Convenience singleton
_default_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get default config loader singleton."""
    global _default_loader  # noqa: PLW0603
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def load_config(path: str | Path | None = None) -> BlockbenchMCPConfig:
    """Convenience function to load config.

    Args:
        path: Optional path to config file

    Returns:
        Loaded BlockbenchMCPConfig instance
    """
    return get_config_loader().load(path)
