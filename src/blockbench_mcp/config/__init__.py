"""Configuration - YAML loading with environment interpolation."""

from .loader import ConfigLoader, get_config_loader, load_config, resolve_env_vars
from .models import (
    BlockbenchMCPConfig,
    HostConfig,
    LoggingComponentsConfig,
    LoggingConfig,
    LoggingOptionsConfig,
    MCPConfig,
    TelemetryConfig,
    ToolsConfig,
)

__all__ = [
    # Config models
    "BlockbenchMCPConfig",
    "MCPConfig",
    "HostConfig",
    "ToolsConfig",
    "LoggingConfig",
    "LoggingComponentsConfig",
    "LoggingOptionsConfig",
    "TelemetryConfig",
    # Loader
    "ConfigLoader",
    "get_config_loader",
    "load_config",
    "resolve_env_vars",
]
