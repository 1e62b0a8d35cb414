"""blockbench-mcp configuration data models."""

from dataclasses import dataclass, field

from blockbench_mcp import __version__
from blockbench_mcp.types import HostType, LogFormat, LogLevel, MCPTransport, ToolStatus


@dataclass
class MCPConfig:
    """MCP frontend configuration."""

    name: str = "blockbench-mcp"
    version: str = __version__
    transport: MCPTransport = MCPTransport.STDIO


@dataclass
class HostConfig:
    """Host service configuration.

    ``memory`` runs against the built-in simulated editor. ``bridge`` talks
    to a running Blockbench instance through its bridge plugin.
    """

    type: HostType = HostType.MEMORY
    url: str = "http://127.0.0.1:8765"
    timeout: float = 10.0
    include_optifine: bool = True


@dataclass
class ToolsConfig:
    """Tools configuration."""

    project_extensions: list[str] = field(
        default_factory=lambda: [".bbmodel", ".json", ".geo.json", ".mcmodel", ".jem", ".jpm"]
    )
    default_format: str = "bedrock_block"
    enabled_statuses: list[ToolStatus] = field(
        default_factory=lambda: [ToolStatus.STABLE, ToolStatus.EXPERIMENTAL]
    )


@dataclass
class LoggingComponentsConfig:
    """Logging components configuration."""

    registry: bool = True
    tool: bool = True
    resolver: bool = True
    host: bool = True
    frontend: bool = True


@dataclass
class LoggingOptionsConfig:
    """Logging options configuration."""

    show_params: bool = True
    show_results: bool = True
    truncate_at: int = 200


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    components: LoggingComponentsConfig = field(default_factory=LoggingComponentsConfig)
    options: LoggingOptionsConfig = field(default_factory=LoggingOptionsConfig)


@dataclass
class TelemetryConfig:
    """Telemetry configuration (OpenTelemetry).

    Attributes:
        enabled: Master switch, everything is a no-op when False
        service_name: Resource service name
        metrics_enabled: Record tool invocation metrics
        traces_enabled: Record a span per tool invocation
    """

    enabled: bool = False
    service_name: str = "blockbench-mcp"
    metrics_enabled: bool = True
    traces_enabled: bool = False


@dataclass
class BlockbenchMCPConfig:
    """Root configuration object."""

    mcp: MCPConfig = field(default_factory=MCPConfig)
    host: HostConfig = field(default_factory=HostConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
