"""blockbench-mcp application - orchestrator for all components.

Initializes the config, logger, telemetry, host, tool registry and MCP
frontend and wires them together.
"""

import os
import sys
from typing import Any, TextIO

from blockbench_mcp.config import BlockbenchMCPConfig, ConfigLoader
from blockbench_mcp.errors import ErrorFactory, ErrorRegistry
from blockbench_mcp.host import BridgeHost, HostService, InMemoryHost
from blockbench_mcp.logging import BBLogger, LogConfig
from blockbench_mcp.mcp_frontend import MCPFrontend, MCPServerConfig
from blockbench_mcp.registry import ToolRegistry
from blockbench_mcp.telemetry import setup_telemetry
from blockbench_mcp.tools import register_all
from blockbench_mcp.types import HostType, LogLevel


class BlockbenchApplication:
    """
    blockbench-mcp application orchestrator.

    Initialization sequence:

    1. Config loading
    2. Logger setup
    3. Telemetry setup
    4. Error registry
    5. Host service (in-memory or bridge)
    6. Tool registry (all tools registered against the host)
    7. MCP frontend (stdio server)
    """

    def __init__(
        self,
        config_path: str | None = None,
        log_output: TextIO | None = None,
        host_type: HostType | None = None,
        bridge_url: str | None = None,
        config: BlockbenchMCPConfig | None = None,
        host: HostService | None = None,
    ):
        """Initialize application.

        Args:
            config_path: Path to config file (optional)
            log_output: Output stream for logs (default: sys.stderr)
            host_type: Overrides host.type from the config
            bridge_url: Overrides host.url from the config
            config: Ready-made config, skips file loading
            host: Ready-made host service, skips host construction
        """
        self._config_path = config_path
        self._log_output = log_output or sys.stderr
        self._host_type = host_type
        self._bridge_url = bridge_url
        self._initialized = False

        # Components (initialized in initialize())
        self.config_loader: ConfigLoader | None = None
        self.config: BlockbenchMCPConfig | None = config
        self.logger: BBLogger | None = None
        self.error_registry: ErrorRegistry | None = None
        self.error_factory: ErrorFactory | None = None
        self.host: HostService | None = host
        self.tool_registry: ToolRegistry | None = None
        self.mcp_frontend: MCPFrontend | None = None
        self.telemetry: dict[str, Any] | None = None

    async def initialize(self) -> None:
        """Initialize all components."""
        if self._initialized:
            return

        # 1. Config
        if self.config is None:
            self.config_loader = ConfigLoader()
            self.config = self.config_loader.load(self._config_path)
        config = self.config

        if self._host_type is not None:
            config.host.type = self._host_type
        if self._bridge_url:
            config.host.url = self._bridge_url

        # 2. Logger
        log_config = LogConfig(
            level=config.logging.level,
            format=config.logging.format,
            show_params=config.logging.options.show_params,
            show_results=config.logging.options.show_results,
            truncate_at=config.logging.options.truncate_at,
            components={
                "registry": config.logging.components.registry,
                "tool": config.logging.components.tool,
                "resolver": config.logging.components.resolver,
                "host": config.logging.components.host,
                "frontend": config.logging.components.frontend,
            },
            output=self._log_output,
        )
        self.logger = BBLogger(log_config)
        if self.config_loader:
            self.config_loader._logger = self.logger

        # 3. Telemetry
        if os.environ.get("BBMCP_TELEMETRY_ENABLED", "").lower() == "true":
            config.telemetry.enabled = True
        self.telemetry = setup_telemetry(config.telemetry)

        # 4. Error Registry & Factory
        self.error_registry = ErrorRegistry()
        self.error_factory = ErrorFactory(self.error_registry)

        # 5. Host
        if self.host is None:
            self.host = self._create_host()
        self.logger._log(
            LogLevel.INFO,
            "host",
            "Host service ready",
            {"type": config.host.type.value},
        )

        # 6. Tool Registry
        self.tool_registry = ToolRegistry(
            logger=self.logger,
            enabled_statuses=config.tools.enabled_statuses,
            error_factory=self.error_factory,
        )
        await register_all(self.tool_registry, self.host, config.tools, self.logger)

        # 7. MCP Frontend
        self.mcp_frontend = MCPFrontend(
            self.tool_registry,
            config=MCPServerConfig(name=config.mcp.name, version=config.mcp.version),
            logger=self.logger,
        )

        self._initialized = True

    def _create_host(self) -> HostService:
        assert self.config is not None
        host_config = self.config.host
        if host_config.type == HostType.BRIDGE:
            return BridgeHost(
                url=host_config.url,
                timeout=host_config.timeout,
                logger=self.logger,
            )
        return InMemoryHost(include_optifine=host_config.include_optifine, logger=self.logger)

    async def shutdown(self) -> None:
        """Shutdown all components."""
        if not self._initialized:
            return

        if self.mcp_frontend:
            await self.mcp_frontend.stop()
        if self.host:
            await self.host.aclose()

        self._initialized = False

    async def start(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        """Initialize (if needed) and serve MCP on stdio until EOF."""
        if not self._initialized:
            await self.initialize()

        assert self.mcp_frontend is not None
        try:
            await self.mcp_frontend.start(stdin, stdout)
        finally:
            await self.shutdown()
