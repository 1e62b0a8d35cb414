"""Tools - the Blockbench operations exposed to agents."""

from blockbench_mcp.config import ToolsConfig
from blockbench_mcp.host import HostService
from blockbench_mcp.logging import BBLogger
from blockbench_mcp.registry import ToolRegistry

from .batch import BatchFailure, BatchOpener, BatchReport, open_file
from .export import format_listing, normalize_export_path, register_export_tools
from .project import PROJECT_EXTENSIONS, format_project_list, register_project_tools


async def register_all(
    registry: ToolRegistry,
    host: HostService,
    config: ToolsConfig | None = None,
    logger: BBLogger | None = None,
) -> None:
    """Register every tool against one host.

    The create_project enum is read from the host's formats, so this runs
    once the host is reachable.
    """
    config = config or ToolsConfig()
    format_ids = [f.id for f in await host.list_formats()]
    register_export_tools(registry, host, logger)
    register_project_tools(
        registry,
        host,
        format_ids,
        default_format=config.default_format,
        project_extensions=config.project_extensions,
        logger=logger,
    )


__all__ = [
    "register_all",
    "register_export_tools",
    "register_project_tools",
    "BatchOpener",
    "BatchReport",
    "BatchFailure",
    "open_file",
    "normalize_export_path",
    "format_listing",
    "format_project_list",
    "PROJECT_EXTENSIONS",
]
