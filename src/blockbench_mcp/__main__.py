"""Command line entry point: ``blockbench-mcp`` / ``python -m blockbench_mcp``."""

import argparse
import asyncio
import sys

from blockbench_mcp import __version__
from blockbench_mcp.application import BlockbenchApplication
from blockbench_mcp.errors import BlockbenchError, create_error
from blockbench_mcp.registry import format_tool_detail, format_tool_list
from blockbench_mcp.types import HostType


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockbench-mcp",
        description="Serve Blockbench project tools over MCP (stdio)",
    )
    parser.add_argument("--config", help="Path to a blockbench-mcp.yaml config file")
    parser.add_argument(
        "--host",
        choices=[t.value for t in HostType],
        help="Host service to drive (overrides host.type)",
    )
    parser.add_argument("--bridge-url", help="Base URL of the Blockbench bridge plugin")
    parser.add_argument(
        "--list-tools",
        action="store_true",
        help="Print the registered tools and exit",
    )
    parser.add_argument("--tool", metavar="NAME", help="Print one tool's schema and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def run(args: argparse.Namespace) -> int:
    app = BlockbenchApplication(
        config_path=args.config,
        host_type=HostType(args.host) if args.host else None,
        bridge_url=args.bridge_url,
    )

    if args.list_tools or args.tool:
        await app.initialize()
        assert app.tool_registry is not None
        try:
            if args.tool:
                tool = app.tool_registry.get(args.tool)
                if tool is None:
                    raise create_error("TOOL_NOT_FOUND", tool_name=args.tool)
                print(format_tool_detail(tool))
            else:
                print(format_tool_list(app.tool_registry.list_tools()))
        finally:
            await app.shutdown()
        return 0

    await app.start()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except BlockbenchError as e:
        print(f"blockbench-mcp: {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
