"""stdio I/O helpers for the MCP protocol (one JSON object per line)."""

import asyncio
import json
import sys
from typing import Any, TextIO


async def read_line(stream: TextIO | None = None) -> str:
    """Read one line from stdin without blocking the event loop.

    Returns:
        The raw line, "" at EOF
    """
    stream = stream or sys.stdin
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, stream.readline)


async def write_message(message: dict[str, Any], stream: TextIO | None = None) -> bool:
    """Write a JSON-RPC message to stdout.

    Args:
        message: JSON-RPC message to write
        stream: Output stream (defaults to stdout)

    Returns:
        False when the client has gone away
    """
    stream = stream or sys.stdout
    loop = asyncio.get_running_loop()
    line = json.dumps(message, ensure_ascii=False) + "\n"

    try:
        await loop.run_in_executor(None, stream.write, line)
        await loop.run_in_executor(None, stream.flush)
    except (BrokenPipeError, ValueError):
        # Client closed the pipe; ValueError means the stream itself is closed
        return False
    return True
