"""MCP Frontend - serves the tool registry over JSON-RPC 2.0 on stdio."""

import json
from typing import Any, TextIO

from blockbench_mcp.errors import (
    BlockbenchError,
    ToolExecutionError,
    ToolUnavailableError,
    UnknownToolError,
    ValidationError,
    create_error,
)
from blockbench_mcp.logging import BBLogger
from blockbench_mcp.registry import ToolRegistry
from blockbench_mcp.types import LogLevel

from .stdio import read_line, write_message
from .types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PROTOCOL_VERSION,
    MCPServerConfig,
)


class MCPFrontend:
    """
    blockbench-mcp as MCP server.

    Exposes every enabled tool of the registry.
    Transport: stdio, one JSON-RPC message per line.
    """

    def __init__(
        self,
        tool_registry: ToolRegistry,
        config: MCPServerConfig | None = None,
        logger: BBLogger | None = None,
    ):
        """Initialize MCP frontend.

        Args:
            tool_registry: Registry whose tools are served
            config: Server identity
            logger: Logger instance
        """
        self._tool_registry = tool_registry
        self._config = config or MCPServerConfig()
        self._logger = logger
        self._running = False

    def _log(self, level: LogLevel, message: str, **context: Any) -> None:
        if self._logger:
            self._logger._log(level, "frontend", message, context or None)

    async def start(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        """Serve until EOF on stdin or stop()."""
        self._running = True
        self._log(LogLevel.INFO, f"MCP server '{self._config.name}' listening on stdio")

        while self._running:
            line = await read_line(stdin)
            if not line:
                break
            if not line.strip():
                continue

            response = await self.handle_line(line)
            if response and not await write_message(response, stdout):
                break

        self._running = False
        self._log(LogLevel.INFO, "MCP server stopped")

    async def stop(self) -> None:
        """Stop MCP server after the current message."""
        self._running = False

    async def handle_line(self, line: str) -> dict[str, Any] | None:
        """Parse one raw line and dispatch it.

        Args:
            line: Raw JSON text

        Returns:
            JSON-RPC response or None (None for notifications)
        """
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            return self._error_response(None, PARSE_ERROR, "Parse error: Invalid JSON")

        if not isinstance(message, dict):
            return self._error_response(None, INVALID_REQUEST, "Invalid Request")
        return await self.handle_message(message)

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """Route message to appropriate handler.

        Args:
            message: JSON-RPC message

        Returns:
            JSON-RPC response or None (None for notifications)
        """
        method = message.get("method")
        msg_id = message.get("id")
        params = message.get("params")
        if params is None:
            params = {}

        # JSON-RPC 2.0: Notifications (no id) never receive a response
        is_notification = "id" not in message

        try:
            if not isinstance(params, dict):
                raise create_error("PARAM_INVALID", message="params must be an object")
            if method == "initialize":
                result = self._handle_initialize(params)
            elif method == "tools/list":
                result = {"tools": self._tool_registry.get_for_mcp_exposure()}
            elif method == "tools/call":
                result = await self._handle_tools_call(params)
            elif method == "ping":
                result = {}
            elif isinstance(method, str) and method.startswith("notifications/"):
                return None
            else:
                if is_notification:
                    return None
                return self._error_response(
                    msg_id, METHOD_NOT_FOUND, f"Method not found: {method}"
                )

            if is_notification:
                return None
            return self._success_response(msg_id, result)

        except (UnknownToolError, ToolUnavailableError, ValidationError) as e:
            if is_notification:
                return None
            return self._error_response(msg_id, INVALID_PARAMS, e.message, e.to_dict())
        except BlockbenchError as e:
            if is_notification:
                return None
            return self._error_response(msg_id, INTERNAL_ERROR, e.message, e.to_dict())
        except Exception as e:
            self._log(LogLevel.ERROR, f"Unhandled error in {method}", error=repr(e))
            if is_notification:
                return None
            return self._error_response(msg_id, INTERNAL_ERROR, f"Internal error: {e}")

    def _handle_initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        client = params.get("clientInfo")
        name = client.get("name", "unknown") if isinstance(client, dict) else "unknown"
        self._log(LogLevel.INFO, "Client initialized", client=name)
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": {
                "name": self._config.name,
                "version": self._config.version,
            },
            "capabilities": {
                "tools": {"listChanged": False},
            },
        }

    async def _handle_tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle tools/call request.

        Tool failures are returned as ``isError`` content so the agent can
        read the message; protocol-level problems raise.

        Args:
            params: Call parameters

        Returns:
            MCP tool call result
        """
        name = params.get("name")
        arguments = params.get("arguments")

        if not name or not isinstance(name, str):
            raise create_error("PARAM_INVALID", message="Tool name is required")

        try:
            text = await self._tool_registry.invoke(name, arguments)
        except (ToolExecutionError, ValidationError) as e:
            message = f"{e.message}: {e.detail}" if e.issues and e.detail else e.message
            return {
                "content": [{"type": "text", "text": message}],
                "isError": True,
                "structuredContent": e.to_dict(),
            }

        return {
            "content": [{"type": "text", "text": text}],
            "isError": False,
        }

    def _success_response(self, msg_id: Any, result: Any) -> dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": msg_id,
            "result": result,
        }

    def _error_response(
        self,
        msg_id: Any,
        code: int,
        message: str,
        data: Any = None,
    ) -> dict[str, Any]:
        """Build error response.

        Args:
            msg_id: Message ID
            code: JSON-RPC error code
            message: Error message
            data: Additional error data

        Returns:
            JSON-RPC error response
        """
        error: dict[str, Any] = {"code": code, "message": message}
        if data:
            error["data"] = data
        return {
            "jsonrpc": "2.0",
            "id": msg_id,
            "error": error,
        }
