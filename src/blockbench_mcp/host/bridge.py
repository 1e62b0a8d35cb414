"""HTTP bridge host - drives a running Blockbench through its bridge plugin.

The plugin listens on ``{url}/rpc`` and accepts ``{"method", "params"}``
JSON bodies. Replies carry either ``result`` or ``error``.
"""

from typing import Any

import httpx

from blockbench_mcp.errors import create_error

from .base import Codec, FormatInfo, HostService, ProjectInfo
from .geometry import GeometryOutput, normalize_geometry


class BridgeCodec(Codec):
    """Codec proxy; compile and parse run inside the editor."""

    def __init__(self, codec_id: str, host: "BridgeHost"):
        self.id = codec_id
        self._host = host

    async def compile(self) -> GeometryOutput:
        raw = await self._host.call("codec.compile", {"codec": self.id})
        return normalize_geometry(raw)

    async def parse(self, content: Any, path: str) -> None:
        await self._host.call("codec.parse", {"codec": self.id, "content": content, "path": path})


class BridgeHost(HostService):
    """HostService backed by the Blockbench bridge plugin."""

    def __init__(
        self,
        url: str = "http://127.0.0.1:8765",
        timeout: float = 10.0,
        logger: Any = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize bridge host.

        Args:
            url: Base URL of the bridge plugin
            timeout: Per-request timeout in seconds
            logger: Optional BBLogger instance
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.url = url.rstrip("/")
        self.timeout = timeout
        self._logger = logger
        self._client = httpx.AsyncClient(base_url=self.url, timeout=timeout, transport=transport)

    async def call(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """Invoke a bridge method.

        Args:
            method: Bridge method name, e.g. ``projects.list``
            params: Method parameters

        Returns:
            The ``result`` member of the reply

        Raises:
            HostUnavailableError: HOST_UNAVAILABLE, HOST_TIMEOUT or HOST_ERROR
        """
        if self._logger:
            self._logger.debug("host", f"Bridge call {method}", method=method)
        try:
            response = await self._client.post(
                "/rpc", json={"method": method, "params": params or {}}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise create_error("HOST_TIMEOUT", timeout_seconds=self.timeout) from e
        except httpx.HTTPStatusError as e:
            raise create_error(
                "HOST_ERROR", reason=f"HTTP {e.response.status_code} for {method}"
            ) from e
        except httpx.TransportError as e:
            raise create_error("HOST_UNAVAILABLE", url=self.url, detail=str(e)) from e
        except ValueError as e:
            raise create_error("HOST_ERROR", reason=f"Malformed reply to {method}") from e

        if not isinstance(payload, dict):
            raise create_error("HOST_ERROR", reason=f"Malformed reply to {method}")
        if payload.get("error") is not None:
            error = payload["error"]
            reason = error.get("message") if isinstance(error, dict) else str(error)
            raise create_error("HOST_ERROR", reason=reason or method)
        return payload.get("result")

    async def get_active_project(self) -> ProjectInfo | None:
        result = await self.call("projects.active")
        return ProjectInfo.from_dict(result) if result else None

    async def list_open_projects(self) -> list[ProjectInfo]:
        return [ProjectInfo.from_dict(p) for p in await self.call("projects.list") or []]

    async def list_formats(self) -> list[FormatInfo]:
        return [FormatInfo.from_dict(f) for f in await self.call("formats.list") or []]

    async def get_format(self, format_id: str) -> FormatInfo | None:
        for format_info in await self.list_formats():
            if format_info.id == format_id:
                return format_info
        return None

    async def list_codecs(self) -> list[str]:
        return list(await self.call("codecs.list") or [])

    async def get_codec(self, codec_id: str) -> Codec | None:
        if codec_id in await self.list_codecs():
            return BridgeCodec(codec_id, self)
        return None

    async def new_project(self, format_id: str) -> ProjectInfo:
        return ProjectInfo.from_dict(await self.call("projects.new", {"format": format_id}))

    async def rename_project(self, uuid: str, name: str) -> None:
        await self.call("projects.rename", {"uuid": uuid, "name": name})

    async def select_project(self, uuid: str) -> None:
        await self.call("projects.select", {"uuid": uuid})

    async def close_project(self, uuid: str, force: bool = False) -> bool:
        return bool(await self.call("projects.close", {"uuid": uuid, "force": force}))

    async def convert_project(self, format_id: str) -> None:
        await self.call("projects.convert", {"format": format_id})

    async def aclose(self) -> None:
        await self._client.aclose()
