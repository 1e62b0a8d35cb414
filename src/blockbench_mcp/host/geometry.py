"""Geometry output returned by codec compilation.

A codec may hand back either JSON text or an already-built JSON value. The
raw result is normalized once, when it crosses the host boundary, so tools
only ever deal with the two tagged variants below.
"""

import json
from dataclasses import dataclass
from typing import Any

from blockbench_mcp.errors import create_error


@dataclass(frozen=True)
class GeometryText:
    """Geometry serialized as JSON text by the codec."""

    text: str

    def render(self, pretty: bool = True) -> str:
        if not pretty:
            return self.text
        try:
            value = json.loads(self.text)
        except json.JSONDecodeError as e:
            raise create_error(
                "COMPILE_FAILED",
                detail=f"Codec produced invalid JSON: {e}",
            ) from e
        return json.dumps(value, indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class GeometryStructured:
    """Geometry as a JSON-compatible value (dict or list)."""

    value: dict[str, Any] | list[Any]

    def render(self, pretty: bool = True) -> str:
        try:
            if pretty:
                return json.dumps(self.value, indent=2, ensure_ascii=False)
            return json.dumps(self.value, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise create_error(
                "COMPILE_FAILED",
                detail=f"Codec produced a value that is not JSON-serializable: {e}",
            ) from e


GeometryOutput = GeometryText | GeometryStructured


def normalize_geometry(raw: Any) -> GeometryOutput:
    """Tag a raw compile result.

    Args:
        raw: Whatever the codec returned

    Returns:
        GeometryText for strings, GeometryStructured for dicts and lists

    Raises:
        ProjectStateError: COMPILE_FAILED when the result is empty or not JSON-shaped
    """
    if not raw:
        raise create_error("COMPILE_FAILED")
    if isinstance(raw, str):
        return GeometryText(raw)
    if isinstance(raw, dict | list):
        return GeometryStructured(raw)
    raise create_error(
        "COMPILE_FAILED",
        detail=f"Codec returned unsupported type {type(raw).__name__}",
    )
