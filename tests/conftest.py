"""
Pytest configuration and shared fixtures for blockbench-mcp tests.
"""

import json
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blockbench_mcp.host import InMemoryHost  # noqa: E402
from blockbench_mcp.registry import ToolRegistry  # noqa: E402
from blockbench_mcp.telemetry import reset_telemetry  # noqa: E402
from blockbench_mcp.tools import register_all  # noqa: E402

# =============================================================================
# Sample documents
# =============================================================================

BEDROCK_GEOMETRY: dict[str, Any] = {
    "format_version": "1.12.0",
    "minecraft:geometry": [
        {
            "description": {"identifier": "geometry.pig"},
            "bones": [{"name": "body", "pivot": [0, 13, 2]}],
        }
    ],
}

JAVA_BLOCK_MODEL: dict[str, Any] = {
    "textures": {"0": "block/stone"},
    "elements": [{"name": "cube", "from": [0, 0, 0], "to": [16, 16, 16]}],
}

NATIVE_PROJECT: dict[str, Any] = {
    "meta": {"format_version": "4.10", "model_format": "bedrock"},
    "name": "robot",
    "elements": [],
}


# =============================================================================
# Telemetry
# =============================================================================


@pytest.fixture(autouse=True)
def _isolated_telemetry() -> Generator[None, None, None]:
    """Every test starts and ends without global telemetry state."""
    reset_telemetry()
    yield
    reset_telemetry()


# =============================================================================
# Host & Registry Fixtures
# =============================================================================


@pytest.fixture
def memory_host() -> InMemoryHost:
    """Fresh in-memory host with the standard format catalog."""
    return InMemoryHost()


@pytest_asyncio.fixture
async def registry(memory_host: InMemoryHost) -> ToolRegistry:
    """Registry with every tool registered against ``memory_host``."""
    tool_registry = ToolRegistry()
    await register_all(tool_registry, memory_host)
    return tool_registry


# =============================================================================
# Filesystem Fixtures
# =============================================================================


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[..., Path]:
    """Write a JSON document (or raw text) below tmp_path and return its path."""

    def _write(relative: str, content: Any) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def model_dir(tmp_path: Path, write_json: Callable[..., Path]) -> Path:
    """Folder with two valid models, one broken file and a nested model."""
    write_json("a.geo.json", BEDROCK_GEOMETRY)
    write_json("b.json", JAVA_BLOCK_MODEL)
    write_json("broken.json", "{not json")
    write_json("notes.txt", "ignored")
    write_json("nested/c.bbmodel", NATIVE_PROJECT)
    return tmp_path


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "frontend: MCP frontend tests")
