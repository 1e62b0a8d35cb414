"""Unit tests for the project lifecycle tools."""

import json
from pathlib import Path

import pytest

from blockbench_mcp.errors import ToolExecutionError, ValidationError
from blockbench_mcp.host import InMemoryHost
from blockbench_mcp.registry import ToolRegistry
from blockbench_mcp.tools.project import create_project_arguments, parse_index


async def open_three(registry: ToolRegistry) -> list[str]:
    """Create three projects and return their UUIDs in tab order."""
    for name in ("one", "two", "three"):
        await registry.invoke("create_project", {"name": name})
    listing = await registry.invoke("list_open_projects", {})
    lines = [line for line in listing.splitlines() if "UUID: " in line]
    return [line.split("UUID: ")[1].split(",")[0] for line in lines]


class TestCreateProject:
    """Tests for create_project."""

    @pytest.mark.asyncio
    async def test_default_format(self, registry: ToolRegistry, memory_host: InMemoryHost):
        result = await registry.invoke("create_project", {"name": "pig"})
        active = await memory_host.get_active_project()
        assert result == (
            f'Created project with name "pig" (UUID: {active.uuid}) and format "bedrock_block".'
        )
        assert active.name == "pig"

    @pytest.mark.asyncio
    async def test_format_enum_is_enforced(self, registry: ToolRegistry):
        with pytest.raises(ValidationError) as exc_info:
            await registry.invoke("create_project", {"name": "pig", "format": "voxel"})
        assert exc_info.value.issues[0].path == "format"

    @pytest.mark.asyncio
    async def test_schema_lists_host_formats(self, registry: ToolRegistry):
        schema = registry.get("create_project").input_schema
        assert schema["properties"]["format"]["enum"][:2] == ["free", "bedrock"]
        assert schema["properties"]["format"]["default"] == "bedrock_block"
        assert schema["required"] == ["name"]

    def test_unknown_default_falls_back_to_first(self):
        model = create_project_arguments(["free", "bedrock"], "bedrock_block")
        assert model(name="x").format == "free"


class TestParseIndex:
    @pytest.mark.parametrize(
        ("identifier", "count", "expected"),
        [("1", 3, 1), (" 3 ", 3, 3), ("0", 3, None), ("4", 3, None), ("abc", 3, None)],
    )
    def test_parse(self, identifier, count, expected):
        assert parse_index(identifier, count) == expected


class TestListOpenProjects:
    """Tests for list_open_projects."""

    @pytest.mark.asyncio
    async def test_empty(self, registry: ToolRegistry):
        assert await registry.invoke("list_open_projects", {}) == "No projects are currently open."

    @pytest.mark.asyncio
    async def test_marks_active(self, registry: ToolRegistry):
        uuids = await open_three(registry)
        listing = await registry.invoke("list_open_projects", {})
        lines = listing.splitlines()
        assert lines[0] == "# Open Projects (3)"
        assert lines[2] == f"1.   one (UUID: {uuids[0]}, Format: bedrock_block)"
        assert lines[4] == f"3. → three (UUID: {uuids[2]}, Format: bedrock_block)"


class TestSwitchProject:
    """Tests for switch_project."""

    @pytest.mark.asyncio
    async def test_by_index(self, registry: ToolRegistry, memory_host: InMemoryHost):
        uuids = await open_three(registry)
        result = await registry.invoke("switch_project", {"identifier": "1"})
        assert result == f"Switched to project: one (UUID: {uuids[0]})"
        assert (await memory_host.get_active_project()).uuid == uuids[0]

    @pytest.mark.asyncio
    async def test_by_uuid(self, registry: ToolRegistry, memory_host: InMemoryHost):
        uuids = await open_three(registry)
        await registry.invoke("switch_project", {"identifier": uuids[1]})
        assert (await memory_host.get_active_project()).uuid == uuids[1]

    @pytest.mark.asyncio
    async def test_unknown_target_changes_nothing(
        self, registry: ToolRegistry, memory_host: InMemoryHost
    ):
        uuids = await open_three(registry)
        for identifier in ("0", "4", "not-a-uuid"):
            with pytest.raises(ToolExecutionError) as exc_info:
                await registry.invoke("switch_project", {"identifier": identifier})
            assert exc_info.value.message.startswith(f"Project not found: {identifier}.")
        assert (await memory_host.get_active_project()).uuid == uuids[2]

    @pytest.mark.asyncio
    async def test_nothing_open(self, registry: ToolRegistry):
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.invoke("switch_project", {"identifier": "1"})
        assert exc_info.value.message == "No projects are currently open."


class TestCloseProject:
    """Tests for close_project."""

    @pytest.mark.asyncio
    async def test_close_active(self, registry: ToolRegistry, memory_host: InMemoryHost):
        uuids = await open_three(registry)
        result = await registry.invoke("close_project", {})
        assert result == f"Closed project: three (UUID: {uuids[2]})"
        assert len(await memory_host.list_open_projects()) == 2

    @pytest.mark.asyncio
    async def test_close_by_uuid(self, registry: ToolRegistry, memory_host: InMemoryHost):
        uuids = await open_three(registry)
        await registry.invoke("close_project", {"uuid": uuids[0]})
        remaining = [p.uuid for p in await memory_host.list_open_projects()]
        assert remaining == uuids[1:]

    @pytest.mark.asyncio
    async def test_unknown_uuid(self, registry: ToolRegistry, memory_host: InMemoryHost):
        await open_three(registry)
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.invoke("close_project", {"uuid": "missing"})
        assert exc_info.value.cause.code == "PROJECT_NOT_FOUND"
        assert len(await memory_host.list_open_projects()) == 3

    @pytest.mark.asyncio
    async def test_unsaved_needs_force(self, registry: ToolRegistry, memory_host: InMemoryHost):
        await registry.invoke("create_project", {"name": "draft", "format": "java_block"})
        await registry.invoke("convert_format", {"format": "bedrock"})
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.invoke("close_project", {})
        assert exc_info.value.cause.code == "PROJECT_CLOSE_REFUSED"
        await registry.invoke("close_project", {"force": True})
        assert await memory_host.list_open_projects() == []

    @pytest.mark.asyncio
    async def test_nothing_open(self, registry: ToolRegistry):
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.invoke("close_project", {})
        assert exc_info.value.cause.code == "NO_PROJECTS_OPEN"


class TestOpenProject:
    """Tests for open_project."""

    @pytest.mark.asyncio
    async def test_open_geo_json(
        self, registry: ToolRegistry, memory_host: InMemoryHost, tmp_path: Path
    ):
        path = tmp_path / "pig.geo.json"
        path.write_text(json.dumps({"format_version": "1.12.0", "minecraft:geometry": []}))
        result = await registry.invoke("open_project", {"path": str(path)})
        active = await memory_host.get_active_project()
        assert result == f"Opened project: {path} (UUID: {active.uuid})"
        assert active.format_id == "bedrock"
        assert active.name == "pig"

    @pytest.mark.asyncio
    async def test_native_project_with_unknown_tag(
        self, registry: ToolRegistry, memory_host: InMemoryHost, tmp_path: Path
    ):
        path = tmp_path / "robot.bbmodel"
        path.write_text(json.dumps({"meta": {"model_format": "mystery"}, "name": "Robot"}))
        await registry.invoke("open_project", {"path": str(path)})
        active = await memory_host.get_active_project()
        assert active.format_id == "free"
        assert active.name == "Robot"

    @pytest.mark.asyncio
    async def test_missing_file(self, registry: ToolRegistry, tmp_path: Path):
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.invoke("open_project", {"path": str(tmp_path / "nope.json")})
        assert exc_info.value.cause.code == "FILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_directory_is_not_a_file(
        self, registry: ToolRegistry, memory_host: InMemoryHost, tmp_path: Path
    ):
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.invoke("open_project", {"path": str(tmp_path)})
        assert exc_info.value.cause.code == "FILE_NOT_FOUND"
        assert await memory_host.list_open_projects() == []

    @pytest.mark.asyncio
    async def test_unreadable_file(
        self, registry: ToolRegistry, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        path = tmp_path / "locked.json"
        path.write_text("{}")

        def deny(_path: str) -> str:
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("blockbench_mcp.tools.batch.read_text", deny)
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.invoke("open_project", {"path": str(path)})
        assert exc_info.value.cause.code == "FILE_READ_FAILED"
        assert exc_info.value.message == f"Failed to read file: {path}"

    @pytest.mark.asyncio
    async def test_invalid_json(self, registry: ToolRegistry, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{")
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.invoke("open_project", {"path": str(path)})
        assert exc_info.value.cause.code == "FILE_PARSE_FAILED"

    @pytest.mark.asyncio
    async def test_optifine_without_codec(self, tmp_path: Path):
        from blockbench_mcp.tools import register_all

        host = InMemoryHost(include_optifine=False)
        registry = ToolRegistry()
        await register_all(registry, host)
        path = tmp_path / "creeper.jem"
        path.write_text("{}")
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.invoke("open_project", {"path": str(path)})
        assert exc_info.value.cause.code == "CAPABILITY_UNAVAILABLE"
        assert await host.list_open_projects() == []
