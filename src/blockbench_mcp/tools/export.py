"""Export and format tools: geometry output, conversion, format catalog."""

import asyncio
import json
import os

from pydantic import Field

from blockbench_mcp.errors import create_error
from blockbench_mcp.host import BEDROCK_CODEC, FormatInfo, HostService, ProjectInfo
from blockbench_mcp.host.geometry import GeometryOutput
from blockbench_mcp.logging import BBLogger
from blockbench_mcp.registry import (
    NoArguments,
    ToolAnnotations,
    ToolArguments,
    ToolDescriptor,
    ToolRegistry,
)

GEO_JSON = ".geo.json"


class ToGeoJsonArguments(ToolArguments):
    pretty: bool = Field(
        True, description="Whether to format the JSON with indentation for readability."
    )


class ExportGeoJsonArguments(ToolArguments):
    path: str = Field(
        description=(
            "The file path where the .geo.json file should be saved. "
            "Should end with .geo.json extension."
        )
    )
    pretty: bool = Field(
        True, description="Whether to format the JSON with indentation for readability."
    )


class ConvertFormatArguments(ToolArguments):
    format: str = Field(
        "bedrock",
        description=(
            "The target format ID to convert to. "
            "Use 'list_formats' tool to see all available format IDs."
        ),
    )


def normalize_export_path(path: str) -> str:
    """Make sure an export path ends with ``.geo.json``.

    ``model.geo.json`` is kept, ``model.json`` becomes ``model.geo.json`` and
    anything else gets the suffix appended.
    """
    if path.endswith(GEO_JSON):
        return path
    if path.endswith(".json"):
        return path[: -len(".json")] + GEO_JSON
    return f"{path}{GEO_JSON}"


def write_text(path: str, text: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def format_listing(formats: list[FormatInfo]) -> str:
    """Markdown catalog of formats, sorted by category then name."""
    ordered = sorted(formats, key=lambda f: (f.category.casefold(), f.name.casefold()))
    entries = []
    for f in ordered:
        lines = [
            f"- **{f.name}** (id: `{f.id}`)",
            f"  Category: {f.category}",
            f"  Target: {', '.join(f.target) or 'N/A'}",
        ]
        if f.description:
            lines.append(f"  Description: {f.description}")
        lines.append(f"  Can convert to: {'Yes' if f.can_convert_to else 'No'}")
        entries.append("\n".join(lines))
    return "# Available Blockbench Formats\n\n" + "\n\n".join(entries)


async def require_active_project(host: HostService) -> ProjectInfo:
    project = await host.get_active_project()
    if project is None:
        raise create_error("NO_ACTIVE_PROJECT")
    return project


def register_export_tools(
    registry: ToolRegistry,
    host: HostService,
    logger: BBLogger | None = None,
) -> None:
    """Register to_geo_json, export_geo_json, convert_format, list_formats, get_current_format."""

    async def compile_bedrock(tool_name: str) -> tuple[GeometryOutput, str | None]:
        project = await require_active_project(host)
        codec = await host.get_codec(BEDROCK_CODEC)
        if codec is None:
            raise create_error("CAPABILITY_UNAVAILABLE", capability="Bedrock codec")

        warning = None
        current = await host.get_format(project.format_id) if project.format_id else None
        if current is None or not current.is_bedrock_compatible:
            warning = (
                f'Project format "{project.format_id or "unknown"}" is not Bedrock-compatible; '
                "the compiled geometry may be incomplete."
            )
            if logger:
                logger.tool(tool_name).warning(warning)

        return await codec.compile(), warning

    async def to_geo_json(args: ToGeoJsonArguments) -> str:
        # Warning is logged only; the result must stay plain JSON
        geometry, _ = await compile_bedrock("to_geo_json")
        return geometry.render(args.pretty)

    async def export_geo_json(args: ExportGeoJsonArguments) -> str:
        geometry, warning = await compile_bedrock("export_geo_json")
        text = geometry.render(args.pretty)
        file_path = normalize_export_path(args.path)
        try:
            await asyncio.to_thread(write_text, file_path, text)
        except OSError as e:
            raise create_error("FILE_WRITE_FAILED", path=file_path, detail=str(e)) from e

        result = f"Successfully exported model to: {file_path}"
        if warning:
            result += f"\nWarning: {warning}"
        return result

    async def convert_format(args: ConvertFormatArguments) -> str:
        project = await require_active_project(host)
        if await host.get_format(args.format) is None:
            available = ", ".join(f.id for f in await host.list_formats())
            raise create_error("FORMAT_NOT_FOUND", format_id=args.format, available=available)

        previous = project.format_id or "unknown"
        await host.convert_project(args.format)
        return f'Successfully converted project from "{previous}" to "{args.format}" format.'

    async def list_formats(args: NoArguments) -> str:
        return format_listing(await host.list_formats())

    async def get_current_format(args: NoArguments) -> str:
        project = await require_active_project(host)
        current = await host.get_format(project.format_id) if project.format_id else None
        if current is None:
            raise create_error("PROJECT_FORMAT_UNSET")
        return json.dumps(current.capabilities(), indent=2, ensure_ascii=False)

    registry.register(
        ToolDescriptor(
            name="to_geo_json",
            description=(
                "Converts the current model to Minecraft Bedrock geometry JSON format "
                "(.geo.json) and returns the JSON string. The model must be in a "
                "Bedrock-compatible format."
            ),
            input_model=ToGeoJsonArguments,
            handler=to_geo_json,
            annotations=ToolAnnotations(title="Convert to GeoJSON", read_only=True),
        )
    )
    registry.register(
        ToolDescriptor(
            name="export_geo_json",
            description=(
                "Exports the current model to a Minecraft Bedrock geometry JSON file "
                "(.geo.json) at the specified path. The model must be in a "
                "Bedrock-compatible format."
            ),
            input_model=ExportGeoJsonArguments,
            handler=export_geo_json,
            annotations=ToolAnnotations(title="Export GeoJSON File", open_world=True),
        )
    )
    registry.register(
        ToolDescriptor(
            name="convert_format",
            description=(
                "Converts the current project to a different Blockbench format. This is "
                "useful for converting between Java, Bedrock, and other model formats "
                "before exporting. Use 'list_formats' tool to see all available formats."
            ),
            input_model=ConvertFormatArguments,
            handler=convert_format,
            annotations=ToolAnnotations(title="Convert Format", destructive=True),
        )
    )
    registry.register(
        ToolDescriptor(
            name="list_formats",
            description=(
                "Lists all available Blockbench formats that can be used for creating or "
                "converting projects. Returns format IDs, names, descriptions, and "
                "capabilities."
            ),
            input_model=NoArguments,
            handler=list_formats,
            annotations=ToolAnnotations(title="List Formats", read_only=True),
        )
    )
    registry.register(
        ToolDescriptor(
            name="get_current_format",
            description=(
                "Gets information about the current project's format, including its ID, "
                "name, and capabilities."
            ),
            input_model=NoArguments,
            handler=get_current_format,
            annotations=ToolAnnotations(title="Get Current Format", read_only=True),
        )
    )
