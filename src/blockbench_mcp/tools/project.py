"""Project tools: create, open, list, switch and close editor projects."""

import asyncio
from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, Field, create_model

from blockbench_mcp.errors import create_error
from blockbench_mcp.host import HostService, ProjectInfo
from blockbench_mcp.logging import BBLogger
from blockbench_mcp.registry import (
    NoArguments,
    ToolAnnotations,
    ToolArguments,
    ToolDescriptor,
    ToolRegistry,
)

from .batch import BatchOpener, open_file, read_json_file

PROJECT_EXTENSIONS = (".bbmodel", ".json", ".geo.json", ".mcmodel", ".jem", ".jpm")


class OpenProjectArguments(ToolArguments):
    path: str = Field(description="The file path to the project file to open.")


class OpenFolderArguments(ToolArguments):
    folder: str = Field(description="The folder path to scan for project files.")
    recursive: bool = Field(False, description="Whether to search subfolders recursively.")
    extensions: list[str] | None = Field(
        None,
        description=(
            "Filter by specific file extensions (e.g., ['.bbmodel', '.geo.json']). "
            "If not provided, all supported formats are included."
        ),
    )


class SwitchProjectArguments(ToolArguments):
    identifier: str = Field(
        description="The UUID of the project or its index (1-based) in the open projects list."
    )


class CloseProjectArguments(ToolArguments):
    uuid: str | None = Field(
        None,
        description=(
            "The UUID of the project to close. If not provided, closes the current project."
        ),
    )
    force: bool = Field(False, description="Whether to close without saving (force close).")


def create_project_arguments(format_ids: Sequence[str], default_format: str) -> type[BaseModel]:
    """Build the create_project input model with the host's format ids as an enum.

    Args:
        format_ids: Format ids known to the host
        default_format: Preferred default; the first id is used when it is unknown

    Returns:
        Pydantic model class
    """
    if not format_ids:
        raise create_error("CAPABILITY_UNAVAILABLE", capability="Model format catalog")
    default = default_format if default_format in format_ids else format_ids[0]
    return create_model(
        "CreateProjectArguments",
        __base__=ToolArguments,
        name=(str, Field(description="Name of the new project.")),
        format=(
            Literal[tuple(format_ids)],
            Field(default, description="Format ID of the new project."),
        ),
    )


def parse_index(identifier: str, count: int) -> int | None:
    """1-based index from an identifier, None when it is not an in-range integer."""
    try:
        index = int(identifier.strip())
    except ValueError:
        return None
    return index if 1 <= index <= count else None


def format_project_list(projects: list[ProjectInfo], active_uuid: str | None) -> str:
    if not projects:
        return "No projects are currently open."
    lines = []
    for i, project in enumerate(projects, start=1):
        marker = "→ " if project.uuid == active_uuid else "  "
        lines.append(
            f"{i}. {marker}{project.display_name} "
            f"(UUID: {project.uuid}, Format: {project.format_id or 'unknown'})"
        )
    return f"# Open Projects ({len(projects)})\n\n" + "\n".join(lines)


def register_project_tools(
    registry: ToolRegistry,
    host: HostService,
    format_ids: Sequence[str],
    default_format: str = "bedrock_block",
    project_extensions: Sequence[str] = PROJECT_EXTENSIONS,
    logger: BBLogger | None = None,
) -> None:
    """Register the project lifecycle tools.

    Args:
        registry: Registry to add the tools to
        host: Host service the tools drive
        format_ids: Format ids for the create_project enum
        default_format: Default format for create_project
        project_extensions: Extensions opened by open_projects_from_folder by default
        logger: Optional logger
    """
    batch_opener = BatchOpener(host, project_extensions, logger)
    create_arguments = create_project_arguments(format_ids, default_format)

    async def create_project(args: BaseModel) -> str:
        project = await host.new_project(args.format)
        await host.rename_project(project.uuid, args.name)
        return (
            f'Created project with name "{args.name}" (UUID: {project.uuid}) '
            f'and format "{args.format}".'
        )

    async def open_project(args: OpenProjectArguments) -> str:
        content = await asyncio.to_thread(read_json_file, args.path)
        project = await open_file(host, args.path, content, logger)
        return f"Opened project: {args.path} (UUID: {project.uuid})"

    async def open_projects_from_folder(args: OpenFolderArguments) -> str:
        report = await batch_opener.open_folder(args.folder, args.recursive, args.extensions)
        return report.render()

    async def list_open_projects(args: NoArguments) -> str:
        projects = await host.list_open_projects()
        active = await host.get_active_project()
        return format_project_list(projects, active.uuid if active else None)

    async def switch_project(args: SwitchProjectArguments) -> str:
        projects = await host.list_open_projects()
        if not projects:
            raise create_error("NO_PROJECTS_OPEN")

        index = parse_index(args.identifier, len(projects))
        if index is not None:
            target = projects[index - 1]
        else:
            target = next((p for p in projects if p.uuid == args.identifier), None)
        if target is None:
            raise create_error("PROJECT_NOT_FOUND", identifier=args.identifier)

        await host.select_project(target.uuid)
        return f"Switched to project: {target.display_name} (UUID: {target.uuid})"

    async def close_project(args: CloseProjectArguments) -> str:
        projects = await host.list_open_projects()
        if not projects:
            raise create_error("NO_PROJECTS_OPEN")

        if args.uuid:
            target = next((p for p in projects if p.uuid == args.uuid), None)
            if target is None:
                raise create_error("PROJECT_NOT_FOUND", identifier=args.uuid)
        else:
            target = await host.get_active_project()
            if target is None:
                raise create_error("NO_ACTIVE_PROJECT")

        if not await host.close_project(target.uuid, force=args.force):
            raise create_error("PROJECT_CLOSE_REFUSED", name=target.display_name)
        return f"Closed project: {target.display_name} (UUID: {target.uuid})"

    registry.register(
        ToolDescriptor(
            name="create_project",
            description="Creates a new project with the given name and project type.",
            input_model=create_arguments,
            handler=create_project,
            annotations=ToolAnnotations(title="Create Project", destructive=True, open_world=True),
        )
    )
    registry.register(
        ToolDescriptor(
            name="open_project",
            description="Opens a Blockbench project file (.bbmodel, .json, .geo.json, etc.).",
            input_model=OpenProjectArguments,
            handler=open_project,
            annotations=ToolAnnotations(title="Open Project", destructive=True, open_world=True),
        )
    )
    registry.register(
        ToolDescriptor(
            name="open_projects_from_folder",
            description=(
                "Scans a folder for Blockbench project files and opens them all as separate "
                "tabs. Supports .bbmodel, .json, .geo.json, .mcmodel, .jem, .jpm files."
            ),
            input_model=OpenFolderArguments,
            handler=open_projects_from_folder,
            annotations=ToolAnnotations(
                title="Open Projects from Folder", destructive=True, open_world=True
            ),
        )
    )
    registry.register(
        ToolDescriptor(
            name="list_open_projects",
            description="Lists all currently open projects/tabs in Blockbench.",
            input_model=NoArguments,
            handler=list_open_projects,
            annotations=ToolAnnotations(title="List Open Projects", read_only=True),
        )
    )
    registry.register(
        ToolDescriptor(
            name="switch_project",
            description="Switches to a different open project by its UUID or index.",
            input_model=SwitchProjectArguments,
            handler=switch_project,
            annotations=ToolAnnotations(title="Switch Project"),
        )
    )
    registry.register(
        ToolDescriptor(
            name="close_project",
            description="Closes the current project or a specific project by UUID.",
            input_model=CloseProjectArguments,
            handler=close_project,
            annotations=ToolAnnotations(title="Close Project", destructive=True),
        )
    )
