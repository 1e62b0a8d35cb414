"""In-memory host - a self-contained stand-in for a running editor.

Holds the standard Blockbench format catalog and a tab list of projects.
Used by the test suite and by ``--host memory`` dry runs.
"""

import json
import re
import uuid as uuid_lib
from dataclasses import dataclass, field
from typing import Any

from blockbench_mcp.errors import create_error

from .base import Codec, FormatInfo, HostService, ProjectInfo
from .geometry import GeometryOutput, normalize_geometry

JAVA_EDITION = "Minecraft: Java Edition"
BEDROCK_EDITION = "Minecraft: Bedrock Edition"


def standard_formats(include_optifine: bool = True) -> list[FormatInfo]:
    """Formats shipped with a stock Blockbench install."""
    formats = [
        FormatInfo(
            id="free",
            name="Generic Model",
            description="Model for game engines and rendering, with meshes and animations",
            category="general",
            target=["Godot", "Unity", "Unreal Engine", "Sketchfab", "Blender"],
            codec_id="project",
            optional_box_uv=True,
            bone_rig=True,
            rotate_cubes=True,
            locators=True,
            animation_mode=True,
            meshes=True,
        ),
        FormatInfo(
            id="bedrock",
            name="Bedrock Entity",
            description="Entity model for Minecraft Bedrock Edition",
            category="minecraft",
            target=[BEDROCK_EDITION],
            codec_id="bedrock",
            box_uv=True,
            optional_box_uv=True,
            bone_rig=True,
            rotate_cubes=True,
            locators=True,
            animation_mode=True,
        ),
        FormatInfo(
            id="bedrock_old",
            name="Bedrock Entity (Legacy)",
            description="Entity model for Minecraft Bedrock Edition before 1.12",
            category="minecraft",
            target=[BEDROCK_EDITION],
            codec_id="bedrock_old",
            box_uv=True,
            bone_rig=True,
            animation_mode=True,
        ),
        FormatInfo(
            id="bedrock_block",
            name="Bedrock Block",
            description="Custom block model for Minecraft Bedrock Edition",
            category="minecraft",
            target=[BEDROCK_EDITION],
            codec_id="bedrock",
            optional_box_uv=True,
            bone_rig=True,
            rotate_cubes=True,
        ),
        FormatInfo(
            id="java_block",
            name="Java Block/Item",
            description="Block or item model for Minecraft Java Edition",
            category="minecraft",
            target=[JAVA_EDITION],
            codec_id="java_block",
            rotate_cubes=True,
        ),
        FormatInfo(
            id="modded_entity",
            name="Modded Entity",
            description="Entity model for Forge or Fabric mods",
            category="minecraft",
            target=[f"{JAVA_EDITION} with Forge/Fabric"],
            codec_id="modded_entity",
            box_uv=True,
            optional_box_uv=True,
            single_texture=True,
            bone_rig=True,
            rotate_cubes=True,
            integer_size=True,
        ),
        FormatInfo(
            id="skin",
            name="Minecraft Skin",
            description="Player skin for Minecraft",
            category="minecraft",
            target=[JAVA_EDITION, BEDROCK_EDITION],
            can_convert_to=False,
            codec_id="skin_model",
            box_uv=True,
            single_texture=True,
            bone_rig=True,
        ),
    ]
    if include_optifine:
        formats.append(
            FormatInfo(
                id="optifine_entity",
                name="OptiFine Entity",
                description="Entity model for the OptiFine JEM format",
                category="minecraft",
                target=[f"{JAVA_EDITION} with OptiFine"],
                codec_id="optifine_entity",
                box_uv=True,
                optional_box_uv=True,
                single_texture=True,
                bone_rig=True,
                integer_size=True,
            )
        )
    return formats


@dataclass
class MemoryProject:
    """Mutable editor-side project state."""

    uuid: str
    format_id: str
    name: str = ""
    saved: bool = True
    content: Any = None
    source_path: str | None = None
    history: list[str] = field(default_factory=list)

    def info(self) -> ProjectInfo:
        return ProjectInfo(
            uuid=self.uuid, name=self.name, format_id=self.format_id, saved=self.saved
        )


class MemoryCodec(Codec):
    """Codec that stores parsed content on the active project."""

    def __init__(self, codec_id: str, host: "InMemoryHost"):
        self.id = codec_id
        self._host = host

    async def parse(self, content: Any, path: str) -> None:
        project = self._host.require_active()
        project.content = content
        project.source_path = path
        project.history.append(f"parse:{self.id}")
        if isinstance(content, dict):
            name = (content.get("name") if self.id == "project" else None) or _stem(path)
            project.name = name

    async def compile(self) -> GeometryOutput:
        project = self._host.require_active()
        return normalize_geometry(self._build(project))

    def _build(self, project: MemoryProject) -> Any:
        content = project.content
        if self.id == "bedrock":
            if isinstance(content, dict) and "minecraft:geometry" in content:
                return json.dumps(content)
            return json.dumps(_bedrock_document(project))
        if self.id == "project":
            return {
                "meta": {"format_version": "4.10", "model_format": project.format_id},
                "name": project.name,
                "elements": _elements(content),
            }
        return content


class InMemoryHost(HostService):
    """Simulated editor host."""

    def __init__(self, include_optifine: bool = True, logger: Any = None):
        """Initialize the host with an empty tab list.

        Args:
            include_optifine: Register the OptiFine entity format and codec
            logger: Optional BBLogger instance
        """
        self._logger = logger
        self._formats = {f.id: f for f in standard_formats(include_optifine)}
        codec_ids = [
            "project",
            "bedrock",
            "bedrock_old",
            "java_block",
            "modded_entity",
            "skin_model",
        ]
        if include_optifine:
            codec_ids.append("optifine_entity")
        self._codecs: dict[str, Codec] = {cid: MemoryCodec(cid, self) for cid in codec_ids}
        self._projects: list[MemoryProject] = []
        self._active: MemoryProject | None = None

    def require_active(self) -> MemoryProject:
        if self._active is None:
            raise create_error("NO_ACTIVE_PROJECT")
        return self._active

    def project(self, uuid: str) -> MemoryProject | None:
        """Direct access to editor-side state, for inspection."""
        for project in self._projects:
            if project.uuid == uuid:
                return project
        return None

    async def get_active_project(self) -> ProjectInfo | None:
        return self._active.info() if self._active else None

    async def list_open_projects(self) -> list[ProjectInfo]:
        return [p.info() for p in self._projects]

    async def list_formats(self) -> list[FormatInfo]:
        return list(self._formats.values())

    async def get_format(self, format_id: str) -> FormatInfo | None:
        return self._formats.get(format_id)

    async def list_codecs(self) -> list[str]:
        return list(self._codecs)

    async def get_codec(self, codec_id: str) -> Codec | None:
        return self._codecs.get(codec_id)

    async def new_project(self, format_id: str) -> ProjectInfo:
        self._require_format(format_id)
        project = MemoryProject(uuid=str(uuid_lib.uuid4()), format_id=format_id)
        self._projects.append(project)
        self._active = project
        if self._logger:
            self._logger.debug("host", "Project created", uuid=project.uuid, format=format_id)
        return project.info()

    async def rename_project(self, uuid: str, name: str) -> None:
        self._require_project(uuid).name = name

    async def select_project(self, uuid: str) -> None:
        self._active = self._require_project(uuid)

    async def close_project(self, uuid: str, force: bool = False) -> bool:
        project = self._require_project(uuid)
        if not project.saved and not force:
            return False
        index = self._projects.index(project)
        self._projects.remove(project)
        if self._active is project:
            # Editor focuses the neighbouring tab
            if self._projects:
                self._active = self._projects[min(index, len(self._projects) - 1)]
            else:
                self._active = None
        return True

    async def convert_project(self, format_id: str) -> None:
        project = self.require_active()
        self._require_format(format_id)
        project.history.append(f"convert:{project.format_id}->{format_id}")
        project.format_id = format_id
        project.saved = False

    def _require_format(self, format_id: str) -> FormatInfo:
        format_info = self._formats.get(format_id)
        if format_info is None:
            raise create_error(
                "FORMAT_NOT_FOUND",
                format_id=format_id,
                available=", ".join(self._formats),
            )
        return format_info

    def _require_project(self, uuid: str) -> MemoryProject:
        project = self.project(uuid)
        if project is None:
            raise create_error("PROJECT_NOT_FOUND", identifier=uuid)
        return project


def _stem(path: str) -> str:
    base = re.split(r"[\\/]", path)[-1]
    for suffix in (".geo.json", ".bbmodel", ".json", ".jem", ".jpm", ".mcmodel"):
        if base.lower().endswith(suffix):
            return base[: -len(suffix)]
    return base


def _elements(content: Any) -> list[Any]:
    if isinstance(content, dict) and isinstance(content.get("elements"), list):
        return content["elements"]
    return []


def _bedrock_document(project: MemoryProject) -> dict[str, Any]:
    identifier = re.sub(r"[^a-z0-9_.]+", "_", (project.name or "unknown").lower())
    bones = []
    for index, element in enumerate(_elements(project.content)):
        if isinstance(element, dict):
            bones.append(
                {
                    "name": element.get("name") or f"bone{index}",
                    "pivot": [0, 0, 0],
                    "cubes": [
                        {
                            "origin": element.get("from", [0, 0, 0]),
                            "size": _size(element),
                            "uv": [0, 0],
                        }
                    ],
                }
            )
    return {
        "format_version": "1.12.0",
        "minecraft:geometry": [
            {
                "description": {
                    "identifier": f"geometry.{identifier}",
                    "texture_width": 16,
                    "texture_height": 16,
                },
                "bones": bones,
            }
        ],
    }


def _size(element: dict[str, Any]) -> list[float]:
    start = element.get("from", [0, 0, 0])
    end = element.get("to", start)
    try:
        return [b - a for a, b in zip(start, end, strict=True)]
    except (TypeError, ValueError):
        return [0, 0, 0]
