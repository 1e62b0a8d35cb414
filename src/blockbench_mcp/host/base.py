"""Host service interface.

The host is the editor application that owns projects, formats and codecs.
Tools never touch editor state directly; everything goes through a
HostService implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any

from .geometry import GeometryOutput

CAPABILITY_FLAGS = (
    "box_uv",
    "optional_box_uv",
    "single_texture",
    "bone_rig",
    "rotate_cubes",
    "integer_size",
    "locators",
    "animation_mode",
    "meshes",
)

BEDROCK_CODEC = "bedrock"
BEDROCK_FORMATS = frozenset({"bedrock", "bedrock_block"})


@dataclass
class FormatInfo:
    """A model format the host supports."""

    id: str
    name: str
    description: str = ""
    category: str = "unknown"
    target: list[str] = field(default_factory=list)
    can_convert_to: bool = True
    codec_id: str | None = None

    # Capability flags
    box_uv: bool = False
    optional_box_uv: bool = False
    single_texture: bool = False
    bone_rig: bool = False
    rotate_cubes: bool = False
    integer_size: bool = False
    locators: bool = False
    animation_mode: bool = False
    meshes: bool = False

    @property
    def is_bedrock_compatible(self) -> bool:
        return self.codec_id == BEDROCK_CODEC or self.id in BEDROCK_FORMATS

    def capabilities(self) -> dict[str, Any]:
        """Identity plus capability flags, in a stable key order."""
        info: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "target": list(self.target),
        }
        for flag in CAPABILITY_FLAGS:
            info[flag] = getattr(self, flag)
        return info

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormatInfo":
        target = data.get("target") or []
        if isinstance(target, str):
            target = [target]
        kwargs: dict[str, Any] = {
            "id": data["id"],
            "name": data.get("name") or data["id"],
            "description": data.get("description") or "",
            "category": data.get("category") or "unknown",
            "target": list(target),
            "can_convert_to": data.get("can_convert_to", True) is not False,
            "codec_id": data.get("codec_id"),
        }
        for flag in CAPABILITY_FLAGS:
            kwargs[flag] = bool(data.get(flag, False))
        return cls(**kwargs)


@dataclass
class ProjectInfo:
    """Snapshot of one open project."""

    uuid: str
    name: str = ""
    format_id: str | None = None
    saved: bool = True

    @property
    def display_name(self) -> str:
        return self.name or "Untitled"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectInfo":
        return cls(
            uuid=data["uuid"],
            name=data.get("name") or "",
            format_id=data.get("format_id"),
            saved=bool(data.get("saved", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class Codec(ABC):
    """File codec exposed by the host."""

    id: str

    @abstractmethod
    async def compile(self) -> GeometryOutput:
        """Compile the active project.

        Returns:
            Normalized geometry output

        Raises:
            ProjectStateError: COMPILE_FAILED when the codec produced nothing
        """

    @abstractmethod
    async def parse(self, content: Any, path: str) -> None:
        """Load parsed file content into the active project.

        Args:
            content: Parsed JSON value of the file
            path: Source path, used by codecs to resolve textures
        """


class HostService(ABC):
    """Abstract editor host."""

    @abstractmethod
    async def get_active_project(self) -> ProjectInfo | None:
        """Return the active project, None when nothing is open."""

    @abstractmethod
    async def list_open_projects(self) -> list[ProjectInfo]:
        """Return open projects in tab order."""

    @abstractmethod
    async def list_formats(self) -> list[FormatInfo]:
        """Return all formats, in host registration order."""

    @abstractmethod
    async def get_format(self, format_id: str) -> FormatInfo | None:
        """Look up a format by id."""

    @abstractmethod
    async def list_codecs(self) -> list[str]:
        """Return the ids of the available codecs."""

    @abstractmethod
    async def get_codec(self, codec_id: str) -> Codec | None:
        """Look up a codec by id."""

    @abstractmethod
    async def new_project(self, format_id: str) -> ProjectInfo:
        """Create a project in the given format and make it active."""

    @abstractmethod
    async def rename_project(self, uuid: str, name: str) -> None:
        """Set a project's display name."""

    @abstractmethod
    async def select_project(self, uuid: str) -> None:
        """Make a project the active one."""

    @abstractmethod
    async def close_project(self, uuid: str, force: bool = False) -> bool:
        """Close a project.

        Returns:
            False when the host refused, e.g. unsaved changes without force
        """

    @abstractmethod
    async def convert_project(self, format_id: str) -> None:
        """Convert the active project to another format."""

    async def aclose(self) -> None:
        """Release host resources. Default: nothing to release."""
        return None
