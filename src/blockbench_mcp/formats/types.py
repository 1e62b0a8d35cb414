"""Format resolution types."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FormatBinding:
    """The (codec, format) pair chosen for a file."""

    format_id: str
    codec_id: str


@dataclass(frozen=True)
class SniffInput:
    """What the resolver looks at: the file's suffix and its parsed content."""

    path: str
    extension: str  # compound-aware, lower-case, e.g. ".geo.json"
    content: Any = None  # parsed JSON value, None when unavailable

    @property
    def document(self) -> dict[str, Any] | None:
        """The content when it is a JSON object. Markers only count on objects."""
        return self.content if isinstance(self.content, dict) else None


@dataclass(frozen=True)
class SniffRule:
    """One resolution rule. Rules are tried in order; first match wins."""

    name: str
    predicate: Callable[[SniffInput], bool]
    bind: Callable[[SniffInput], FormatBinding]
