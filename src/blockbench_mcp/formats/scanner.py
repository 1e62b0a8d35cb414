"""Directory scanner - finds project files under a folder."""

import os
from collections.abc import Iterable
from dataclasses import dataclass

from blockbench_mcp.errors import create_error

from .resolver import GEO_JSON, file_extension


@dataclass(frozen=True)
class DiscoveredFile:
    """A file that matched the allowed extensions."""

    path: str  # absolute
    extension: str  # compound-aware, lower-case


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Lower-case extensions and make sure each has a leading dot."""
    normalized = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        normalized.add(ext if ext.startswith(".") else f".{ext}")
    return frozenset(normalized)


def matches(name: str, allowed: frozenset[str]) -> bool:
    """Whether a file name matches one of the (normalized) allowed extensions.

    ``.geo.json`` is checked against the full name. A ``.geo.json`` file also
    matches a plain ``.json`` entry since its last segment is ``.json``.
    """
    lowered = name.lower()
    if lowered.endswith(GEO_JSON) and GEO_JSON in allowed:
        return True
    return os.path.splitext(lowered)[1] in allowed


def scan(root: str, recursive: bool, allowed_extensions: Iterable[str]) -> list[DiscoveredFile]:
    """Collect matching files under ``root``.

    Traversal keeps an explicit stack of directories. Symlinked directories
    are not followed. Entry order follows ``os.scandir``.

    Args:
        root: Folder to scan
        recursive: Descend into subdirectories
        allowed_extensions: Extensions to keep, e.g. [".bbmodel", "geo.json"]

    Returns:
        Discovered files

    Raises:
        InvalidDirectoryError: ``root`` is missing or not a directory
    """
    if not os.path.exists(root):
        raise create_error("DIRECTORY_INVALID", reason="Folder not found", path=root)
    if not os.path.isdir(root):
        raise create_error("DIRECTORY_INVALID", reason="Path is not a directory", path=root)

    allowed = normalize_extensions(allowed_extensions)
    found: list[DiscoveredFile] = []
    stack = [os.path.abspath(root)]

    while stack:
        directory = stack.pop()
        subdirectories = []
        with os.scandir(directory) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    if recursive:
                        subdirectories.append(entry.path)
                elif entry.is_file() and matches(entry.name, allowed):
                    found.append(
                        DiscoveredFile(path=entry.path, extension=file_extension(entry.name))
                    )
        # Reversed so the first subdirectory is visited next
        stack.extend(reversed(subdirectories))

    return found
