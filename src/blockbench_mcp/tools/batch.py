"""Opening project files: one file at a time or a whole folder."""

import asyncio
import json
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from blockbench_mcp.errors import CapabilityUnavailableError, create_error
from blockbench_mcp.formats import FormatBinding, resolve, scan
from blockbench_mcp.formats.resolver import FALLBACK_FORMAT
from blockbench_mcp.host import HostService, ProjectInfo
from blockbench_mcp.logging import BBLogger


def read_text(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


def read_json_file(path: str) -> Any:
    """Read and parse a project file.

    Raises:
        FileAccessError: FILE_NOT_FOUND, FILE_READ_FAILED or FILE_PARSE_FAILED
    """
    if not os.path.isfile(path):
        raise create_error("FILE_NOT_FOUND", path=path)
    try:
        text = read_text(path)
    except OSError as e:
        raise create_error("FILE_READ_FAILED", path=path, detail=str(e)) from e
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise create_error("FILE_PARSE_FAILED", path=path, detail=str(e)) from e


async def load_with_binding(
    host: HostService,
    path: str,
    content: Any,
    binding: FormatBinding,
    logger: BBLogger | None = None,
) -> ProjectInfo:
    """Create a fresh project for the binding and parse the content into it.

    A tagged format the host does not know falls back to the generic format.
    """
    codec = await host.get_codec(binding.codec_id)
    if codec is None:
        raise create_error("CAPABILITY_UNAVAILABLE", capability=f"Codec '{binding.codec_id}'")

    format_id = binding.format_id
    if await host.get_format(format_id) is None:
        format_id = FALLBACK_FORMAT

    if logger:
        logger.debug(
            "resolver",
            f"Resolved {os.path.basename(path)}",
            codec=binding.codec_id,
            format=format_id,
        )

    # A new project keeps the file from merging into whatever is open
    project = await host.new_project(format_id)
    await codec.parse(content, path)
    return project


async def open_file(
    host: HostService,
    path: str,
    content: Any,
    logger: BBLogger | None = None,
) -> ProjectInfo:
    """Resolve a parsed file to a codec and open it as a new project."""
    binding = resolve(path, content, await host.list_codecs())
    return await load_with_binding(host, path, content, binding, logger)


@dataclass
class BatchFailure:
    """One file that could not be opened."""

    path: str
    reason: str


@dataclass
class BatchReport:
    """Outcome of opening a folder."""

    folder: str
    discovered: int = 0
    opened: list[str] = field(default_factory=list)  # base names
    failures: list[BatchFailure] = field(default_factory=list)

    def render(self) -> str:
        if self.discovered == 0:
            return f"No project files found in: {self.folder}"

        output = f"Opened {len(self.opened)} project(s) from: {self.folder}\n"
        if self.opened:
            output += "\nOpened files:\n" + "\n".join(f"  - {name}" for name in self.opened)
        if self.failures:
            output += f"\n\nErrors ({len(self.failures)}):\n"
            output += "\n".join(f"  - {failure.reason}" for failure in self.failures)
        return output


class BatchOpener:
    """Scans a folder and opens every matching file as its own project.

    Each file succeeds or fails on its own; one bad file never stops the
    rest of the batch.
    """

    def __init__(
        self,
        host: HostService,
        default_extensions: Iterable[str],
        logger: BBLogger | None = None,
    ):
        self._host = host
        self._default_extensions = list(default_extensions)
        self._logger = logger

    async def open_folder(
        self,
        folder: str,
        recursive: bool = False,
        extensions: list[str] | None = None,
    ) -> BatchReport:
        """Open all project files in a folder.

        Args:
            folder: Folder to scan
            recursive: Include subfolders
            extensions: Extensions to include, defaults to all project extensions

        Returns:
            BatchReport with per-file outcomes

        Raises:
            InvalidDirectoryError: The folder is missing or not a directory
        """
        allowed = extensions if extensions is not None else self._default_extensions
        files = await asyncio.to_thread(scan, folder, recursive, allowed)
        files.sort(key=lambda f: f.path)

        report = BatchReport(folder=folder, discovered=len(files))
        codecs = await self._host.list_codecs()

        for discovered in files:
            path = discovered.path
            try:
                text = await asyncio.to_thread(read_text, path)
                content = json.loads(text)
            except (json.JSONDecodeError, UnicodeDecodeError):
                report.failures.append(BatchFailure(path, f"Failed to parse: {path}"))
                continue
            except OSError as e:
                report.failures.append(BatchFailure(path, f"Error opening {path}: {e}"))
                continue

            try:
                binding = resolve(path, content, codecs)
            except CapabilityUnavailableError:
                report.failures.append(
                    BatchFailure(path, f"OptiFine codec not available for: {path}")
                )
                continue

            try:
                await load_with_binding(self._host, path, content, binding, self._logger)
            except Exception as e:
                report.failures.append(BatchFailure(path, f"Error opening {path}: {e}"))
                continue

            report.opened.append(os.path.basename(path))

        if self._logger:
            self._logger.info(
                "tool",
                f"Opened {len(report.opened)} of {report.discovered} file(s) from {folder}",
                failed=len(report.failures),
            )
        return report
