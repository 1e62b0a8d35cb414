"""Format resolver - picks the codec and format for a project file.

Pure decision procedure: the same path, content and codec set always give
the same binding. Looking the chosen format up on the host is left to the
caller.
"""

import os
from collections.abc import Collection
from typing import Any

from blockbench_mcp.errors import create_error

from .types import FormatBinding, SniffInput, SniffRule

GEO_JSON = ".geo.json"
OPTIFINE_CODEC = "optifine_entity"
FALLBACK_FORMAT = "free"
PROJECT_CODEC = "project"

BEDROCK = FormatBinding(format_id="bedrock", codec_id="bedrock")
JAVA_BLOCK = FormatBinding(format_id="java_block", codec_id="java_block")
OPTIFINE_ENTITY = FormatBinding(format_id=OPTIFINE_CODEC, codec_id=OPTIFINE_CODEC)
FREE = FormatBinding(format_id=FALLBACK_FORMAT, codec_id=PROJECT_CODEC)


def file_extension(name: str) -> str:
    """Lower-case extension of a file name, with ``.geo.json`` kept whole.

    Args:
        name: File name or path

    Returns:
        Extension including the leading dot, "" when there is none
    """
    base = os.path.basename(name).lower()
    if base.endswith(GEO_JSON) and len(base) > len(GEO_JSON):
        return GEO_JSON
    return os.path.splitext(base)[1]


def _present(document: dict[str, Any] | None, key: str) -> bool:
    # Empty strings, zero, false and null do not count as markers
    if document is None or key not in document:
        return False
    value = document[key]
    return value is not None and value is not False and value != 0 and value != ""


def _has_model_format(sniff: SniffInput) -> bool:
    document = sniff.document
    if document is None or not isinstance(document.get("meta"), dict):
        return False
    return _present(document["meta"], "model_format")


def _is_native(sniff: SniffInput) -> bool:
    return sniff.extension == ".bbmodel" or _has_model_format(sniff)


def _bind_native(sniff: SniffInput) -> FormatBinding:
    # Only a string tag can name a format
    tagged = sniff.document["meta"].get("model_format") if _has_model_format(sniff) else None
    format_id = tagged if isinstance(tagged, str) else FALLBACK_FORMAT
    return FormatBinding(format_id=format_id, codec_id=PROJECT_CODEC)


def _is_bedrock(sniff: SniffInput) -> bool:
    return (
        sniff.extension == GEO_JSON
        or _present(sniff.document, "minecraft:geometry")
        or _present(sniff.document, "format_version")
    )


def _is_java_block(sniff: SniffInput) -> bool:
    return sniff.extension == ".json" and (
        _present(sniff.document, "elements") or _present(sniff.document, "textures")
    )


def _is_optifine(sniff: SniffInput) -> bool:
    return sniff.extension in (".jem", ".jpm")


RULES: tuple[SniffRule, ...] = (
    SniffRule("native_project", _is_native, _bind_native),
    SniffRule("bedrock_geometry", _is_bedrock, lambda _: BEDROCK),
    SniffRule("java_block_model", _is_java_block, lambda _: JAVA_BLOCK),
    SniffRule("optifine_entity", _is_optifine, lambda _: OPTIFINE_ENTITY),
    SniffRule("fallback", lambda _: True, lambda _: FREE),
)


def _first_match(sniff: SniffInput) -> SniffRule:
    for rule in RULES:
        if rule.predicate(sniff):
            return rule
    # The fallback rule always matches
    return RULES[-1]


def match_rule(path: str, content: Any = None) -> SniffRule:
    """Return the first rule whose predicate accepts the input."""
    return _first_match(SniffInput(path=path, extension=file_extension(path), content=content))


def resolve(
    path: str,
    content: Any = None,
    available_codecs: Collection[str] = (),
) -> FormatBinding:
    """Choose the codec and format for a file.

    Args:
        path: File path; only its name is inspected
        content: Parsed JSON content, or None
        available_codecs: Codec ids the host exposes

    Returns:
        The chosen FormatBinding

    Raises:
        CapabilityUnavailableError: A ``.jem``/``.jpm`` file without the OptiFine codec
    """
    sniff = SniffInput(path=path, extension=file_extension(path), content=content)
    binding = _first_match(sniff).bind(sniff)
    if binding.codec_id == OPTIFINE_CODEC and OPTIFINE_CODEC not in available_codecs:
        raise create_error("CAPABILITY_UNAVAILABLE", capability="OptiFine codec", path=path)
    return binding
