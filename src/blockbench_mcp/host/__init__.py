"""Host services - the editor behind the tools."""

from .base import (
    BEDROCK_CODEC,
    CAPABILITY_FLAGS,
    Codec,
    FormatInfo,
    HostService,
    ProjectInfo,
)
from .bridge import BridgeCodec, BridgeHost
from .geometry import GeometryOutput, GeometryStructured, GeometryText, normalize_geometry
from .memory import InMemoryHost, MemoryCodec, standard_formats

__all__ = [
    # Interface
    "HostService",
    "Codec",
    "FormatInfo",
    "ProjectInfo",
    "CAPABILITY_FLAGS",
    "BEDROCK_CODEC",
    # Geometry
    "GeometryOutput",
    "GeometryText",
    "GeometryStructured",
    "normalize_geometry",
    # Implementations
    "InMemoryHost",
    "MemoryCodec",
    "standard_formats",
    "BridgeHost",
    "BridgeCodec",
]
