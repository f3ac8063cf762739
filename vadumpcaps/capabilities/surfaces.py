"""
Surface Attribute Decoders

Writes the attributes returned by vaQuerySurfaceAttributes for one RT
format. Pixel formats are gathered and written last as a single array.
"""

from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from vadumpcaps.capabilities import names
from vadumpcaps.capabilities.render import write_flags
from vadumpcaps.output.writer import StructuredWriter
from vadumpcaps.va import constants as va
from vadumpcaps.va.interface import SurfaceAttrib

SurfaceDecoder = Callable[[StructuredWriter, SurfaceAttrib], None]


def _integer(tag: str) -> SurfaceDecoder:
    def decode(writer: StructuredWriter, attrib: SurfaceAttrib) -> None:
        writer.write_integer(tag, attrib.value)
    return decode


def _flags(tag: str, table: names.NameTable) -> SurfaceDecoder:
    def decode(writer: StructuredWriter, attrib: SurfaceAttrib) -> None:
        write_flags(writer, tag, table, attrib.value)
    return decode


def _alignment(writer: StructuredWriter, attrib: SurfaceAttrib) -> None:
    with writer.object("alignment_size"):
        writer.write_integer("log2_width", attrib.value & 0xF)
        writer.write_integer("log2_height", (attrib.value >> 4) & 0xF)


def _ignored(writer: StructuredWriter, attrib: SurfaceAttrib) -> None:
    # Write-only attributes carry nothing to report.
    pass


def _unknown(writer: StructuredWriter, attrib: SurfaceAttrib) -> None:
    with writer.object(f"unknown_{attrib.type}"):
        writer.write_integer("type", attrib.type)
        writer.write_integer("value", attrib.value)


SURFACE_DECODERS: Mapping[int, SurfaceDecoder] = MappingProxyType({
    va.SURFACE_ATTRIB_MIN_WIDTH: _integer("min_width"),
    va.SURFACE_ATTRIB_MAX_WIDTH: _integer("max_width"),
    va.SURFACE_ATTRIB_MIN_HEIGHT: _integer("min_height"),
    va.SURFACE_ATTRIB_MAX_HEIGHT: _integer("max_height"),
    va.SURFACE_ATTRIB_MEMORY_TYPE: _flags("memory_types", names.MEMORY_TYPES),
    va.SURFACE_ATTRIB_USAGE_HINT: _flags("usage_hints", names.USAGE_HINTS),
    va.SURFACE_ATTRIB_ALIGNMENT_SIZE: _alignment,
    va.SURFACE_ATTRIB_EXTERNAL_BUFFER_DESCRIPTOR: _ignored,
    va.SURFACE_ATTRIB_DRM_FORMAT_MODIFIERS: _ignored,
})


def write_surface_attributes(writer: StructuredWriter, attribs: Sequence[SurfaceAttrib]) -> None:
    """
    Write the decoded surface attributes of one RT format into the open object.
    """
    pixel_formats = []
    for attrib in attribs:
        if attrib.type == va.SURFACE_ATTRIB_PIXEL_FORMAT:
            pixel_formats.append(attrib.value)
            continue
        SURFACE_DECODERS.get(attrib.type, _unknown)(writer, attrib)

    if pixel_formats:
        with writer.array("pixel_formats"):
            for fourcc in pixel_formats:
                writer.write_string(None, "%s", names.fourcc_string(fourcc))
