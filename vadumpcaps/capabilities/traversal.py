"""
Capability Traversal

Walks a VA display's capability surface and writes it as one structured
document: profiles, their entry points, config attributes, surface formats,
video processing filters and pipeline limits, then image and subpicture
formats.

Each branch queries before it writes. A failed query is logged and ends
that branch only; siblings and ancestors already written stay valid.
Configs, contexts and parameter buffers are scoped to the branch that
created them and released on every path.
"""

import logging
from typing import Iterator, Optional

from vadumpcaps.capabilities import names
from vadumpcaps.capabilities.attributes import decode_attribute, is_supported
from vadumpcaps.capabilities.filters import (
    default_parameters,
    write_filter_caps,
    write_pipeline_caps,
)
from vadumpcaps.capabilities.render import write_enumerant, write_flags
from vadumpcaps.capabilities.selection import Section, Selection
from vadumpcaps.capabilities.surfaces import write_surface_attributes
from vadumpcaps.output.writer import StructuredWriter
from vadumpcaps.va import constants as va
from vadumpcaps.va.interface import (
    CapabilityQuery,
    ConfigAttrib,
    ImageFormat,
    VAStatusError,
)

logger = logging.getLogger(__name__)


def rt_format_bits(mask: int) -> Iterator[int]:
    """Yield each set bit of an RT-format mask on its own, low to high."""
    bit = 1
    while bit <= mask:
        if mask & bit:
            yield bit
        bit <<= 1


class CapabilityDumper:
    """
    Writes the capability document for one display.

    Args:
        query: Initialised capability-query handle.
        writer: Destination writer, at depth zero.
        selection: Sections to traverse. None means every section.
    """

    def __init__(
        self,
        query: CapabilityQuery,
        writer: StructuredWriter,
        selection: Optional[Selection] = None,
    ):
        self.query = query
        self.writer = writer
        self.selection = selection if selection is not None else Selection.all()

    def _selected(self, section: Section) -> bool:
        return section in self.selection

    @staticmethod
    def _report(operation: str, error: VAStatusError) -> None:
        logger.error(f"{operation}: {error.status} ({error.description})")

    # ============ Root ============

    def dump(self) -> None:
        """Write the whole document."""
        with self.writer.object(None):
            self._write_versions()

            if self._selected(Section.PROFILES):
                self.dump_profiles()
            if self._selected(Section.IMAGE_FORMATS):
                self.dump_image_formats()
            if self._selected(Section.SUBPICTURE_FORMATS):
                self.dump_subpicture_formats()

    def _write_versions(self) -> None:
        writer = self.writer
        with writer.object("build_version"):
            writer.write_integer("major", va.VA_MAJOR_VERSION)
            writer.write_integer("minor", va.VA_MINOR_VERSION)
            writer.write_integer("micro", va.VA_MICRO_VERSION)

        major, minor = self.query.version()
        with writer.object("driver_version"):
            writer.write_integer("major", major)
            writer.write_integer("minor", minor)

        vendor = self.query.vendor_string()
        writer.write_string("driver_vendor", "%s", vendor if vendor is not None else "unknown")

    # ============ Profiles and entry points ============

    def dump_profiles(self) -> None:
        try:
            profiles = self.query.query_config_profiles()
        except VAStatusError as e:
            self._report("Unable to query profiles", e)
            return

        logger.debug(f"Driver reports {len(profiles)} profiles")
        with self.writer.array("profiles"):
            for profile in profiles:
                with self.writer.object(None):
                    write_enumerant(self.writer, "profile", names.PROFILES, profile, describe=True)
                    if self._selected(Section.ENTRYPOINTS):
                        self.dump_entrypoints(profile)

    def dump_entrypoints(self, profile: int) -> None:
        try:
            entrypoints = self.query.query_config_entrypoints(profile)
        except VAStatusError as e:
            self._report("Unable to query entrypoints", e)
            return

        with self.writer.array("entrypoints"):
            for entrypoint in entrypoints:
                with self.writer.object(None):
                    self.dump_entrypoint(profile, entrypoint)

    def dump_entrypoint(self, profile: int, entrypoint: int) -> None:
        write_enumerant(self.writer, "entrypoint", names.ENTRYPOINTS, entrypoint, describe=True)

        want_surfaces = self._selected(Section.SURFACE_FORMATS)
        want_filters = (
            self._selected(Section.FILTERS) and entrypoint == va.VA_ENTRYPOINT_VIDEO_PROC
        )

        if not self._selected(Section.ATTRIBUTES):
            return

        # Surface formats and filters run per RT format found by the attribute pass.
        rt_formats = self.dump_attributes(profile, entrypoint)
        if not rt_formats:
            return
        if want_surfaces:
            self.dump_surface_formats(profile, entrypoint, rt_formats)
        if want_filters:
            self.dump_filters(rt_formats)

    # ============ Config attributes ============

    def dump_attributes(self, profile: int, entrypoint: int) -> int:
        """
        Write the supported config attributes of one profile/entry point.

        Returns:
            The RT-format mask found among the attributes, or 0.
        """
        try:
            attribs = self.query.get_config_attributes(
                profile, entrypoint, range(va.CONFIG_ATTRIB_TYPE_MAX)
            )
        except VAStatusError as e:
            self._report("Unable to query config attributes", e)
            return 0

        rt_formats = 0
        with self.writer.object("attributes"):
            for attrib in attribs:
                if is_supported(attrib):
                    rt_formats |= decode_attribute(self.writer, attrib)
        return rt_formats

    # ============ Surface formats ============

    def dump_surface_formats(self, profile: int, entrypoint: int, rt_formats: int) -> None:
        with self.writer.array("surface_formats"):
            for rt_format in rt_format_bits(rt_formats):
                self.dump_surface_format(profile, entrypoint, rt_format)

    def dump_surface_format(self, profile: int, entrypoint: int, rt_format: int) -> None:
        rt_attrib = ConfigAttrib(va.CONFIG_ATTRIB_RT_FORMAT, rt_format)
        try:
            with self.query.config(profile, entrypoint, [rt_attrib]) as config_id:
                attribs = self.query.query_surface_attributes(config_id)
        except VAStatusError as e:
            self._report("Unable to query surface attributes", e)
            return

        writer = self.writer
        with writer.object(None):
            writer.write_integer("rt_format", rt_format)
            entry = names.RT_FORMATS.lookup(rt_format)
            if entry is not None:
                writer.write_string("rt_format_name", "%s", entry.name)
            else:
                writer.write_boolean("unknown", True)
            write_surface_attributes(writer, attribs)

    # ============ Video processing ============

    def dump_filters(self, rt_formats: int) -> None:
        with self.writer.array("filters"):
            for rt_format in rt_format_bits(rt_formats):
                self.dump_filters_for(rt_format)

    def dump_filters_for(self, rt_format: int) -> None:
        """Probe every filter against a VideoProc context of one RT format."""
        rt_attrib = ConfigAttrib(va.CONFIG_ATTRIB_RT_FORMAT, rt_format)
        try:
            with self.query.config(
                va.VA_PROFILE_NONE, va.VA_ENTRYPOINT_VIDEO_PROC, [rt_attrib]
            ) as config_id, self.query.context(
                config_id, va.FILTER_PROBE_WIDTH, va.FILTER_PROBE_HEIGHT
            ) as context_id:
                filters = self.query.query_video_proc_filters(context_id)
                logger.debug(f"RT format {rt_format:#x}: {len(filters)} filters")

                self.dump_filter(context_id, rt_format, va.PROC_FILTER_NONE)
                for filter_type in filters:
                    if filter_type != va.PROC_FILTER_NONE:
                        self.dump_filter(context_id, rt_format, filter_type)
        except VAStatusError as e:
            self._report("Unable to probe filters", e)

    def dump_filter(self, context_id: int, rt_format: int, filter_type: int) -> None:
        want_caps = self._selected(Section.FILTER_CAPS)
        want_pipeline = self._selected(Section.PIPELINE_CAPS)

        caps = []
        if filter_type != va.PROC_FILTER_NONE and (want_caps or want_pipeline):
            try:
                caps = self.query.query_video_proc_filter_caps(context_id, filter_type)
            except VAStatusError as e:
                self._report("Failed to query filter caps", e)
                return

        writer = self.writer
        with writer.object(None):
            writer.write_integer("rt_format", rt_format)
            write_enumerant(writer, "filter", names.FILTERS, filter_type)
            if want_caps:
                write_filter_caps(writer, filter_type, caps)
            if want_pipeline:
                self.dump_pipeline(context_id, filter_type, caps)

    def dump_pipeline(self, context_id: int, filter_type: int, caps) -> None:
        params = default_parameters(filter_type, caps)
        try:
            with self.query.parameter_buffer(context_id, params) as buffers:
                pipeline = self.query.query_video_proc_pipeline_caps(context_id, buffers)
        except VAStatusError as e:
            self._report("Failed to query pipeline caps", e)
            return

        write_pipeline_caps(self.writer, pipeline)

    # ============ Image formats ============

    def _write_image_format(self, image_format: ImageFormat) -> None:
        writer = self.writer
        writer.write_string("pixel_format", "%s", names.fourcc_string(image_format.fourcc))
        byte_order = names.BYTE_ORDERS.lookup(image_format.byte_order)
        writer.write_string("byte_order", "%s", byte_order.name if byte_order else "unknown")
        writer.write_integer("bits_per_pixel", image_format.bits_per_pixel)

        if image_format.depth:
            writer.write_integer("depth", image_format.depth)
            writer.write_integer("red_mask", image_format.red_mask)
            writer.write_integer("green_mask", image_format.green_mask)
            writer.write_integer("blue_mask", image_format.blue_mask)
            writer.write_integer("alpha_mask", image_format.alpha_mask)

    def dump_image_formats(self) -> None:
        try:
            formats = self.query.query_image_formats()
        except VAStatusError as e:
            self._report("Unable to query image formats", e)
            return

        with self.writer.array("image_formats"):
            for image_format in formats:
                with self.writer.object(None):
                    self._write_image_format(image_format)

    def dump_subpicture_formats(self) -> None:
        try:
            formats = self.query.query_subpicture_formats()
        except VAStatusError as e:
            self._report("Unable to query subpicture formats", e)
            return

        with self.writer.array("subpicture_formats"):
            for subpicture in formats:
                with self.writer.object(None):
                    self._write_image_format(subpicture.format)
                    write_flags(self.writer, "flags", names.SUBPICTURE_FLAGS, subpicture.flags)


def dump_capabilities(
    query: CapabilityQuery,
    writer: StructuredWriter,
    selection: Optional[Selection] = None,
) -> None:
    """
    Write the capability document for an initialised display.

    Args:
        query: Capability-query handle.
        writer: Destination writer.
        selection: Sections to traverse; None or an empty selection means all.
    """
    CapabilityDumper(query, writer, selection).dump()
