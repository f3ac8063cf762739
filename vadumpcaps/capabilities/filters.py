"""
Video Processing Filter Decoders

Renders the per-filter capability records returned by
vaQueryVideoProcFilterCaps, synthesises default parameters for the pipeline
capability query, and renders the pipeline capabilities themselves.
"""

from typing import Optional, Sequence

from vadumpcaps.capabilities import names
from vadumpcaps.capabilities.render import write_enumerant, write_flags
from vadumpcaps.output.writer import StructuredWriter
from vadumpcaps.va import constants as va
from vadumpcaps.va.interface import (
    ColorBalanceCap,
    ColorBalanceParameters,
    DeinterlacingCap,
    DeinterlacingParameters,
    FilterCap,
    FilterParameters,
    FilterValueRange,
    HighDynamicRangeCap,
    LUT3DCap,
    PipelineCaps,
    TotalColorCorrectionCap,
    TotalColorCorrectionParameters,
    ToneMappingParameters,
)

# Filters whose capability is a single value range.
RANGE_FILTERS = frozenset({
    va.PROC_FILTER_NOISE_REDUCTION,
    va.PROC_FILTER_SHARPENING,
    va.PROC_FILTER_SKIN_TONE_ENHANCEMENT,
})


def _write_range(writer: StructuredWriter, value_range: FilterValueRange) -> None:
    writer.write_double("min_value", value_range.min_value)
    writer.write_double("max_value", value_range.max_value)
    writer.write_double("default_value", value_range.default_value)
    writer.write_double("step", value_range.step)


def _write_typed_caps(
    writer: StructuredWriter, table: names.NameTable, caps: Sequence[FilterCap]
) -> None:
    with writer.array("types"):
        for cap in caps:
            with writer.object(None):
                write_enumerant(writer, "type", table, cap.type)
                value_range = getattr(cap, "range", None)
                if value_range is not None:
                    _write_range(writer, value_range)


def _write_hdr_caps(writer: StructuredWriter, caps: Sequence[HighDynamicRangeCap]) -> None:
    with writer.array("types"):
        for cap in caps:
            with writer.object(None):
                write_enumerant(writer, "metadata_type", names.HDR_METADATA_TYPES, cap.metadata_type)
                write_flags(writer, "caps_flags", names.TONE_MAPPING_FLAGS, cap.caps_flag)


def _write_lut_caps(writer: StructuredWriter, caps: Sequence[LUT3DCap]) -> None:
    with writer.array("luts"):
        for cap in caps:
            with writer.object(None):
                writer.write_integer("lut_size", cap.lut_size)
                with writer.array("lut_stride"):
                    for stride in cap.lut_stride:
                        writer.write_integer(None, stride)
                writer.write_integer("bit_depth", cap.bit_depth)
                writer.write_integer("num_channel", cap.num_channel)
                writer.write_integer("channel_mapping", cap.channel_mapping)


def write_filter_caps(
    writer: StructuredWriter, filter_type: int, caps: Sequence[FilterCap]
) -> None:
    """
    Write the capabilities of one filter as a "caps" object.

    Args:
        writer: Output writer, positioned inside the filter object.
        filter_type: Filter the capabilities belong to.
        caps: Records returned by the filter-caps query. May be empty.
    """
    with writer.object("caps"):
        if filter_type == va.PROC_FILTER_DEINTERLACING:
            _write_typed_caps(writer, names.DEINTERLACING_TYPES, caps)
        elif filter_type == va.PROC_FILTER_COLOR_BALANCE:
            _write_typed_caps(writer, names.COLOR_BALANCE_TYPES, caps)
        elif filter_type == va.PROC_FILTER_TOTAL_COLOR_CORRECTION:
            _write_typed_caps(writer, names.TOTAL_COLOR_CORRECTION_TYPES, caps)
        elif filter_type == va.PROC_FILTER_HIGH_DYNAMIC_RANGE_TONE_MAPPING:
            _write_hdr_caps(writer, caps)
        elif filter_type == va.PROC_FILTER_3DLUT:
            _write_lut_caps(writer, caps)
        elif caps and isinstance(caps[0], FilterValueRange):
            _write_range(writer, caps[0])


def default_parameters(
    filter_type: int, caps: Sequence[FilterCap]
) -> Optional[FilterParameters]:
    """
    Build the parameters used to ask the pipeline about one filter.

    Returns:
        Parameters derived from the reported capabilities, or None when the
        pipeline should be queried with no filter at all (the None filter,
        filters with no capabilities, and filters with no known parameters).
    """
    if filter_type == va.PROC_FILTER_NONE or not caps:
        return None

    if filter_type == va.PROC_FILTER_DEINTERLACING:
        algorithm = max(
            (cap.type for cap in caps if isinstance(cap, DeinterlacingCap)), default=None
        )
        if algorithm is None:
            return None
        return DeinterlacingParameters(filter_type=filter_type, algorithm=algorithm)

    first = caps[0]
    if filter_type == va.PROC_FILTER_COLOR_BALANCE and isinstance(first, ColorBalanceCap):
        return ColorBalanceParameters(
            filter_type=filter_type,
            value=first.range.default_value,
            attrib=first.type,
        )
    if (filter_type == va.PROC_FILTER_TOTAL_COLOR_CORRECTION
            and isinstance(first, TotalColorCorrectionCap)):
        return TotalColorCorrectionParameters(
            filter_type=filter_type,
            value=first.range.default_value,
            attrib=first.type,
        )
    if (filter_type == va.PROC_FILTER_HIGH_DYNAMIC_RANGE_TONE_MAPPING
            and isinstance(first, HighDynamicRangeCap)):
        return ToneMappingParameters(filter_type=filter_type, metadata_type=first.metadata_type)
    if filter_type in RANGE_FILTERS and isinstance(first, FilterValueRange):
        return FilterParameters(filter_type=filter_type, value=first.default_value)

    return None


def _write_colour_standards(
    writer: StructuredWriter, tag: str, standards: Sequence[int]
) -> None:
    with writer.array(tag):
        for standard in standards:
            with writer.object(None):
                write_enumerant(writer, "type", names.COLOR_STANDARDS, standard)


def _write_fourccs(writer: StructuredWriter, tag: str, fourccs: Sequence[int]) -> None:
    with writer.array(tag):
        for fourcc in fourccs:
            writer.write_string(None, "%s", names.fourcc_string(fourcc))


def write_pipeline_caps(writer: StructuredWriter, caps: PipelineCaps) -> None:
    """Write the pipeline capabilities as a "pipeline" object."""
    with writer.object("pipeline"):
        write_flags(writer, "pipeline_flags", names.PIPELINE_FLAGS, caps.pipeline_flags)
        writer.write_integer("filter_flags", caps.filter_flags)
        writer.write_integer("forward_references", caps.num_forward_references)
        writer.write_integer("backward_references", caps.num_backward_references)
        _write_colour_standards(writer, "input_colour_standards", caps.input_color_standards)
        _write_colour_standards(writer, "output_colour_standards", caps.output_color_standards)
        write_flags(writer, "rotation_flags", names.ROTATIONS, caps.rotation_flags)
        write_flags(writer, "blend_flags", names.BLEND_FLAGS, caps.blend_flags)
        write_flags(writer, "mirror_flags", names.MIRROR_FLAGS, caps.mirror_flags)
        writer.write_integer("num_additional_outputs", caps.num_additional_outputs)
        _write_fourccs(writer, "input_pixel_formats", caps.input_pixel_formats)
        _write_fourccs(writer, "output_pixel_formats", caps.output_pixel_formats)
        writer.write_integer("max_input_width", caps.max_input_width)
        writer.write_integer("max_input_height", caps.max_input_height)
        writer.write_integer("min_input_width", caps.min_input_width)
        writer.write_integer("min_input_height", caps.min_input_height)
        writer.write_integer("max_output_width", caps.max_output_width)
        writer.write_integer("max_output_height", caps.max_output_height)
        writer.write_integer("min_output_width", caps.min_output_width)
        writer.write_integer("min_output_height", caps.min_output_height)
