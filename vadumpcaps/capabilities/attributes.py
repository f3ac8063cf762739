"""
Config Attribute Decoders

Turns the raw (type, value) pairs reported by vaGetConfigAttributes into
readable sub-trees.

Decoding is a lookup from attribute type to a decoder strategy. Types with
no decoder fall back to UnknownAttributeDecoder, which always shows the raw
type and value so that attributes added to VA-API after these tables were
written are never silently lost.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Mapping, Sequence

from vadumpcaps.capabilities import names
from vadumpcaps.capabilities.render import write_flags
from vadumpcaps.output.writer import StructuredWriter
from vadumpcaps.va import constants as va
from vadumpcaps.va.interface import ConfigAttrib


class AttributeDecoder(ABC):
    """Strategy that writes one config attribute into the attributes object."""

    @abstractmethod
    def decode(self, writer: StructuredWriter, attrib: ConfigAttrib) -> int:
        """
        Write the decoded attribute.

        Returns:
            The supported RT-format mask if this attribute carries it, else 0.
        """


class ScalarDecoder(AttributeDecoder):
    """Count or boolean attribute written as a single integer."""

    def __init__(self, tag: str):
        self.tag = tag

    def decode(self, writer: StructuredWriter, attrib: ConfigAttrib) -> int:
        writer.write_integer(self.tag, attrib.value)
        return 0


class BitmaskDecoder(AttributeDecoder):
    """
    Bitmask attribute written as an array of flag names.

    Bits without a name in the table are dropped.
    """

    def __init__(self, tag: str, table: names.NameTable):
        self.tag = tag
        self.table = table

    def decode(self, writer: StructuredWriter, attrib: ConfigAttrib) -> int:
        write_flags(writer, self.tag, self.table, attrib.value)
        return 0


class RTFormatDecoder(BitmaskDecoder):
    """RT formats bitmask; also reports the mask back to the traversal."""

    def __init__(self):
        super().__init__("rt_formats", names.RT_FORMATS)

    def decode(self, writer: StructuredWriter, attrib: ConfigAttrib) -> int:
        super().decode(writer, attrib)
        return attrib.value


class BitfieldDecoder(AttributeDecoder):
    """
    Bit-field packed capability record written field by field.

    Args:
        tag: Name of the sub-object.
        fields: (name, width) pairs from the least significant bit upwards.
    """

    def __init__(self, tag: str, fields: Sequence[tuple[str, int]]):
        self.tag = tag
        self.fields = tuple(fields)

    def unpack(self, value: int) -> list[tuple[str, int]]:
        result = []
        shift = 0
        for name, width in self.fields:
            result.append((name, (value >> shift) & ((1 << width) - 1)))
            shift += width
        return result

    def decode(self, writer: StructuredWriter, attrib: ConfigAttrib) -> int:
        with writer.object(self.tag):
            for name, field_value in self.unpack(attrib.value):
                writer.write_integer(name, field_value)
        return 0


class MaxRefFramesDecoder(AttributeDecoder):
    """L0 count in the low 16 bits, L1 count in the high 16 bits."""

    def decode(self, writer: StructuredWriter, attrib: ConfigAttrib) -> int:
        writer.write_integer("max_ref_frames_l0", attrib.value & 0xFFFF)
        if attrib.value >> 16:
            writer.write_integer("max_ref_frames_l1", attrib.value >> 16)
        return 0


class DecJPEGDecoder(AttributeDecoder):
    """Supported JPEG decode rotations (4-bit rotation mask)."""

    def decode(self, writer: StructuredWriter, attrib: ConfigAttrib) -> int:
        with writer.object("jpeg_decode"):
            write_flags(writer, "rotations", names.ROTATIONS, attrib.value & 0xF)
        return 0


class UnknownAttributeDecoder(AttributeDecoder):
    """Fallback for attribute types with no decoder: raw type and value."""

    def decode(self, writer: StructuredWriter, attrib: ConfigAttrib) -> int:
        with writer.object(f"unknown_{attrib.type}"):
            writer.write_integer("type", attrib.type)
            writer.write_integer("value", attrib.value)
        return 0


UNKNOWN_DECODER = UnknownAttributeDecoder()

DECODERS: Mapping[int, AttributeDecoder] = MappingProxyType({
    va.CONFIG_ATTRIB_RT_FORMAT: RTFormatDecoder(),
    va.CONFIG_ATTRIB_RATE_CONTROL: BitmaskDecoder("rate_control_modes", names.RATE_CONTROL_MODES),
    va.CONFIG_ATTRIB_DEC_SLICE_MODE: BitmaskDecoder("decode_slice_modes", names.DECODE_SLICE_MODES),
    va.CONFIG_ATTRIB_DEC_JPEG: DecJPEGDecoder(),
    va.CONFIG_ATTRIB_DEC_PROCESSING: ScalarDecoder("decode_processing"),
    va.CONFIG_ATTRIB_ENC_PACKED_HEADERS: BitmaskDecoder("packed_headers", names.PACKED_HEADERS),
    va.CONFIG_ATTRIB_ENC_INTERLACED: BitmaskDecoder("interlace_modes", names.INTERLACE_MODES),
    va.CONFIG_ATTRIB_ENC_MAX_REF_FRAMES: MaxRefFramesDecoder(),
    va.CONFIG_ATTRIB_ENC_MAX_SLICES: ScalarDecoder("max_slices"),
    va.CONFIG_ATTRIB_ENC_SLICE_STRUCTURE: BitmaskDecoder(
        "slice_structure_modes", names.SLICE_STRUCTURES
    ),
    va.CONFIG_ATTRIB_ENC_MACROBLOCK_INFO: ScalarDecoder("macroblock_info"),
    va.CONFIG_ATTRIB_MAX_PICTURE_WIDTH: ScalarDecoder("max_picture_width"),
    va.CONFIG_ATTRIB_MAX_PICTURE_HEIGHT: ScalarDecoder("max_picture_height"),
    va.CONFIG_ATTRIB_ENC_JPEG: BitfieldDecoder("jpeg", [
        ("arithmatic_coding_mode", 1),
        ("progressive_dct_mode", 1),
        ("non_interleaved_mode", 1),
        ("differential_mode", 1),
        ("max_num_components", 3),
        ("max_num_scans", 4),
        ("max_num_huffman_tables", 3),
        ("max_num_quantization_tables", 3),
    ]),
    va.CONFIG_ATTRIB_ENC_QUALITY_RANGE: ScalarDecoder("quality_range"),
    va.CONFIG_ATTRIB_ENC_QUANTIZATION: BitmaskDecoder("quantization", names.QUANTIZATION_MODES),
    va.CONFIG_ATTRIB_ENC_INTRA_REFRESH: BitmaskDecoder(
        "intra_refresh_modes", names.INTRA_REFRESH_MODES
    ),
    va.CONFIG_ATTRIB_ENC_SKIP_FRAME: ScalarDecoder("skip_frame"),
    va.CONFIG_ATTRIB_ENC_ROI: BitfieldDecoder("roi", [
        ("num_regions", 8),
        ("rc_priority_support", 1),
        ("rc_qp_delta_support", 1),
    ]),
    va.CONFIG_ATTRIB_ENC_RATE_CONTROL_EXT: BitfieldDecoder("rate_control_ext", [
        ("max_num_temporal_layers_minus1", 8),
        ("temporal_layer_bitrate_control_flag", 1),
    ]),
    va.CONFIG_ATTRIB_PROCESSING_RATE: BitmaskDecoder("processing_rate", names.PROCESSING_RATES),
    va.CONFIG_ATTRIB_ENC_DIRTY_RECT: ScalarDecoder("max_dirty_rects"),
    va.CONFIG_ATTRIB_ENC_PARALLEL_RATE_CONTROL: ScalarDecoder("parallel_rate_control_layers"),
    va.CONFIG_ATTRIB_ENC_DYNAMIC_SCALING: ScalarDecoder("dynamic_scaling"),
    va.CONFIG_ATTRIB_FRAME_SIZE_TOLERANCE_SUPPORT: ScalarDecoder("frame_size_tolerance"),
    va.CONFIG_ATTRIB_FEI_FUNCTION_TYPE: BitmaskDecoder("fei_function_types", names.FEI_FUNCTIONS),
    va.CONFIG_ATTRIB_FEI_MV_PREDICTORS: ScalarDecoder("fei_mv_predictors"),
    va.CONFIG_ATTRIB_ENC_TILE_SUPPORT: ScalarDecoder("tile_support"),
    va.CONFIG_ATTRIB_CUSTOM_ROUNDING_CONTROL: ScalarDecoder("custom_rounding_control"),
    va.CONFIG_ATTRIB_QP_BLOCK_SIZE: ScalarDecoder("qp_block_size"),
    va.CONFIG_ATTRIB_MAX_FRAME_SIZE: BitfieldDecoder("max_frame_size", [
        ("max_frame_size", 1),
        ("multiple_pass", 1),
    ]),
    va.CONFIG_ATTRIB_PREDICTION_DIRECTION: BitmaskDecoder(
        "prediction_directions", names.PREDICTION_DIRECTIONS
    ),
    va.CONFIG_ATTRIB_MULTIPLE_FRAME: BitfieldDecoder("multiple_frame", [
        ("max_num_concurrent_frames", 8),
        ("mixed_quality_level", 1),
    ]),
    va.CONFIG_ATTRIB_CONTEXT_PRIORITY: BitfieldDecoder("context_priority", [
        ("priority", 16),
    ]),
    va.CONFIG_ATTRIB_DEC_AV1_FEATURES: BitfieldDecoder("av1_decode_features", [
        ("lst_support", 2),
    ]),
    va.CONFIG_ATTRIB_ENC_HEVC_FEATURES: BitfieldDecoder("hevc_features", [
        ("separate_colour_planes", 2),
        ("scaling_lists", 2),
        ("amp", 2),
        ("sao", 2),
        ("pcm", 2),
        ("temporal_mvp", 2),
        ("strong_intra_smoothing", 2),
        ("dependent_slices", 2),
        ("sign_data_hiding", 2),
        ("constrained_intra_pred", 2),
        ("transform_skip", 2),
        ("cu_qp_delta", 2),
        ("weighted_prediction", 2),
        ("transquant_bypass", 2),
        ("deblocking_filter_disable", 2),
    ]),
    va.CONFIG_ATTRIB_ENC_HEVC_BLOCK_SIZES: BitfieldDecoder("hevc_block_sizes", [
        ("log2_max_coding_tree_block_size_minus3", 2),
        ("log2_min_coding_tree_block_size_minus3", 2),
        ("log2_min_luma_coding_block_size_minus3", 2),
        ("log2_max_luma_transform_block_size_minus2", 2),
        ("log2_min_luma_transform_block_size_minus2", 2),
        ("max_max_transform_hierarchy_depth_inter", 2),
        ("min_max_transform_hierarchy_depth_inter", 2),
        ("max_max_transform_hierarchy_depth_intra", 2),
        ("min_max_transform_hierarchy_depth_intra", 2),
        ("log2_max_pcm_coding_block_size_minus3", 2),
        ("log2_min_pcm_coding_block_size_minus3", 2),
    ]),
    va.CONFIG_ATTRIB_ENC_MAX_TILE_ROWS: ScalarDecoder("max_tile_rows"),
    va.CONFIG_ATTRIB_ENC_MAX_TILE_COLS: ScalarDecoder("max_tile_cols"),
})


def decoder_for(attrib_type: int) -> AttributeDecoder:
    return DECODERS.get(attrib_type, UNKNOWN_DECODER)


def decode_attribute(writer: StructuredWriter, attrib: ConfigAttrib) -> int:
    """
    Write one supported attribute and return its RT-format contribution.
    """
    return decoder_for(attrib.type).decode(writer, attrib)


def is_supported(attrib: ConfigAttrib) -> bool:
    return attrib.value != va.VA_ATTRIB_NOT_SUPPORTED
