"""
Enumerant Name Tables

Symbolic names for the numeric enumerants reported by a VA-API driver.

Each table is an ordered, immutable list of (code, name, description)
entries built once at import. Lookup is a linear scan where the first match
wins. Bitmask tables are decoded in declaration order, so the order of the
entries here is the order flags appear in the output.
"""

from typing import Iterable, Iterator, NamedTuple, Optional


class EnumName(NamedTuple):
    """One enumerant: numeric code, canonical name, optional description."""

    code: int
    name: str
    description: Optional[str] = None


class NameTable:
    """
    Immutable ordered table of enumerant names for one capability domain.
    """

    __slots__ = ("_title", "_entries")

    def __init__(self, title: str, entries: Iterable[tuple]):
        object.__setattr__(self, "_title", title)
        object.__setattr__(self, "_entries", tuple(EnumName(*entry) for entry in entries))

    def __setattr__(self, name, value):
        raise AttributeError(f"NameTable {self._title!r} is read-only")

    def __delattr__(self, name):
        raise AttributeError(f"NameTable {self._title!r} is read-only")

    @property
    def title(self) -> str:
        return self._title

    def __iter__(self) -> Iterator[EnumName]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"NameTable({self._title!r}, {len(self._entries)} entries)"

    def lookup(self, code: int) -> Optional[EnumName]:
        """
        Find the entry for a code.

        Args:
            code: Numeric enumerant value.

        Returns:
            The first matching entry, or None when the code is not known.
        """
        for entry in self._entries:
            if entry.code == code:
                return entry
        return None

    def flags(self, value: int) -> list[str]:
        """
        Decode a bitmask into the names of the entries it contains.

        Entries are returned in table order. Bits with no entry are dropped.
        """
        return [entry.name for entry in self._entries if entry.code & value]


# ============ Profiles and entry points ============

PROFILES = NameTable("profile", [
    (-1, "None", "Video Processing"),
    (0, "MPEG2Simple", "MPEG-2 Simple Profile"),
    (1, "MPEG2Main", "MPEG-2 Main Profile"),
    (2, "MPEG4Simple", "MPEG-4 part 2 Simple Profile"),
    (3, "MPEG4AdvancedSimple", "MPEG-4 part 2 Advanced Simple Profile"),
    (4, "MPEG4Main", "MPEG-4 part 2 Main Profile"),
    (5, "H264Baseline", "H.264 / MPEG-4 part 10 (AVC) Baseline Profile"),
    (6, "H264Main", "H.264 / MPEG-4 part 10 (AVC) Main Profile"),
    (7, "H264High", "H.264 / MPEG-4 part 10 (AVC) High Profile"),
    (8, "VC1Simple", "VC-1 / SMPTE 421M / WMV 9 / WMV3 Simple Profile"),
    (9, "VC1Main", "VC-1 / SMPTE 421M / WMV 9 / WMV3 Main Profile"),
    (10, "VC1Advanced", "VC-1 / SMPTE 421M / WMV 9 / WMV3 Advanced Profile"),
    (11, "H263Baseline", "H.263"),
    (12, "JPEGBaseline", "JPEG"),
    (13, "H264ConstrainedBaseline", "H.264 / MPEG-4 part 10 (AVC) Constrained Baseline Profile"),
    (14, "VP8Version0_3", "VP8 profile versions 0-3"),
    (15, "H264MultiviewHigh", "H.264 / MPEG-4 part 10 (AVC) Multiview High Profile"),
    (16, "H264StereoHigh", "H.264 / MPEG-4 part 10 (AVC) Stereo High Profile"),
    (17, "HEVCMain", "H.265 / MPEG-H part 2 (HEVC) Main Profile"),
    (18, "HEVCMain10", "H.265 / MPEG-H part 2 (HEVC) Main 10 Profile"),
    (19, "VP9Profile0", "VP9 profile 0"),
    (20, "VP9Profile1", "VP9 profile 1"),
    (21, "VP9Profile2", "VP9 profile 2"),
    (22, "VP9Profile3", "VP9 profile 3"),
    (23, "HEVCMain12", "H.265 / MPEG-H part 2 (HEVC) Main 12 Profile"),
    (24, "HEVCMain422_10", "H.265 / MPEG-H part 2 (HEVC) Main 4:2:2 10 Profile"),
    (25, "HEVCMain422_12", "H.265 / MPEG-H part 2 (HEVC) Main 4:2:2 12 Profile"),
    (26, "HEVCMain444", "H.265 / MPEG-H part 2 (HEVC) Main 4:4:4 Profile"),
    (27, "HEVCMain444_10", "H.265 / MPEG-H part 2 (HEVC) Main 4:4:4 10 Profile"),
    (28, "HEVCMain444_12", "H.265 / MPEG-H part 2 (HEVC) Main 4:4:4 12 Profile"),
    (29, "HEVCSccMain", "H.265 / MPEG-H part 2 (HEVC) Screen Content Coding Main Profile"),
    (30, "HEVCSccMain10", "H.265 / MPEG-H part 2 (HEVC) Screen Content Coding Main 10 Profile"),
    (31, "HEVCSccMain444", "H.265 / MPEG-H part 2 (HEVC) Screen Content Coding Main 4:4:4 Profile"),
    (32, "AV1Profile0", "AV1 Main Profile"),
    (33, "AV1Profile1", "AV1 High Profile"),
    (34, "HEVCSccMain444_10", "H.265 / MPEG-H part 2 (HEVC) Screen Content Coding Main 4:4:4 10 Profile"),
    (35, "Protected", "Protected Content"),
    (36, "H264High10", "H.264 / MPEG-4 part 10 (AVC) High 10 Profile"),
    (37, "VVCMain10", "H.266 / MPEG-I part 3 (VVC) Main 10 Profile"),
    (38, "VVCMultilayerMain10", "H.266 / MPEG-I part 3 (VVC) Multilayer Main 10 Profile"),
])

ENTRYPOINTS = NameTable("entrypoint", [
    (1, "VLD", "Decode Slice"),
    (2, "IZZ", "(Legacy) ZigZag Scan"),
    (3, "IDCT", "(Legacy) Inverse DCT"),
    (4, "MoComp", "(Legacy) Motion Compensation"),
    (5, "Deblocking", "(Legacy) Deblocking"),
    (6, "EncSlice", "Encode Slice"),
    (7, "EncPicture", "Encode Picture"),
    (8, "EncSliceLP", "Encode Slice (Low Power)"),
    (10, "VideoProc", "Video Processing"),
    (11, "FEI", "Flexible Encoding Infrastructure"),
    (12, "Stats", "Statistics"),
    (13, "ProtectedTEEComm", "Protected TEE Communication"),
    (14, "ProtectedContent", "Protected Content"),
])

# ============ Config attribute bitmasks ============

RT_FORMATS = NameTable("rt_format", [
    (0x00000001, "YUV420"),
    (0x00000002, "YUV422"),
    (0x00000004, "YUV444"),
    (0x00000008, "YUV411"),
    (0x00000010, "YUV400"),
    (0x00000100, "YUV420_10"),
    (0x00000200, "YUV422_10"),
    (0x00000400, "YUV444_10"),
    (0x00001000, "YUV420_12"),
    (0x00002000, "YUV422_12"),
    (0x00004000, "YUV444_12"),
    (0x00010000, "RGB16"),
    (0x00020000, "RGB32"),
    (0x00100000, "RGBP"),
    (0x00200000, "RGB32_10"),
    (0x80000000, "PROTECTED"),
])

RATE_CONTROL_MODES = NameTable("rate_control", [
    (0x00000001, "NONE"),
    (0x00000002, "CBR"),
    (0x00000004, "VBR"),
    (0x00000008, "VCM"),
    (0x00000010, "CQP"),
    (0x00000020, "VBR_CONSTRAINED"),
    (0x00000040, "ICQ"),
    (0x00000080, "MB"),
    (0x00000100, "CFS"),
    (0x00000200, "PARALLEL"),
    (0x00000400, "QVBR"),
    (0x00000800, "AVBR"),
    (0x00001000, "TCBRC"),
])

DECODE_SLICE_MODES = NameTable("decode_slice_mode", [
    (0x00000001, "NORMAL"),
    (0x00000002, "BASE"),
])

PACKED_HEADERS = NameTable("packed_header", [
    (0x00000001, "SEQUENCE"),
    (0x00000002, "PICTURE"),
    (0x00000004, "SLICE"),
    (0x00000008, "MISC"),
    (0x00000010, "RAW_DATA"),
])

INTERLACE_MODES = NameTable("interlace_mode", [
    (0x00000001, "FRAME"),
    (0x00000002, "FIELD"),
    (0x00000004, "MBAFF"),
    (0x00000008, "PAFF"),
])

SLICE_STRUCTURES = NameTable("slice_structure", [
    (0x00000001, "POWER_OF_TWO_ROWS"),
    (0x00000002, "ARBITRARY_MACROBLOCKS"),
    (0x00000004, "EQUAL_ROWS"),
    (0x00000008, "MAX_SLICE_SIZE"),
    (0x00000010, "ARBITRARY_ROWS"),
    (0x00000020, "EQUAL_MULTI_ROWS"),
])

QUANTIZATION_MODES = NameTable("quantization", [
    (0x00000001, "TRELLIS_SUPPORTED"),
])

INTRA_REFRESH_MODES = NameTable("intra_refresh", [
    (0x00000001, "ROLLING_COLUMN"),
    (0x00000002, "ROLLING_ROW"),
    (0x00000010, "ADAPTIVE"),
    (0x00000020, "CYCLIC"),
    (0x00010000, "P_FRAME"),
    (0x00020000, "B_FRAME"),
    (0x00040000, "MULTI_REF"),
])

PROCESSING_RATES = NameTable("processing_rate", [
    (0x00000001, "ENCODE"),
    (0x00000002, "DECODE"),
])

PREDICTION_DIRECTIONS = NameTable("prediction_direction", [
    (0x00000001, "PREVIOUS"),
    (0x00000002, "FUTURE"),
    (0x00000004, "BI_NOT_EMPTY"),
])

FEI_FUNCTIONS = NameTable("fei_function", [
    (0x00000001, "ENC"),
    (0x00000002, "PAK"),
    (0x00000004, "ENC_PAK"),
])

# Bit n set means rotation n (VA_ROTATION_*) is supported.
ROTATIONS = NameTable("rotation", [
    (1 << 0, "NONE"),
    (1 << 1, "90"),
    (1 << 2, "180"),
    (1 << 3, "270"),
])

# ============ Surface attributes ============

MEMORY_TYPES = NameTable("memory_type", [
    (0x00000001, "VA"),
    (0x00000002, "V4L2"),
    (0x00000004, "USER_PTR"),
    (0x10000000, "KERNEL_DRM"),
    (0x20000000, "DRM_PRIME"),
    (0x40000000, "DRM_PRIME_2"),
    (0x80000000, "DRM_PRIME_3"),
])

USAGE_HINTS = NameTable("usage_hint", [
    (0x00000001, "DECODER"),
    (0x00000002, "ENCODER"),
    (0x00000004, "VPP_READ"),
    (0x00000008, "VPP_WRITE"),
    (0x00000010, "DISPLAY"),
    (0x00000020, "EXPORT"),
])

# ============ Video processing ============

FILTERS = NameTable("filter", [
    (0, "None"),
    (1, "NoiseReduction"),
    (2, "Deinterlacing"),
    (3, "Sharpening"),
    (4, "ColorBalance"),
    (5, "SkinToneEnhancement"),
    (6, "TotalColorCorrection"),
    (7, "HVSNoiseReduction"),
    (8, "HighDynamicRangeToneMapping"),
    (9, "3DLUT"),
])

DEINTERLACING_TYPES = NameTable("deinterlacing", [
    (0, "None"),
    (1, "Bob"),
    (2, "Weave"),
    (3, "MotionAdaptive"),
    (4, "MotionCompensated"),
])

COLOR_BALANCE_TYPES = NameTable("color_balance", [
    (0, "None"),
    (1, "Hue"),
    (2, "Saturation"),
    (3, "Brightness"),
    (4, "Contrast"),
    (5, "AutoSaturation"),
    (6, "AutoBrightness"),
    (7, "AutoContrast"),
])

TOTAL_COLOR_CORRECTION_TYPES = NameTable("total_color_correction", [
    (0, "None"),
    (1, "Red"),
    (2, "Green"),
    (3, "Blue"),
    (4, "Cyan"),
    (5, "Magenta"),
    (6, "Yellow"),
])

COLOR_STANDARDS = NameTable("color_standard", [
    (0, "None"),
    (1, "BT601"),
    (2, "BT709"),
    (3, "BT470M"),
    (4, "BT470BG"),
    (5, "SMPTE170M"),
    (6, "SMPTE240M"),
    (7, "GenericFilm"),
    (8, "SRGB"),
    (9, "STRGB"),
    (10, "XVYCC601"),
    (11, "XVYCC709"),
    (12, "BT2020"),
    (13, "Explicit"),
])

HDR_METADATA_TYPES = NameTable("hdr_metadata", [
    (0, "None"),
    (1, "HDR10"),
])

TONE_MAPPING_FLAGS = NameTable("tone_mapping", [
    (0x0001, "HDR_TO_HDR"),
    (0x0002, "HDR_TO_SDR"),
    (0x0004, "HDR_TO_EDR"),
    (0x0008, "SDR_TO_HDR"),
])

PIPELINE_FLAGS = NameTable("pipeline", [
    (0x00000001, "SUBPICTURES"),
    (0x00000002, "FAST"),
])

MIRROR_FLAGS = NameTable("mirror", [
    (0x00000001, "HORIZONTAL"),
    (0x00000002, "VERTICAL"),
])

BLEND_FLAGS = NameTable("blend", [
    (0x00000001, "GLOBAL_ALPHA"),
    (0x00000002, "PREMULTIPLIED_ALPHA"),
    (0x00000010, "LUMA_KEY"),
])

# ============ Image formats ============

SUBPICTURE_FLAGS = NameTable("subpicture", [
    (0x00000001, "CHROMA_KEYING"),
    (0x00000002, "GLOBAL_ALPHA"),
    (0x00000004, "DESTINATION_IS_SCREEN_COORD"),
])

BYTE_ORDERS = NameTable("byte_order", [
    (1, "LE"),
    (2, "BE"),
])


def fourcc_string(fourcc: int) -> str:
    """
    Render a FourCC code as its four characters.

    The code is stored little-endian (first character in the low byte).
    Non-printable bytes are shown as ".".
    """
    chars = []
    for shift in (0, 8, 16, 24):
        byte = (fourcc >> shift) & 0xFF
        chars.append(chr(byte) if 0x20 <= byte < 0x7F else ".")
    return "".join(chars)
