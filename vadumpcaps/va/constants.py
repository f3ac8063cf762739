"""
VA-API Constants

Numeric values of the VA-API surface used by the capability dump, taken
from va.h, va_vpp.h and va_drmcommon.h as of libva 1.22.
"""

# Version of the VA-API headers these constants and name tables describe.
VA_MAJOR_VERSION = 1
VA_MINOR_VERSION = 22
VA_MICRO_VERSION = 0

# ============ Status codes ============

VA_STATUS_SUCCESS = 0x00000000
VA_STATUS_ERROR_OPERATION_FAILED = 0x00000001
VA_STATUS_ERROR_ALLOCATION_FAILED = 0x00000002
VA_STATUS_ERROR_INVALID_DISPLAY = 0x00000003
VA_STATUS_ERROR_INVALID_CONFIG = 0x00000004
VA_STATUS_ERROR_INVALID_CONTEXT = 0x00000005
VA_STATUS_ERROR_INVALID_SURFACE = 0x00000006
VA_STATUS_ERROR_INVALID_BUFFER = 0x00000007
VA_STATUS_ERROR_INVALID_IMAGE = 0x00000008
VA_STATUS_ERROR_INVALID_SUBPICTURE = 0x00000009
VA_STATUS_ERROR_ATTR_NOT_SUPPORTED = 0x0000000A
VA_STATUS_ERROR_MAX_NUM_EXCEEDED = 0x0000000B
VA_STATUS_ERROR_UNSUPPORTED_PROFILE = 0x0000000C
VA_STATUS_ERROR_UNSUPPORTED_ENTRYPOINT = 0x0000000D
VA_STATUS_ERROR_UNSUPPORTED_RT_FORMAT = 0x0000000E
VA_STATUS_ERROR_UNSUPPORTED_BUFFERTYPE = 0x0000000F
VA_STATUS_ERROR_SURFACE_BUSY = 0x00000010
VA_STATUS_ERROR_FLAG_NOT_SUPPORTED = 0x00000011
VA_STATUS_ERROR_INVALID_PARAMETER = 0x00000012
VA_STATUS_ERROR_RESOLUTION_NOT_SUPPORTED = 0x00000013
VA_STATUS_ERROR_UNIMPLEMENTED = 0x00000014
VA_STATUS_ERROR_SURFACE_IN_DISPLAYING = 0x00000015
VA_STATUS_ERROR_INVALID_IMAGE_FORMAT = 0x00000016
VA_STATUS_ERROR_DECODING_ERROR = 0x00000017
VA_STATUS_ERROR_ENCODING_ERROR = 0x00000018
VA_STATUS_ERROR_INVALID_VALUE = 0x00000019
VA_STATUS_ERROR_UNSUPPORTED_FILTER = 0x00000020
VA_STATUS_ERROR_INVALID_FILTER_CHAIN = 0x00000021
VA_STATUS_ERROR_HW_BUSY = 0x00000022
VA_STATUS_ERROR_UNSUPPORTED_MEMORY_TYPE = 0x00000024
VA_STATUS_ERROR_NOT_ENOUGH_BUFFER = 0x00000025
VA_STATUS_ERROR_TIMEDOUT = 0x00000026
VA_STATUS_ERROR_UNKNOWN = 0xFFFFFFFF

# Same wording as vaErrorStr(), for drivers reached without libva.
STATUS_DESCRIPTIONS = {
    VA_STATUS_SUCCESS: "success (no error)",
    VA_STATUS_ERROR_OPERATION_FAILED: "operation failed",
    VA_STATUS_ERROR_ALLOCATION_FAILED: "resource allocation failed",
    VA_STATUS_ERROR_INVALID_DISPLAY: "invalid VADisplay",
    VA_STATUS_ERROR_INVALID_CONFIG: "invalid VAConfigID",
    VA_STATUS_ERROR_INVALID_CONTEXT: "invalid VAContextID",
    VA_STATUS_ERROR_INVALID_SURFACE: "invalid VASurfaceID",
    VA_STATUS_ERROR_INVALID_BUFFER: "invalid VABufferID",
    VA_STATUS_ERROR_INVALID_IMAGE: "invalid VAImageID",
    VA_STATUS_ERROR_INVALID_SUBPICTURE: "invalid VASubpictureID",
    VA_STATUS_ERROR_ATTR_NOT_SUPPORTED: "attribute not supported",
    VA_STATUS_ERROR_MAX_NUM_EXCEEDED: "list argument exceeds maximum number",
    VA_STATUS_ERROR_UNSUPPORTED_PROFILE: "the requested VAProfile is not supported",
    VA_STATUS_ERROR_UNSUPPORTED_ENTRYPOINT: "the requested VAEntryPoint is not supported",
    VA_STATUS_ERROR_UNSUPPORTED_RT_FORMAT: "the requested RT Format is not supported",
    VA_STATUS_ERROR_UNSUPPORTED_BUFFERTYPE: "the requested VABufferType is not supported",
    VA_STATUS_ERROR_SURFACE_BUSY: "surface is in use",
    VA_STATUS_ERROR_FLAG_NOT_SUPPORTED: "flag not supported",
    VA_STATUS_ERROR_INVALID_PARAMETER: "invalid parameter",
    VA_STATUS_ERROR_RESOLUTION_NOT_SUPPORTED: "resolution not supported",
    VA_STATUS_ERROR_UNIMPLEMENTED: "the requested function is not implemented",
    VA_STATUS_ERROR_SURFACE_IN_DISPLAYING: "surface is in displaying (may by overlay)",
    VA_STATUS_ERROR_INVALID_IMAGE_FORMAT: "invalid VAImageFormat",
    VA_STATUS_ERROR_DECODING_ERROR: "internal decoding error",
    VA_STATUS_ERROR_ENCODING_ERROR: "internal encoding error",
    VA_STATUS_ERROR_INVALID_VALUE: "an invalid/unsupported value was supplied",
    VA_STATUS_ERROR_UNSUPPORTED_FILTER: "the requested filter is not supported",
    VA_STATUS_ERROR_INVALID_FILTER_CHAIN: "an invalid filter chain was supplied",
    VA_STATUS_ERROR_HW_BUSY: "HW busy now",
    VA_STATUS_ERROR_UNSUPPORTED_MEMORY_TYPE: "an unsupported memory type was supplied",
    VA_STATUS_ERROR_NOT_ENOUGH_BUFFER: "allocated memory size is not enough for input or output",
    VA_STATUS_ERROR_TIMEDOUT: "operation timed out",
    VA_STATUS_ERROR_UNKNOWN: "unknown libva error",
}


def status_description(status: int) -> str:
    """Describe a VAStatus value the way vaErrorStr() does."""
    return STATUS_DESCRIPTIONS.get(status, "unknown libva error / description missing")


# ============ Profiles and entry points ============

VA_PROFILE_NONE = -1
VA_ENTRYPOINT_VIDEO_PROC = 10

# ============ Config attributes ============

VA_ATTRIB_NOT_SUPPORTED = 0x80000000

CONFIG_ATTRIB_RT_FORMAT = 0
CONFIG_ATTRIB_SPATIAL_RESIDUAL = 1
CONFIG_ATTRIB_SPATIAL_CLIPPING = 2
CONFIG_ATTRIB_INTRA_RESIDUAL = 3
CONFIG_ATTRIB_ENCRYPTION = 4
CONFIG_ATTRIB_RATE_CONTROL = 5
CONFIG_ATTRIB_DEC_SLICE_MODE = 6
CONFIG_ATTRIB_DEC_JPEG = 7
CONFIG_ATTRIB_DEC_PROCESSING = 8
CONFIG_ATTRIB_ENC_PACKED_HEADERS = 10
CONFIG_ATTRIB_ENC_INTERLACED = 11
CONFIG_ATTRIB_ENC_MAX_REF_FRAMES = 13
CONFIG_ATTRIB_ENC_MAX_SLICES = 14
CONFIG_ATTRIB_ENC_SLICE_STRUCTURE = 15
CONFIG_ATTRIB_ENC_MACROBLOCK_INFO = 16
CONFIG_ATTRIB_MAX_PICTURE_WIDTH = 18
CONFIG_ATTRIB_MAX_PICTURE_HEIGHT = 19
CONFIG_ATTRIB_ENC_JPEG = 20
CONFIG_ATTRIB_ENC_QUALITY_RANGE = 21
CONFIG_ATTRIB_ENC_QUANTIZATION = 22
CONFIG_ATTRIB_ENC_INTRA_REFRESH = 23
CONFIG_ATTRIB_ENC_SKIP_FRAME = 24
CONFIG_ATTRIB_ENC_ROI = 25
CONFIG_ATTRIB_ENC_RATE_CONTROL_EXT = 26
CONFIG_ATTRIB_PROCESSING_RATE = 27
CONFIG_ATTRIB_ENC_DIRTY_RECT = 28
CONFIG_ATTRIB_ENC_PARALLEL_RATE_CONTROL = 29
CONFIG_ATTRIB_ENC_DYNAMIC_SCALING = 30
CONFIG_ATTRIB_FRAME_SIZE_TOLERANCE_SUPPORT = 31
CONFIG_ATTRIB_FEI_FUNCTION_TYPE = 32
CONFIG_ATTRIB_FEI_MV_PREDICTORS = 33
CONFIG_ATTRIB_STATS = 34
CONFIG_ATTRIB_ENC_TILE_SUPPORT = 35
CONFIG_ATTRIB_CUSTOM_ROUNDING_CONTROL = 36
CONFIG_ATTRIB_QP_BLOCK_SIZE = 37
CONFIG_ATTRIB_MAX_FRAME_SIZE = 38
CONFIG_ATTRIB_PREDICTION_DIRECTION = 39
CONFIG_ATTRIB_MULTIPLE_FRAME = 40
CONFIG_ATTRIB_CONTEXT_PRIORITY = 41
CONFIG_ATTRIB_DEC_AV1_FEATURES = 42
CONFIG_ATTRIB_TEE_TYPE = 43
CONFIG_ATTRIB_TEE_TYPE_CLIENT = 44
CONFIG_ATTRIB_PROTECTED_CONTENT_CIPHER_ALGORITHM = 45
CONFIG_ATTRIB_PROTECTED_CONTENT_CIPHER_BLOCK_SIZE = 46
CONFIG_ATTRIB_PROTECTED_CONTENT_CIPHER_MODE = 47
CONFIG_ATTRIB_PROTECTED_CONTENT_CIPHER_SAMPLE_TYPE = 48
CONFIG_ATTRIB_PROTECTED_CONTENT_USAGE = 49
CONFIG_ATTRIB_ENC_HEVC_FEATURES = 50
CONFIG_ATTRIB_ENC_HEVC_BLOCK_SIZES = 51
CONFIG_ATTRIB_ENC_AV1 = 52
CONFIG_ATTRIB_ENC_AV1_EXT1 = 53
CONFIG_ATTRIB_ENC_AV1_EXT2 = 54
CONFIG_ATTRIB_ENC_PER_BLOCK_CONTROL = 55
CONFIG_ATTRIB_ENC_MAX_TILE_ROWS = 56
CONFIG_ATTRIB_ENC_MAX_TILE_COLS = 57
CONFIG_ATTRIB_TYPE_MAX = 58

# ============ Surface attributes ============

SURFACE_ATTRIB_NONE = 0
SURFACE_ATTRIB_PIXEL_FORMAT = 1
SURFACE_ATTRIB_MIN_WIDTH = 2
SURFACE_ATTRIB_MAX_WIDTH = 3
SURFACE_ATTRIB_MIN_HEIGHT = 4
SURFACE_ATTRIB_MAX_HEIGHT = 5
SURFACE_ATTRIB_MEMORY_TYPE = 6
SURFACE_ATTRIB_EXTERNAL_BUFFER_DESCRIPTOR = 7
SURFACE_ATTRIB_USAGE_HINT = 8
SURFACE_ATTRIB_DRM_FORMAT_MODIFIERS = 9
SURFACE_ATTRIB_ALIGNMENT_SIZE = 10

GENERIC_VALUE_TYPE_INTEGER = 1
GENERIC_VALUE_TYPE_FLOAT = 2
GENERIC_VALUE_TYPE_POINTER = 3
GENERIC_VALUE_TYPE_FUNC = 4

# ============ Video processing ============

PROC_FILTER_NONE = 0
PROC_FILTER_NOISE_REDUCTION = 1
PROC_FILTER_DEINTERLACING = 2
PROC_FILTER_SHARPENING = 3
PROC_FILTER_COLOR_BALANCE = 4
PROC_FILTER_SKIN_TONE_ENHANCEMENT = 5
PROC_FILTER_TOTAL_COLOR_CORRECTION = 6
PROC_FILTER_HVS_NOISE_REDUCTION = 7
PROC_FILTER_HIGH_DYNAMIC_RANGE_TONE_MAPPING = 8
PROC_FILTER_3DLUT = 9
PROC_FILTER_COUNT = 10

PROC_DEINTERLACING_COUNT = 5
PROC_COLOR_BALANCE_COUNT = 8
PROC_TOTAL_COLOR_CORRECTION_COUNT = 7
PROC_HIGH_DYNAMIC_RANGE_METADATA_TYPE_COUNT = 2
PROC_COLOR_STANDARD_COUNT = 14

# Capacity used for the pipeline pixel-format and 3D LUT lists.
PROC_PIXEL_FORMAT_CAPACITY = 256
PROC_3DLUT_CAPACITY = 16

VA_PROC_FILTER_PARAMETER_BUFFER_TYPE = 42

# Size of the throwaway context used to probe filters.
FILTER_PROBE_WIDTH = 1280
FILTER_PROBE_HEIGHT = 720

# ============ Image formats ============

VA_LSB_FIRST = 1
VA_MSB_FIRST = 2
