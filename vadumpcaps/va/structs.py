"""
VA-API C structures for the ctypes binding.

Layouts follow va.h and va_vpp.h. Reserved padding is kept so that arrays
of these structures have the stride the driver writes with.
"""

import ctypes

VA_PADDING_LOW = 4
VA_PADDING_HIGH = 16

VADisplay = ctypes.c_void_p
VAStatus = ctypes.c_int
VAGenericID = ctypes.c_uint
VAConfigID = VAGenericID
VAContextID = VAGenericID
VABufferID = VAGenericID
VASurfaceID = VAGenericID


class VAConfigAttrib(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("value", ctypes.c_uint32),
    ]


class _VAGenericValueUnion(ctypes.Union):
    _fields_ = [
        ("i", ctypes.c_int32),
        ("f", ctypes.c_float),
        ("p", ctypes.c_void_p),
        ("fn", ctypes.c_void_p),
    ]


class VAGenericValue(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("value", _VAGenericValueUnion),
    ]


class VASurfaceAttrib(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("flags", ctypes.c_uint32),
        ("value", VAGenericValue),
    ]


class VAImageFormat(ctypes.Structure):
    _fields_ = [
        ("fourcc", ctypes.c_uint32),
        ("byte_order", ctypes.c_uint32),
        ("bits_per_pixel", ctypes.c_uint32),
        ("depth", ctypes.c_uint32),
        ("red_mask", ctypes.c_uint32),
        ("green_mask", ctypes.c_uint32),
        ("blue_mask", ctypes.c_uint32),
        ("alpha_mask", ctypes.c_uint32),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_LOW),
    ]


# ============ Filter capabilities ============


class VAProcFilterValueRange(ctypes.Structure):
    _fields_ = [
        ("min_value", ctypes.c_float),
        ("max_value", ctypes.c_float),
        ("default_value", ctypes.c_float),
        ("step", ctypes.c_float),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_LOW),
    ]


class VAProcFilterCap(ctypes.Structure):
    _fields_ = [
        ("range", VAProcFilterValueRange),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_LOW),
    ]


class VAProcFilterCapDeinterlacing(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_LOW),
    ]


class VAProcFilterCapColorBalance(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("range", VAProcFilterValueRange),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_LOW),
    ]


class VAProcFilterCapTotalColorCorrection(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("range", VAProcFilterValueRange),
    ]


class VAProcFilterCapHighDynamicRange(ctypes.Structure):
    _fields_ = [
        ("metadata_type", ctypes.c_int),
        ("caps_flag", ctypes.c_uint16),
        ("va_reserved", ctypes.c_uint16 * VA_PADDING_HIGH),
    ]


class VAProcFilterCap3DLUT(ctypes.Structure):
    _fields_ = [
        ("lut_size", ctypes.c_uint16),
        ("lut_stride", ctypes.c_uint16 * 3),
        ("bit_depth", ctypes.c_uint16),
        ("num_channel", ctypes.c_uint16),
        ("channel_mapping", ctypes.c_uint32),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_HIGH),
    ]


# ============ Filter parameter buffers ============


class VAProcFilterParameterBuffer(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("value", ctypes.c_float),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_LOW),
    ]


class VAProcFilterParameterBufferDeinterlacing(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("algorithm", ctypes.c_int),
        ("flags", ctypes.c_uint32),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_LOW),
    ]


class VAProcFilterParameterBufferColorBalance(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("attrib", ctypes.c_int),
        ("value", ctypes.c_float),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_LOW),
    ]


class VAProcFilterParameterBufferTotalColorCorrection(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("attrib", ctypes.c_int),
        ("value", ctypes.c_float),
    ]


class VAHdrMetaDataHDR10(ctypes.Structure):
    _fields_ = [
        ("display_primaries_x", ctypes.c_uint16 * 3),
        ("display_primaries_y", ctypes.c_uint16 * 3),
        ("white_point_x", ctypes.c_uint16),
        ("white_point_y", ctypes.c_uint16),
        ("max_display_mastering_luminance", ctypes.c_uint32),
        ("min_display_mastering_luminance", ctypes.c_uint32),
        ("max_content_light_level", ctypes.c_uint16),
        ("max_pic_average_light_level", ctypes.c_uint16),
        ("reserved", ctypes.c_uint16 * VA_PADDING_HIGH),
    ]


class VAHdrMetaData(ctypes.Structure):
    _fields_ = [
        ("metadata_type", ctypes.c_int),
        ("metadata", ctypes.c_void_p),
        ("metadata_size", ctypes.c_uint32),
        ("reserved", ctypes.c_uint32 * VA_PADDING_LOW),
    ]


class VAProcFilterParameterBufferHDRToneMapping(ctypes.Structure):
    _fields_ = [
        ("type", ctypes.c_int),
        ("data", VAHdrMetaData),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_HIGH),
    ]


# ============ Pipeline capabilities ============


class VAProcPipelineCaps(ctypes.Structure):
    _fields_ = [
        ("pipeline_flags", ctypes.c_uint32),
        ("filter_flags", ctypes.c_uint32),
        ("num_forward_references", ctypes.c_uint32),
        ("num_backward_references", ctypes.c_uint32),
        ("input_color_standards", ctypes.POINTER(ctypes.c_int)),
        ("num_input_color_standards", ctypes.c_uint32),
        ("output_color_standards", ctypes.POINTER(ctypes.c_int)),
        ("num_output_color_standards", ctypes.c_uint32),
        ("rotation_flags", ctypes.c_uint32),
        ("blend_flags", ctypes.c_uint32),
        ("mirror_flags", ctypes.c_uint32),
        ("num_additional_outputs", ctypes.c_uint32),
        ("num_input_pixel_formats", ctypes.c_uint32),
        ("input_pixel_format", ctypes.POINTER(ctypes.c_uint32)),
        ("num_output_pixel_formats", ctypes.c_uint32),
        ("output_pixel_format", ctypes.POINTER(ctypes.c_uint32)),
        ("max_input_width", ctypes.c_uint32),
        ("max_input_height", ctypes.c_uint32),
        ("min_input_width", ctypes.c_uint32),
        ("min_input_height", ctypes.c_uint32),
        ("max_output_width", ctypes.c_uint32),
        ("max_output_height", ctypes.c_uint32),
        ("min_output_width", ctypes.c_uint32),
        ("min_output_height", ctypes.c_uint32),
        ("va_reserved", ctypes.c_uint32 * VA_PADDING_HIGH),
    ]
