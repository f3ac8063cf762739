"""
libva Binding

ctypes implementation of the capability-query interface on top of the
system libva, reached either through a DRM render node or an X11 display.
"""

import ctypes
import ctypes.util
import logging
import os
from typing import Optional, Sequence

from vadumpcaps.va import constants as va
from vadumpcaps.va import structs as s
from vadumpcaps.va.interface import (
    CapabilityQuery,
    ColorBalanceCap,
    ColorBalanceParameters,
    ConfigAttrib,
    DeinterlacingCap,
    DeinterlacingParameters,
    DeviceOpenError,
    FilterCap,
    FilterParameters,
    FilterValueRange,
    HighDynamicRangeCap,
    ImageFormat,
    LUT3DCap,
    PipelineCaps,
    SubpictureFormat,
    SurfaceAttrib,
    ToneMappingParameters,
    TotalColorCorrectionCap,
    TotalColorCorrectionParameters,
    VAStatusError,
)

logger = logging.getLogger(__name__)

_c_int_p = ctypes.POINTER(ctypes.c_int)
_c_uint_p = ctypes.POINTER(ctypes.c_uint)


def _load_library(name: str, soname: str, override: Optional[str] = None) -> ctypes.CDLL:
    candidates = [override] if override else [soname, ctypes.util.find_library(name)]
    errors = []
    for candidate in candidates:
        if not candidate:
            continue
        try:
            return ctypes.CDLL(candidate)
        except OSError as e:
            errors.append(str(e))
    raise DeviceOpenError(f"Unable to load {soname}: {'; '.join(errors) or 'not found'}")


def _declare(lib: ctypes.CDLL, name: str, restype, *argtypes) -> None:
    func = getattr(lib, name)
    func.restype = restype
    func.argtypes = list(argtypes)


def _load_libva(path: Optional[str] = None) -> ctypes.CDLL:
    lib = _load_library("va", "libva.so.2", path)
    dpy = s.VADisplay
    _declare(lib, "vaInitialize", s.VAStatus, dpy, _c_int_p, _c_int_p)
    _declare(lib, "vaTerminate", s.VAStatus, dpy)
    _declare(lib, "vaErrorStr", ctypes.c_char_p, s.VAStatus)
    _declare(lib, "vaQueryVendorString", ctypes.c_char_p, dpy)
    _declare(lib, "vaMaxNumProfiles", ctypes.c_int, dpy)
    _declare(lib, "vaMaxNumEntrypoints", ctypes.c_int, dpy)
    _declare(lib, "vaMaxNumImageFormats", ctypes.c_int, dpy)
    _declare(lib, "vaMaxNumSubpictureFormats", ctypes.c_int, dpy)
    _declare(lib, "vaQueryConfigProfiles", s.VAStatus, dpy, _c_int_p, _c_int_p)
    _declare(lib, "vaQueryConfigEntrypoints", s.VAStatus, dpy, ctypes.c_int, _c_int_p, _c_int_p)
    _declare(
        lib, "vaGetConfigAttributes", s.VAStatus,
        dpy, ctypes.c_int, ctypes.c_int, ctypes.POINTER(s.VAConfigAttrib), ctypes.c_int,
    )
    _declare(
        lib, "vaCreateConfig", s.VAStatus,
        dpy, ctypes.c_int, ctypes.c_int, ctypes.POINTER(s.VAConfigAttrib), ctypes.c_int,
        ctypes.POINTER(s.VAConfigID),
    )
    _declare(lib, "vaDestroyConfig", s.VAStatus, dpy, s.VAConfigID)
    _declare(
        lib, "vaQuerySurfaceAttributes", s.VAStatus,
        dpy, s.VAConfigID, ctypes.POINTER(s.VASurfaceAttrib), _c_uint_p,
    )
    _declare(
        lib, "vaCreateContext", s.VAStatus,
        dpy, s.VAConfigID, ctypes.c_int, ctypes.c_int, ctypes.c_int,
        ctypes.POINTER(s.VASurfaceID), ctypes.c_int, ctypes.POINTER(s.VAContextID),
    )
    _declare(lib, "vaDestroyContext", s.VAStatus, dpy, s.VAContextID)
    _declare(lib, "vaQueryVideoProcFilters", s.VAStatus, dpy, s.VAContextID, _c_int_p, _c_uint_p)
    _declare(
        lib, "vaQueryVideoProcFilterCaps", s.VAStatus,
        dpy, s.VAContextID, ctypes.c_int, ctypes.c_void_p, _c_uint_p,
    )
    _declare(
        lib, "vaCreateBuffer", s.VAStatus,
        dpy, s.VAContextID, ctypes.c_int, ctypes.c_uint, ctypes.c_uint, ctypes.c_void_p,
        ctypes.POINTER(s.VABufferID),
    )
    _declare(lib, "vaDestroyBuffer", s.VAStatus, dpy, s.VABufferID)
    _declare(
        lib, "vaQueryVideoProcPipelineCaps", s.VAStatus,
        dpy, s.VAContextID, ctypes.POINTER(s.VABufferID), ctypes.c_uint,
        ctypes.POINTER(s.VAProcPipelineCaps),
    )
    _declare(lib, "vaQueryImageFormats", s.VAStatus, dpy, ctypes.POINTER(s.VAImageFormat), _c_int_p)
    _declare(
        lib, "vaQuerySubpictureFormats", s.VAStatus,
        dpy, ctypes.POINTER(s.VAImageFormat), _c_uint_p, _c_uint_p,
    )
    return lib


# Per filter type: (cap structure, maximum number of entries, converter).
_FILTER_CAP_LAYOUTS = {
    va.PROC_FILTER_DEINTERLACING: (
        s.VAProcFilterCapDeinterlacing,
        va.PROC_DEINTERLACING_COUNT,
        lambda cap: DeinterlacingCap(type=cap.type),
    ),
    va.PROC_FILTER_COLOR_BALANCE: (
        s.VAProcFilterCapColorBalance,
        va.PROC_COLOR_BALANCE_COUNT,
        lambda cap: ColorBalanceCap(type=cap.type, range=_range(cap.range)),
    ),
    va.PROC_FILTER_TOTAL_COLOR_CORRECTION: (
        s.VAProcFilterCapTotalColorCorrection,
        va.PROC_TOTAL_COLOR_CORRECTION_COUNT,
        lambda cap: TotalColorCorrectionCap(type=cap.type, range=_range(cap.range)),
    ),
    va.PROC_FILTER_HIGH_DYNAMIC_RANGE_TONE_MAPPING: (
        s.VAProcFilterCapHighDynamicRange,
        va.PROC_HIGH_DYNAMIC_RANGE_METADATA_TYPE_COUNT,
        lambda cap: HighDynamicRangeCap(metadata_type=cap.metadata_type, caps_flag=cap.caps_flag),
    ),
    va.PROC_FILTER_3DLUT: (
        s.VAProcFilterCap3DLUT,
        va.PROC_3DLUT_CAPACITY,
        lambda cap: LUT3DCap(
            lut_size=cap.lut_size,
            lut_stride=tuple(cap.lut_stride),
            bit_depth=cap.bit_depth,
            num_channel=cap.num_channel,
            channel_mapping=cap.channel_mapping,
        ),
    ),
}


def _range(value_range: s.VAProcFilterValueRange) -> FilterValueRange:
    return FilterValueRange(
        min_value=value_range.min_value,
        max_value=value_range.max_value,
        default_value=value_range.default_value,
        step=value_range.step,
    )


def _image_format(fmt: s.VAImageFormat) -> ImageFormat:
    return ImageFormat(
        fourcc=fmt.fourcc,
        byte_order=fmt.byte_order,
        bits_per_pixel=fmt.bits_per_pixel,
        depth=fmt.depth,
        red_mask=fmt.red_mask,
        green_mask=fmt.green_mask,
        blue_mask=fmt.blue_mask,
        alpha_mask=fmt.alpha_mask,
    )


class LibvaDisplay(CapabilityQuery):
    """
    An initialised VA display backed by libva.

    Use open_drm() or open_x11() to obtain one, and close() (or a with
    block) to terminate it.
    """

    def __init__(self, lib: ctypes.CDLL, display: int, major: int, minor: int,
                 on_close=None):
        self._lib = lib
        self._display = s.VADisplay(display)
        self._version = (major, minor)
        self._on_close = on_close
        # Keeps HDR metadata referenced by live parameter buffers alive.
        self._buffer_payloads: dict[int, object] = {}

    # ============ Opening ============

    @classmethod
    def open_drm(cls, device: str, libva_path: Optional[str] = None) -> "LibvaDisplay":
        """
        Open a DRM render node and initialise VA on it.

        Raises:
            DeviceOpenError: If the node, the libraries or the driver fail.
        """
        lib = _load_libva(libva_path)
        drm = _load_library("va-drm", "libva-drm.so.2")
        _declare(drm, "vaGetDisplayDRM", s.VADisplay, ctypes.c_int)

        try:
            fd = os.open(device, os.O_RDWR)
        except OSError as e:
            raise DeviceOpenError(f"Failed to open {device}: {e.strerror}.") from e

        display = drm.vaGetDisplayDRM(fd)
        if not display:
            os.close(fd)
            raise DeviceOpenError("Failed to open VA display from DRM device.")

        logger.debug(f"Opened DRM device {device} (fd {fd})")
        return cls._initialize(lib, display, lambda: os.close(fd))

    @classmethod
    def open_x11(cls, display_name: Optional[str] = None,
                 libva_path: Optional[str] = None) -> "LibvaDisplay":
        """
        Open an X11 display and initialise VA on it.

        Args:
            display_name: X11 display name; $DISPLAY when None.

        Raises:
            DeviceOpenError: If the display, the libraries or the driver fail.
        """
        if display_name is None:
            display_name = os.environ.get("DISPLAY")
            if not display_name:
                raise DeviceOpenError("DISPLAY not set.")

        lib = _load_libva(libva_path)
        x11 = _load_library("X11", "libX11.so.6")
        va_x11 = _load_library("va-x11", "libva-x11.so.2")
        _declare(x11, "XOpenDisplay", ctypes.c_void_p, ctypes.c_char_p)
        _declare(x11, "XCloseDisplay", ctypes.c_int, ctypes.c_void_p)
        _declare(va_x11, "vaGetDisplay", s.VADisplay, ctypes.c_void_p)

        x_display = x11.XOpenDisplay(display_name.encode())
        if not x_display:
            raise DeviceOpenError(f"Failed to open X11 display {display_name}.")

        display = va_x11.vaGetDisplay(x_display)
        if not display:
            x11.XCloseDisplay(x_display)
            raise DeviceOpenError("Failed to open VA Display from X11 display.")

        logger.debug(f"Opened X11 display {display_name}")
        return cls._initialize(lib, display, lambda: x11.XCloseDisplay(x_display))

    @classmethod
    def _initialize(cls, lib: ctypes.CDLL, display: int, on_close) -> "LibvaDisplay":
        major = ctypes.c_int(0)
        minor = ctypes.c_int(0)
        status = lib.vaInitialize(display, ctypes.byref(major), ctypes.byref(minor))
        if status != va.VA_STATUS_SUCCESS:
            on_close()
            raise DeviceOpenError(
                f"Failed to initialise: {status} ({cls._error_str(lib, status)})."
            )
        logger.info(f"VA-API {major.value}.{minor.value} initialised")
        return cls(lib, display, major.value, minor.value, on_close)

    def close(self) -> None:
        """Terminate the VA display and release the underlying device."""
        if self._display is None:
            return
        status = self._lib.vaTerminate(self._display)
        if status != va.VA_STATUS_SUCCESS:
            logger.warning(f"vaTerminate failed: {status} ({self._error_str(self._lib, status)})")
        self._display = None
        if self._on_close is not None:
            self._on_close()

    def __enter__(self) -> "LibvaDisplay":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ============ Helpers ============

    @staticmethod
    def _error_str(lib: ctypes.CDLL, status: int) -> str:
        text = lib.vaErrorStr(status)
        return text.decode(errors="replace") if text else va.status_description(status)

    def _check(self, status: int, call: str) -> None:
        if status != va.VA_STATUS_SUCCESS:
            raise VAStatusError(status & 0xFFFFFFFF, call, self._error_str(self._lib, status))

    # ============ Queries ============

    def version(self) -> tuple[int, int]:
        return self._version

    def vendor_string(self) -> Optional[str]:
        text = self._lib.vaQueryVendorString(self._display)
        return text.decode(errors="replace") if text else None

    def query_config_profiles(self) -> list[int]:
        count = ctypes.c_int(self._lib.vaMaxNumProfiles(self._display))
        profiles = (ctypes.c_int * max(count.value, 1))()
        self._check(
            self._lib.vaQueryConfigProfiles(self._display, profiles, ctypes.byref(count)),
            "vaQueryConfigProfiles",
        )
        return list(profiles[: count.value])

    def query_config_entrypoints(self, profile: int) -> list[int]:
        count = ctypes.c_int(self._lib.vaMaxNumEntrypoints(self._display))
        entrypoints = (ctypes.c_int * max(count.value, 1))()
        self._check(
            self._lib.vaQueryConfigEntrypoints(
                self._display, profile, entrypoints, ctypes.byref(count)
            ),
            "vaQueryConfigEntrypoints",
        )
        return list(entrypoints[: count.value])

    def get_config_attributes(
        self, profile: int, entrypoint: int, types: Sequence[int]
    ) -> list[ConfigAttrib]:
        attribs = (s.VAConfigAttrib * len(types))()
        for slot, attrib_type in zip(attribs, types):
            slot.type = attrib_type
        self._check(
            self._lib.vaGetConfigAttributes(
                self._display, profile, entrypoint, attribs, len(types)
            ),
            "vaGetConfigAttributes",
        )
        return [ConfigAttrib(type=a.type, value=a.value) for a in attribs]

    def create_config(
        self, profile: int, entrypoint: int, attribs: Sequence[ConfigAttrib] = ()
    ) -> int:
        c_attribs = (s.VAConfigAttrib * max(len(attribs), 1))()
        for slot, attrib in zip(c_attribs, attribs):
            slot.type = attrib.type
            slot.value = attrib.value
        config_id = s.VAConfigID()
        self._check(
            self._lib.vaCreateConfig(
                self._display, profile, entrypoint, c_attribs, len(attribs),
                ctypes.byref(config_id),
            ),
            "vaCreateConfig",
        )
        return config_id.value

    def destroy_config(self, config_id: int) -> None:
        self._check(self._lib.vaDestroyConfig(self._display, config_id), "vaDestroyConfig")

    def query_surface_attributes(self, config_id: int) -> list[SurfaceAttrib]:
        count = ctypes.c_uint(0)
        self._check(
            self._lib.vaQuerySurfaceAttributes(self._display, config_id, None, ctypes.byref(count)),
            "vaQuerySurfaceAttributes",
        )
        attribs = (s.VASurfaceAttrib * max(count.value, 1))()
        self._check(
            self._lib.vaQuerySurfaceAttributes(
                self._display, config_id, attribs, ctypes.byref(count)
            ),
            "vaQuerySurfaceAttributes",
        )
        result = []
        for attrib in attribs[: count.value]:
            if attrib.value.type == va.GENERIC_VALUE_TYPE_INTEGER:
                value = attrib.value.value.i & 0xFFFFFFFF
            else:
                value = 0
            result.append(SurfaceAttrib(type=attrib.type, flags=attrib.flags, value=value))
        return result

    def create_context(self, config_id: int, width: int, height: int) -> int:
        context_id = s.VAContextID()
        self._check(
            self._lib.vaCreateContext(
                self._display, config_id, width, height, 0, None, 0, ctypes.byref(context_id)
            ),
            "vaCreateContext",
        )
        return context_id.value

    def destroy_context(self, context_id: int) -> None:
        self._check(self._lib.vaDestroyContext(self._display, context_id), "vaDestroyContext")

    def query_video_proc_filters(self, context_id: int) -> list[int]:
        count = ctypes.c_uint(va.PROC_FILTER_COUNT)
        filters = (ctypes.c_int * va.PROC_FILTER_COUNT)()
        self._check(
            self._lib.vaQueryVideoProcFilters(
                self._display, context_id, filters, ctypes.byref(count)
            ),
            "vaQueryVideoProcFilters",
        )
        return list(filters[: count.value])

    def query_video_proc_filter_caps(self, context_id: int, filter_type: int) -> list[FilterCap]:
        layout = _FILTER_CAP_LAYOUTS.get(filter_type)
        if layout is None:
            structure, capacity, convert = s.VAProcFilterCap, 1, lambda cap: _range(cap.range)
        else:
            structure, capacity, convert = layout
        caps = (structure * capacity)()
        count = ctypes.c_uint(capacity)
        self._check(
            self._lib.vaQueryVideoProcFilterCaps(
                self._display, context_id, filter_type, caps, ctypes.byref(count)
            ),
            "vaQueryVideoProcFilterCaps",
        )
        return [convert(cap) for cap in caps[: min(count.value, capacity)]]

    def create_filter_parameter_buffer(self, context_id: int, params: FilterParameters) -> int:
        payload = None
        if isinstance(params, DeinterlacingParameters):
            data = s.VAProcFilterParameterBufferDeinterlacing(
                type=params.filter_type, algorithm=params.algorithm, flags=params.flags
            )
        elif isinstance(params, ColorBalanceParameters):
            data = s.VAProcFilterParameterBufferColorBalance(
                type=params.filter_type, attrib=params.attrib, value=params.value
            )
        elif isinstance(params, TotalColorCorrectionParameters):
            data = s.VAProcFilterParameterBufferTotalColorCorrection(
                type=params.filter_type, attrib=params.attrib, value=params.value
            )
        elif isinstance(params, ToneMappingParameters):
            payload = s.VAHdrMetaDataHDR10()
            data = s.VAProcFilterParameterBufferHDRToneMapping(
                type=params.filter_type,
                data=s.VAHdrMetaData(
                    metadata_type=params.metadata_type,
                    metadata=ctypes.cast(ctypes.pointer(payload), ctypes.c_void_p),
                    metadata_size=ctypes.sizeof(payload),
                ),
            )
        else:
            data = s.VAProcFilterParameterBuffer(type=params.filter_type, value=params.value)

        buffer_id = s.VABufferID()
        self._check(
            self._lib.vaCreateBuffer(
                self._display, context_id, va.VA_PROC_FILTER_PARAMETER_BUFFER_TYPE,
                ctypes.sizeof(data), 1, ctypes.byref(data), ctypes.byref(buffer_id),
            ),
            "vaCreateBuffer",
        )
        if payload is not None:
            self._buffer_payloads[buffer_id.value] = payload
        return buffer_id.value

    def destroy_buffer(self, buffer_id: int) -> None:
        self._buffer_payloads.pop(buffer_id, None)
        self._check(self._lib.vaDestroyBuffer(self._display, buffer_id), "vaDestroyBuffer")

    def query_video_proc_pipeline_caps(
        self, context_id: int, filter_buffers: Sequence[int] = ()
    ) -> PipelineCaps:
        input_standards = (ctypes.c_int * va.PROC_COLOR_STANDARD_COUNT)()
        output_standards = (ctypes.c_int * va.PROC_COLOR_STANDARD_COUNT)()
        input_formats = (ctypes.c_uint32 * va.PROC_PIXEL_FORMAT_CAPACITY)()
        output_formats = (ctypes.c_uint32 * va.PROC_PIXEL_FORMAT_CAPACITY)()

        caps = s.VAProcPipelineCaps()
        caps.input_color_standards = ctypes.cast(input_standards, _c_int_p)
        caps.num_input_color_standards = va.PROC_COLOR_STANDARD_COUNT
        caps.output_color_standards = ctypes.cast(output_standards, _c_int_p)
        caps.num_output_color_standards = va.PROC_COLOR_STANDARD_COUNT
        caps.input_pixel_format = ctypes.cast(input_formats, ctypes.POINTER(ctypes.c_uint32))
        caps.num_input_pixel_formats = va.PROC_PIXEL_FORMAT_CAPACITY
        caps.output_pixel_format = ctypes.cast(output_formats, ctypes.POINTER(ctypes.c_uint32))
        caps.num_output_pixel_formats = va.PROC_PIXEL_FORMAT_CAPACITY

        buffers = (s.VABufferID * max(len(filter_buffers), 1))(*filter_buffers)
        self._check(
            self._lib.vaQueryVideoProcPipelineCaps(
                self._display, context_id, buffers if filter_buffers else None,
                len(filter_buffers), ctypes.byref(caps),
            ),
            "vaQueryVideoProcPipelineCaps",
        )

        def _take(array, count, capacity):
            return tuple(array[: min(count, capacity)])

        return PipelineCaps(
            pipeline_flags=caps.pipeline_flags,
            filter_flags=caps.filter_flags,
            num_forward_references=caps.num_forward_references,
            num_backward_references=caps.num_backward_references,
            input_color_standards=_take(
                input_standards, caps.num_input_color_standards, va.PROC_COLOR_STANDARD_COUNT
            ),
            output_color_standards=_take(
                output_standards, caps.num_output_color_standards, va.PROC_COLOR_STANDARD_COUNT
            ),
            rotation_flags=caps.rotation_flags,
            blend_flags=caps.blend_flags,
            mirror_flags=caps.mirror_flags,
            num_additional_outputs=caps.num_additional_outputs,
            input_pixel_formats=_take(
                input_formats, caps.num_input_pixel_formats, va.PROC_PIXEL_FORMAT_CAPACITY
            ),
            output_pixel_formats=_take(
                output_formats, caps.num_output_pixel_formats, va.PROC_PIXEL_FORMAT_CAPACITY
            ),
            max_input_width=caps.max_input_width,
            max_input_height=caps.max_input_height,
            min_input_width=caps.min_input_width,
            min_input_height=caps.min_input_height,
            max_output_width=caps.max_output_width,
            max_output_height=caps.max_output_height,
            min_output_width=caps.min_output_width,
            min_output_height=caps.min_output_height,
        )

    def query_image_formats(self) -> list[ImageFormat]:
        count = ctypes.c_int(self._lib.vaMaxNumImageFormats(self._display))
        formats = (s.VAImageFormat * max(count.value, 1))()
        self._check(
            self._lib.vaQueryImageFormats(self._display, formats, ctypes.byref(count)),
            "vaQueryImageFormats",
        )
        return [_image_format(fmt) for fmt in formats[: count.value]]

    def query_subpicture_formats(self) -> list[SubpictureFormat]:
        capacity = max(self._lib.vaMaxNumSubpictureFormats(self._display), 1)
        count = ctypes.c_uint(capacity)
        formats = (s.VAImageFormat * capacity)()
        flags = (ctypes.c_uint * capacity)()
        self._check(
            self._lib.vaQuerySubpictureFormats(self._display, formats, flags, ctypes.byref(count)),
            "vaQuerySubpictureFormats",
        )
        return [
            SubpictureFormat(format=_image_format(formats[i]), flags=flags[i])
            for i in range(min(count.value, capacity))
        ]
