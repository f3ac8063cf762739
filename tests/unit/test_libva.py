"""
Unit tests for the libva binding that do not need a VA driver.
"""

import ctypes

import pytest

from vadumpcaps.va import DeviceOpenError, ImageFormat
from vadumpcaps.va import constants as va
from vadumpcaps.va import structs as s
from vadumpcaps.va.interface import ColorBalanceCap, FilterValueRange, VAStatusError
from vadumpcaps.va.libva import (
    _FILTER_CAP_LAYOUTS,
    LibvaDisplay,
    _image_format,
    _load_library,
    _range,
)


@pytest.mark.unit
class TestStructLayouts:
    """Tests for ctypes structure sizes against the libva ABI."""

    def test_image_format_size(self):
        """Test VAImageFormat: eight fields plus four reserved words."""
        assert ctypes.sizeof(s.VAImageFormat) == 48

    def test_value_range_size(self):
        """Test VAProcFilterValueRange: four floats plus four reserved words."""
        assert ctypes.sizeof(s.VAProcFilterValueRange) == 32

    def test_config_attrib_size(self):
        """Test VAConfigAttrib."""
        assert ctypes.sizeof(s.VAConfigAttrib) == 8

    def test_tone_mapping_reserved_words(self):
        """Test that the HDR tone mapping buffer ends in sixteen reserved words."""
        field = s.VAProcFilterParameterBufferHDRToneMapping.va_reserved

        assert field.size == 16 * 4

    @pytest.mark.skipif(ctypes.sizeof(ctypes.c_void_p) != 8, reason="64-bit layout")
    def test_tone_mapping_size(self):
        """Test VAProcFilterParameterBufferHDRToneMapping on a 64-bit ABI."""
        assert ctypes.sizeof(s.VAHdrMetaData) == 40
        assert ctypes.sizeof(s.VAProcFilterParameterBufferHDRToneMapping) == 112


@pytest.mark.unit
class TestConversions:
    """Tests for structure to record conversion."""

    def test_image_format(self):
        """Test that every image format field is copied."""
        fmt = s.VAImageFormat(
            fourcc=0x41524742,
            byte_order=va.VA_LSB_FIRST,
            bits_per_pixel=32,
            depth=24,
            red_mask=0xFF0000,
            green_mask=0xFF00,
            blue_mask=0xFF,
        )

        assert _image_format(fmt) == ImageFormat(
            fourcc=0x41524742,
            byte_order=va.VA_LSB_FIRST,
            bits_per_pixel=32,
            depth=24,
            red_mask=0xFF0000,
            green_mask=0xFF00,
            blue_mask=0xFF,
            alpha_mask=0,
        )

    def test_range(self):
        """Test value range conversion."""
        value_range = s.VAProcFilterValueRange(
            min_value=-1.0, max_value=1.0, default_value=0.5, step=0.25
        )

        assert _range(value_range) == FilterValueRange(-1.0, 1.0, 0.5, 0.25)

    def test_colour_balance_layout(self):
        """Test the colour balance cap converter."""
        structure, capacity, convert = _FILTER_CAP_LAYOUTS[va.PROC_FILTER_COLOR_BALANCE]
        cap = structure(type=2, range=s.VAProcFilterValueRange(0.0, 10.0, 1.0, 0.5))

        assert capacity == va.PROC_COLOR_BALANCE_COUNT
        assert convert(cap) == ColorBalanceCap(2, FilterValueRange(0.0, 10.0, 1.0, 0.5))


@pytest.mark.unit
class TestOpening:
    """Tests for display opening failures."""

    def test_missing_library(self):
        """Test that an unloadable library raises DeviceOpenError."""
        with pytest.raises(DeviceOpenError, match="Unable to load"):
            _load_library("va", "libva.so.2", "/nonexistent/libva-missing.so")

    def test_x11_without_display(self, monkeypatch):
        """Test that a bare X11 request without $DISPLAY is fatal."""
        monkeypatch.delenv("DISPLAY", raising=False)

        with pytest.raises(DeviceOpenError, match="DISPLAY not set"):
            LibvaDisplay.open_x11()


@pytest.mark.unit
class TestStatusError:
    """Tests for VAStatusError."""

    def test_description_from_status(self):
        """Test that a missing description is filled from the status table."""
        error = VAStatusError(va.VA_STATUS_ERROR_UNSUPPORTED_PROFILE, "vaCreateConfig")

        assert error.status == va.VA_STATUS_ERROR_UNSUPPORTED_PROFILE
        assert error.call == "vaCreateConfig"
        assert error.description == va.status_description(va.VA_STATUS_ERROR_UNSUPPORTED_PROFILE)
        assert "VAProfile" in error.description
        assert str(error).startswith("vaCreateConfig failed: 12 (")
