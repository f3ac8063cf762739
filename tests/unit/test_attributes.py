"""
Unit tests for config and surface attribute decoding.
"""

import pytest

from vadumpcaps.capabilities.attributes import (
    DECODERS,
    UNKNOWN_DECODER,
    BitfieldDecoder,
    decode_attribute,
    decoder_for,
    is_supported,
)
from vadumpcaps.capabilities.surfaces import write_surface_attributes
from vadumpcaps.va import ConfigAttrib, SurfaceAttrib
from vadumpcaps.va import constants as va

from tests.fixtures import parse_document


def decode_all(writer, stream, attribs):
    with writer.object(None):
        mask = 0
        for attrib in attribs:
            mask |= decode_attribute(writer, attrib)
    return mask, parse_document(stream.getvalue())


@pytest.mark.unit
class TestConfigAttributes:
    """Tests for config attribute decoders."""

    def test_rt_format_reports_mask(self, writer, stream):
        """Test that the RT format attribute returns its mask and names it."""
        mask, doc = decode_all(writer, stream, [
            ConfigAttrib(va.CONFIG_ATTRIB_RT_FORMAT, 0x1 | 0x100),
        ])

        assert mask == 0x101
        assert doc == {"rt_formats": ["YUV420", "YUV420_10"]}

    def test_bitmask_drops_unknown_bits(self, writer, stream):
        """Test that unnamed bits of a known attribute are omitted."""
        _, doc = decode_all(writer, stream, [
            ConfigAttrib(va.CONFIG_ATTRIB_RATE_CONTROL, 0x2 | 0x40000000),
        ])

        assert doc == {"rate_control_modes": ["CBR"]}

    def test_unknown_attribute_shown_raw(self, writer, stream):
        """Test that attributes without a decoder show type and value."""
        _, doc = decode_all(writer, stream, [ConfigAttrib(9, 5)])

        assert doc == {"unknown_9": {"type": 9, "value": 5}}

    def test_max_ref_frames(self, writer, stream):
        """Test that the L1 count only appears when nonzero."""
        _, doc = decode_all(writer, stream, [
            ConfigAttrib(va.CONFIG_ATTRIB_ENC_MAX_REF_FRAMES, 4),
        ])

        assert doc == {"max_ref_frames_l0": 4}

    def test_max_ref_frames_with_l1(self, writer, stream):
        """Test the L1 count from the high half."""
        _, doc = decode_all(writer, stream, [
            ConfigAttrib(va.CONFIG_ATTRIB_ENC_MAX_REF_FRAMES, (2 << 16) | 4),
        ])

        assert doc == {"max_ref_frames_l0": 4, "max_ref_frames_l1": 2}

    def test_jpeg_decode_rotations(self, writer, stream):
        """Test the JPEG decode rotation mask."""
        _, doc = decode_all(writer, stream, [
            ConfigAttrib(va.CONFIG_ATTRIB_DEC_JPEG, 0b0101),
        ])

        assert doc == {"jpeg_decode": {"rotations": ["NONE", "180"]}}

    def test_roi_bitfield(self, writer, stream):
        """Test a packed bit-field attribute."""
        value = 8 | (1 << 9)
        _, doc = decode_all(writer, stream, [ConfigAttrib(va.CONFIG_ATTRIB_ENC_ROI, value)])

        assert doc == {"roi": {
            "num_regions": 8,
            "rc_priority_support": 0,
            "rc_qp_delta_support": 1,
        }}

    def test_decoder_lookup(self):
        """Test the fallback decoder for unmapped types."""
        assert decoder_for(va.CONFIG_ATTRIB_TYPE_MAX + 5) is UNKNOWN_DECODER
        assert decoder_for(va.CONFIG_ATTRIB_RT_FORMAT) is DECODERS[va.CONFIG_ATTRIB_RT_FORMAT]

    def test_decoder_table_is_read_only(self):
        """Test that the decoder table cannot be changed."""
        with pytest.raises(TypeError):
            DECODERS[99] = UNKNOWN_DECODER

    def test_is_supported(self):
        """Test the not-supported sentinel."""
        assert is_supported(ConfigAttrib(0, 0))
        assert not is_supported(ConfigAttrib(0, va.VA_ATTRIB_NOT_SUPPORTED))


@pytest.mark.unit
class TestBitfieldDecoder:
    """Tests for bit-field unpacking."""

    def test_fields_from_lsb(self):
        """Test that fields are read upwards from bit zero."""
        decoder = BitfieldDecoder("x", [("low", 4), ("mid", 2), ("high", 8)])

        assert decoder.unpack(0b11111111_10_0011) == [("low", 3), ("mid", 2), ("high", 255)]


@pytest.mark.unit
class TestSurfaceAttributes:
    """Tests for surface attribute decoding."""

    def test_pixel_formats_written_last(self, writer, stream):
        """Test that pixel formats are collected into one trailing array."""
        with writer.object(None):
            write_surface_attributes(writer, [
                SurfaceAttrib(va.SURFACE_ATTRIB_PIXEL_FORMAT, 1, 0x3231564E),
                SurfaceAttrib(va.SURFACE_ATTRIB_MIN_WIDTH, 1, 16),
                SurfaceAttrib(va.SURFACE_ATTRIB_PIXEL_FORMAT, 1, 0x30313050),
            ])

        text = stream.getvalue()
        assert text.index("min_width") < text.index("pixel_formats")
        assert parse_document(text) == {"min_width": 16, "pixel_formats": ["NV12", "P010"]}

    def test_alignment_and_ignored(self, writer, stream):
        """Test alignment decoding and that write-only attributes are skipped."""
        with writer.object(None):
            write_surface_attributes(writer, [
                SurfaceAttrib(va.SURFACE_ATTRIB_ALIGNMENT_SIZE, 1, 0x43),
                SurfaceAttrib(va.SURFACE_ATTRIB_EXTERNAL_BUFFER_DESCRIPTOR, 2, 0),
            ])

        assert parse_document(stream.getvalue()) == {
            "alignment_size": {"log2_width": 3, "log2_height": 4},
        }

    def test_unknown_surface_attribute(self, writer, stream):
        """Test the raw fallback for unknown surface attributes."""
        with writer.object(None):
            write_surface_attributes(writer, [SurfaceAttrib(42, 1, 7)])

        assert parse_document(stream.getvalue()) == {"unknown_42": {"type": 42, "value": 7}}
