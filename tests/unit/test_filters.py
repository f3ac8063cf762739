"""
Unit tests for filter capability rendering and default parameters.
"""

import pytest

from vadumpcaps.capabilities.filters import (
    default_parameters,
    write_filter_caps,
    write_pipeline_caps,
)
from vadumpcaps.va import PipelineCaps
from vadumpcaps.va import constants as va
from vadumpcaps.va.interface import (
    ColorBalanceCap,
    ColorBalanceParameters,
    DeinterlacingCap,
    DeinterlacingParameters,
    FilterParameters,
    FilterValueRange,
    HighDynamicRangeCap,
    LUT3DCap,
    TotalColorCorrectionCap,
    TotalColorCorrectionParameters,
    ToneMappingParameters,
)

from tests.fixtures import parse_document


@pytest.mark.unit
class TestDefaultParameters:
    """Tests for default parameter synthesis."""

    def test_none_filter(self):
        """Test that the None filter takes no parameters."""
        assert default_parameters(va.PROC_FILTER_NONE, []) is None

    def test_zero_caps_falls_back(self):
        """Test that a filter reporting no caps gets no parameters."""
        assert default_parameters(va.PROC_FILTER_DEINTERLACING, []) is None
        assert default_parameters(va.PROC_FILTER_COLOR_BALANCE, []) is None

    def test_highest_deinterlacer(self):
        """Test that the highest reported algorithm is chosen."""
        caps = [DeinterlacingCap(1), DeinterlacingCap(4), DeinterlacingCap(2)]

        params = default_parameters(va.PROC_FILTER_DEINTERLACING, caps)

        assert params == DeinterlacingParameters(
            filter_type=va.PROC_FILTER_DEINTERLACING, algorithm=4
        )

    def test_first_colour_balance_entry(self):
        """Test that the first colour balance entry is used at its default."""
        caps = [
            ColorBalanceCap(2, FilterValueRange(0.0, 10.0, 1.0, 0.1)),
            ColorBalanceCap(1, FilterValueRange(-180.0, 180.0, 0.0, 1.0)),
        ]

        params = default_parameters(va.PROC_FILTER_COLOR_BALANCE, caps)

        assert params == ColorBalanceParameters(
            filter_type=va.PROC_FILTER_COLOR_BALANCE, value=1.0, attrib=2
        )

    def test_first_total_colour_correction_entry(self):
        """Test total colour correction defaults."""
        caps = [TotalColorCorrectionCap(3, FilterValueRange(0.0, 1.0, 0.5, 0.1))]

        params = default_parameters(va.PROC_FILTER_TOTAL_COLOR_CORRECTION, caps)

        assert isinstance(params, TotalColorCorrectionParameters)
        assert (params.attrib, params.value) == (3, 0.5)

    def test_tone_mapping_metadata_type(self):
        """Test that tone mapping uses the first metadata type."""
        caps = [HighDynamicRangeCap(1, 0x2)]

        params = default_parameters(va.PROC_FILTER_HIGH_DYNAMIC_RANGE_TONE_MAPPING, caps)

        assert isinstance(params, ToneMappingParameters)
        assert params.metadata_type == 1

    @pytest.mark.parametrize("filter_type", [
        va.PROC_FILTER_NOISE_REDUCTION,
        va.PROC_FILTER_SHARPENING,
        va.PROC_FILTER_SKIN_TONE_ENHANCEMENT,
    ])
    def test_range_filters_use_default_value(self, filter_type):
        """Test single-value filters at their default value."""
        params = default_parameters(filter_type, [FilterValueRange(0.0, 64.0, 8.0, 1.0)])

        assert params == FilterParameters(filter_type=filter_type, value=8.0)

    def test_3dlut_has_no_defaults(self):
        """Test that filters with no known parameters get none."""
        caps = [LUT3DCap(33, (1, 33, 1089), 16, 4, 0)]

        assert default_parameters(va.PROC_FILTER_3DLUT, caps) is None


@pytest.mark.unit
class TestFilterCaps:
    """Tests for filter capability rendering."""

    def render(self, writer, stream, filter_type, caps):
        with writer.object(None):
            write_filter_caps(writer, filter_type, caps)
        return parse_document(stream.getvalue())["caps"]

    def test_range(self, writer, stream):
        """Test a single-range filter."""
        caps = self.render(writer, stream, va.PROC_FILTER_SHARPENING, [
            FilterValueRange(0.0, 64.0, 44.0, 1.0),
        ])

        assert caps == {"min_value": 0, "max_value": 64, "default_value": 44, "step": 1}

    def test_empty_caps(self, writer, stream):
        """Test that a filter with no caps renders an empty object."""
        assert self.render(writer, stream, va.PROC_FILTER_NOISE_REDUCTION, []) == {}

    def test_deinterlacing_types(self, writer, stream):
        """Test deinterlacing types, including an unknown one."""
        caps = self.render(writer, stream, va.PROC_FILTER_DEINTERLACING, [
            DeinterlacingCap(1), DeinterlacingCap(77),
        ])

        assert caps == {"types": [
            {"type": 1, "name": "Bob"},
            {"type": 77, "unknown": True},
        ]}

    def test_colour_balance_ranges(self, writer, stream):
        """Test that colour balance entries carry their range."""
        caps = self.render(writer, stream, va.PROC_FILTER_COLOR_BALANCE, [
            ColorBalanceCap(1, FilterValueRange(-180.0, 180.0, 0.0, 1.0)),
        ])

        assert caps == {"types": [{
            "type": 1,
            "name": "Hue",
            "min_value": -180,
            "max_value": 180,
            "default_value": 0,
            "step": 1,
        }]}

    def test_hdr_flags(self, writer, stream):
        """Test HDR metadata types and tone mapping flags."""
        caps = self.render(writer, stream, va.PROC_FILTER_HIGH_DYNAMIC_RANGE_TONE_MAPPING, [
            HighDynamicRangeCap(1, 0x1 | 0x2),
        ])

        assert caps == {"types": [{
            "metadata_type": 1,
            "name": "HDR10",
            "caps_flags": ["HDR_TO_HDR", "HDR_TO_SDR"],
        }]}

    def test_3dlut(self, writer, stream):
        """Test 3D LUT entries."""
        caps = self.render(writer, stream, va.PROC_FILTER_3DLUT, [
            LUT3DCap(33, (1, 33, 1089), 16, 4, 1),
        ])

        assert caps == {"luts": [{
            "lut_size": 33,
            "lut_stride": [1, 33, 1089],
            "bit_depth": 16,
            "num_channel": 4,
            "channel_mapping": 1,
        }]}


@pytest.mark.unit
class TestPipelineCaps:
    """Tests for pipeline capability rendering."""

    def test_pipeline_object(self, writer, stream):
        """Test the pipeline fields and their decoding."""
        with writer.object(None):
            write_pipeline_caps(writer, PipelineCaps(
                num_forward_references=2,
                input_color_standards=(2, 99),
                rotation_flags=0x1 | 0x2,
                mirror_flags=0x2,
                output_pixel_formats=(0x3231564E,),
                max_output_width=8192,
            ))

        pipeline = parse_document(stream.getvalue())["pipeline"]

        assert pipeline["forward_references"] == 2
        assert pipeline["input_colour_standards"] == [
            {"type": 2, "name": "BT709"},
            {"type": 99, "unknown": True},
        ]
        assert pipeline["output_colour_standards"] == []
        assert pipeline["rotation_flags"] == ["NONE", "90"]
        assert pipeline["mirror_flags"] == ["VERTICAL"]
        assert pipeline["output_pixel_formats"] == ["NV12"]
        assert pipeline["max_output_width"] == 8192
        assert pipeline["pipeline_flags"] == []
