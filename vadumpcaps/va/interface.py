"""
Capability-Query Interface

Abstract view of a VA-API display as seen by the capability traversal, and
the plain data records its queries return.

Every query either returns its result or raises VAStatusError. List queries
do their own size discovery, so callers never assume a fixed result size.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Union

from vadumpcaps.va.constants import status_description

logger = logging.getLogger(__name__)


class VAStatusError(Exception):
    """A capability query returned a non-success VAStatus."""

    def __init__(self, status: int, call: str, description: Optional[str] = None):
        self.status = status
        self.call = call
        self.description = description or status_description(status)
        super().__init__(f"{call} failed: {status} ({self.description})")


class DeviceOpenError(Exception):
    """The VA display could not be opened or initialised."""


# ============ Query results ============


@dataclass(frozen=True)
class ConfigAttrib:
    """One config attribute as returned by vaGetConfigAttributes."""

    type: int
    value: int


@dataclass(frozen=True)
class SurfaceAttrib:
    """One surface attribute; only integer values are carried."""

    type: int
    flags: int
    value: int


@dataclass(frozen=True)
class FilterValueRange:
    min_value: float
    max_value: float
    default_value: float
    step: float


@dataclass(frozen=True)
class DeinterlacingCap:
    type: int


@dataclass(frozen=True)
class ColorBalanceCap:
    type: int
    range: FilterValueRange


@dataclass(frozen=True)
class TotalColorCorrectionCap:
    type: int
    range: FilterValueRange


@dataclass(frozen=True)
class HighDynamicRangeCap:
    metadata_type: int
    caps_flag: int


@dataclass(frozen=True)
class LUT3DCap:
    lut_size: int
    lut_stride: tuple[int, int, int]
    bit_depth: int
    num_channel: int
    channel_mapping: int


FilterCap = Union[
    FilterValueRange,
    DeinterlacingCap,
    ColorBalanceCap,
    TotalColorCorrectionCap,
    HighDynamicRangeCap,
    LUT3DCap,
]


@dataclass(frozen=True)
class PipelineCaps:
    """Result of vaQueryVideoProcPipelineCaps."""

    pipeline_flags: int = 0
    filter_flags: int = 0
    num_forward_references: int = 0
    num_backward_references: int = 0
    input_color_standards: tuple[int, ...] = ()
    output_color_standards: tuple[int, ...] = ()
    rotation_flags: int = 0
    blend_flags: int = 0
    mirror_flags: int = 0
    num_additional_outputs: int = 0
    input_pixel_formats: tuple[int, ...] = ()
    output_pixel_formats: tuple[int, ...] = ()
    max_input_width: int = 0
    max_input_height: int = 0
    min_input_width: int = 0
    min_input_height: int = 0
    max_output_width: int = 0
    max_output_height: int = 0
    min_output_width: int = 0
    min_output_height: int = 0


@dataclass(frozen=True)
class ImageFormat:
    fourcc: int
    byte_order: int
    bits_per_pixel: int
    depth: int = 0
    red_mask: int = 0
    green_mask: int = 0
    blue_mask: int = 0
    alpha_mask: int = 0


@dataclass(frozen=True)
class SubpictureFormat:
    format: ImageFormat
    flags: int


# ============ Filter parameters ============


@dataclass(frozen=True)
class FilterParameters:
    """Parameters for filters that take a single value (VAProcFilterParameterBuffer)."""

    filter_type: int
    value: float = 0.0


@dataclass(frozen=True)
class DeinterlacingParameters(FilterParameters):
    algorithm: int = 0
    flags: int = 0


@dataclass(frozen=True)
class ColorBalanceParameters(FilterParameters):
    attrib: int = 0


@dataclass(frozen=True)
class TotalColorCorrectionParameters(FilterParameters):
    attrib: int = 0


@dataclass(frozen=True)
class ToneMappingParameters(FilterParameters):
    metadata_type: int = 0


# ============ Interface ============


class CapabilityQuery(ABC):
    """
    Capability queries against one initialised VA display.

    Implementations raise VAStatusError for any non-success status. The
    create/destroy pairs are exposed for completeness; the traversal uses the
    scoped helpers config(), context() and parameter_buffer() so that
    release happens on every exit path.
    """

    @abstractmethod
    def version(self) -> tuple[int, int]:
        """Runtime API version reported by vaInitialize."""

    @abstractmethod
    def vendor_string(self) -> Optional[str]:
        """Driver vendor string, or None if the driver has none."""

    @abstractmethod
    def query_config_profiles(self) -> list[int]:
        pass

    @abstractmethod
    def query_config_entrypoints(self, profile: int) -> list[int]:
        pass

    @abstractmethod
    def get_config_attributes(
        self, profile: int, entrypoint: int, types: Sequence[int]
    ) -> list[ConfigAttrib]:
        """
        Query a batch of config attributes in one call.

        Returns one ConfigAttrib per requested type, in request order.
        Unsupported attributes carry VA_ATTRIB_NOT_SUPPORTED as value.
        """

    @abstractmethod
    def create_config(
        self, profile: int, entrypoint: int, attribs: Sequence[ConfigAttrib] = ()
    ) -> int:
        pass

    @abstractmethod
    def destroy_config(self, config_id: int) -> None:
        pass

    @abstractmethod
    def query_surface_attributes(self, config_id: int) -> list[SurfaceAttrib]:
        pass

    @abstractmethod
    def create_context(self, config_id: int, width: int, height: int) -> int:
        pass

    @abstractmethod
    def destroy_context(self, context_id: int) -> None:
        pass

    @abstractmethod
    def query_video_proc_filters(self, context_id: int) -> list[int]:
        pass

    @abstractmethod
    def query_video_proc_filter_caps(
        self, context_id: int, filter_type: int
    ) -> list[FilterCap]:
        """
        Query the static capabilities of one filter.

        The element type depends on filter_type: a FilterValueRange for
        single-value filters, a typed cap record otherwise. Filters without
        capabilities return an empty list.
        """

    @abstractmethod
    def create_filter_parameter_buffer(
        self, context_id: int, params: FilterParameters
    ) -> int:
        pass

    @abstractmethod
    def destroy_buffer(self, buffer_id: int) -> None:
        pass

    @abstractmethod
    def query_video_proc_pipeline_caps(
        self, context_id: int, filter_buffers: Sequence[int] = ()
    ) -> PipelineCaps:
        pass

    @abstractmethod
    def query_image_formats(self) -> list[ImageFormat]:
        pass

    @abstractmethod
    def query_subpicture_formats(self) -> list[SubpictureFormat]:
        pass

    # ============ Scoped resources ============

    @contextmanager
    def config(
        self, profile: int, entrypoint: int, attribs: Sequence[ConfigAttrib] = ()
    ) -> Iterator[int]:
        """Create a config for the duration of the block."""
        config_id = self.create_config(profile, entrypoint, attribs)
        try:
            yield config_id
        finally:
            self._release("config", self.destroy_config, config_id)

    @contextmanager
    def context(self, config_id: int, width: int, height: int) -> Iterator[int]:
        """Create a context for the duration of the block."""
        context_id = self.create_context(config_id, width, height)
        try:
            yield context_id
        finally:
            self._release("context", self.destroy_context, context_id)

    @contextmanager
    def parameter_buffer(
        self, context_id: int, params: Optional[FilterParameters]
    ) -> Iterator[list[int]]:
        """
        Create a filter parameter buffer for the duration of the block.

        Yields the list of buffer ids to pass to the pipeline query: empty
        when params is None.
        """
        if params is None:
            yield []
            return
        buffer_id = self.create_filter_parameter_buffer(context_id, params)
        try:
            yield [buffer_id]
        finally:
            self._release("buffer", self.destroy_buffer, buffer_id)

    @staticmethod
    def _release(kind: str, destroy, resource_id: int) -> None:
        # A failed release must not replace an error already propagating.
        try:
            destroy(resource_id)
        except VAStatusError as e:
            logger.warning(f"Failed to destroy {kind} {resource_id}: {e}")
