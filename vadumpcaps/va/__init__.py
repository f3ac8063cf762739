"""
vadumpcaps VA-API Access

Capability-query interface and its libva implementation.
"""

from vadumpcaps.va.interface import (
    CapabilityQuery,
    ConfigAttrib,
    DeviceOpenError,
    ImageFormat,
    PipelineCaps,
    SubpictureFormat,
    SurfaceAttrib,
    VAStatusError,
)

__all__ = [
    "CapabilityQuery",
    "ConfigAttrib",
    "DeviceOpenError",
    "ImageFormat",
    "PipelineCaps",
    "SubpictureFormat",
    "SurfaceAttrib",
    "VAStatusError",
]
