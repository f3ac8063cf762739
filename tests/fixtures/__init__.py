"""
Test Fixtures

Fake VA driver and helpers for reading the capability document.
"""

from .documents import parse_document
from .fake_driver import DriverFactory, FakeDriver

__all__ = [
    "DriverFactory",
    "FakeDriver",
    "parse_document",
]
