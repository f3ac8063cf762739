"""
vadumpcaps Test Configuration

Shared fixtures and configuration for all tests.
"""

import io
import logging
import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

import vadumpcaps.config as config_module
from vadumpcaps.output import StructuredWriter

from tests.fixtures import DriverFactory, FakeDriver


# ============ Writer Fixtures ============


@pytest.fixture
def stream() -> io.StringIO:
    """In-memory text sink for the writer."""
    return io.StringIO()


@pytest.fixture
def writer(stream: io.StringIO) -> StructuredWriter:
    """Pretty writer with the default indentation."""
    return StructuredWriter(stream)


@pytest.fixture
def compact_writer(stream: io.StringIO) -> StructuredWriter:
    """Single-line writer."""
    return StructuredWriter(stream, pretty=False)


# ============ Driver Fixtures ============


@pytest.fixture
def driver() -> FakeDriver:
    """Fake driver with decode, encode and video processing support."""
    return DriverFactory.create_typical()


@pytest.fixture
def minimal_driver() -> FakeDriver:
    """Fake driver with one decode profile."""
    return DriverFactory.create_minimal()


# ============ Temporary File Fixtures ============


@pytest.fixture(scope="function")
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(scope="function")
def temp_config_file(temp_dir: Path) -> Path:
    """Create a temporary config file."""
    config_file = temp_dir / "vadumpcaps.yaml"
    config_content = """
device:
  drm_device: "/dev/dri/renderD129"

output:
  indent: 2
  pretty: true

selection:
  image_formats: true

logging:
  level: "DEBUG"
"""
    config_file.write_text(config_content)
    return config_file


# ============ Environment Fixtures ============


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate each test from VADUMPCAPS_* variables and cached config."""
    for key in list(os.environ.keys()):
        if key.startswith("VADUMPCAPS_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(config_module, "_config", None)

    # main() replaces the handlers and level of the root logger.
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
