"""
Unit tests for configuration module.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from vadumpcaps.capabilities import Section, Selection
from vadumpcaps.config import (
    DeviceConfig,
    LoggingConfig,
    OutputConfig,
    SelectionConfig,
    VADumpCapsConfig,
    get_config,
    load_config,
    reload_config,
)


@pytest.mark.unit
class TestDeviceConfig:
    """Tests for DeviceConfig."""

    def test_default_values(self):
        """Test default device configuration values."""
        config = DeviceConfig()

        assert config.drm_device is None
        assert config.x11_display is None
        assert config.use_x11 is False
        assert config.libva_path is None

    def test_custom_values(self):
        """Test custom device configuration."""
        config = DeviceConfig(use_x11=True, x11_display=":1")

        assert config.use_x11 is True
        assert config.x11_display == ":1"


@pytest.mark.unit
class TestOutputConfig:
    """Tests for OutputConfig."""

    def test_default_values(self):
        """Test default output configuration values."""
        config = OutputConfig()

        assert config.indent == 4
        assert config.pretty is True
        assert config.file is None

    def test_indent_validation(self):
        """Test that a negative indentation is rejected."""
        assert OutputConfig(indent=0).indent == 0

        with pytest.raises(ValidationError):
            OutputConfig(indent=-2)


@pytest.mark.unit
class TestSelectionConfig:
    """Tests for SelectionConfig."""

    def test_default_selects_all(self):
        """Test that no flags means every section."""
        assert SelectionConfig().to_selection() == Selection.all()

    def test_flags_to_selection(self):
        """Test that set flags map onto sections."""
        config = SelectionConfig(surface_formats=True, image_formats=True)

        assert config.to_selection() == Selection.of(
            Section.SURFACE_FORMATS, Section.IMAGE_FORMATS
        )


@pytest.mark.unit
class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_default_values(self):
        """Test default logging configuration."""
        config = LoggingConfig()

        assert config.level == "WARNING"
        assert config.file is None
        assert "%(asctime)s" in config.format

    def test_custom_level(self):
        """Test custom log level."""
        config = LoggingConfig(level="DEBUG")

        assert config.level == "DEBUG"


@pytest.mark.unit
class TestVADumpCapsConfig:
    """Tests for main VADumpCapsConfig class."""

    def test_default_config(self):
        """Test default configuration."""
        config = VADumpCapsConfig()

        assert isinstance(config.device, DeviceConfig)
        assert isinstance(config.output, OutputConfig)
        assert isinstance(config.selection, SelectionConfig)
        assert isinstance(config.logging, LoggingConfig)

    def test_nested_config(self):
        """Test nested configuration access."""
        config = VADumpCapsConfig(
            device=DeviceConfig(drm_device="/dev/dri/renderD129"),
            output=OutputConfig(pretty=False),
        )

        assert config.device.drm_device == "/dev/dri/renderD129"
        assert config.output.pretty is False


@pytest.mark.unit
class TestLoadConfig:
    """Tests for config loading functions."""

    def test_load_from_file(self, temp_config_file: Path):
        """Test loading values from a YAML file."""
        config = load_config(str(temp_config_file))

        assert config.device.drm_device == "/dev/dri/renderD129"
        assert config.output.indent == 2
        assert config.selection.image_formats is True
        assert config.logging.level == "DEBUG"

    def test_missing_explicit_file_raises(self, temp_dir: Path):
        """Test that a config path that does not exist is an error."""
        with pytest.raises(FileNotFoundError, match="absent.yaml"):
            load_config(str(temp_dir / "absent.yaml"))

    def test_no_default_file_gives_defaults(self, temp_dir: Path, monkeypatch):
        """Test that defaults apply when no file is given and none is present."""
        monkeypatch.chdir(temp_dir)

        assert load_config() == VADumpCapsConfig()

    def test_malformed_yaml_raises(self, temp_dir: Path):
        """Test that a file that is not YAML raises a YAML error."""
        bad = temp_dir / "bad.yaml"
        bad.write_text("output: {indent: [\n")

        with pytest.raises(yaml.YAMLError):
            load_config(str(bad))

    def test_default_file_in_working_directory(self, temp_config_file: Path, monkeypatch):
        """Test that vadumpcaps.yaml is picked up from the working directory."""
        monkeypatch.chdir(temp_config_file.parent)

        config = load_config()

        assert config.output.indent == 2

    def test_env_overrides(self, temp_config_file: Path):
        """Test that environment variables override file values."""
        env_vars = {
            "VADUMPCAPS_DEVICE": "/dev/dri/renderD130",
            "VADUMPCAPS_INDENT": "8",
            "VADUMPCAPS_PRETTY": "false",
            "VADUMPCAPS_LOG_LEVEL": "ERROR",
        }
        with patch.dict(os.environ, env_vars):
            config = load_config(str(temp_config_file))

        assert config.device.drm_device == "/dev/dri/renderD130"
        assert config.output.indent == 8
        assert config.output.pretty is False
        assert config.logging.level == "ERROR"

    def test_invalid_env_value(self):
        """Test that an invalid override fails validation."""
        with patch.dict(os.environ, {"VADUMPCAPS_INDENT": "-1"}):
            with pytest.raises(ValidationError):
                load_config()

    def test_get_config_caching(self):
        """Test that get_config returns cached config."""
        config1 = get_config()
        config2 = get_config()

        assert isinstance(config1, VADumpCapsConfig)
        assert config1 is config2

    def test_reload_config_creates_new_instance(self):
        """Test that reload_config drops the cached config."""
        config1 = get_config()
        config2 = reload_config()

        assert config1 is not config2
        assert get_config() is config2
