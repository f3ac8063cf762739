"""
Configuration management for vadumpcaps.

Handles loading, validation, and access to the tool's defaults: which device
to open, how to format the document, which sections to dump and how to log.
Command-line flags are applied on top of this by vadumpcaps.main.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

from vadumpcaps.capabilities.selection import Section, Selection
from vadumpcaps.output.writer import DEFAULT_INDENT

DEFAULT_CONFIG_FILE = "vadumpcaps.yaml"
DEFAULT_DRM_DEVICE = "/dev/dri/renderD128"

# Global configuration instance
_config: Optional["VADumpCapsConfig"] = None


class DeviceConfig(BaseModel):
    """Device selection."""
    drm_device: Optional[str] = None
    x11_display: Optional[str] = None
    use_x11: bool = False
    libva_path: Optional[str] = None  # Overrides the libva shared library name


class OutputConfig(BaseModel):
    """Document formatting."""
    indent: int = Field(default=DEFAULT_INDENT, ge=0)
    pretty: bool = True
    file: Optional[str] = None  # None writes to stdout


class SelectionConfig(BaseModel):
    """
    Sections to dump.

    All False (the default) selects every section.
    """
    profiles: bool = False
    entrypoints: bool = False
    attributes: bool = False
    surface_formats: bool = False
    filters: bool = False
    filter_caps: bool = False
    pipeline_caps: bool = False
    image_formats: bool = False
    subpicture_formats: bool = False

    def to_selection(self) -> Selection:
        chosen = [
            section for section in Section
            if getattr(self, section.value.replace("-", "_"))
        ]
        return Selection(chosen)


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "WARNING"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5


class VADumpCapsConfig(BaseModel):
    """Main vadumpcaps configuration."""
    device: DeviceConfig = Field(default_factory=DeviceConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> VADumpCapsConfig:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file. Defaults to vadumpcaps.yaml in the
            working directory, if present.

    Returns:
        Loaded and validated configuration.

    Raises:
        FileNotFoundError: If config_path is given but does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If a value is out of range or of the wrong type.
    """
    global _config

    if config_path is None:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            config_path = str(default_path)
    elif not Path(config_path).exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    config_data: dict[str, Any] = {}

    if config_path:
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

    # Apply environment variable overrides
    env_overrides = _get_env_overrides()
    _deep_merge(config_data, env_overrides)

    _config = VADumpCapsConfig(**config_data)
    return _config


def get_config() -> VADumpCapsConfig:
    """
    Get the current configuration.

    Returns:
        Current configuration (loads default if not yet loaded).
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Optional[str] = None) -> VADumpCapsConfig:
    """
    Drop the cached configuration and load it again.

    Returns:
        Freshly loaded configuration.
    """
    global _config
    _config = None
    return load_config(config_path)


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    # Map of environment variables to config paths
    env_map = {
        "VADUMPCAPS_DEVICE": ("device", "drm_device"),
        "VADUMPCAPS_X11_DISPLAY": ("device", "x11_display"),
        "VADUMPCAPS_LIBVA_PATH": ("device", "libva_path"),
        "VADUMPCAPS_INDENT": ("output", "indent"),
        "VADUMPCAPS_PRETTY": ("output", "pretty"),
        "VADUMPCAPS_LOG_LEVEL": ("logging", "level"),
    }

    for env_var, path in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested(overrides, path, _parse_env_value(value))

    return overrides


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    return value


def _set_nested(d: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """Set a nested dictionary value from a path tuple."""
    for key in path[:-1]:
        d = d.setdefault(key, {})
    d[path[-1]] = value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Deep merge override into base dictionary."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
