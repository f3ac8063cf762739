"""
Unit tests for logging setup.
"""

import logging
import logging.handlers

import pytest

from vadumpcaps.utils import level_for_verbosity, setup_logging


@pytest.mark.unit
class TestVerbosity:
    """Tests for -v handling."""

    @pytest.mark.parametrize("verbosity,expected", [
        (0, "WARNING"),
        (1, "INFO"),
        (2, "DEBUG"),
        (5, "DEBUG"),
    ])
    def test_steps(self, verbosity, expected):
        """Test that each -v lowers the level one step."""
        assert level_for_verbosity("WARNING", verbosity) == expected

    def test_never_raises_level(self):
        """Test that -v does not make a DEBUG config quieter."""
        assert level_for_verbosity("DEBUG", 1) == "DEBUG"


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_only(self):
        """Test the default console handler."""
        root = setup_logging("INFO")

        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_rotating_file(self, temp_dir):
        """Test that a log file adds a rotating handler."""
        log_file = temp_dir / "logs" / "vadumpcaps.log"

        root = setup_logging("DEBUG", log_file_name=str(log_file), backup_count=2)
        logging.getLogger("vadumpcaps.test").debug("hello")
        for handler in root.handlers:
            handler.flush()

        file_handlers = [
            h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].backupCount == 2
        assert "hello" in log_file.read_text()
        file_handlers[0].close()
