"""Utility modules for vadumpcaps"""

from .logging_setup import level_for_verbosity, setup_logging

__all__ = [
    "level_for_verbosity",
    "setup_logging",
]
