"""
vadumpcaps - VA-API capability dumper

Opens a VA-API display and writes everything it can report as one nested
document:
- Profiles, entry points and config attributes
- Surface formats per RT format
- Video processing filters, filter caps and pipeline limits
- Image and subpicture formats
"""

__version__ = "0.2.0"
__author__ = "vadumpcaps Contributors"
__license__ = "MIT"

from vadumpcaps.config import get_config, load_config

__all__ = [
    "__version__",
    "get_config",
    "load_config",
]
