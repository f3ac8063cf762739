"""
Document Parsing Helpers

The capability document is JSON with a trailing comma after every entry.
Tests strip those commas and read the result with the json module.
"""

import json
import re
from typing import Any

_TRAILING_COMMA = re.compile(r",(\s*[\]}])")


def parse_document(text: str) -> Any:
    """Parse writer output into Python objects."""
    cleaned = _TRAILING_COMMA.sub(r"\1", text).rstrip()
    if cleaned.endswith(","):
        cleaned = cleaned[:-1]
    return json.loads(cleaned)
