"""
vadumpcaps Output

Streaming structured-text writer used as the document sink.
"""

from vadumpcaps.output.writer import DEFAULT_INDENT, StructuredWriter

__all__ = [
    "DEFAULT_INDENT",
    "StructuredWriter",
]
