"""
vadumpcaps Capabilities

Name tables, decoders and the traversal that turns VA-API query results
into the capability document.
"""

from vadumpcaps.capabilities.selection import Section, Selection
from vadumpcaps.capabilities.traversal import CapabilityDumper, dump_capabilities

__all__ = [
    "CapabilityDumper",
    "Section",
    "Selection",
    "dump_capabilities",
]
