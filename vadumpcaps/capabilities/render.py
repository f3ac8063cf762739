"""Shared helpers for writing enumerants and flag sets."""

from typing import Optional

from vadumpcaps.capabilities.names import NameTable
from vadumpcaps.output.writer import StructuredWriter


def write_enumerant(
    writer: StructuredWriter,
    tag: str,
    table: NameTable,
    code: int,
    describe: bool = False,
) -> None:
    """
    Write a numeric enumerant followed by its name.

    Codes missing from the table get an explicit unknown marker instead of
    a name.

    Args:
        writer: Output writer, positioned inside an object.
        tag: Field name for the numeric code.
        table: Table to look the code up in.
        code: Numeric value.
        describe: Also write the description when the table has one.
    """
    writer.write_integer(tag, code)
    entry = table.lookup(code)
    if entry is None:
        writer.write_boolean("unknown", True)
        return
    writer.write_string("name", "%s", entry.name)
    if describe and entry.description:
        writer.write_string("description", "%s", entry.description)


def write_flags(
    writer: StructuredWriter, tag: Optional[str], table: NameTable, value: int
) -> None:
    """Write the names of the flags set in value as an array."""
    with writer.array(tag):
        for flag in table.flags(value):
            writer.write_string(None, "%s", flag)
