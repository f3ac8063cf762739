"""
vadumpcaps command line.

Opens a VA-API display and writes its capability document to stdout (or a
file). Section flags restrict the traversal; a deeper section brings its
ancestors along, so --filter-caps alone still walks profiles, entry points,
attributes and filters to reach it.

Examples:
    vadumpcaps
    vadumpcaps --device /dev/dri/renderD129 --compact
    vadumpcaps --x11 --surface-formats
    vadumpcaps --image-formats --subpicture-formats -o formats.txt
"""

import argparse
import logging
import sys
from typing import Optional, Sequence, TextIO

import yaml
from pydantic import ValidationError

from vadumpcaps import __version__
from vadumpcaps.capabilities import Section, Selection, dump_capabilities
from vadumpcaps.config import DEFAULT_DRM_DEVICE, VADumpCapsConfig, load_config
from vadumpcaps.output import DEFAULT_INDENT, StructuredWriter
from vadumpcaps.utils.logging_setup import level_for_verbosity, setup_logging
from vadumpcaps.va import CapabilityQuery, DeviceOpenError
from vadumpcaps.va.libva import LibvaDisplay

logger = logging.getLogger(__name__)

EXIT_DEVICE_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_OUTPUT_ERROR = 3

SECTION_HELP = {
    Section.PROFILES: "Dump profiles",
    Section.ENTRYPOINTS: "Dump entry points of each profile",
    Section.ATTRIBUTES: "Dump config attributes of each entry point",
    Section.SURFACE_FORMATS: "Dump surface formats of each entry point",
    Section.FILTERS: "Dump video processing filters",
    Section.FILTER_CAPS: "Dump the capabilities of each filter",
    Section.PIPELINE_CAPS: "Dump the pipeline capabilities of each filter",
    Section.IMAGE_FORMATS: "Dump image formats",
    Section.SUBPICTURE_FORMATS: "Dump subpicture formats",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vadumpcaps",
        description="Dump the capabilities of a VA-API device",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    device = parser.add_mutually_exclusive_group()
    device.add_argument("-d", "--device", metavar="PATH", help="DRM render node to open")
    device.add_argument(
        "-x", "--x11",
        nargs="?",
        const="",
        metavar="DISPLAY",
        help="Open an X11 display instead ($DISPLAY when no name is given)",
    )

    output = parser.add_argument_group("output")
    output.add_argument("--compact", action="store_true", help="No indentation or newlines")
    output.add_argument("--indent", type=int, metavar="N", help="Spaces per nesting level")
    output.add_argument("-o", "--output", metavar="FILE", help="Write to FILE instead of stdout")

    sections = parser.add_argument_group("sections (default: all)")
    for section, text in SECTION_HELP.items():
        sections.add_argument(
            f"--{section.value}",
            dest=section.value.replace("-", "_"),
            action="store_true",
            help=text,
        )

    parser.add_argument("-c", "--config", metavar="FILE", help="Configuration file")
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log more (repeat for debug output)",
    )
    return parser


def apply_args(config: VADumpCapsConfig, args: argparse.Namespace) -> VADumpCapsConfig:
    """
    Merge command-line flags over the loaded configuration.

    Raises:
        ValidationError: If a flag carries an invalid value.
    """
    data = config.model_dump()

    if args.device is not None:
        data["device"].update(drm_device=args.device, use_x11=False)
    elif args.x11 is not None:
        data["device"].update(use_x11=True, x11_display=args.x11 or None)

    if args.compact:
        data["output"]["pretty"] = False
    if args.indent is not None:
        data["output"]["indent"] = args.indent
    if args.output is not None:
        data["output"]["file"] = args.output

    flagged = {
        section.value.replace("-", "_")
        for section in Section
        if getattr(args, section.value.replace("-", "_"))
    }
    if flagged:
        data["selection"] = {name: name in flagged for name in data["selection"]}

    return VADumpCapsConfig.model_validate(data)


def open_display(config: VADumpCapsConfig) -> LibvaDisplay:
    """
    Open the display the configuration points at.

    Raises:
        DeviceOpenError: If it cannot be opened or initialised.
    """
    device = config.device
    if device.use_x11:
        return LibvaDisplay.open_x11(device.x11_display, libva_path=device.libva_path)
    return LibvaDisplay.open_drm(
        device.drm_device or DEFAULT_DRM_DEVICE, libva_path=device.libva_path
    )


def run(
    query: CapabilityQuery,
    stream: TextIO,
    selection: Optional[Selection] = None,
    indent: int = DEFAULT_INDENT,
    pretty: bool = True,
) -> None:
    """
    Write the capability document of an open display to a stream.

    Args:
        query: Initialised capability-query handle.
        stream: Text stream for the document.
        selection: Sections to dump; ancestors of each are added.
        indent: Spaces per nesting level in pretty mode.
        pretty: False for the single-line compact form.
    """
    selection = (selection or Selection.all()).with_ancestors()
    logger.debug(f"Dumping sections: {', '.join(selection.names())}")
    writer = StructuredWriter(stream, indent=indent, pretty=pretty)
    dump_capabilities(query, writer, selection)
    stream.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = apply_args(load_config(args.config), args)
    except OSError as e:
        print(f"Unable to read configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except (ValidationError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(
        log_level=level_for_verbosity(config.logging.level, args.verbose),
        log_file_name=config.logging.file,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
        log_format=config.logging.format,
    )

    try:
        display = open_display(config)
    except DeviceOpenError as e:
        logger.error(str(e))
        return EXIT_DEVICE_ERROR

    with display as query:
        output = config.output
        if output.file:
            try:
                stream = open(output.file, "w", encoding="utf-8")
            except OSError as e:
                logger.error(f"Unable to open output file: {e}")
                return EXIT_OUTPUT_ERROR
            with stream:
                run(query, stream, config.selection.to_selection(), output.indent, output.pretty)
        else:
            run(query, sys.stdout, config.selection.to_selection(), output.indent, output.pretty)

    return 0


if __name__ == "__main__":
    sys.exit(main())
