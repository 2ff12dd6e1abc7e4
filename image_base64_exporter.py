#!/usr/bin/env python3
"""
Image Base64 Exporter - converts images to base64 data URIs and exports them
as a JSON document mapping each file name to its data URI.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cli_parser import CommandLineOptions, CommandLineParser
from exporter import format_preview, serialize_document
from file_reader import ReadError
from logger_setup import configure_logging
from selection import select_files
from session import Session
from utils import format_file_size, write_stdout_or_file


__version__ = "1.0.0"

logger = logging.getLogger('image-base64-exporter')


def print_summary(session: Session, rejected: int, written: Optional[Path] = None) -> None:
    """Print a concise summary to stderr."""
    records = session.state.records
    total = sum(len(r.content) for r in records)
    print(f"image_base64_exporter converted {len(records)} files "
          f"({format_file_size(total)} of data URIs)", file=sys.stderr)
    if len(session.state.document or {}) != len(records):
        print(f"Duplicate file names: {len(records) - len(session.state.document)} "
              f"entries replaced by later files", file=sys.stderr)
    if rejected:
        print(f"Skipped {rejected} inputs that are not readable images", file=sys.stderr)
    if written is not None:
        print(f"Done. Wrote {written}", file=sys.stderr)


def run(options: CommandLineOptions, session: Session) -> int:
    """
    Select, convert and export according to the options.

    Returns:
        int: Exit code
    """
    selection = select_files(options.inputs, options.base_path)
    if not selection.accepted:
        logger.error("No image files to convert.")
        return 1
    session.add_files(selection.accepted)
    logger.info(f"Selected {len(selection.accepted)} files.")

    try:
        asyncio.run(session.convert())
    except ReadError as e:
        logger.error(f"Conversion failed: {e}")
        if options.debug:
            logger.exception("Stack trace:")
        return 1

    exit_code = 0
    written = None
    if options.copy_index is not None:
        try:
            copied = session.copy(options.copy_index - 1)
        except IndexError as e:
            logger.error(str(e))
            exit_code = 1
        else:
            name = session.state.records[options.copy_index - 1].file_name
            if copied:
                print(f"Copied entry {options.copy_index} ({name})", file=sys.stderr)
            else:
                print(f"Copy failed for entry {options.copy_index} ({name})", file=sys.stderr)

    if options.preview:
        sys.stderr.write(format_preview(session.state.records, options.preview_width,
                                        session.state.copied_index))

    if options.download:
        try:
            written = session.download(options.output_file)
        except RuntimeError as e:
            logger.error(f"Download failed: {e}")
            exit_code = 1

    if options.to_stdout:
        try:
            write_stdout_or_file(serialize_document(session.state.document) + "\n")
        except RuntimeError as e:
            logger.error(str(e))
            exit_code = 1

    if not options.quiet:
        print_summary(session, len(selection.rejected), written)
    return exit_code


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    options = CommandLineParser.parse(args)
    configure_logging(options)

    session = Session()
    try:
        return run(options, session)
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        return 1
    finally:
        session.reset()


if __name__ == "__main__":
    sys.exit(main())
