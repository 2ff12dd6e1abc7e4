"""
Command line argument parser for the image exporter.
"""

import argparse
from dataclasses import dataclass, field
from typing import List, Optional

from exporter import DEFAULT_EXPORT_FILE_NAME


@dataclass
class CommandLineOptions:
    """Holds the parsed command line options."""
    inputs: List[str] = field(default_factory=list)
    output_file: str = DEFAULT_EXPORT_FILE_NAME
    download: bool = True
    to_stdout: bool = False
    preview: bool = False
    preview_width: int = 80  # Characters of content shown per entry, 0 = all
    copy_index: Optional[int] = None  # 1-based, as numbered in the preview
    base_path: str = ""
    log_file: Optional[str] = None
    debug: bool = False
    verbose: bool = False
    quiet: bool = False


class CommandLineParser:
    """Parses command line arguments."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="Convert images to base64 data URIs and export them as a JSON document."
        )

        parser.add_argument(
            "inputs", nargs="+", metavar="INPUT",
            help="Image files, glob patterns (e.g. 'img/*.png') or http(s) URLs"
        )

        # Output
        parser.add_argument(
            "--output-file", "-o", type=str, default=DEFAULT_EXPORT_FILE_NAME,
            help=f"Write the JSON document to FILE (default: {DEFAULT_EXPORT_FILE_NAME})"
        )
        parser.add_argument(
            "--no-download", action="store_true",
            help="Do not write the JSON document to a file"
        )
        parser.add_argument(
            "--stdout", action="store_true",
            help="Also write the JSON document to stdout"
        )
        parser.add_argument(
            "--preview", "-P", action="store_true",
            help="Print the converted entries to stderr"
        )
        parser.add_argument(
            "--preview-width", type=int, default=80, metavar="N",
            help="Characters of content shown per entry in the preview (default: 80, 0 = all)"
        )
        parser.add_argument(
            "--copy", "-c", type=int, metavar="N",
            help="Copy the content of entry N (as numbered in the preview) to the clipboard"
        )
        parser.add_argument(
            "--path", "-p", type=str, default="",
            help="Base path for resolving relative file paths (default: CWD)"
        )

        # Logging
        parser.add_argument(
            "--log-file", "-l", type=str,
            help="Also write log output to FILE"
        )
        verbosity_group = parser.add_mutually_exclusive_group()
        verbosity_group.add_argument(
            "--quiet", "-Q", action="store_true",
            help="Quiet console output: only show errors, no summary."
        )
        verbosity_group.add_argument(
            "--verbose", "-v", action="store_true",
            help="Verbose console output: show per-file processing info on stderr."
        )
        verbosity_group.add_argument(
            "--debug", "-d", action="store_true",
            help="Debug console output: show detailed debug messages on stderr."
        )
        return parser

    @staticmethod
    def parse(args: Optional[List[str]] = None) -> CommandLineOptions:
        """
        Parse command line arguments.

        Args:
            args: Command line arguments (uses sys.argv[1:] if None)

        Returns:
            CommandLineOptions: The parsed options
        """
        parser = CommandLineParser.create_parser()
        parsed_args = parser.parse_args(args)

        if parsed_args.preview_width < 0:
            parser.error("--preview-width must be 0 or greater")
        if parsed_args.copy is not None and parsed_args.copy < 1:
            parser.error("--copy expects an entry number starting at 1")

        return CommandLineOptions(
            inputs=parsed_args.inputs,
            output_file=parsed_args.output_file,
            download=not parsed_args.no_download,
            to_stdout=parsed_args.stdout,
            preview=parsed_args.preview,
            preview_width=parsed_args.preview_width,
            copy_index=parsed_args.copy,
            base_path=parsed_args.path,
            log_file=parsed_args.log_file,
            debug=parsed_args.debug,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )
