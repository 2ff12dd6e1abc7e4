"""
Logging setup for the image exporter.
"""

import logging
import sys

from cli_parser import CommandLineOptions


CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s %(levelname)-8s: %(message)s'


def configure_logging(options: CommandLineOptions) -> logging.Logger:
    """
    Configure logging based on command line options.

    The console handler writes to stderr at a level chosen by
    --quiet/--verbose/--debug; by default only errors are shown and a
    concise summary is printed separately. A log file, if requested,
    always receives INFO (or DEBUG with --debug).

    Returns:
        logging.Logger: The root logger
    """
    root = logging.getLogger()
    # Let every record through; handlers filter on their own levels
    root.setLevel(logging.DEBUG)

    # Clear existing handlers to avoid duplication
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    if options.log_file:
        try:
            file_handler = logging.FileHandler(options.log_file, 'w', encoding='utf-8')
        except OSError as e:
            # Logging is not set up yet
            print(f"WARNING: Failed to create log file '{options.log_file}': {e}", file=sys.stderr)
        else:
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            file_handler.setLevel(logging.DEBUG if options.debug else logging.INFO)
            root.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    if options.debug:
        console_handler.setLevel(logging.DEBUG)
    elif options.verbose:
        console_handler.setLevel(logging.INFO)
    elif options.quiet:
        console_handler.setLevel(logging.ERROR)
    else:
        # Selection warnings are worth seeing in the default mode
        console_handler.setLevel(logging.WARNING)
    root.addHandler(console_handler)

    # Keep third-party chatter out of the console
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.INFO)

    return root
