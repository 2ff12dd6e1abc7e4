"""
Utility functions for the image exporter.
"""

import sys
from typing import Optional


def format_file_size(size_bytes: int, decimals: int = 1) -> str:
    """
    Format a file size in human-readable form.

    Args:
        size_bytes: The size in bytes
        decimals: Number of decimal places to display

    Returns:
        str: The formatted file size
    """
    units = ["B", "KB", "MB", "GB", "TB"]

    if size_bytes == 0:
        return "0 B"

    unit_index = 0
    while size_bytes >= 1024 and unit_index < len(units) - 1:
        size_bytes /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{size_bytes} B"
    return f"{size_bytes:.{decimals}f} {units[unit_index]}"


def write_stdout_or_file(content: str, file_path: Optional[str] = None) -> None:
    """
    Write content to stdout or a file.

    Args:
        content: The content to write
        file_path: Path to a file (optional, uses stdout if None)

    Raises:
        RuntimeError: If the content could not be written
    """
    if file_path:
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise RuntimeError(f"Error writing to output file: {e}") from e
    else:
        try:
            sys.stdout.write(content)
            sys.stdout.flush()
        except OSError as e:
            raise RuntimeError(f"Error writing to stdout: {e}") from e
