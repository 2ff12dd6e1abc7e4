"""
Collects encoded records into an export document and writes it out.
"""

import json
import logging
from pathlib import Path
from typing import List, Sequence, Union

from models import EncodedRecord, ExportDocument
from utils import format_file_size, write_stdout_or_file


logger = logging.getLogger(__name__)

# Name of the downloaded document
DEFAULT_EXPORT_FILE_NAME = "images.json"
JSON_INDENT = 2


def preview_records(records: Sequence[EncodedRecord]) -> List[EncodedRecord]:
    """Return the records for preview, in the order they were produced."""
    return list(records)


def merge_records(records: Sequence[EncodedRecord]) -> ExportDocument:
    """
    Fold records into a mapping from file name to content.

    A later record with the same file name replaces the earlier value. The
    key keeps the position where it first appeared.
    """
    document: ExportDocument = {}
    for record in records:
        if record.file_name in document:
            logger.debug(f"Duplicate file name '{record.file_name}': later entry wins")
        document[record.file_name] = record.content
    return document


def serialize_document(document: ExportDocument) -> str:
    """Render the document as JSON indented by two spaces."""
    return json.dumps(document, indent=JSON_INDENT, ensure_ascii=False)


def write_document(document: ExportDocument,
                   path: Union[str, Path] = DEFAULT_EXPORT_FILE_NAME) -> Path:
    """
    Write the serialized document to a file.

    Args:
        document: The document to write
        path: Destination file (default: images.json)

    Returns:
        Path: The file written

    Raises:
        RuntimeError: If the file could not be written
    """
    path = Path(path)
    text = serialize_document(document)
    write_stdout_or_file(text, str(path))
    logger.info(f"Wrote {len(document)} entries to {path} ({format_file_size(len(text.encode('utf-8')))})")
    return path


def format_preview(records: Sequence[EncodedRecord], width: int = 80,
                   copied_index: int = -1) -> str:
    """
    Format records as a numbered text listing.

    Args:
        records: Records in preview order
        width: Maximum number of content characters shown per record
               (0 shows the full content)
        copied_index: Zero-based index of the record last copied, or -1

    Returns:
        str: The listing, one header line and one content line per record
    """
    lines = []
    for index, record in enumerate(preview_records(records)):
        status = "  [copied]" if index == copied_index else ""
        size = format_file_size(len(record.content))
        lines.append(f"{index + 1:>3}. {record.file_name} ({size}){status}")

        content = record.content
        if width and len(content) > width:
            content = content[:width] + "..."
        lines.append(f"     {content}")
    return "\n".join(lines) + ("\n" if lines else "")
