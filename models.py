"""
Data types shared by the encoder, exporter and session.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class SourceFile:
    """A selected file waiting to be encoded."""
    name: str        # Base name, used as the export key (not unique)
    mime_type: str   # e.g. "image/png"
    location: str    # Local path or http(s) URL


@dataclass(frozen=True)
class EncodedRecord:
    """One encoded file: its name and the full data URI."""
    file_name: str
    content: str


# File name -> data URI, in insertion order
ExportDocument = Dict[str, str]
