"""
Session state for one conversion run.

The state is an immutable value; every transition is a plain function that
returns a new state. ``Session`` holds the current state and connects the
transitions to a reader and a clipboard.

Phases::

    EMPTY -> FILES_SELECTED -> CONVERTING -> CONVERTED
      ^                            |
      |                            +-- read failure --> FILES_SELECTED
      +-- reset (from any phase)
"""

from dataclasses import dataclass, replace
from enum import Enum
import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from clipboard import Clipboard, copy_to_clipboard, create_clipboard
from encoder import encode_batch
from exporter import DEFAULT_EXPORT_FILE_NAME, merge_records, write_document
from file_reader import DataUriReader, create_file_reader
from models import EncodedRecord, ExportDocument, SourceFile


logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    EMPTY = "empty"
    FILES_SELECTED = "files_selected"
    CONVERTING = "converting"
    CONVERTED = "converted"


@dataclass(frozen=True)
class SessionState:
    phase: SessionPhase = SessionPhase.EMPTY
    files: Tuple[SourceFile, ...] = ()
    records: Tuple[EncodedRecord, ...] = ()
    document: Optional[ExportDocument] = None
    copied_index: int = -1


def add_files(state: SessionState, files: Iterable[SourceFile]) -> SessionState:
    """
    Append newly selected files to the pending list.

    Selections accumulate. Adding files while converting or after a
    conversion keeps the current phase and records; the new files are picked
    up by the next conversion.
    """
    files = tuple(files)
    if not files:
        return state
    phase = state.phase
    if phase is SessionPhase.EMPTY:
        phase = SessionPhase.FILES_SELECTED
    return replace(state, phase=phase, files=state.files + files)


def begin_conversion(state: SessionState) -> SessionState:
    if state.phase is SessionPhase.CONVERTING:
        raise RuntimeError("A conversion is already running")
    if not state.files:
        raise ValueError("No files selected")
    return replace(state, phase=SessionPhase.CONVERTING)


def complete_conversion(state: SessionState, records: Iterable[EncodedRecord]) -> SessionState:
    records = tuple(records)
    return replace(
        state,
        phase=SessionPhase.CONVERTED,
        records=records,
        document=merge_records(records),
        copied_index=-1,
    )


def fail_conversion(state: SessionState) -> SessionState:
    """Drop any converted output and go back to the selected files."""
    return replace(
        state,
        phase=SessionPhase.FILES_SELECTED,
        records=(),
        document=None,
        copied_index=-1,
    )


def mark_copied(state: SessionState, index: int) -> SessionState:
    return replace(state, copied_index=index)


def reset() -> SessionState:
    return SessionState()


class Session:
    """Holds the current state and runs conversions, copies and downloads."""

    def __init__(self, reader: Optional[DataUriReader] = None,
                 clipboard: Optional[Clipboard] = None):
        self.reader = reader or create_file_reader()
        self.clipboard = clipboard or create_clipboard()
        self.state = SessionState()

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    def add_files(self, files: Iterable[SourceFile]) -> None:
        self.state = add_files(self.state, files)
        logger.debug(f"{len(self.state.files)} files selected")

    async def convert(self) -> Tuple[EncodedRecord, ...]:
        """
        Encode every selected file.

        The file list is captured when the conversion starts; files added
        while it runs wait for the next conversion.

        Returns:
            Tuple[EncodedRecord, ...]: The records, in selection order

        Raises:
            ReadError: If any file could not be read. The session is back in
                       FILES_SELECTED with no records.
            ValueError: If no files are selected
            RuntimeError: If a conversion is already running

        Any other error or cancellation also returns the session to
        FILES_SELECTED before it propagates.
        """
        self.state = begin_conversion(self.state)
        snapshot = self.state.files
        try:
            records = await encode_batch(snapshot, self.reader)
        except BaseException:
            self.state = fail_conversion(self.state)
            raise
        self.state = complete_conversion(self.state, records)
        logger.info(f"Converted {len(records)} files into {len(self.state.document)} entries")
        return self.state.records

    def copy(self, index: int) -> bool:
        """
        Copy the content of one record to the clipboard.

        Args:
            index: Zero-based position of the record in the preview

        Returns:
            bool: True if the content was copied. On failure the copied
                  indicator is cleared.

        Raises:
            IndexError: If there is no record at ``index``
        """
        if not 0 <= index < len(self.state.records):
            raise IndexError(f"No converted entry at position {index + 1}")
        record = self.state.records[index]
        if copy_to_clipboard(record.content, self.clipboard):
            self.state = mark_copied(self.state, index)
            return True
        self.state = mark_copied(self.state, -1)
        return False

    def download(self, path: Union[str, Path] = DEFAULT_EXPORT_FILE_NAME) -> Path:
        """
        Write the export document to ``path``.

        Raises:
            RuntimeError: If nothing has been converted yet, or the file
                          could not be written
        """
        if self.state.document is None:
            raise RuntimeError("Nothing to download: convert the selected files first")
        return write_document(self.state.document, path)

    def reset(self) -> None:
        self.state = reset()
