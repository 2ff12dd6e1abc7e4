"""
Clipboard access for copying a single encoded entry.
"""

from abc import ABC, abstractmethod
import logging
import subprocess
from typing import Optional, Sequence, Tuple


# Clipboard programs tried in order; the first one installed is used
CLIPBOARD_COMMANDS: Tuple[Tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)

# Seconds to wait for a helper to accept the text
CLIPBOARD_TIMEOUT = 5


class ClipboardError(Exception):
    """Raised when text could not be placed on the clipboard."""


class Clipboard(ABC):
    """Abstract base class for clipboard writes."""

    @abstractmethod
    def write_text(self, text: str) -> None:
        """
        Place text on the system clipboard unchanged.

        Raises:
            ClipboardError: If the write failed
        """
        pass


class CommandClipboard(Clipboard):
    """Writes to the clipboard by piping text into a helper program."""

    def __init__(self, commands: Sequence[Sequence[str]] = CLIPBOARD_COMMANDS,
                 timeout: float = CLIPBOARD_TIMEOUT):
        self.commands = [tuple(cmd) for cmd in commands]
        self.timeout = timeout
        self._command: Optional[Tuple[str, ...]] = None

    def _pipe(self, cmd: Tuple[str, ...], text: str) -> None:
        # Only stdin is a pipe: helpers such as xclip fork a child that keeps
        # serving the selection and would hold an output pipe open.
        proc = subprocess.Popen(list(cmd), stdin=subprocess.PIPE,
                                stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        try:
            proc.communicate(input=text.encode('utf-8'), timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            proc.kill()
            proc.wait()
            raise ClipboardError(f"{cmd[0]} did not finish within {self.timeout} seconds") from e
        if proc.returncode != 0:
            raise ClipboardError(f"{cmd[0]} failed with exit status {proc.returncode}")

    def write_text(self, text: str) -> None:
        logger = logging.getLogger(__name__)
        candidates = [self._command] if self._command else self.commands

        for cmd in candidates:
            try:
                self._pipe(cmd, text)
            except FileNotFoundError:
                continue
            except OSError as e:
                raise ClipboardError(f"{cmd[0]} could not be started: {e}") from e
            logger.debug(f"Copied {len(text)} characters with {cmd[0]}")
            self._command = cmd
            return

        raise ClipboardError("No clipboard program found (tried: "
                             + ", ".join(cmd[0] for cmd in self.commands) + ")")


def create_clipboard() -> Clipboard:
    """
    Factory function to create a clipboard.

    Returns:
        Clipboard: An instance of a Clipboard implementation
    """
    return CommandClipboard()


def copy_to_clipboard(content: str, clipboard: Clipboard) -> bool:
    """
    Copy one record's content to the clipboard, best effort.

    Returns:
        bool: True if the copy succeeded, False if it failed (the failure is logged)
    """
    logger = logging.getLogger(__name__)
    try:
        clipboard.write_text(content)
    except ClipboardError as e:
        logger.error(f"Copy to clipboard failed: {e}")
        return False
    return True
