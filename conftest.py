"""
Shared pytest fixtures. Living at the repository root also puts the
top-level modules on sys.path for the tests.
"""

import base64

import pytest

from base64_encoder import build_data_uri
from clipboard import Clipboard, ClipboardError
from file_reader import DataUriReader, ReadError
from models import SourceFile


# A 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class FakeReader(DataUriReader):
    """Serves file bytes from a dict keyed by location."""

    def __init__(self, files=None, fail=(), platform_mime="application/octet-stream"):
        self.files = dict(files or {})
        self.fail = set(fail)
        self.platform_mime = platform_mime
        self.calls = []

    async def read_as_data_uri(self, source: SourceFile) -> str:
        self.calls.append(source.location)
        if source.location in self.fail or source.location not in self.files:
            raise ReadError(source, "unreadable")
        return build_data_uri(self.platform_mime, self.files[source.location])


class FakeClipboard(Clipboard):
    def __init__(self, fail=False):
        self.fail = fail
        self.contents = []

    def write_text(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("clipboard unavailable")
        self.contents.append(text)


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def fake_clipboard():
    return FakeClipboard()


@pytest.fixture
def image_dir(tmp_path):
    """A directory with two PNGs, a JPEG-named file and a text file."""
    (tmp_path / "a.png").write_bytes(PNG_BYTES)
    (tmp_path / "b.png").write_bytes(PNG_BYTES + b"\x00")
    (tmp_path / "photo.jpg").write_bytes(b"\xff\xd8\xff\xe0fake")
    (tmp_path / "notes.txt").write_text("not an image")
    return tmp_path


@pytest.fixture
def make_reader():
    """Factory for in-memory readers: make_reader({location: bytes}, fail=[...])."""
    return FakeReader


@pytest.fixture
def make_clipboard():
    return FakeClipboard
