# tests/test_file_reader.py
import asyncio
import base64

import pytest
from requests.exceptions import ConnectionError as RequestsConnectionError

import file_reader
from file_reader import (
    LocalFileReader,
    ReadError,
    RequestsReader,
    SourceReader,
    create_file_reader,
    is_remote_location,
)
from models import SourceFile


class FakeResponse:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content


def test_is_remote_location():
    assert is_remote_location("https://example.com/a.png")
    assert is_remote_location("HTTP://example.com/a.png")
    assert not is_remote_location("/tmp/a.png")
    assert not is_remote_location("a.png")


def test_local_reader_returns_data_uri(tmp_path, png_bytes):
    path = tmp_path / "a.png"
    path.write_bytes(png_bytes)
    source = SourceFile("a.png", "image/png", str(path))

    data_uri = asyncio.run(LocalFileReader().read_as_data_uri(source))

    assert data_uri == "data:image/png;base64," + base64.b64encode(png_bytes).decode()


def test_local_reader_unknown_extension_uses_fallback_header(tmp_path):
    path = tmp_path / "blob"
    path.write_bytes(b"abc")
    source = SourceFile("blob", "image/png", str(path))

    data_uri = asyncio.run(LocalFileReader().read_as_data_uri(source))

    assert data_uri == "data:application/octet-stream;base64,YWJj"


def test_local_reader_missing_file(tmp_path):
    source = SourceFile("gone.png", "image/png", str(tmp_path / "gone.png"))
    with pytest.raises(ReadError) as excinfo:
        asyncio.run(LocalFileReader().read_as_data_uri(source))
    assert "gone.png" in str(excinfo.value)


def test_requests_reader_downloads(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse(200, b"abc")

    monkeypatch.setattr(file_reader.requests, "get", fake_get)
    source = SourceFile("a.png", "image/png", "https://example.com/a.png")

    data_uri = asyncio.run(RequestsReader().read_as_data_uri(source))

    assert data_uri == "data:image/png;base64,YWJj"
    assert calls == [("https://example.com/a.png", file_reader.REQUEST_TIMEOUT)]


def test_requests_reader_bad_status(monkeypatch):
    monkeypatch.setattr(file_reader.requests, "get", lambda url, timeout: FakeResponse(404))
    source = SourceFile("a.png", "image/png", "https://example.com/a.png")

    with pytest.raises(ReadError) as excinfo:
        asyncio.run(RequestsReader().read_as_data_uri(source))
    assert "404" in excinfo.value.reason


def test_requests_reader_connection_error(monkeypatch):
    def fake_get(url, timeout):
        raise RequestsConnectionError("refused")

    monkeypatch.setattr(file_reader.requests, "get", fake_get)
    source = SourceFile("a.png", "image/png", "https://example.com/a.png")

    with pytest.raises(ReadError):
        asyncio.run(RequestsReader().read_as_data_uri(source))


def test_source_reader_routes_by_location(make_reader):
    local = make_reader({"/x/a.png": b"1"})
    remote = make_reader({"https://h/b.png": b"2"})
    reader = SourceReader(local=local, remote=remote)

    asyncio.run(reader.read_as_data_uri(SourceFile("a.png", "image/png", "/x/a.png")))
    asyncio.run(reader.read_as_data_uri(SourceFile("b.png", "image/png", "https://h/b.png")))

    assert local.calls == ["/x/a.png"]
    assert remote.calls == ["https://h/b.png"]


def test_create_file_reader():
    assert isinstance(create_file_reader(), SourceReader)
