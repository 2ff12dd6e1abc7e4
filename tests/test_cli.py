# tests/test_cli.py
import json
import logging

import pytest

import session as session_module
from cli_parser import CommandLineParser
from file_reader import DataUriReader, ReadError
from image_base64_exporter import main


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def clipboard(monkeypatch, make_clipboard):
    board = make_clipboard()
    monkeypatch.setattr(session_module, "create_clipboard", lambda: board)
    return board


def test_parse_defaults():
    options = CommandLineParser.parse(["a.png"])
    assert options.inputs == ["a.png"]
    assert options.output_file == "images.json"
    assert options.download is True
    assert options.copy_index is None


def test_parse_rejects_conflicting_verbosity():
    with pytest.raises(SystemExit):
        CommandLineParser.parse(["a.png", "-Q", "-v"])


def test_parse_rejects_copy_zero():
    with pytest.raises(SystemExit):
        CommandLineParser.parse(["a.png", "--copy", "0"])


def test_end_to_end_run(image_dir, monkeypatch, capsys, png_bytes):
    monkeypatch.chdir(image_dir)

    exit_code = main(["*.png", "photo.jpg", "notes.txt"])

    assert exit_code == 0
    document = json.loads((image_dir / "images.json").read_text(encoding="utf-8"))
    assert list(document) == ["a.png", "b.png", "photo.jpg"]
    assert document["photo.jpg"].startswith("data:image/jpeg;base64,")

    err = capsys.readouterr().err
    assert "converted 3 files" in err
    assert "Skipped 1 inputs" in err


def test_output_file_and_stdout(image_dir, monkeypatch, capsys):
    monkeypatch.chdir(image_dir)

    exit_code = main(["a.png", "-o", "out.json", "--stdout", "-Q"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert json.loads(out) == json.loads((image_dir / "out.json").read_text(encoding="utf-8"))
    assert not (image_dir / "images.json").exists()


def test_no_download_with_preview(image_dir, monkeypatch, capsys):
    monkeypatch.chdir(image_dir)

    exit_code = main(["a.png", "b.png", "--no-download", "--preview", "--preview-width", "0"])

    assert exit_code == 0
    assert not (image_dir / "images.json").exists()
    err = capsys.readouterr().err
    assert "  1. a.png" in err
    assert "  2. b.png" in err


def test_copy_entry(image_dir, monkeypatch, capsys, clipboard):
    monkeypatch.chdir(image_dir)

    exit_code = main(["a.png", "b.png", "--no-download", "--copy", "2", "-P"])

    assert exit_code == 0
    assert len(clipboard.contents) == 1
    assert clipboard.contents[0].startswith("data:image/png;base64,")
    err = capsys.readouterr().err
    assert "Copied entry 2 (b.png)" in err
    assert "[copied]" in err


def test_copy_out_of_range(image_dir, monkeypatch, clipboard):
    monkeypatch.chdir(image_dir)
    assert main(["a.png", "--no-download", "--copy", "5"]) == 1
    assert clipboard.contents == []


def test_no_images_selected(image_dir, monkeypatch):
    monkeypatch.chdir(image_dir)
    assert main(["notes.txt"]) == 1
    assert not (image_dir / "images.json").exists()


class _FailingReader(DataUriReader):
    def __init__(self, failing):
        self.failing = failing

    async def read_as_data_uri(self, source):
        if source.name in self.failing:
            raise ReadError(source, "permission denied")
        return "data:image/png;base64,AAAA"


def test_read_failure_exports_nothing(image_dir, monkeypatch):
    monkeypatch.chdir(image_dir)
    monkeypatch.setattr(session_module, "create_file_reader",
                        lambda: _FailingReader({"b.png"}))

    assert main(["a.png", "b.png"]) == 1
    assert not (image_dir / "images.json").exists()


def test_log_file(image_dir, monkeypatch):
    monkeypatch.chdir(image_dir)

    assert main(["a.png", "-l", "run.log", "-Q"]) == 0
    log = (image_dir / "run.log").read_text(encoding="utf-8")
    assert "Selected 1 files." in log
