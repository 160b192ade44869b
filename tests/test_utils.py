import io
import logging
import sys
from datetime import datetime

import pytest

from ludo.utils import (
    all_files_in,
    capture_output,
    core_ext,
    dated_name,
    file_name,
    index_of_string,
    lines_in_file,
)


def test_index_of_string_found():
    assert index_of_string("c", ["a", "b", "c"]) == 2


def test_index_of_string_missing_returns_zero():
    assert index_of_string("z", ["a", "b", "c"]) == 0


def test_index_of_string_first_match():
    data = ["x", "y", "y"]
    assert data[index_of_string("y", data)] == "y"
    assert index_of_string("y", data) == data.index("y")


def test_file_name_strips_dir_and_extension():
    assert file_name("/roms/snes/game.sfc") == "game"


def test_file_name_only_last_extension():
    assert file_name("dir/archive.tar.gz") == "archive.tar"


def test_file_name_without_extension():
    assert file_name("some/dir/README") == "README"


def test_file_name_dotfile_is_all_extension():
    assert file_name("/home/user/.bashrc") == ""


def test_dated_name_format():
    before = datetime.now().replace(microsecond=0)
    result = dated_name("/roms/game.sfc")
    after = datetime.now().replace(microsecond=0)

    name, separator, stamp = result.partition("@")
    assert name == "game"
    assert separator == "@"
    assert len(stamp) == len("2006-01-02-15-04-05")
    moment = datetime.strptime(stamp, "%Y-%m-%d-%H-%M-%S")
    assert before <= moment <= after


def test_capture_output_collects_messages():
    def emit():
        logging.getLogger("ludo.test").warning("hello")
        logging.getLogger("ludo.test").info("world")

    assert capture_output(emit) == "hello\nworld\n"


def test_capture_output_restores_root_level():
    root = logging.getLogger()
    before = root.level
    assert capture_output(lambda: None) == ""
    assert root.level == before


def test_all_files_in_skips_hidden_and_orders(tmp_path):
    (tmp_path / "b.txt").write_text("b")
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / ".hidden").write_text("h")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.txt").write_text("c")

    files = all_files_in(tmp_path)
    assert files == [
        str(tmp_path / "a.txt"),
        str(tmp_path / "b.txt"),
        str(sub / "c.txt"),
    ]


def test_all_files_in_single_file(tmp_path):
    target = tmp_path / "game.bin"
    target.write_bytes(b"\x00")
    assert all_files_in(target) == [str(target)]


def test_all_files_in_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        all_files_in(tmp_path / "nope")


@pytest.mark.parametrize(
    ("platform", "ext"),
    [("linux", ".so"), ("darwin", ".dylib"), ("win32", ".dll"), ("plan9", "")],
)
def test_core_ext(monkeypatch, platform, ext):
    monkeypatch.setattr(sys, "platform", platform)
    assert core_ext() == ext


def test_lines_in_file_bytes():
    assert lines_in_file(io.BytesIO(b"a\nb\nc")) == 2


def test_lines_in_file_empty():
    assert lines_in_file(io.BytesIO(b"")) == 0


def test_lines_in_file_spans_chunks():
    data = b"line\n" * 20000
    assert lines_in_file(io.BytesIO(data)) == 20000


def test_lines_in_file_text_matches_bytes():
    text = "one\ntwo\nthree\n"
    assert lines_in_file(io.StringIO(text)) == lines_in_file(io.BytesIO(text.encode()))


def test_lines_in_file_propagates_errors():
    class Broken(io.RawIOBase):
        def read(self, size=-1):
            raise OSError("boom")

    with pytest.raises(OSError, match="boom"):
        lines_in_file(Broken())