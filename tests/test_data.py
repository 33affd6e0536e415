import pytest

from zyranet.data import DataHandler


def test_load_reads_lines(tmp_path):
    path = tmp_path / "in.txt"
    path.write_text("first\nSecond Line\n")
    handler = DataHandler()
    handler.load_data(path)
    assert handler.data == ["first", "Second Line"]


def test_load_without_trailing_newline(tmp_path):
    path = tmp_path / "in.txt"
    path.write_text("a\nb")
    handler = DataHandler()
    handler.load_data(path)
    assert handler.data == ["a", "b"]


def test_load_appends(tmp_path):
    path = tmp_path / "in.txt"
    path.write_text("x\n")
    handler = DataHandler()
    handler.load_data(path)
    handler.load_data(path)
    assert handler.data == ["x", "x"]


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("")
    handler = DataHandler()
    handler.load_data(path)
    assert handler.data == []


def test_load_missing_file(tmp_path):
    handler = DataHandler()
    with pytest.raises(FileNotFoundError, match="Could not open file"):
        handler.load_data(tmp_path / "missing.txt")


def test_process_lowercases_ascii_only():
    handler = DataHandler()
    handler.data = ["HeLLo World 42", "ÄB"]
    handler.process_data()
    assert handler.data == ["hello world 42", "Äb"]


def test_process_is_idempotent():
    handler = DataHandler()
    handler.data = ["MiXeD", "case"]
    handler.process_data()
    once = list(handler.data)
    handler.process_data()
    assert handler.data == once


def test_save_load_round_trip(tmp_path):
    path = tmp_path / "out.txt"
    handler = DataHandler()
    handler.data = ["one", "", "three"]
    handler.save_data(path)
    other = DataHandler()
    other.load_data(path)
    assert other.data == handler.data


def test_save_writes_newline_after_each_line(tmp_path):
    path = tmp_path / "out.txt"
    handler = DataHandler()
    handler.data = ["a", "b"]
    handler.save_data(path)
    assert path.read_text() == "a\nb\n"