import pytest

from sigmacomp import dumper


@pytest.fixture(autouse=True)
def _stdout_mode(monkeypatch):
    monkeypatch.setattr(dumper, "_buffer", None)


def test_default_dumps_to_stdout(capsys):
    dumper.dump("hello")
    dumper.dump(" world")
    assert capsys.readouterr().out == "hello world"


def test_buffer_empty_in_stdout_mode(capsys):
    dumper.dump("abc")
    assert dumper.dump_buffer() == ""
    assert capsys.readouterr().out == "abc"


def test_dump_to_string_collects_text(capsys):
    dumper.dump_to_string()
    dumper.dump("first ")
    dumper.dump("second")
    assert dumper.dump_buffer() == "first second"
    assert capsys.readouterr().out == ""


def test_dump_buffer_clears_after_retrieval():
    dumper.dump_to_string()
    dumper.dump("x")
    assert dumper.dump_buffer() == "x"
    assert dumper.dump_buffer() == ""
    dumper.dump("y")
    assert dumper.dump_buffer() == "y"


def test_dump_to_string_discards_previous_content():
    dumper.dump_to_string()
    dumper.dump("old")
    dumper.dump_to_string()
    dumper.dump("new")
    assert dumper.dump_buffer() == "new"