import pytest

from tools.recorder import TextSink


def test_writes_lines_in_order(tmp_path):
    path = tmp_path / "out.txt"
    with TextSink.open(path) as sink:
        sink.write("a,b\n")
        sink.write("c,d")
        assert sink.lines_written == 2
    assert path.read_text() == "a,b\nc,d\n"
    assert sink.closed


def test_close_is_idempotent(tmp_path):
    sink = TextSink.open(tmp_path / "out.txt", name="primary")
    sink.close()
    sink.close()
    assert sink.closed
    with pytest.raises(ValueError):
        sink.write("late\n")


def test_open_failure_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        TextSink.open(tmp_path / "missing" / "out.txt")
