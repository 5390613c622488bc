import pytest

from vedit import buffer, logger
from vedit.__main__ import EditorContext
from vedit.ui import input
from vedit.ui.keys import KeyInput, Modifier


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path, monkeypatch):
    # keep test runs out of the real log file
    monkeypatch.setattr(logger, "LOG_FILE_PATH", str(tmp_path / "vedit.log"))


@pytest.fixture
def make_context(tmp_path):
    def _make(lines=("",), row=0, col=0, filename=None, mode=None):
        path = filename or str(tmp_path / "doc.txt")
        context = EditorContext(path)
        context.current_buffer = buffer.Buffer(path, list(lines))
        context.current_buffer.cursor_line = row
        context.current_buffer.cursor_col = col
        if mode is not None:
            context.mode = mode
        return context
    return _make


def press(context, *codes, modifiers=Modifier.NONE):
    """Dispatch one key press per code."""
    for code in codes:
        input.dispatch(context, KeyInput(code, modifiers))


def ctrl(context, ch):
    input.dispatch(context, KeyInput(ch, Modifier.CTRL))


def assert_cursor_valid(buf):
    assert buf.lines
    assert 0 <= buf.cursor_line < len(buf.lines)
    assert 0 <= buf.cursor_col <= len(buf.lines[buf.cursor_line])
