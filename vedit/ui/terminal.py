"""
vedit/ui/terminal.py

Owns the terminal while the editor runs: raw input mode, the alternate screen and cursor
visibility. TerminalSession is a context manager so the terminal is always handed back,
whether the editor quits normally, crashes, or fails half way through setup.
"""
import codecs
import os
import select
import sys
import termios
import tty

from vedit import logger
from vedit.ui.keys import KeyDecoder

DEFAULT_SIZE = (24, 80)

# How long to wait for the rest of an escape sequence before treating ESC as a key press
ESCAPE_TIMEOUT = 0.025

ENTER_ALT_SCREEN = "\x1b[?1049h"
LEAVE_ALT_SCREEN = "\x1b[?1049l"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
RESET_STYLE = "\x1b[0m"


def terminal_size():
    """Return (rows, cols) of the controlling terminal, or DEFAULT_SIZE if unknown."""
    try:
        size = os.get_terminal_size(sys.__stdout__.fileno())
    except (AttributeError, ValueError, OSError):
        return DEFAULT_SIZE
    # Some ptys report 0x0 before they are sized
    if not size.lines or not size.columns:
        return DEFAULT_SIZE
    return size.lines, size.columns


class TerminalSession:
    """Raw-mode terminal session; use it as ``with TerminalSession() as term:``."""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self._saved_attrs = None
        self._active = False
        self._decoder = KeyDecoder()
        self._utf8 = codecs.getincrementaldecoder("utf-8")("replace")
        self._queue = []

    def __enter__(self):
        fd = self.stdin.fileno()
        self._saved_attrs = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            self._active = True
            self.write(ENTER_ALT_SCREEN + HIDE_CURSOR)
        except BaseException:
            self._restore()
            raise
        logger.log("terminal session started")
        return self

    def __exit__(self, exc_type, exc, tb):
        self._restore()
        logger.log("terminal session closed")
        return False

    def _restore(self):
        """Undo every setup step that was applied. Safe to call more than once."""
        if self._saved_attrs is None:
            return
        if self._active:
            self._active = False
            try:
                self.write(RESET_STYLE + SHOW_CURSOR + LEAVE_ALT_SCREEN)
            except OSError as e:
                logger.log(f"could not reset screen: {e}")
        attrs = self._saved_attrs
        self._saved_attrs = None
        termios.tcsetattr(self.stdin.fileno(), termios.TCSADRAIN, attrs)

    def write(self, text: str):
        self.stdout.write(text)
        self.stdout.flush()

    def terminal_size(self):
        return terminal_size()

    def _wait_readable(self, timeout: float) -> bool:
        readable, _, _ = select.select([self.stdin.fileno()], [], [], timeout)
        return bool(readable)

    def _read_available(self) -> str:
        data = os.read(self.stdin.fileno(), 1024)
        return self._utf8.decode(data)

    def poll_event(self, timeout: float):
        """
        Wait up to ``timeout`` seconds for a key press.
        Returns the next KeyInput, or None if nothing arrived in time.
        """
        if self._queue:
            return self._queue.pop(0)
        if not self._wait_readable(timeout):
            return None
        self._queue.extend(self._decoder.feed(self._read_available()))
        # An escape prefix with nothing behind it is the Esc key itself
        while self._decoder.has_pending:
            if self._wait_readable(ESCAPE_TIMEOUT):
                self._queue.extend(self._decoder.feed(self._read_available()))
            else:
                self._queue.extend(self._decoder.flush())
        if self._queue:
            return self._queue.pop(0)
        return None
