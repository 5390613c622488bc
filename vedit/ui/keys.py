"""
Key events for the vedit text editor.

The terminal delivers raw characters; KeyDecoder turns them into KeyInput presses that the
mode handlers in vedit.ui.input match against. A KeyInput's code is either the typed
character itself or one of the KEY_* names below.
"""
import enum
from dataclasses import dataclass

KEY_LEFT = "KEY_LEFT"
KEY_RIGHT = "KEY_RIGHT"
KEY_UP = "KEY_UP"
KEY_DOWN = "KEY_DOWN"
KEY_HOME = "KEY_HOME"
KEY_END = "KEY_END"
KEY_ENTER = "KEY_ENTER"
KEY_ESC = "KEY_ESC"
KEY_BACKSPACE = "KEY_BACKSPACE"
KEY_DELETE = "KEY_DELETE"
KEY_TAB = "KEY_TAB"

ESC = "\x1b"


class Modifier(enum.IntFlag):
    NONE = 0
    CTRL = 1
    ALT = 2


@dataclass(frozen=True)
class KeyInput:
    """A single key press."""
    code: str
    modifiers: Modifier = Modifier.NONE

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1

    def is_ctrl(self, ch: str) -> bool:
        """True for the Ctrl+<ch> chord."""
        return self.code == ch and bool(self.modifiers & Modifier.CTRL)


# Final characters of CSI ("ESC [") and SS3 ("ESC O") sequences
_CSI_FINALS = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
}

# "ESC [ <n> ~" sequences
_CSI_TILDE = {
    "1": KEY_HOME,
    "3": KEY_DELETE,
    "4": KEY_END,
    "7": KEY_HOME,
    "8": KEY_END,
}


class KeyDecoder:
    """
    Incremental decoder from terminal input to KeyInput presses.

    Escape sequences may be split across reads, so an unfinished sequence is kept until
    more text arrives. A lone ESC is only known to be the Esc key once no more input
    follows; the caller signals that by calling flush().
    """
    def __init__(self):
        self._pending = ""

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def feed(self, text: str) -> list:
        """Decode ``text`` and return the complete key presses found in it."""
        data = self._pending + text
        self._pending = ""
        keys = []
        i = 0
        while i < len(data):
            ch = data[i]
            if ch == ESC:
                key, used = self._parse_escape(data, i)
                if used == 0:
                    # Incomplete sequence, wait for more input
                    self._pending = data[i:]
                    break
                if key is not None:
                    keys.append(key)
                i += used
                continue
            key = _decode_char(ch)
            if key is not None:
                keys.append(key)
            i += 1
        return keys

    def flush(self) -> list:
        """Resolve a held-back escape prefix once no more input is coming."""
        pending = self._pending
        self._pending = ""
        if not pending:
            return []
        keys = [KeyInput(KEY_ESC)]
        # Whatever followed the ESC was not a known sequence; decode it as plain input
        keys.extend(self.feed(pending[1:]))
        keys.extend(self.flush())
        return keys

    def _parse_escape(self, data: str, start: int):
        """
        Parse the escape sequence at data[start].
        Returns (key or None, characters consumed); 0 consumed means the sequence is incomplete.
        """
        rest = data[start + 1:]
        if not rest:
            return None, 0
        lead = rest[0]
        if lead == "[":
            # CSI: parameter bytes then a final byte in 0x40-0x7e
            for j in range(1, len(rest)):
                final = rest[j]
                if "\x40" <= final <= "\x7e":
                    params = rest[1:j]
                    return _decode_csi(params, final), j + 2
            return None, 0
        if lead == "O":
            if len(rest) < 2:
                return None, 0
            return _decode_csi("", rest[1]), 3
        if lead == ESC:
            return KeyInput(KEY_ESC), 1
        key = _decode_char(lead)
        if key is not None and key.is_char and not key.modifiers:
            return KeyInput(key.code, Modifier.ALT), 2
        # ESC followed by a control key: report Esc and let the control key decode on its own
        return KeyInput(KEY_ESC), 1


def _decode_csi(params: str, final: str):
    if final == "~":
        return KeyInput(_CSI_TILDE[params]) if params in _CSI_TILDE else None
    name = _CSI_FINALS.get(final)
    if name is None:
        return None
    # "1;5C" style parameters carry modifiers; only Ctrl and Alt are tracked
    modifiers = Modifier.NONE
    if ";" in params:
        try:
            mask = int(params.split(";")[1]) - 1
        except ValueError:
            mask = 0
        if mask & 2:
            modifiers |= Modifier.ALT
        if mask & 4:
            modifiers |= Modifier.CTRL
    return KeyInput(name, modifiers)


def _decode_char(ch: str):
    """Decode one character that is not part of an escape sequence."""
    if ch in ("\r", "\n"):
        return KeyInput(KEY_ENTER)
    if ch in ("\x7f", "\x08"):
        return KeyInput(KEY_BACKSPACE)
    if ch == "\t":
        return KeyInput(KEY_TAB)
    code = ord(ch)
    if 1 <= code <= 26:
        return KeyInput(chr(code + 96), Modifier.CTRL)
    if code < 32:
        # Ctrl+@, Ctrl+\ and friends have no binding
        return None
    return KeyInput(ch)
