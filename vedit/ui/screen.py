"""
vedit/ui/screen.py

Draws the editor: a line-number gutter and the buffer text above a one-row status bar.
render() is a pure projection of the editor state onto a frame of ANSI/VT100 escape
sequences; display() is the only function here that touches the terminal.
"""
from wcwidth import wcwidth

from vedit.ui.input import Mode
from vedit.ui.terminal import HIDE_CURSOR, RESET_STYLE, SHOW_CURSOR

GUTTER_WIDTH = 5

# Built-in themes: style role -> SGR parameters
THEMES = {
    "default": {
        "gutter": "34",
        "status": "7",
    },
}

CLEAR_SCREEN = "\x1b[2J"

MODE_NAMES = {
    Mode.NORMAL: "NORMAL",
    Mode.INSERT: "INSERT",
    Mode.COMMAND: "COMMAND",
}


def move_to(row: int, col: int) -> str:
    """Cursor positioning sequence for 1-based screen coordinates."""
    return f"\x1b[{row};{col}H"


def sgr(params: str) -> str:
    return f"\x1b[{params}m"


def visible_char(ch: str) -> str:
    """Map a character to what is drawn for it; control characters become one safe cell."""
    if ch == "\t":
        return " "
    if ord(ch) < 32 or ord(ch) == 127:
        return "?"
    return ch


def char_width(ch: str) -> int:
    """Display cells used by ``ch`` once drawn."""
    return max(0, wcwidth(visible_char(ch)))


def text_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def clip(text: str, width: int) -> str:
    """Return the longest prefix of ``text`` that fits in ``width`` cells, made drawable."""
    out = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > width:
            break
        out.append(visible_char(ch))
        used += w
    return "".join(out)


def pad_line(text, width):
    """Pad or trim a string to match the visual width."""
    width = max(0, width)
    clipped = clip(text, width)
    return clipped + " " * (width - text_width(clipped))


def status_text(context) -> str:
    """Text of the status bar: mode, file, 1-based cursor position and feedback."""
    buf = context.current_buffer
    dirty_mark = "*" if buf.modified else ""
    text = (f" {MODE_NAMES[context.mode]} | {buf.filename}{dirty_mark} | "
            f"{buf.cursor_line + 1}:{buf.cursor_col + 1} ")
    if context.mode == Mode.COMMAND:
        text += f"| :{context.command_buffer} "
    elif context.status_message:
        text += f"| {context.status_message} "
    return text


def cursor_position(context, rows: int, cols: int):
    """1-based screen (row, col) of the buffer cursor, kept inside the viewport."""
    buf = context.current_buffer
    line = buf.lines[buf.cursor_line]
    row = buf.cursor_line + 1
    col = GUTTER_WIDTH + text_width(line[:buf.cursor_col]) + 1
    return max(1, min(row, rows)), max(1, min(col, cols))


def render(context, rows: int, cols: int) -> str:
    """
    Build one full frame for a viewport of ``rows`` x ``cols`` cells.

    The last row is the status bar; every row above it shows the buffer line with the same
    index, or stays blank past the end of the buffer. Lines are cut to the width left over
    by the gutter, which may be zero on very narrow terminals.
    """
    theme = THEMES[context.current_theme]
    lines = context.current_buffer.lines
    text_rows = max(0, rows - 1)
    text_width_avail = max(0, cols - GUTTER_WIDTH)

    frame = [HIDE_CURSOR, CLEAR_SCREEN, move_to(1, 1)]
    for i, line in enumerate(lines[:text_rows]):
        gutter = f"{i + 1:>{GUTTER_WIDTH - 1}} "[:max(0, cols)]
        frame.append(move_to(i + 1, 1) + sgr(theme["gutter"]) + gutter + RESET_STYLE)
        if text_width_avail:
            frame.append(move_to(i + 1, GUTTER_WIDTH + 1) + clip(line, text_width_avail))

    if rows > 0:
        frame.append(move_to(rows, 1) + sgr(theme["status"]) +
                     pad_line(status_text(context), cols) + RESET_STYLE)

    frame.append(move_to(*cursor_position(context, rows, cols)))
    frame.append(SHOW_CURSOR)
    return "".join(frame)


def display(context, session):
    """
    Re-read the viewport size and draw the current state to the terminal.
    """
    context.height, context.width = session.terminal_size()
    session.write(render(context, context.height, context.width))
