"""
Buffer module for the vedit text editor.

Defines the Buffer class that owns the text content and the cursor position, plus the
two file helpers used to load and persist it. Columns are counted in characters (Python
string indices), never in encoded bytes, so multi-byte text behaves like ASCII.

Invariants kept by every operation:
    * ``lines`` always holds at least one line
    * ``0 <= cursor_line < len(lines)``
    * ``0 <= cursor_col <= len(lines[cursor_line])``
"""


def read_file(path: str) -> str:
    """Return the text stored at ``path``. Raises OSError or UnicodeDecodeError.

    Line endings are left untranslated; split_lines decides what ends a line.
    """
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def split_lines(text: str) -> list:
    """
    Split file text into lines at LF only, dropping one CR right before each LF.

    A final newline does not start another line. Other separators such as form feeds
    or U+2028 stay inside the line they appear in.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def write_file(path: str, text: str) -> None:
    """Write ``text`` to ``path``, replacing the previous contents.

    The target is opened and truncated in place, so an error part way through can leave
    a partially written file behind.
    """
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)


class Buffer:
    """Represents a text buffer (file content) with its cursor and editing operations."""
    def __init__(self, filename: str = None, lines=None):
        self.filename = filename  # Path the buffer is saved to
        self.lines = list(lines) if lines is not None else [""]

        # An empty file is one empty line, never zero lines
        if not self.lines:
            self.lines = [""]

        self.modified = False
        self.cursor_line = 0
        self.cursor_col = 0

    @classmethod
    def from_text(cls, filename: str, text: str):
        """Build a buffer from file contents, one entry per line."""
        return cls(filename, split_lines(text))

    def to_text(self) -> str:
        """Return the persisted form: lines joined by newlines."""
        return "\n".join(self.lines)

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor_line]

    def line_length(self, row: int = None) -> int:
        """Number of characters on ``row`` (defaults to the cursor row)."""
        if row is None:
            row = self.cursor_line
        return len(self.lines[row])

    def clamp_cursor(self):
        """Pull the cursor back inside the buffer after a structural change."""
        if self.cursor_line >= len(self.lines):
            self.cursor_line = len(self.lines) - 1
        if self.cursor_line < 0:
            self.cursor_line = 0
        line_len = self.line_length()
        if self.cursor_col > line_len:
            self.cursor_col = line_len
        if self.cursor_col < 0:
            self.cursor_col = 0

    def move_line_start(self):
        self.cursor_col = 0

    def move_line_end(self):
        self.cursor_col = self.line_length()

    def move_left(self):
        if self.cursor_col > 0:
            self.cursor_col -= 1

    def move_right(self):
        if self.cursor_col < self.line_length():
            self.cursor_col += 1

    def move_up(self):
        if self.cursor_line > 0:
            self.cursor_line -= 1
        self.clamp_cursor()

    def move_down(self):
        if self.cursor_line < len(self.lines) - 1:
            self.cursor_line += 1
        self.clamp_cursor()

    def insert_char(self, ch: str):
        """Insert a single character at the cursor and step past it."""
        line = self.current_line
        col = self.cursor_col
        self.lines[self.cursor_line] = line[:col] + ch + line[col:]
        self.cursor_col += 1
        self.modified = True

    def delete_char_before(self):
        """Backspace: remove the character left of the cursor, or join with the previous line."""
        if self.cursor_col > 0:
            line = self.current_line
            col = self.cursor_col
            self.lines[self.cursor_line] = line[:col - 1] + line[col:]
            self.cursor_col -= 1
            self.modified = True
        elif self.cursor_line > 0:
            curr_line = self.lines.pop(self.cursor_line)
            self.cursor_line -= 1
            prev_line = self.lines[self.cursor_line]
            self.cursor_col = len(prev_line)
            self.lines[self.cursor_line] = prev_line + curr_line
            self.modified = True

    def delete_char_at(self):
        """Delete the character under the cursor. No-op at end of line."""
        line = self.current_line
        col = self.cursor_col
        if col < len(line):
            self.lines[self.cursor_line] = line[:col] + line[col + 1:]
            self.modified = True

    def split_line_at_cursor(self):
        """Split the current line at the cursor position, moving the remainder to a new line below."""
        line = self.current_line
        before = line[:self.cursor_col]
        after = line[self.cursor_col:]
        self.lines[self.cursor_line] = before
        self.lines.insert(self.cursor_line + 1, after)
        self.modified = True
        self.cursor_line += 1
        self.cursor_col = 0

    def insert_line_after(self, row: int):
        """Insert an empty line directly below ``row``. The cursor is left alone."""
        self.lines.insert(row + 1, "")
        self.modified = True

    def remove_line(self, row: int):
        """Delete line ``row``; an emptied buffer keeps a single empty line."""
        if not 0 <= row < len(self.lines):
            return
        del self.lines[row]
        if not self.lines:
            self.lines = [""]
        self.modified = True
        self.clamp_cursor()

    def save_to_file(self) -> int:
        """
        Write the buffer contents to self.filename.
        Returns the number of bytes written; OSError propagates to the caller.
        """
        text = self.to_text()
        write_file(self.filename, text)
        self.modified = False
        return len(text.encode("utf-8"))
