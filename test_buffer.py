import pytest

from vedit.buffer import Buffer, read_file, split_lines, write_file


def make(lines, row=0, col=0):
    buf = Buffer("doc.txt", lines)
    buf.cursor_line = row
    buf.cursor_col = col
    return buf


def test_empty_lines_become_one_empty_line():
    assert Buffer("x", []).lines == [""]
    assert Buffer("x").lines == [""]
    assert Buffer.from_text("x", "").lines == [""]


def test_clamp_cursor_pulls_row_and_column_back():
    buf = make(["abc", "de"], row=5, col=9)
    buf.clamp_cursor()
    assert (buf.cursor_line, buf.cursor_col) == (1, 2)


def test_clamp_cursor_is_idempotent():
    buf = make(["hello", "x"], row=3, col=7)
    buf.clamp_cursor()
    once = (buf.cursor_line, buf.cursor_col)
    buf.clamp_cursor()
    assert (buf.cursor_line, buf.cursor_col) == once


def test_line_start_and_end():
    buf = make(["héllo"], col=2)
    buf.move_line_end()
    assert buf.cursor_col == 5
    buf.move_line_start()
    assert buf.cursor_col == 0


def test_insert_char_counts_characters_not_bytes():
    buf = make(["日本"], col=1)
    buf.insert_char("語")
    assert buf.lines == ["日語本"]
    assert buf.cursor_col == 2
    assert buf.modified


@pytest.mark.parametrize("line,col", [("", 0), ("abc", 0), ("abc", 2), ("abc", 3), ("ñandú", 4)])
def test_insert_then_backspace_restores_line(line, col):
    buf = make([line], col=col)
    buf.insert_char("Z")
    buf.delete_char_before()
    assert buf.lines == [line]
    assert buf.cursor_col == col


def test_backspace_at_line_start_joins_previous_line():
    buf = make(["one", "two"], row=1, col=0)
    buf.delete_char_before()
    assert buf.lines == ["onetwo"]
    assert (buf.cursor_line, buf.cursor_col) == (0, 3)


def test_backspace_at_buffer_start_is_noop():
    buf = make(["abc"], row=0, col=0)
    buf.delete_char_before()
    assert buf.lines == ["abc"]
    assert (buf.cursor_line, buf.cursor_col) == (0, 0)
    assert not buf.modified


def test_delete_char_at():
    buf = make(["abc"], col=1)
    buf.delete_char_at()
    assert buf.lines == ["ac"]
    assert buf.cursor_col == 1


def test_delete_char_at_end_of_line_is_noop():
    buf = make(["abc", "def"], col=3)
    buf.delete_char_at()
    assert buf.lines == ["abc", "def"]
    assert buf.cursor_col == 3


def test_split_line_at_cursor():
    buf = make(["hello world"], col=5)
    buf.split_line_at_cursor()
    assert buf.lines == ["hello", " world"]
    assert (buf.cursor_line, buf.cursor_col) == (1, 0)


def test_split_at_end_adds_empty_line():
    buf = make(["abc"], col=3)
    buf.split_line_at_cursor()
    assert buf.lines == ["abc", ""]
    assert (buf.cursor_line, buf.cursor_col) == (1, 0)


def test_insert_line_after_leaves_cursor():
    buf = make(["a", "b"], row=0, col=1)
    buf.insert_line_after(0)
    assert buf.lines == ["a", "", "b"]
    assert (buf.cursor_line, buf.cursor_col) == (0, 1)


def test_remove_last_line_moves_cursor_up():
    buf = make(["first", "second line"], row=1, col=8)
    buf.remove_line(1)
    assert buf.lines == ["first"]
    assert (buf.cursor_line, buf.cursor_col) == (0, 5)


def test_remove_only_line_leaves_empty_line():
    buf = make(["only"], col=2)
    buf.remove_line(0)
    assert buf.lines == [""]
    assert (buf.cursor_line, buf.cursor_col) == (0, 0)


def test_remove_line_out_of_range_is_ignored():
    buf = make(["a"])
    buf.remove_line(4)
    assert buf.lines == ["a"]


def test_save_round_trip(tmp_path):
    path = tmp_path / "out.txt"
    buf = Buffer(str(path), ["alpha", "", "gämma"])
    buf.modified = True
    written = buf.save_to_file()
    assert written == len("alpha\n\ngämma".encode("utf-8"))
    assert not buf.modified
    assert path.read_text(encoding="utf-8") == "alpha\n\ngämma"
    assert Buffer.from_text(str(path), read_file(str(path))).lines == ["alpha", "", "gämma"]


def test_write_file_error_propagates(tmp_path):
    with pytest.raises(OSError):
        write_file(str(tmp_path / "missing" / "dir" / "f.txt"), "x")


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file(str(tmp_path / "nope.txt"))


@pytest.mark.parametrize("text,lines", [
    ("", []),
    ("a", ["a"]),
    ("a\n", ["a"]),
    ("a\n\n", ["a", ""]),
    ("a\r\nb\r\n", ["a", "b"]),
    ("a\rb", ["a\rb"]),
    ("a\x0cb c\x85d", ["a\x0cb c\x85d"]),
])
def test_split_lines_breaks_only_at_newline(text, lines):
    assert split_lines(text) == lines


def test_unusual_separators_survive_save_and_reload(tmp_path):
    path = tmp_path / "odd.txt"
    path.write_bytes("a\x0cb\rc".encode("utf-8"))
    buf = Buffer.from_text(str(path), read_file(str(path)))
    assert buf.lines == ["a\x0cb\rc"]
    buf.save_to_file()
    assert path.read_bytes() == "a\x0cb\rc".encode("utf-8")


def test_crlf_file_loads_without_carriage_returns(tmp_path):
    path = tmp_path / "dos.txt"
    path.write_bytes(b"one\r\ntwo\r\n")
    assert Buffer.from_text(str(path), read_file(str(path))).lines == ["one", "two"]
