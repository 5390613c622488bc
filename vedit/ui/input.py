"""
Input handling for the vedit text editor.

Processes key presses for each mode (normal, insert, command) and updates the context
accordingly. Keys with no binding in the active mode are ignored.
"""
import enum
import unicodedata

from vedit import commands
from vedit.ui import keys


class Mode(enum.Enum):
    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"


def is_text_char(key: keys.KeyInput) -> bool:
    """True for a plain printable character typed without modifiers."""
    if not key.is_char or key.modifiers:
        return False
    return unicodedata.category(key.code) != "Cc"


def enter_insert_mode(context):
    context.mode = Mode.INSERT
    context.log_command("i: insert")


def enter_command_mode(context):
    context.mode = Mode.COMMAND
    context.command_buffer = ""
    context.log_command(":: command")


def leave_to_normal_mode(context):
    context.mode = Mode.NORMAL
    context.command_buffer = ""


def handle_normal_mode(context, key: keys.KeyInput):
    """Handle a key press in normal mode."""
    buf = context.current_buffer

    # Ctrl chords first
    if key.is_ctrl("w"):
        commands.save(context)
        return
    if key.is_ctrl("q"):
        context.log_command("^Q: quit")
        context.graceful_exit()
        return
    if key.is_ctrl("d"):
        buf.remove_line(buf.cursor_line)
        context.log_command("^D: delete line")
        return
    if key.modifiers:
        return

    code = key.code
    if code in ("h", keys.KEY_LEFT):
        buf.move_left()
    elif code in ("j", keys.KEY_DOWN):
        buf.move_down()
    elif code in ("k", keys.KEY_UP):
        buf.move_up()
    elif code in ("l", keys.KEY_RIGHT):
        buf.move_right()
    elif code in ("0", keys.KEY_HOME):
        buf.move_line_start()
    elif code in ("$", keys.KEY_END):
        buf.move_line_end()
    elif code == "i":
        enter_insert_mode(context)
    elif code == ":":
        enter_command_mode(context)
    elif code == "o":
        # Open a line below and start typing on it
        buf.insert_line_after(buf.cursor_line)
        buf.cursor_line += 1
        buf.cursor_col = 0
        context.mode = Mode.INSERT
        context.log_command("o: open line")
    elif code == keys.KEY_ESC:
        context.status_message = ""


def handle_insert_mode(context, key: keys.KeyInput):
    """Handle a key press in insert mode."""
    buf = context.current_buffer
    code = key.code

    if code == keys.KEY_ESC:
        context.mode = Mode.NORMAL
        context.log_command("esc: normal")
    elif code == keys.KEY_BACKSPACE:
        buf.delete_char_before()
    elif code == keys.KEY_DELETE:
        buf.delete_char_at()
    elif code == keys.KEY_ENTER:
        buf.split_line_at_cursor()
    elif is_text_char(key):
        buf.insert_char(code)


def handle_command_mode(context, key: keys.KeyInput):
    """Handle a key press in command (:) mode."""
    code = key.code

    if code == keys.KEY_ESC:
        leave_to_normal_mode(context)
        return
    if code == keys.KEY_ENTER:
        cmd = context.command_buffer
        leave_to_normal_mode(context)
        commands.process_command(context, cmd)
        return

    # Basic text input in command mode
    if code == keys.KEY_BACKSPACE:
        context.command_buffer = context.command_buffer[:-1]
    elif is_text_char(key):
        context.command_buffer += code


def dispatch(context, key: keys.KeyInput):
    """Send a key press to the handler of the active mode."""
    if context.mode == Mode.NORMAL:
        handle_normal_mode(context, key)
    elif context.mode == Mode.INSERT:
        handle_insert_mode(context, key)
    elif context.mode == Mode.COMMAND:
        handle_command_mode(context, key)
