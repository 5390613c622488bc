"""
Main entry point and editor context for the vedit text editor.
"""
import sys

from vedit import buffer, logger
from vedit.ui import input, screen, terminal
from vedit.ui.input import Mode

# Seconds to wait for a key before redrawing (picks up terminal resizes)
POLL_TIMEOUT = 0.1


class EditorContext:
    """
    Holds the state of one editing session: the buffer and its cursor, the active mode,
    the command line, status feedback, the viewport size and the exit flag.
    """
    def __init__(self, filename: str, size=terminal.DEFAULT_SIZE):
        self.height, self.width = size

        self.mode = Mode.NORMAL
        self.command_buffer = ""
        self.status_message = ""
        self.current_theme = "default"

        self.current_buffer = self.open_file(filename)

        # Running flag
        self.exit_flag = False

    def open_file(self, filename: str) -> buffer.Buffer:
        """
        Load ``filename`` into a new buffer. A missing or unreadable file gives an
        empty buffer bound to the same path; nothing is created until the first save.
        """
        try:
            text = buffer.read_file(filename)
        except FileNotFoundError:
            logger.log(f"new file: {filename}")
            return buffer.Buffer(filename, [""])
        except (OSError, UnicodeDecodeError) as e:
            self.status_message = f"error opening file: {e}"
            logger.log(f"error opening {filename}: {e}")
            return buffer.Buffer(filename, [""])
        logger.log(f"file opened: {filename}")
        return buffer.Buffer.from_text(filename, text)

    def log_command(self, msg: str):
        """Log a command or action to the debug log file."""
        logger.log(msg)

    def graceful_exit(self):
        """Stop the event loop after the current key has been handled."""
        logger.log("Editor exited.")
        self.exit_flag = True


def run_loop(context, session):
    """Render, wait for a key, dispatch it; repeat until the exit flag is set."""
    while not context.exit_flag:
        screen.display(context, session)
        key = session.poll_event(POLL_TIMEOUT)
        if key is not None:
            input.dispatch(context, key)


def prompt_filename(stream=None) -> str:
    """Ask for the file to edit on the normal (cooked) terminal."""
    print("Enter file path: ", end="", flush=True)
    stream = stream if stream is not None else sys.stdin
    line = stream.readline()
    if not line:
        raise EOFError("no file path given")
    return line.strip()


def main() -> int:
    try:
        filename = prompt_filename()
    except (EOFError, KeyboardInterrupt):
        print()
        return 1
    if not filename:
        print("no file path given", file=sys.stderr)
        return 1

    context = EditorContext(filename, terminal.terminal_size())
    with terminal.TerminalSession() as session:
        run_loop(context, session)
    return 0


def run():
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
