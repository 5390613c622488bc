"""
Command parsing and execution for the vedit text editor.

This module handles command-line mode input (':' mode) and the save operation shared with
the Ctrl+W binding. Commands are matched exactly: there are no abbreviations or arguments.
"""


def save(context):
    """Write the current buffer to its file and report the outcome in the status bar."""
    buf = context.current_buffer
    try:
        num_bytes = buf.save_to_file()
    except OSError as e:
        context.status_message = f"Save error: {e}"
        context.log_command(f"w: error saving {buf.filename}: {e}")
        return False
    context.status_message = "File saved"
    context.log_command(f"w: write ({num_bytes} bytes)")
    return True


def process_command(context, command: str):
    """Execute a submitted command-line (':' mode) command string."""
    if command == "w":
        save(context)
    elif command == "q":
        context.log_command("q: quit")
        context.graceful_exit()
    elif command == "wq":
        save(context)
        context.log_command("wq: quit")
        context.graceful_exit()
    else:
        context.status_message = f"Unknown command: {command}"
        context.log_command(f"unknown command: {command!r}")
