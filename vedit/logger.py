"""
Logger module for the vedit text editor.

The editor draws over the whole terminal while it runs, so diagnostics cannot be
printed; each message is appended as one timestamped line to LOG_FILE_PATH.
"""
import datetime
import os
import tempfile

LOG_FILE_PATH = os.path.join(tempfile.gettempdir(), "vedit.log")


def log(message: str) -> None:
    """Record ``message`` as ``[YYYY-mm-dd HH:MM:SS] message``. Never raises."""
    stamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    try:
        with open(LOG_FILE_PATH, 'a', encoding='utf-8') as log_file:
            log_file.write(f"[{stamp}] {message}\n")
    except OSError:
        # an unwritable log location leaves the editor running without a log
        pass
