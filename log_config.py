import logging
import os
from typing import Optional


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "warning", log_file: Optional[str] = None) -> None:
    """Route log records to ``log_file``.

    The terminal is owned by curses while the browser runs, so nothing is
    ever written to stderr; without a log file records are discarded.
    """
    normalized = (level or "warning").strip().upper()
    level_value = getattr(logging, normalized, logging.WARNING)
    if not isinstance(level_value, int):
        level_value = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level_value)
    if root.handlers:
        return

    if not log_file:
        root.addHandler(logging.NullHandler())
        return

    path = os.path.expanduser(log_file)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
