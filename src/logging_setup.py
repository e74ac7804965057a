"""Logging configuration.

The terminal belongs to the screen, so records go to a file only.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Union

LOG_FILE_NAME = "todo.log"

_installed: List[logging.Handler] = []


def setup_logging(log_dir: Union[str, Path] = ".local/todo", level: Union[int, str] = logging.INFO) -> Path:
    """Attach a file handler to the root logger and return the log file path.

    Safe to call more than once: handlers from an earlier call are replaced,
    anything else on the root logger is left alone.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    while _installed:
        h = _installed.pop()
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)
    _installed.append(fh)

    # warnings.warn(...) lands in the log as 'py.warnings'
    logging.captureWarnings(True)
    return log_file
