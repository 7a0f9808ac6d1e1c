"""Console logging utilities for the decoder harness and tools.

Provides a small levelled console logger with optional colours and elapsed
timestamps, plus a tqdm progress bar helper for long scans such as the
opcode survey.
"""

import os
import sys
import time
from typing import Iterable, Optional, TextIO

from tqdm import tqdm

LOG_LEVEL_ENV = "CHIP8DECODE_LOG_LEVEL"

LEVEL_ORDER = {
    "DEBUG": 0,
    "INFO": 1,
    "WARNING": 2,
    "ERROR": 3,
    "CRITICAL": 4,
}


_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "ERROR": "\033[31m",
}
_RESET = "\033[0m"


def default_log_level() -> str:
    """Log level from the environment, falling back to INFO."""
    level = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    return level if level in LEVEL_ORDER else "INFO"


class ConsoleLogger:
    """Levelled logger writing ``[elapsed][level][name] message`` lines to stderr.

    Colours are only used when the stream is a terminal. ``log_level`` defaults
    to ``CHIP8DECODE_LOG_LEVEL``.
    """

    def __init__(
        self,
        name: str = "chip8decode",
        log_level: Optional[str] = None,
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.name = name
        self.log_level = (log_level or default_log_level()).upper()
        self.threshold = LEVEL_ORDER.get(self.log_level, LEVEL_ORDER["INFO"])
        self.stream = stream if stream is not None else sys.stderr
        self.use_colors = use_colors and getattr(self.stream, "isatty", lambda: False)()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _prefix(self, level: str) -> str:
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{_COLORS.get(level, '')}{tag}{_RESET}"
        if self.show_timestamps:
            tag = f"[{time.time() - self.start_time:8.2f}s]{tag}"
        return f"{tag}[{self.name}]"

    def log(self, level: str, message: str):
        level = level.upper()
        if LEVEL_ORDER.get(level, LEVEL_ORDER["INFO"]) < self.threshold:
            return
        print(f"{self._prefix(level)} {message}", file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def error(self, message: str):
        self.log("ERROR", message)


def progress_bar(
    iterable: Iterable,
    desc: Optional[str] = None,
    enabled: bool = True,
    **kwargs,
):
    """Wrap an iterable in a tqdm progress bar written to stderr."""
    for kwarg in ("iterable", "disable", "file"):
        kwargs.pop(kwarg, None)
    return tqdm(iterable, desc=desc, disable=not enabled, file=sys.stderr, **kwargs)
