# sanitizer/console.py

from __future__ import annotations
import sys
from datetime import datetime
from typing import Optional, TextIO

RESET = "\033[0m"
COLORS = {
    "INFO": "\033[0;34m",
    "WARN": "\033[1;33m",
    "ERROR": "\033[0;31m",
    "SUCCESS": "\033[0;32m",
    "PROCESSING": "\033[0;36m",
    "HEADER": "\033[0;35m",
    "SECTION": "\033[0;36m",
}

# levels that only print with --verbose
_VERBOSE_ONLY = {"WARN", "SUCCESS", "PROCESSING"}


def timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


class Console:
    """Timestamped status lines on stderr, colored when stderr is a terminal."""

    def __init__(self, verbose: bool = False, stream: Optional[TextIO] = None) -> None:
        self.verbose = verbose
        self.stream = stream if stream is not None else sys.stderr
        isatty = getattr(self.stream, "isatty", None)
        self.color = bool(isatty and isatty())

    def paint(self, text: str, tone: str) -> str:
        if not self.color:
            return text
        return f"{COLORS.get(tone, '')}{text}{RESET}"

    def write(self, text: str = "") -> None:
        print(text, file=self.stream)

    def log(self, level: str, msg: str) -> None:
        if level in _VERBOSE_ONLY and not self.verbose:
            return
        tag = self.paint(f"[{timestamp()} {level}]", level)
        self.write(f"{tag} {msg}")

    def info(self, msg: str) -> None:
        self.log("INFO", msg)

    def warning(self, msg: str) -> None:
        self.log("WARN", msg)

    def error(self, msg: str) -> None:
        self.log("ERROR", msg)

    def success(self, msg: str) -> None:
        self.log("SUCCESS", msg)

    def processing(self, msg: str) -> None:
        self.log("PROCESSING", msg)

    def section(self, title: str) -> None:
        self.write()
        self.write(self.paint(f"--- {title} ---", "SECTION"))
