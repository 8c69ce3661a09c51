# sanitizer/settings.py

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

PROG = "clean-bom"
VERSION = "2.6.4"

SUPPORTED_EXTENSIONS: Tuple[str, ...] = ("php", "css", "js", "txt", "xml", "htm", "html")
DEFAULT_MAX_SIZE = 100 * 1024 * 1024  # 100 MiB


@dataclass(frozen=True)
class Settings:
    """Effective options for one run, resolved once from defaults and CLI flags."""
    paths: Tuple[Path, ...] = ()
    verbose: bool = False
    dry_run: bool = False
    max_size: int = DEFAULT_MAX_SIZE
    extensions: Tuple[str, ...] = SUPPORTED_EXTENSIONS
    report: Optional[Path] = None
    temp_dir: Optional[Path] = field(default=None)  # None -> tempfile.gettempdir()

    @property
    def recursive(self) -> bool:
        """True when no explicit paths were given and the current tree is scanned."""
        return not self.paths
