"""
Centralized input utilities.

- Single place for encoding and stdin handling
- Use Path.read_text() consistently (no raw open/read)
"""

import sys
from pathlib import Path
from typing import Union

DEFAULT_FILE_ENCODING = "utf-8"
STDIN_MARKER = "-"


def read_input(text: str) -> str:
    """Return ``text`` itself, or standard input when ``text`` is ``-``."""
    if text == STDIN_MARKER:
        return sys.stdin.read().strip()
    return text


def read_source_file(path: Union[Path, str]) -> str:
    """Read source file with standard encoding."""
    p = Path(path) if not isinstance(path, Path) else path
    return p.read_text(encoding=DEFAULT_FILE_ENCODING).strip()
