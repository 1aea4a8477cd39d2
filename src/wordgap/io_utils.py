"""Text source reading and JSON persistence for query results.

Reading a corpus file is the only fatal failure in a query run: any OSError
is re-raised as ``InputUnavailable`` so callers can report it and carry on.
JSON goes through orjson with sorted keys so saved indexes diff cleanly.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import orjson

log = logging.getLogger(__name__)


class InputUnavailable(RuntimeError):
    """Raised when a text source cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


def read_text_source(fpath: Path) -> str:
    """Read a whole corpus file as text.

    Decodes as UTF-8; bytes that are not valid UTF-8 are replaced rather
    than aborting the run, with a warning.

    Raises:
        InputUnavailable: the file is missing, unreadable, or a directory.
    """
    try:
        raw = fpath.read_bytes()
    except OSError as exc:
        raise InputUnavailable(fpath, exc.strerror or str(exc)) from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        log.warning("%s is not valid UTF-8 (%s); decoding with replacement", fpath, exc.reason)
        return raw.decode("utf-8", errors="replace")


def load_json(path: Path) -> Any:
    """Load JSON from a file."""
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON with sorted keys, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(obj, option=opts))
