"""Whole-file JSON reads and atomic writes for the persisted state files."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any:
    """Return the decoded JSON content of *path*, or ``None`` if it does not exist.

    Raises:
        ValueError: If the file exists but is not valid JSON (or not UTF-8).
        OSError: If the path exists but cannot be read.
    """
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding="utf-8"))


def write_json_atomic(path: Path, data: Any) -> None:
    """Serialise *data* to *path*, replacing any previous file in one step.

    The payload goes to a temporary sibling first and is renamed over the
    target, so readers never observe a half-written file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(data, indent=2, ensure_ascii=False)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
