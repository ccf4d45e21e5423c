"""JSON read/write helpers with atomic replacement on write."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from ..errors import JsonIOError


def read_json(path: Path) -> Any:
    """Return the decoded JSON document stored at *path*."""

    try:
        with Path(path).open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError as exc:
        raise JsonIOError(f"File not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise JsonIOError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise JsonIOError(f"Unable to read {path}: {exc}") from exc


def write_json(path: Path, payload: Any, *, indent: int = 2) -> None:
    """Serialise *payload* to *path*, replacing the file atomically."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=False, indent=indent)
            handle.write("\n")
        os.replace(tmp_name, target)
    except (OSError, TypeError, ValueError) as exc:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise JsonIOError(f"Unable to write {target}: {exc}") from exc


__all__ = ["read_json", "write_json"]
