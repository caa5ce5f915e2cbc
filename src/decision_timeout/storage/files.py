"""Atomic JSON file writes shared by the file-backed stores."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

__all__ = ["write_json_atomic"]


def write_json_atomic(path: Path, data: Any) -> None:
    """Write data as JSON to path through a temp file and a rename.

    Readers see either the old file or the new one. The temp file is
    removed if anything fails before the rename.

    Args:
        path: Destination file; its directory is created if missing.
        data: JSON-serializable data.

    Raises:
        OSError: If the directory, temp file or rename fails.

    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
