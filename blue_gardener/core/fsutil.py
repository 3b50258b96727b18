"""Atomic file helpers.

Files are written to a temporary sibling and moved into place with
``os.replace`` so a crash never leaves a half-written file behind.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from blue_gardener.core.errors import FilesystemError
from blue_gardener.output import MessageType, VerbosityLevel, message


def read_text(path: Path) -> str | None:
    """Return the file's text, or ``None`` if it does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise FilesystemError("read", path, exc) from exc


def atomic_write_text(path: Path, content: str) -> bool:
    """Replace *path* with *content* in a single rename.

    Args:
        path: Destination file
        content: Full new file content

    Returns:
        ``True`` if the file was written, ``False`` if it already held
        exactly *content*

    Raises:
        FilesystemError: If the directory or file cannot be written
    """
    if read_text(path) == content:
        message(f"Unchanged: {path}", MessageType.DEBUG, VerbosityLevel.DEBUG)
        return False

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError("create directory", path.parent, exc) from exc

    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.tmp.")
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        # mkstemp creates 0600 files; output is meant to be shared in the repo
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except OSError as exc:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise FilesystemError("write", path, exc) from exc

    message(f"Wrote {path}", MessageType.DEBUG, VerbosityLevel.DEBUG)
    return True


def delete_file(path: Path) -> bool:
    """Delete *path* if it exists.

    Returns:
        ``True`` if a file was deleted

    Raises:
        FilesystemError: If the file exists but cannot be deleted
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise FilesystemError("delete", path, exc) from exc

    message(f"Deleted {path}", MessageType.DEBUG, VerbosityLevel.DEBUG)
    return True
