"""Checks and writes for files that commands upload or download."""

from __future__ import annotations

import os
from pathlib import Path

from koban.errors import FileError


def ensure_download_path(path: str | os.PathLike[str], force: bool) -> None:
    """Raise FileError unless ``path`` may be written to."""
    path = Path(path)
    if path.exists() and not force:
        raise FileError(f"{path} already exists")

    parent = path.parent
    if str(parent) not in ("", ".") and not parent.exists():
        raise FileError(f"parent directory {parent} does not exist")


def write_download_file(path: str | os.PathLike[str], data: bytes, force: bool) -> None:
    """Write downloaded bytes to ``path`` after checking it is writable."""
    path = Path(path)
    ensure_download_path(path, force)
    try:
        path.write_bytes(data)
    except OSError as error:
        raise FileError(f"could not write {path}: {error}") from error


def ensure_upload_file(path: str | os.PathLike[str]) -> None:
    """Raise FileError unless ``path`` is an existing regular file."""
    path = Path(path)
    try:
        is_file = path.stat() and path.is_file()
    except OSError as error:
        raise FileError(f"could not read {path}: {error}") from error
    if not is_file:
        raise FileError(f"{path} is not a file")