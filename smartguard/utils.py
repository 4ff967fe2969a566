"""SmartGuard utility helpers."""

import logging
import os
from pathlib import Path

from smartguard.config import (
    DEFAULT_IGNORE_DIRS,
    DEFAULT_SCAN_EXTENSIONS,
)

logger = logging.getLogger(__name__)


def validate_path(path: str) -> Path:
    """Resolve and validate that *path* points to an existing file or directory.

    Args:
        path: Raw path string from the CLI.

    Returns:
        Resolved ``Path`` object.

    Raises:
        FileNotFoundError: If the path does not exist.
    """
    resolved = Path(path).resolve()

    if not resolved.exists():
        raise FileNotFoundError(f"Path does not exist: {resolved}")

    return resolved


class FileWalkResult:
    """Container returned by :func:`walk_project_files`.

    Attributes:
        files: List of absolute file paths that matched the scan criteria.
        files_scanned: Total number of files that were inspected.
    """

    __slots__ = ("files", "files_scanned")

    def __init__(self) -> None:
        self.files: list[str] = []
        self.files_scanned: int = 0


def walk_project_files(
    root_path: Path,
    *,
    ignore_dirs: set[str] | None = None,
    scan_extensions: set[str] | None = None,
) -> FileWalkResult:
    """Walk a project directory and collect Solidity source paths.

    Respects ``DEFAULT_IGNORE_DIRS`` and ``DEFAULT_SCAN_EXTENSIONS`` from
    config unless overrides are provided.
    Paths are returned in sorted order so repeated scans are reproducible.

    Args:
        root_path: Root directory to walk.
        ignore_dirs: Optional set of directory names to skip.
        scan_extensions: Optional set of file extensions to include.

    Returns:
        A :class:`FileWalkResult` with the matching file paths and count.
    """
    _ignore_dirs = (
        ignore_dirs if ignore_dirs is not None else set(DEFAULT_IGNORE_DIRS)
    )
    _extensions = (
        scan_extensions if scan_extensions is not None else set(DEFAULT_SCAN_EXTENSIONS)
    )

    result = FileWalkResult()

    for dirpath, dirnames, filenames in os.walk(root_path):
        # Prune ignored directories in-place so os.walk skips them
        dirnames[:] = sorted(d for d in dirnames if d not in _ignore_dirs)

        for filename in sorted(filenames):
            ext = os.path.splitext(filename)[1]
            if ext not in _extensions:
                continue

            result.files.append(os.path.join(dirpath, filename))
            result.files_scanned += 1

    logger.debug("found %d source file(s) under %s", result.files_scanned, root_path)
    return result


def read_source(file_path: str) -> str:
    """Read a source file as UTF-8, replacing undecodable bytes."""
    with open(file_path, encoding="utf-8", errors="replace") as fh:
        return fh.read()
