"""File scanning pipeline.

Resolves a target (single file or project directory) to a list of
Solidity sources, reads each file **once**, and hands its content to the
scan engine, collecting results into a single
:class:`~smartguard.models.ScanResult`.
"""

import logging
from pathlib import Path

from smartguard.core.engine import scan
from smartguard.models import FileReport, ScanResult
from smartguard.utils import read_source, walk_project_files

logger = logging.getLogger(__name__)


def scan_source(file_path: str, content: str) -> FileReport:
    """Scan one file's *content* and tag the report with *file_path*."""
    return FileReport(file_path=file_path, report=scan(content))


def run_scan(target: Path) -> ScanResult:
    """Execute a full scan on *target*.

    A file is scanned as-is, whatever its extension. A directory is walked
    **once** and every matching source is read **once**. Files that cannot
    be read are logged and skipped.

    Args:
        target: A Solidity file or the root directory of a project.

    Returns:
        A :class:`ScanResult` containing all findings and metadata.
    """
    if target.is_file():
        files = [str(target)]
    else:
        files = walk_project_files(target).files

    result = ScanResult()
    for filepath in files:
        try:
            content = read_source(filepath)
        except OSError as exc:
            logger.warning("skipping unreadable file %s: %s", filepath, exc)
            continue

        result.files.append(scan_source(filepath, content))
        result.total_files += 1

    logger.debug(
        "scanned %d file(s): %d finding(s)",
        result.total_files,
        len(result.all_findings()),
    )
    return result
