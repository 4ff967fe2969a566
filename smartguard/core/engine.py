"""Line-by-line scan engine.

Runs every catalog rule against each line of the input and returns a
:class:`~smartguard.models.Report`. The engine is a pure function of its
inputs: no I/O, no shared mutable state.
"""

import logging
from collections.abc import Sequence

from smartguard.models import Finding, Report, Rule
from smartguard.scanners.rules import list_rules

logger = logging.getLogger(__name__)


def scan_lines(
    lines: Sequence[str],
    catalog: Sequence[Rule] | None = None,
) -> Report:
    """Scan already-split *lines* against *catalog*.

    Line numbers are 1-based positions in *lines*. Each ``(line, rule)``
    pair yields at most one finding, however many of the rule's patterns
    match. Findings are ordered by severity, then line number; the sort is
    stable, so equal keys keep catalog order.
    """
    rules = list_rules() if catalog is None else catalog
    findings: list[Finding] = []

    for line_number, line in enumerate(lines, start=1):
        for rule in rules:
            # Rule.matches stops at the first matching pattern.
            if rule.matches(line):
                findings.append(
                    Finding(line_number=line_number, code=line.strip(), rule=rule)
                )

    findings.sort(key=lambda f: f.sort_key)
    return Report(findings=tuple(findings))


def scan(text: str, catalog: Sequence[Rule] | None = None) -> Report:
    """Scan source *text* for known vulnerability patterns.

    Empty or whitespace-only text yields an empty report. Otherwise the
    text is split on ``"\\n"`` only; a trailing newline leaves an empty
    final line that never matches, and a ``"\\r"`` from CRLF input stays
    on its line until the stored code is trimmed.

    Args:
        text: Source code to scan.
        catalog: Rules to apply. Defaults to the built-in catalog.

    Returns:
        A :class:`Report`. Scanning never fails on string input.
    """
    if not text.strip():
        return Report()

    lines = text.split("\n")
    report = scan_lines(lines, catalog)
    logger.debug("scanned %d line(s): %d finding(s)", len(lines), len(report.findings))
    return report
