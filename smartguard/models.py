"""SmartGuard data models for rules, findings, and scan reports."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol


class CatalogConfigurationError(Exception):
    """Raised when the rule catalog cannot be built.

    A pattern that fails to compile, a rule without patterns, or a
    duplicated rule id all abort catalog construction. Rules are never
    dropped silently.
    """


# ---------------------------------------------------------------------------
# Severity enumeration & ordering
# ---------------------------------------------------------------------------


class Severity(IntEnum):
    """Severity levels; a lower value is more urgent."""

    CRITICAL = 0
    HIGH = 1
    MEDIUM = 2
    LOW = 3
    INFORMATIONAL = 4

    @property
    def label(self) -> str:
        """Display name, e.g. ``"Critical"``."""
        return self.name.capitalize()

    @property
    def key(self) -> str:
        """Summary bucket name, e.g. ``"critical"``."""
        return self.name.lower()

    @classmethod
    def parse(cls, text: str) -> "Severity":
        """Return the severity named by *text* (case-insensitive).

        Raises:
            ValueError: If *text* names no severity.
        """
        try:
            return cls[text.strip().upper()]
        except KeyError:
            valid = ", ".join(s.label for s in cls)
            raise ValueError(
                f"Unknown severity: {text!r}. Must be one of: {valid}"
            ) from None

    def __str__(self) -> str:
        return self.label


class Matcher(Protocol):
    """Anything that can be tested against a single line of text."""

    source: str

    def matches(self, line: str) -> bool: ...


# ---------------------------------------------------------------------------
# Rule model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rule:
    """A vulnerability class and the patterns that detect it.

    Attributes:
        id: Unique, stable identifier (e.g. ``"reentrancy"``).
        name: Human-readable title.
        description: Explanation of the weakness.
        severity: How urgent a finding for this rule is.
        patterns: Matchers tested independently against each line.
        suggestion: Remediation guidance.
    """

    id: str
    name: str
    description: str
    severity: Severity
    patterns: tuple[Matcher, ...]
    suggestion: str

    def matches(self, line: str) -> bool:
        """Return ``True`` if any of the rule's patterns match *line*."""
        return any(pattern.matches(line) for pattern in self.patterns)

    def to_dict(self) -> dict:
        """Return the JSON-serializable vulnerability description."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "severity": self.severity.label,
            "suggestion": self.suggestion,
        }


# ---------------------------------------------------------------------------
# Finding model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Finding:
    """A single rule match on one line of scanned text.

    Attributes:
        line_number: 1-based line number where the rule fired.
        code: The offending line with surrounding whitespace removed.
        rule: The catalog rule that fired (shared, never copied).
    """

    line_number: int
    code: str
    rule: Rule

    @property
    def severity(self) -> Severity:
        return self.rule.severity

    @property
    def sort_key(self) -> tuple[int, int]:
        return (int(self.rule.severity), self.line_number)

    def __str__(self) -> str:
        return (
            f"[{self.severity.label}] {self.rule.name} "
            f"at line {self.line_number} — {self.code}"
        )

    def to_dict(self) -> dict:
        """Return a JSON-serializable dictionary representation."""
        return {
            "lineNumber": self.line_number,
            "code": self.code,
            "vulnerability": self.rule.to_dict(),
        }


# ---------------------------------------------------------------------------
# Summary & Report models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Summary:
    """Number of findings in each severity bucket."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    informational: int = 0

    @classmethod
    def from_findings(cls, findings: Iterable[Finding]) -> "Summary":
        counts = {severity.key: 0 for severity in Severity}
        for finding in findings:
            counts[finding.severity.key] += 1
        return cls(**counts)

    @property
    def total(self) -> int:
        return self.critical + self.high + self.medium + self.low + self.informational

    def count(self, severity: Severity) -> int:
        return getattr(self, severity.key)

    def to_dict(self) -> dict[str, int]:
        return {severity.key: self.count(severity) for severity in Severity}


@dataclass(frozen=True)
class Report:
    """Result of scanning one piece of source text.

    Attributes:
        findings: Findings ordered by severity, then line number.

    The summary is always derived from ``findings`` and cannot disagree
    with it.
    """

    findings: tuple[Finding, ...] = ()

    @property
    def summary(self) -> Summary:
        return Summary.from_findings(self.findings)

    @property
    def is_clean(self) -> bool:
        return not self.findings

    def has_severity(self, level: Severity) -> bool:
        """Return ``True`` if any finding is at least as urgent as *level*.

        Severity ordering: ``Critical > High > Medium > Low > Informational``.
        """
        return any(finding.severity <= level for finding in self.findings)

    def filter(self, predicate: Callable[[Finding], bool]) -> "Report":
        """Return a new report holding only the findings accepted by *predicate*."""
        return Report(findings=tuple(f for f in self.findings if predicate(f)))

    def to_dict(self) -> dict:
        """Return the JSON-serializable ``{results, summary}`` structure."""
        return {
            "results": [finding.to_dict() for finding in self.findings],
            "summary": self.summary.to_dict(),
        }


# ---------------------------------------------------------------------------
# Multi-file results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FileReport:
    """A report tied to the file it was produced from."""

    file_path: str
    report: Report

    def to_dict(self) -> dict:
        return {"file_path": self.file_path, **self.report.to_dict()}


@dataclass
class ScanResult:
    """Aggregated result from scanning one or more files.

    Attributes:
        files: Per-file reports, in the order the files were scanned.
        total_files: Number of files that were inspected.
    """

    files: list[FileReport] = field(default_factory=list)
    total_files: int = 0

    @property
    def severity_counts(self) -> Summary:
        return Summary.from_findings(self.all_findings())

    def all_findings(self) -> list[Finding]:
        return [f for file_report in self.files for f in file_report.report.findings]

    def has_severity(self, level: Severity) -> bool:
        """Return ``True`` if any file has a finding at least as urgent as *level*."""
        return any(fr.report.has_severity(level) for fr in self.files)

    def to_dict(self) -> dict:
        """Return a JSON-serializable dictionary of the full scan result."""
        return {
            "total_files": self.total_files,
            "total_findings": len(self.all_findings()),
            "summary": self.severity_counts.to_dict(),
            "files": [fr.to_dict() for fr in self.files],
        }
