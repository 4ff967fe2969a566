"""Request/response adapter for callers such as an HTTP endpoint.

Request shape::

    {"code": "...", "options": {"includeInformational": true, "detailedReport": true}}

Response shape::

    {"results": [{"lineNumber": 1, "code": "...", "vulnerability": {...}}],
     "summary": {"critical": 0, "high": 0, "medium": 0, "low": 0, "informational": 0}}

Options only filter or trim the engine's report; they never change how
the engine matches, deduplicates, or orders findings.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from smartguard.core.engine import scan
from smartguard.models import Finding, Report, Severity


class RequestError(ValueError):
    """Raised when a request does not have the expected shape."""


@dataclass(frozen=True)
class ScanOptions:
    """Advisory filters applied to a report.

    Attributes:
        include_informational: Keep Informational-severity findings.
        detailed_report: Include description and suggestion for each
            vulnerability in the response.
    """

    include_informational: bool = True
    detailed_report: bool = True

    @classmethod
    def from_dict(cls, data: Mapping) -> "ScanOptions":
        """Build options from the request's camelCase ``options`` object."""
        values = {}
        for key, attr in (
            ("includeInformational", "include_informational"),
            ("detailedReport", "detailed_report"),
        ):
            if key not in data:
                continue
            if not isinstance(data[key], bool):
                raise RequestError(f"Option {key!r} must be a boolean")
            values[attr] = data[key]
        return cls(**values)


def apply_options(report: Report, options: ScanOptions) -> Report:
    """Return *report* with the findings *options* exclude removed."""
    if not options.include_informational:
        report = report.filter(lambda f: f.severity is not Severity.INFORMATIONAL)
    return report


def analyze(code: str, options: ScanOptions | None = None) -> Report:
    """Scan *code* and apply *options* to the resulting report."""
    return apply_options(scan(code), options or ScanOptions())


def _finding_to_dict(finding: Finding, detailed: bool) -> dict:
    data = finding.to_dict()
    if not detailed:
        vulnerability = data["vulnerability"]
        data["vulnerability"] = {
            "id": vulnerability["id"],
            "name": vulnerability["name"],
            "severity": vulnerability["severity"],
        }
    return data


def handle_request(payload: Mapping) -> dict:
    """Validate a request *payload*, scan its code, and build the response.

    Raises:
        RequestError: If ``code`` is missing or not a string, or
            ``options`` is not an object of booleans.
    """
    if not isinstance(payload, Mapping):
        raise RequestError("Request body must be an object")

    code = payload.get("code")
    if not isinstance(code, str):
        raise RequestError("Field 'code' is required and must be a string")

    raw_options = payload.get("options")
    if raw_options is None:
        options = ScanOptions()
    elif isinstance(raw_options, Mapping):
        options = ScanOptions.from_dict(raw_options)
    else:
        raise RequestError("Field 'options' must be an object")

    report = analyze(code, options)
    return {
        "results": [_finding_to_dict(f, options.detailed_report) for f in report.findings],
        "summary": report.summary.to_dict(),
    }
