"""Unit tests for the request/response adapter."""

import pytest

from smartguard.api import RequestError, ScanOptions, analyze, handle_request
from smartguard.models import Severity
from smartguard.scanners.matchers import SubstringMatcher
from smartguard.scanners.rules import build_catalog

# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class TestScanOptions:
    """Tests for ScanOptions parsing."""

    def test_defaults(self) -> None:
        """Missing keys keep the defaults."""
        assert ScanOptions.from_dict({}) == ScanOptions()
        assert ScanOptions().include_informational is True
        assert ScanOptions().detailed_report is True

    def test_camel_case_keys(self) -> None:
        """Request keys use camelCase."""
        options = ScanOptions.from_dict(
            {"includeInformational": False, "detailedReport": False}
        )
        assert options == ScanOptions(include_informational=False, detailed_report=False)

    def test_non_boolean_rejected(self) -> None:
        """Option values must be booleans."""
        with pytest.raises(RequestError, match="includeInformational"):
            ScanOptions.from_dict({"includeInformational": "yes"})


# ---------------------------------------------------------------------------
# analyze()
# ---------------------------------------------------------------------------


class TestAnalyze:
    """Tests for analyze() option handling."""

    def test_drops_informational(self, monkeypatch) -> None:
        """include_informational=False removes Informational findings."""
        catalog = build_catalog(
            [
                {
                    "id": "note",
                    "name": "Note",
                    "description": "Informational marker.",
                    "severity": Severity.INFORMATIONAL,
                    "patterns": [SubstringMatcher("NOTE")],
                    "suggestion": "None.",
                },
                {
                    "id": "origin",
                    "name": "Origin",
                    "description": "tx.origin use.",
                    "severity": Severity.HIGH,
                    "patterns": [SubstringMatcher("tx.origin")],
                    "suggestion": "Use msg.sender.",
                },
            ]
        )
        monkeypatch.setattr("smartguard.core.engine.list_rules", lambda: catalog)
        code = "// NOTE: owner check\nreturn tx.origin == owner;"

        full = analyze(code)
        assert full.summary.informational == 1
        assert full.summary.high == 1

        filtered = analyze(code, ScanOptions(include_informational=False))
        assert [f.rule.id for f in filtered.findings] == ["origin"]
        assert filtered.summary.informational == 0
        assert filtered.summary.total == 1


# ---------------------------------------------------------------------------
# handle_request()
# ---------------------------------------------------------------------------


class TestHandleRequest:
    """Tests for the request/response shape."""

    def test_response_shape(self) -> None:
        """The response carries results and a summary."""
        response = handle_request({"code": "return tx.origin == msg.sender;"})

        assert response["summary"] == {
            "critical": 0,
            "high": 1,
            "medium": 0,
            "low": 0,
            "informational": 0,
        }
        assert response["results"] == [
            {
                "lineNumber": 1,
                "code": "return tx.origin == msg.sender;",
                "vulnerability": {
                    "id": "tx-origin",
                    "name": "tx.origin Authentication",
                    "description": (
                        "Using tx.origin for authentication is vulnerable to "
                        "phishing attacks."
                    ),
                    "severity": "High",
                    "suggestion": "Use msg.sender instead of tx.origin for authentication.",
                },
            }
        ]

    def test_brief_report(self) -> None:
        """detailedReport=False trims vulnerability details."""
        response = handle_request(
            {"code": "return tx.origin;", "options": {"detailedReport": False}}
        )
        assert response["results"][0]["vulnerability"] == {
            "id": "tx-origin",
            "name": "tx.origin Authentication",
            "severity": "High",
        }

    def test_empty_code(self) -> None:
        """Empty code is a valid request with an empty response."""
        response = handle_request({"code": ""})
        assert response["results"] == []
        assert sum(response["summary"].values()) == 0

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"code": None},
            {"code": 42},
            {"code": "x", "options": ["detailedReport"]},
            "not a mapping",
        ],
    )
    def test_bad_requests(self, payload) -> None:
        """Malformed requests raise RequestError."""
        with pytest.raises(RequestError):
            handle_request(payload)
