"""Tests for the auxiliary CLI commands and global options."""

import json

from typer.testing import CliRunner

from smartguard import __version__
from smartguard.cli import app
from smartguard.samples import get_example_contract
from smartguard.scanners.rules import list_rules

runner = CliRunner()


class TestRulesCommand:
    """Tests for `smartguard rules`."""

    def test_rules_json(self) -> None:
        """--json lists every rule with its patterns."""
        result = runner.invoke(app, ["rules", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [r["id"] for r in data] == [r.id for r in list_rules()]
        tx_origin = next(r for r in data if r["id"] == "tx-origin")
        assert tx_origin["patterns"] == ["tx.origin"]
        assert tx_origin["severity"] == "High"

    def test_rules_table(self) -> None:
        """The default output is a table of rules."""
        result = runner.invoke(app, ["rules"])

        assert result.exit_code == 0
        assert "Rule Catalog" in result.stdout
        assert "reentrancy" in result.stdout


class TestExampleCommand:
    """Tests for `smartguard example`."""

    def test_prints_example_contract(self) -> None:
        """The bundled contract is written verbatim to stdout."""
        result = runner.invoke(app, ["example"])

        assert result.exit_code == 0
        assert result.stdout == get_example_contract() + "\n"


class TestGlobalOptions:
    """Tests for version and logging flags."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_verbose_and_quiet_conflict(self) -> None:
        """--verbose and --quiet are mutually exclusive."""
        result = runner.invoke(app, ["--verbose", "--quiet", "rules", "--json"])
        assert result.exit_code == 1

    def test_verbose_enables_debug_logging(self) -> None:
        """--verbose emits debug records from the scan."""
        result = runner.invoke(
            app, ["--verbose", "scan", "-", "--json"], input="return tx.origin;\n"
        )
        assert result.exit_code == 0
        assert "scanned 2 line(s): 1 finding(s)" in result.output
