"""SmartGuard CLI — Entry point for the smart contract scanner."""

import json
import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from smartguard import __app_name__, __version__
from smartguard.api import ScanOptions, apply_options
from smartguard.config import SNIPPET_MAX_LENGTH
from smartguard.core.engine import scan as scan_text
from smartguard.core.pipeline import run_scan
from smartguard.logging_utils import configure_logging
from smartguard.models import FileReport, Report, ScanResult, Severity
from smartguard.samples import get_example_contract
from smartguard.scanners.rules import list_rules
from smartguard.utils import validate_path

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App & Console
# ---------------------------------------------------------------------------

app = typer.Typer(
    name=__app_name__,
    help="🛡 SmartGuard — Vulnerability scanner for Solidity smart contracts.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

STDIN_PATH = "-"

# ---------------------------------------------------------------------------
# Severity → Rich color mapping
# ---------------------------------------------------------------------------

_SEVERITY_COLORS: dict[Severity, str] = {
    Severity.CRITICAL: "magenta",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "blue",
    Severity.INFORMATIONAL: "green",
}

# ---------------------------------------------------------------------------
# Version callback
# ---------------------------------------------------------------------------


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold cyan]{__app_name__}[/bold cyan] v{__version__}")
        raise typer.Exit()


def _error(message: str) -> None:
    console.print(f"[bold red]✗[/bold red] {escape(message)}")


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------


@app.callback()
def main(
    version: Optional[bool] = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-v",
        help="Show the application version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Enable debug logging on stderr."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", help="Only log warnings and errors."
    ),
) -> None:
    """SmartGuard — detect common vulnerabilities in Solidity contracts."""
    if verbose and quiet:
        _error("--verbose and --quiet cannot be used together")
        raise typer.Exit(code=1)
    configure_logging(verbose=verbose, quiet=quiet)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def scan(
    path: str = typer.Argument(
        ...,
        help="Solidity file or project directory to scan, or '-' to read stdin.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON instead of Rich tables.",
    ),
    fail_on: Optional[str] = typer.Option(  # noqa: UP007
        None,
        "--fail-on",
        help="Exit with code 1 if any finding meets this severity "
        "(Critical, High, Medium, Low, Informational).",
    ),
    no_informational: bool = typer.Option(
        False,
        "--no-informational",
        help="Drop Informational findings from the results.",
    ),
    brief: bool = typer.Option(
        False,
        "--brief",
        help="Skip the per-rule description and suggestion panels.",
    ),
) -> None:
    """Scan Solidity source code for known vulnerability patterns."""

    # --- Validate --fail-on value ---
    threshold: Severity | None = None
    if fail_on is not None:
        try:
            threshold = Severity.parse(fail_on)
        except ValueError as exc:
            _error(f"Invalid --fail-on value. {exc}")
            raise typer.Exit(code=1) from None

    # --- Run scan ---
    if path == STDIN_PATH:
        logger.debug("reading source from stdin")
        result = ScanResult(
            files=[FileReport(file_path="<stdin>", report=scan_text(sys.stdin.read()))],
            total_files=1,
        )
    else:
        try:
            target = validate_path(path)
        except FileNotFoundError as exc:
            _error(str(exc))
            raise typer.Exit(code=1) from None
        target_label = str(target)
        logger.debug("scanning %s", target)
        if not output_json:
            console.print(
                Panel(
                    "[bold green]SmartGuard initialized[/bold green]",
                    title="🛡 SmartGuard",
                    subtitle=f"v{__version__}",
                    border_style="cyan",
                )
            )
            console.print(f"[dim]Target:[/dim] {escape(target_label)}\n")
            console.print("[bold]Scanning…[/bold]\n")
        result = run_scan(target)

    result = _apply_options(
        result, ScanOptions(include_informational=not no_informational)
    )

    # --- Output ---
    if output_json:
        _print_json(result)
    else:
        _print_rich(result, detailed=not brief)

    # --- Fail-on check ---
    if threshold is not None and result.has_severity(threshold):
        if not output_json:
            console.print(
                f"\n[bold red]✗ Scan failed:[/bold red] "
                f"Findings at severity [bold]{threshold.label}[/bold] or above were found."
            )
        raise typer.Exit(code=1)


@app.command("rules")
def rules_command(
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output the rule catalog as JSON.",
    ),
) -> None:
    """List the vulnerability rules SmartGuard checks for."""
    catalog = list_rules()

    if output_json:
        data = [
            {**rule.to_dict(), "patterns": [p.source for p in rule.patterns]}
            for rule in catalog
        ]
        print(json.dumps(data, indent=2))
        return

    table = Table(title="📚 Rule Catalog", show_lines=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Severity", justify="center")
    table.add_column("Patterns", style="dim")

    for rule in catalog:
        color = _SEVERITY_COLORS[rule.severity]
        table.add_row(
            rule.id,
            rule.name,
            f"[bold {color}]{rule.severity.label}[/bold {color}]",
            escape("\n".join(p.source for p in rule.patterns)),
        )

    console.print(table)


@app.command()
def example() -> None:
    """Print the bundled vulnerable example contract.

    Pipe it back in to try the scanner: ``smartguard example | smartguard scan -``
    """
    print(get_example_contract())


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _apply_options(result: ScanResult, options: ScanOptions) -> ScanResult:
    return ScanResult(
        files=[
            FileReport(file_path=fr.file_path, report=apply_options(fr.report, options))
            for fr in result.files
        ],
        total_files=result.total_files,
    )


def _print_json(result: ScanResult) -> None:
    """Print scan results as structured JSON."""
    print(json.dumps(result.to_dict(), indent=2))


def _print_rich(result: ScanResult, *, detailed: bool) -> None:
    """Render scan results using Rich tables and panels."""
    flagged = [fr for fr in result.files if not fr.report.is_clean]
    if flagged:
        for file_report in flagged:
            _print_findings_table(file_report)
            if detailed:
                _print_rule_details(file_report.report)
    else:
        console.print(
            Panel(
                "[bold green]✔ No vulnerabilities detected[/bold green]",
                border_style="green",
            )
        )
    _print_summary(result)


def _print_findings_table(file_report: FileReport) -> None:
    """Render one file's findings as a Rich table."""
    table = Table(
        title=f"🔍 {escape(file_report.file_path)}",
        show_lines=True,
        header_style="bold magenta",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Severity", justify="center")
    table.add_column("Vulnerability", style="bold")
    table.add_column("Code", style="cyan", max_width=60)

    for idx, finding in enumerate(file_report.report.findings, start=1):
        color = _SEVERITY_COLORS[finding.severity]
        table.add_row(
            str(idx),
            str(finding.line_number),
            f"[bold {color}]{finding.severity.label}[/bold {color}]",
            finding.rule.name,
            escape(finding.code[:SNIPPET_MAX_LENGTH]),
        )

    console.print(table)
    console.print()


def _print_rule_details(report: Report) -> None:
    """Print a description and suggestion panel for each rule that fired."""
    seen: set[str] = set()
    for finding in report.findings:
        rule = finding.rule
        if rule.id in seen:
            continue
        seen.add(rule.id)
        color = _SEVERITY_COLORS[rule.severity]
        console.print(
            Panel(
                f"{escape(rule.description)}\n\n[bold]Suggestion:[/bold] {escape(rule.suggestion)}",
                title=f"[bold {color}]{rule.name}[/bold {color}]",
                subtitle=rule.id,
                border_style=color,
            )
        )


def _print_summary(result: ScanResult) -> None:
    """Print a scan summary with severity breakdown."""
    counts = result.severity_counts

    summary_lines = [
        f"[bold]Files scanned:[/bold]  {result.total_files}",
        f"[bold]Total findings:[/bold] {counts.total}",
        "",
    ]
    for severity in Severity:
        color = _SEVERITY_COLORS[severity]
        summary_lines.append(
            f"[bold {color}]{severity.label + ':':<15}[/bold {color}] {counts.count(severity)}"
        )

    console.print(
        Panel(
            "\n".join(summary_lines),
            title="📊 Scan Summary",
            border_style="cyan",
        )
    )
