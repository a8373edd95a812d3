"""``tro doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies tro's requirements: the
Python version, the HTTP and UI libraries, and a readable config file.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import importlib
import platform
import sys
from pathlib import Path

from tro.cli import exit_codes
from tro.cli.console import console
from tro.exceptions import ConfigError
from tro.infra.config import default_config_path, load_config
from tro.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 11)
    status = OK if ok else "[red]FAIL (>=3.11 required)[/red]"
    return "Python", version, status


def _package_check(label: str, module: str, *, required: bool) -> tuple[str, str, str]:
    """Return (label, value, status) for an importable package."""
    try:
        imported = importlib.import_module(module)
    except ImportError:
        return label, "NOT INSTALLED", FAIL if required else WARN
    version = getattr(imported, "__version__", None) or "installed"
    return label, str(version), OK


def _config_check(path: Path | None = None) -> tuple[str, str, str]:
    """Return (label, value, status) for the config file row."""
    config_path = path if path is not None else default_config_path()
    try:
        load_config(config_path)
    except ConfigError as exc:
        return "config", str(exc), FAIL
    return "config", str(config_path), OK


def _tro_version_check() -> tuple[str, str, str]:
    return "tro", __version__, OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for plain in ("FAIL", "WARN", "OK"):
        if plain in status:
            return plain
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\ntro doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config_path: Path | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _tro_version_check(),
        _python_version_check(),
        _package_check("httpx", "httpx", required=True),
        _package_check("rich", "rich", required=False),
        _package_check("questionary", "questionary", required=False),
        _config_check(config_path),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
    else:
        table = Table(
            title="tro doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
        if has_failure:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            console.print("[bold green]All checks passed.[/bold green]")

    return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS
