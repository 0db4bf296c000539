"""CLI for beads-doctor.

Usage:
    beads-doctor doctor                  # Check the nearest .beads/ workspace above cwd
    beads-doctor doctor path/to/repo     # Check another workspace
    beads-doctor doctor --json           # Machine-readable report
    beads-doctor checks                  # List checks in the order they run

Exit status is 1 when any check reports an error, 0 otherwise.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from beads_doctor import __version__
from beads_doctor.core import find_beads_root
from beads_doctor.doctor import CHECKS, run_diagnostics
from beads_doctor.logging import setup_logging
from beads_doctor.results import DoctorReport, Status


def _resolve_root(path: Path | None) -> Path:
    """Use *path* as given, else the nearest ancestor of cwd holding .beads/."""
    if path is not None:
        return path
    try:
        return find_beads_root()
    except FileNotFoundError:
        # No workspace anywhere above; report against cwd so Installation explains it.
        return Path.cwd()


def _render_text(report: DoctorReport, verbose: bool) -> None:
    ok = report.count(Status.OK)
    warnings = report.count(Status.WARNING)
    errors = report.count(Status.ERROR)
    click.echo(f"beads-doctor {report.tool_version}  ──  {report.path}")
    click.echo(f"{ok} passed  {warnings} warnings  {errors} errors")
    click.echo()

    for r in report.checks:
        if r.ok and not verbose:
            continue
        click.echo(f"  {r.status.icon}  {r.name}: {r.message}")
        if r.detail and (verbose or not r.ok):
            click.echo(f"       {r.detail}")
        if r.fix:
            click.echo(f"       -> {r.fix}")

    if report.overall_ok and warnings == 0:
        click.echo("\nAll checks passed.")
    elif report.overall_ok:
        click.echo("\nNo errors (see warnings above).")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="beads-doctor")
def cli() -> None:
    """beads-doctor — health checks for a beads workspace."""


@cli.command()
@click.argument("path", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--verbose", is_flag=True, help="Show all checks including passed")
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write a JSONL diagnostic log to this directory",
)
def doctor(path: Path | None, as_json: bool, verbose: bool, log_dir: Path | None) -> None:
    """Run health checks on the beads workspace at PATH.

    Without PATH, walks up from the current directory to the nearest .beads/.
    """
    if log_dir is not None:
        setup_logging(log_dir)

    report = run_diagnostics(_resolve_root(path))

    if as_json:
        click.echo(report.to_json())
    else:
        _render_text(report, verbose)

    if not report.overall_ok:
        sys.exit(1)


@cli.command("checks")
def list_checks() -> None:
    """List the checks in the order they run."""
    for index, (name, _check) in enumerate(CHECKS, start=1):
        click.echo(f"{index}. {name}")


if __name__ == "__main__":
    cli()
