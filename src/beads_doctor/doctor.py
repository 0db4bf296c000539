"""Health-check orchestration (``beads-doctor doctor``).

Runs every check against a workspace root in a fixed order and folds the
results into a single DoctorReport. All checks always run, so one pass
shows every problem rather than only the first.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from beads_doctor.checks import (
    Check,
    check_database_jsonl_sync,
    check_database_version,
    check_installation,
    check_multiple_databases,
    check_multiple_jsonl,
    check_permissions,
)
from beads_doctor.core import DoctorConfig, beads_dir_for, read_config
from beads_doctor.results import CheckResult, DoctorReport, Status

logger = logging.getLogger(__name__)

# Installation must stay first: the others only make sense once .beads/ exists.
CHECKS: tuple[tuple[str, Check], ...] = (
    ("Installation", check_installation),
    ("Database", check_database_version),
    ("Database Files", check_multiple_databases),
    ("JSONL Files", check_multiple_jsonl),
    ("Permissions", check_permissions),
    ("DB-JSONL Sync", check_database_jsonl_sync),
)


def _run_check(name: str, check: Check, root: Path, config: DoctorConfig) -> CheckResult:
    """Run one check, turning any escaped exception into an error result."""
    t0 = time.monotonic()
    try:
        result = check(root, config)
    except Exception as e:
        logger.error("check_error", extra={"check": name}, exc_info=True)
        return CheckResult(
            name,
            Status.ERROR,
            f"Check failed: {e}",
            detail=type(e).__name__,
            fix="Re-run with --log-dir to record the failure, then fix the underlying error",
        )
    duration_ms = round((time.monotonic() - t0) * 1000, 1)
    logger.info(
        "check_complete",
        extra={"check": name, "status": result.status.value, "duration_ms": duration_ms},
    )
    return result


def run_diagnostics(
    root: Path | str,
    *,
    config: DoctorConfig | None = None,
    tool_version: str | None = None,
) -> DoctorReport:
    """Run all health checks against *root* and return the report.

    *config* defaults to the ``doctor`` section of .beads/config.json (or
    built-in defaults); *tool_version* defaults to this package's version.
    """
    root_path = Path(root)
    if config is None:
        config = read_config(beads_dir_for(root_path))
    if tool_version is None:
        from beads_doctor import __version__

        tool_version = __version__

    results = [_run_check(name, check, root_path, config) for name, check in CHECKS]
    report = DoctorReport(path=str(root_path), tool_version=tool_version, checks=tuple(results))
    logger.info(
        "diagnostics_complete",
        extra={"status": report.worst_status.value, "path": report.path},
    )
    return report
