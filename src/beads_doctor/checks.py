"""Individual doctor checks.

Each check takes the workspace root and the doctor config and returns one
CheckResult. Checks are independent: none reads another's result and each
re-probes the filesystem itself. Only ``check_installation`` assumes
nothing about .beads/; the rest degrade gracefully when it is missing.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Callable
from pathlib import Path

from beads_doctor.core import (
    BACKUP_MARKER,
    BEADS_DIR_NAME,
    DB_FILENAME,
    JSONL_FILENAME,
    JSONL_FILENAMES,
    LEGACY_JSONL_FILENAME,
    VC_DB_FILENAME,
    DoctorConfig,
    beads_dir_for,
)
from beads_doctor.results import CheckResult, Status
from beads_doctor.store import SchemaVersionError, list_files, read_schema_version, stat_file
from beads_doctor.versions import InvalidVersionError, compare_versions, first_difference

Check = Callable[[Path, DoctorConfig], CheckResult]

# ---------------------------------------------------------------------------
# File-name predicates
# ---------------------------------------------------------------------------


def is_backup_database(name: str) -> bool:
    """True for backup copies such as ``beads.backup.db`` or ``beads.backup-20240101.db``."""
    return name.endswith(".db") and BACKUP_MARKER in name


def is_reserved_database(name: str) -> bool:
    """True for the VC-integration store, which always coexists with beads.db."""
    return name == VC_DB_FILENAME


def is_database_file(name: str) -> bool:
    """True for files that compete to be the primary SQLite store."""
    return name.endswith(".db") and not is_backup_database(name) and not is_reserved_database(name)


def is_jsonl_file(name: str) -> bool:
    """True for either recognized append-log name."""
    return name in JSONL_FILENAMES


def _present_jsonl(beads_dir: Path) -> Path | None:
    """The append-log in use, preferring the canonical name."""
    for name in JSONL_FILENAMES:
        candidate = beads_dir / name
        if stat_file(candidate) is not None:
            return candidate
    return None


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check_installation(root: Path, config: DoctorConfig) -> CheckResult:
    beads_dir = beads_dir_for(root)
    if not beads_dir.is_dir():
        return CheckResult(
            "Installation",
            Status.ERROR,
            f"No {BEADS_DIR_NAME}/ directory found",
            detail=f"Looked for {beads_dir}",
            fix="Run 'bd init' to initialize beads in this directory",
        )
    return CheckResult("Installation", Status.OK, f"{BEADS_DIR_NAME}/ directory found")


def check_database_version(root: Path, config: DoctorConfig) -> CheckResult:
    """Compare the database's schema version with the one this CLI expects.

    A workspace with only a JSONL file (even an empty one) and no database
    is running in ``--no-db`` mode, which is fully supported.
    """
    beads_dir = beads_dir_for(root)
    db_path = beads_dir / DB_FILENAME

    if stat_file(db_path) is None:
        jsonl_path = _present_jsonl(beads_dir)
        if jsonl_path is not None:
            return CheckResult(
                "Database",
                Status.OK,
                "JSONL-only mode",
                detail=f"Using {jsonl_path.name} as the only store (no SQLite database)",
            )
        return CheckResult(
            "Database",
            Status.ERROR,
            f"No {DB_FILENAME} found",
            fix="Run 'bd init' to create the database",
        )

    try:
        db_version = read_schema_version(db_path)
        cmp = compare_versions(db_version, config.expected_version)
        index = first_difference(db_version, config.expected_version)
    except SchemaVersionError as e:
        return CheckResult(
            "Database",
            Status.ERROR,
            "Unable to read database version",
            detail=str(e),
            fix="Database may be corrupted or predate version tracking. Run 'bd migrate', or restore from backup",
        )
    except InvalidVersionError as e:
        return CheckResult(
            "Database",
            Status.ERROR,
            "Invalid database version marker",
            detail=str(e),
            fix="Run 'bd migrate' to rewrite the version marker",
        )

    versions = f"version {db_version} (expected {config.expected_version})"
    if cmp == 0 or index is None:
        return CheckResult("Database", Status.OK, f"version {db_version}")
    breaking = config.policy.is_breaking(index)
    if cmp < 0:
        return CheckResult(
            "Database",
            Status.ERROR if breaking else Status.WARNING,
            versions,
            detail="Database schema is behind the CLI" + (" and is not compatible" if breaking else ""),
            fix="Run 'bd migrate' to update the database schema",
        )
    if breaking:
        return CheckResult(
            "Database",
            Status.WARNING,
            versions,
            detail="Database was written by a newer bd release",
            fix="Upgrade the bd CLI to match the database version",
        )
    return CheckResult("Database", Status.OK, versions, detail="Database is newer by a compatible margin")


def check_multiple_databases(root: Path, config: DoctorConfig) -> CheckResult:
    databases = [name for name in list_files(beads_dir_for(root)) if is_database_file(name)]
    if len(databases) <= 1:
        message = f"Single database ({databases[0]})" if databases else "No database files"
        return CheckResult("Database Files", Status.OK, message)
    return CheckResult(
        "Database Files",
        Status.WARNING,
        f"Multiple database files found ({len(databases)})",
        detail="Found: " + ", ".join(databases),
        fix=f"Keep {DB_FILENAME} and remove or rename the stale database files (e.g. add a {BACKUP_MARKER} suffix)",
    )


def check_multiple_jsonl(root: Path, config: DoctorConfig) -> CheckResult:
    logs = [name for name in list_files(beads_dir_for(root)) if is_jsonl_file(name)]
    if len(logs) <= 1:
        return CheckResult("JSONL Files", Status.OK, f"Using {logs[0]}" if logs else "No JSONL files")
    return CheckResult(
        "JSONL Files",
        Status.WARNING,
        f"Multiple JSONL files found: {', '.join(logs)}",
        detail="It is ambiguous which file is the source of truth",
        fix=(
            f"{JSONL_FILENAME} is authoritative. Merge any needed records from "
            f"{LEGACY_JSONL_FILENAME} into it, then remove {LEGACY_JSONL_FILENAME}"
        ),
    )


def check_permissions(root: Path, config: DoctorConfig) -> CheckResult:
    """Probe writability by creating and removing a temporary file in .beads/."""
    beads_dir = beads_dir_for(root)
    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=beads_dir, prefix=".doctor_", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write("ok")
    except OSError as e:
        reason = e.strerror or str(e)
        return CheckResult(
            "Permissions",
            Status.ERROR,
            f"{BEADS_DIR_NAME}/ is not writable: {reason}",
            detail=str(e),
            fix=f"Fix ownership and permissions of {beads_dir} (e.g. chmod u+rwx, or chown to the current user)",
        )
    finally:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
    return CheckResult("Permissions", Status.OK, "All permissions OK")


def check_database_jsonl_sync(root: Path, config: DoctorConfig) -> CheckResult:
    """Structural heuristic: compare the mtimes of beads.db and the JSONL mirror.

    File sizes are not compared: a freshly initialized database is never
    zero bytes even with no issues, while its mirror legitimately is.
    """
    beads_dir = beads_dir_for(root)
    db_info = stat_file(beads_dir / DB_FILENAME)
    jsonl_path = _present_jsonl(beads_dir)
    jsonl_info = stat_file(jsonl_path) if jsonl_path is not None else None
    if db_info is None or jsonl_info is None or jsonl_path is None:
        return CheckResult("DB-JSONL Sync", Status.OK, "Single source of truth, nothing to reconcile")

    drift = db_info.mtime - jsonl_info.mtime
    if abs(drift) <= config.sync_tolerance_seconds:
        return CheckResult("DB-JSONL Sync", Status.OK, "Database and JSONL appear in sync")
    if drift > 0:
        return CheckResult(
            "DB-JSONL Sync",
            Status.WARNING,
            f"{DB_FILENAME} has changes not exported to {jsonl_path.name}",
            detail=f"Database modified {int(drift)}s after the JSONL mirror",
            fix=f"Run 'bd export -o {BEADS_DIR_NAME}/{jsonl_path.name}' to refresh the JSONL mirror",
        )
    return CheckResult(
        "DB-JSONL Sync",
        Status.WARNING,
        f"{jsonl_path.name} is newer than {DB_FILENAME}",
        detail=f"JSONL modified {int(-drift)}s after the database (e.g. after a git pull)",
        fix=f"Run 'bd import -i {BEADS_DIR_NAME}/{jsonl_path.name}' to load the newer records",
    )
