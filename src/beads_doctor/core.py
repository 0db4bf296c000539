"""Workspace conventions and doctor configuration.

Convention-based layout: each project has a `.beads/` directory containing
`beads.db` (SQLite) and an `issues.jsonl` mirror. Older workspaces may still
use `beads.jsonl` for the mirror. An optional `config.json` may carry a
``"doctor"`` section tuning the version and sync policies.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from beads_doctor.types import DoctorConfigDict
from beads_doctor.versions import parse_version

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Convention-based discovery
# ---------------------------------------------------------------------------

BEADS_DIR_NAME = ".beads"
DB_FILENAME = "beads.db"
VC_DB_FILENAME = "vc.db"
BACKUP_MARKER = ".backup"
JSONL_FILENAME = "issues.jsonl"
LEGACY_JSONL_FILENAME = "beads.jsonl"
JSONL_FILENAMES: tuple[str, ...] = (JSONL_FILENAME, LEGACY_JSONL_FILENAME)
CONFIG_FILENAME = "config.json"

# Schema version the bd CLI paired with this doctor writes into metadata.bd_version.
EXPECTED_DB_VERSION = "0.21.0"
DEFAULT_SYNC_TOLERANCE_SECONDS = 300.0


def beads_dir_for(root: Path) -> Path:
    """Return the .beads/ directory directly beneath *root* (may not exist)."""
    return Path(root) / BEADS_DIR_NAME


def find_beads_root(start: Path | None = None) -> Path:
    """Walk up from start (default cwd) looking for a .beads/ directory.

    Returns the project root (the parent of .beads/).
    """
    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        if (parent / BEADS_DIR_NAME).is_dir():
            return parent
    msg = f"No {BEADS_DIR_NAME}/ directory found in {current} or any parent"
    raise FileNotFoundError(msg)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VersionPolicy:
    """How far a database schema version may drift from the expected one.

    The first ``compatible_segments`` segments (major.minor by default) must
    match for the two versions to be compatible. An older database that
    differs inside that prefix needs a migration (error); one that differs
    only further right is merely behind (warning). A newer database inside
    the prefix means the CLI is out of date (warning); newer only further
    right is tolerated (ok).
    """

    compatible_segments: int = 2

    def __post_init__(self) -> None:
        if self.compatible_segments < 0:
            msg = f"compatible_segments must be >= 0, got {self.compatible_segments}"
            raise ValueError(msg)

    def is_breaking(self, difference_index: int) -> bool:
        return difference_index < self.compatible_segments


@dataclass(frozen=True)
class DoctorConfig:
    expected_version: str = EXPECTED_DB_VERSION
    policy: VersionPolicy = field(default_factory=VersionPolicy)
    sync_tolerance_seconds: float = DEFAULT_SYNC_TOLERANCE_SECONDS

    def __post_init__(self) -> None:
        # expected_version must be a dotted numeric version.
        # Raises InvalidVersionError.
        parse_version(self.expected_version)

    @classmethod
    def from_dict(cls, data: DoctorConfigDict) -> DoctorConfig:
        defaults = cls()
        return cls(
            expected_version=str(data.get("expected_version", defaults.expected_version)),
            policy=VersionPolicy(int(data.get("compatible_segments", defaults.policy.compatible_segments))),
            sync_tolerance_seconds=float(data.get("sync_tolerance_seconds", defaults.sync_tolerance_seconds)),
        )


def read_config(beads_dir: Path) -> DoctorConfig:
    """Read the doctor section of .beads/config.json. Returns defaults if missing or corrupt."""
    config_path = beads_dir / CONFIG_FILENAME
    if not config_path.exists():
        return DoctorConfig()
    try:
        raw = json.loads(config_path.read_text())
        section = raw.get("doctor", {}) if isinstance(raw, dict) else {}
        if not isinstance(section, dict):
            raise ValueError("'doctor' must be a JSON object")
        return DoctorConfig.from_dict(section)  # type: ignore[arg-type]
    except (json.JSONDecodeError, OSError, TypeError, ValueError) as exc:
        logger.warning("Failed to read %s, using defaults: %s", config_path, exc)
        return DoctorConfig()
