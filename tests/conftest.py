"""Shared pytest fixtures for beads-doctor tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from beads_doctor.core import BEADS_DIR_NAME, DB_FILENAME
from tests._db_factory import make_beads_db


@pytest.fixture
def beads_root(tmp_path: Path) -> Path:
    """A tmp directory with an empty .beads/ directory. Returns the project root."""
    (tmp_path / BEADS_DIR_NAME).mkdir()
    return tmp_path


@pytest.fixture
def beads_dir(beads_root: Path) -> Path:
    return beads_root / BEADS_DIR_NAME


@pytest.fixture
def healthy_root(beads_root: Path) -> Path:
    """A workspace with a current beads.db and a non-empty issues.jsonl."""
    beads_dir = beads_root / BEADS_DIR_NAME
    make_beads_db(beads_dir / DB_FILENAME)
    (beads_dir / "issues.jsonl").write_text('{"id": "bd-1", "title": "First"}\n')
    return beads_root


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()
