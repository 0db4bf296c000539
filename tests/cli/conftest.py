"""Fixtures for CLI interface tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture
def in_beads_root(healthy_root: Path) -> Generator[Path, None, None]:
    """chdir into a healthy workspace for the duration of the test."""
    original_cwd = os.getcwd()
    os.chdir(str(healthy_root))
    yield healthy_root
    os.chdir(original_cwd)


@pytest.fixture
def in_nested_dir(healthy_root: Path) -> Generator[Path, None, None]:
    """chdir into a subdirectory two levels below a healthy workspace."""
    nested = healthy_root / "src" / "pkg"
    nested.mkdir(parents=True)
    original_cwd = os.getcwd()
    os.chdir(str(nested))
    yield nested
    os.chdir(original_cwd)
