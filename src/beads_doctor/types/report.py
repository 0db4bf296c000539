"""Shapes of the JSON documents read and written by beads-doctor."""

# IMPORT CONSTRAINT: types/ modules must only import from typing, stdlib, and each other.

from __future__ import annotations

from typing import Literal, TypedDict

StatusValue = Literal["ok", "warning", "error"]


class CheckResultDict(TypedDict):
    name: str
    status: StatusValue
    message: str
    detail: str
    fix: str


class DoctorReportDict(TypedDict):
    path: str
    tool_version: str
    overall_ok: bool
    checks: list[CheckResultDict]


class DoctorConfigDict(TypedDict, total=False):
    """Shape of the ``"doctor"`` section of .beads/config.json."""

    expected_version: str
    compatible_segments: int
    sync_tolerance_seconds: float
