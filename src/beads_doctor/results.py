"""Value types produced by doctor checks.

``CheckResult`` is what every individual check returns; ``DoctorReport``
is what :func:`beads_doctor.doctor.run_diagnostics` assembles from them.
Both are immutable and serialize to plain dicts with stable field names.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from beads_doctor.types import CheckResultDict, DoctorReportDict

_SEVERITY = {"ok": 0, "warning": 1, "error": 2}


class Status(StrEnum):
    """Check outcome, ordered by severity: ok < warning < error."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"

    @property
    def severity(self) -> int:
        return _SEVERITY[self.value]

    @property
    def icon(self) -> str:
        return {"ok": "OK", "warning": "??", "error": "!!"}[self.value]

    @classmethod
    def worst(cls, statuses: Iterable[Status]) -> Status:
        """Most severe of *statuses*; ``OK`` for an empty iterable."""
        return max(statuses, key=lambda s: s.severity, default=cls.OK)


@dataclass(frozen=True)
class CheckResult:
    """Result of a single doctor check."""

    name: str
    status: Status
    message: str
    detail: str = ""
    fix: str = ""

    def __post_init__(self) -> None:
        # Accept raw strings ("ok", "warning", ...) from callers and from_dict().
        object.__setattr__(self, "status", Status(self.status))
        if self.status is not Status.OK and not self.fix:
            msg = f"{self.name}: a {self.status} result requires a fix"
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    def to_dict(self) -> CheckResultDict:
        return CheckResultDict(
            name=self.name,
            status=self.status.value,  # type: ignore[typeddict-item]
            message=self.message,
            detail=self.detail,
            fix=self.fix,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckResult:
        return cls(
            name=data["name"],
            status=Status(data["status"]),
            message=data["message"],
            detail=data.get("detail", ""),
            fix=data.get("fix", ""),
        )


@dataclass(frozen=True)
class DoctorReport:
    """Outcome of one full diagnostic pass over a workspace.

    ``overall_ok`` is derived, never stored: it is true iff no check reported
    ``error``. Warnings are surfaced but do not fail the verdict.
    """

    path: str
    tool_version: str
    checks: tuple[CheckResult, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "checks", tuple(self.checks))
        if not self.checks:
            msg = "A DoctorReport must contain at least one check"
            raise ValueError(msg)

    @property
    def overall_ok(self) -> bool:
        return all(c.status is not Status.ERROR for c in self.checks)

    @property
    def worst_status(self) -> Status:
        return Status.worst(c.status for c in self.checks)

    def count(self, status: Status) -> int:
        return sum(1 for c in self.checks if c.status is status)

    def to_dict(self) -> DoctorReportDict:
        return DoctorReportDict(
            path=self.path,
            tool_version=self.tool_version,
            overall_ok=self.overall_ok,
            checks=[c.to_dict() for c in self.checks],
        )

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DoctorReport:
        """Rebuild a report from :meth:`to_dict` output.

        ``overall_ok`` in *data* is cross-checked against the checks rather
        than trusted, since it is derived.
        """
        report = cls(
            path=data["path"],
            tool_version=data["tool_version"],
            checks=tuple(CheckResult.from_dict(c) for c in data["checks"]),
        )
        if "overall_ok" in data and bool(data["overall_ok"]) != report.overall_ok:
            msg = f"overall_ok={data['overall_ok']!r} contradicts the check statuses"
            raise ValueError(msg)
        return report

    @classmethod
    def from_json(cls, text: str) -> DoctorReport:
        data = json.loads(text)
        if not isinstance(data, dict):
            msg = "Doctor report JSON must be an object"
            raise ValueError(msg)
        return cls.from_dict(data)
