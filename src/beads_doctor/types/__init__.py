"""Typed serialization contracts for doctor reports."""

from __future__ import annotations

from beads_doctor.types.report import CheckResultDict, DoctorConfigDict, DoctorReportDict, StatusValue

__all__ = [
    "CheckResultDict",
    "DoctorConfigDict",
    "DoctorReportDict",
    "StatusValue",
]
