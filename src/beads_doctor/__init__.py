"""beads-doctor — one-pass health checks for a .beads/ workspace."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("beads-doctor")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from beads_doctor.doctor import run_diagnostics
from beads_doctor.results import CheckResult, DoctorReport, Status
from beads_doctor.versions import compare_versions

__all__ = ["CheckResult", "DoctorReport", "Status", "__version__", "compare_versions", "run_diagnostics"]
