from __future__ import annotations

"""
Check Result Data Models.

Defines the Data Transfer Objects produced by a completeness run: the
scanned sample records, the per-category discrepancy report and the
aggregated result handed to the reporting and interface layers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# -----------------------------------------------------------------------------
# SCAN MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SampleFile:
    """
    A qualifying sample found on disk.

    Attributes:
        rel_path: Path relative to the category root.
        file_name: Base filename.
    """
    rel_path: str
    file_name: str

# -----------------------------------------------------------------------------
# REPORT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CategoryReport:
    """
    Outcome of checking a single category.

    Attributes:
        name: Category name.
        path: Absolute directory that was scanned.
        missing: Samples on disk that no declared test covers (sorted).
        stale: Declared samples with no file on disk (sorted).
        undeclared_dirs: Subdirectories holding samples but bound to no
                         child category (sorted).
        error: Scan failure message, if the directory could not be read.
    """
    name: str
    path: str
    missing: Tuple[str, ...] = ()
    stale: Tuple[str, ...] = ()
    undeclared_dirs: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not (self.missing or self.stale or self.undeclared_dirs or self.error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "missing": list(self.missing),
            "stale": list(self.stale),
            "undeclared_dirs": list(self.undeclared_dirs),
            "error": self.error,
        }


@dataclass(frozen=True)
class CheckResult:
    """
    Aggregated result of a completeness run.

    Attributes:
        root_dir: Absolute root against which category paths were resolved.
        reports: One report per category, in tree traversal order.
    """
    root_dir: str
    reports: Tuple[CategoryReport, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.reports)

    @property
    def checked(self) -> int:
        return len(self.reports)

    @property
    def failures(self) -> Tuple[CategoryReport, ...]:
        return tuple(r for r in self.reports if not r.ok)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "root_dir": self.root_dir,
            "checked": self.checked,
            "failures": [r.to_dict() for r in self.failures],
        }
