from __future__ import annotations

"""
Completeness Report Rendering.

Turns a CheckResult into the human-readable failure report carried by
CompletenessViolation and printed by the CLI. Every failing category is
listed with its directory and the exact filenames to fix.
"""

import re
from typing import List, Optional

from suitecheck.core.components.filters import derive_test_name
from suitecheck.domain.check_models import CategoryReport, CheckResult

_SEPARATOR = "-" * 80


def render_report(result: CheckResult, pattern: Optional[re.Pattern] = None) -> str:
    """
    Render every failing category of a result.

    Args:
        result: The completed check.
        pattern: Sample pattern; when given, missing samples are annotated
                 with the test entry the generator should emit for them.

    Returns:
        str: Multi-line report, or a one-line summary when consistent.
    """
    if result.ok:
        return f"All {result.checked} categories are consistent with {result.root_dir}."

    failures = result.failures
    lines: List[str] = [
        f"Test data is out of sync with the declared suite: "
        f"{len(failures)} of {result.checked} categories inconsistent.",
        "Re-run the test generator after adding or removing sample files.",
    ]
    for report in failures:
        lines.append(_SEPARATOR)
        lines.extend(_render_category(report, pattern))
    lines.append(_SEPARATOR)
    return "\n".join(lines)


def _render_category(report: CategoryReport, pattern: Optional[re.Pattern]) -> List[str]:
    out = [f"CATEGORY: {report.name}", f"DIRECTORY: {report.path}"]

    if report.error:
        out.append(f"ERROR: {report.error}")

    if report.missing:
        out.append("Missing (present on disk, not declared):")
        for name in report.missing:
            if pattern is not None:
                out.append(f"  {name}  -> {derive_test_name(name, pattern)}")
            else:
                out.append(f"  {name}")

    if report.stale:
        out.append("Stale (declared, absent on disk):")
        out.extend(f"  {name}" for name in report.stale)

    if report.undeclared_dirs:
        out.append("Undeclared subdirectories (hold samples, no category):")
        out.extend(f"  {name}/" for name in report.undeclared_dirs)

    return out
