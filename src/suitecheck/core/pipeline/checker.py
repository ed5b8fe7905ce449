from __future__ import annotations

"""
Completeness Checker.

Drives a single pass over the category tree: every category directory is
scanned, compared with the filenames the generated suite declares, and the
discrepancies of all categories are aggregated into one CheckResult. A scan
failure in one category is recorded in that category's report and never
stops the others from being checked.
"""

import logging
import os
import posixpath
import re
from concurrent.futures import ThreadPoolExecutor
from typing import FrozenSet, Iterable, List, Optional, Union

from suitecheck.core.components.filters import (
    ExclusionSet,
    as_exclusion_set,
    compile_pattern,
)
from suitecheck.core.pipeline.report import render_report
from suitecheck.core.services.scanner import find_sample_directories, scan_directory
from suitecheck.domain.check_models import CategoryReport, CheckResult
from suitecheck.domain.config import DEFAULT_MARKER_FILES
from suitecheck.domain.errors import CompletenessViolation, DirectoryNotFound
from suitecheck.domain.tree_models import Category, CategoryTree

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def check_all(
        tree: CategoryTree,
        root_dir: str,
        pattern: Union[str, re.Pattern],
        exclusions: Union[ExclusionSet, Iterable[str], None] = None,
        *,
        marker_files: Optional[Iterable[str]] = None,
        recursive: bool = True,
        excluded_dirs: Optional[Iterable[str]] = None,
        jobs: int = 1,
) -> CheckResult:
    """
    Compare on-disk samples with declared samples for every category.

    Args:
        tree: Declared category hierarchy.
        root_dir: Directory that category paths are relative to.
        pattern: Sample pattern (raw or compiled); must match whole names.
        exclusions: Filenames never reported as missing.
        marker_files: Generator files that are not samples. Defaults to
                      the standard Gradle script names.
        recursive: Also report subdirectories holding samples that no
                   child category covers.
        excluded_dirs: Directory names exempt from the recursive check.
        jobs: Worker threads used for scanning; 1 scans sequentially.

    Returns:
        CheckResult: One report per category, in tree traversal order.

    Raises:
        InvalidPattern: If a pattern cannot be compiled. Raised before any
                        directory is scanned.
    """
    rx = compile_pattern(pattern)
    excl = as_exclusion_set(exclusions)
    markers = tuple(DEFAULT_MARKER_FILES if marker_files is None else marker_files)
    skip_dirs = tuple(excluded_dirs or ())
    root_abs = os.path.abspath(root_dir)

    categories = list(tree.iter_categories())
    logger.debug(f"Checking {len(categories)} categories under {root_abs} with {rx.pattern!r}")

    def run(category: Category) -> CategoryReport:
        return _check_category(category, root_abs, rx, excl, markers, recursive, skip_dirs)

    if jobs > 1 and len(categories) > 1:
        # map() keeps submission order, so traversal order survives completion order
        with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="CategoryScan") as executor:
            reports: List[CategoryReport] = list(executor.map(run, categories))
    else:
        reports = [run(c) for c in categories]

    result = CheckResult(root_dir=root_abs, reports=tuple(reports))

    for failed in result.failures:
        logger.warning(
            f"Category '{failed.name}' inconsistent: "
            f"{len(failed.missing)} missing, {len(failed.stale)} stale, "
            f"{len(failed.undeclared_dirs)} undeclared dirs"
            + (f", error: {failed.error}" if failed.error else "")
        )
    logger.info(
        f"Checked {result.checked} categories: "
        f"{len(result.failures)} inconsistent."
    )
    return result


def assert_all_samples_present(
        tree: CategoryTree,
        root_dir: str,
        pattern: Union[str, re.Pattern],
        exclusions: Union[ExclusionSet, Iterable[str], None] = None,
        **kwargs,
) -> CheckResult:
    """
    Run check_all and fail the surrounding test on any discrepancy.

    Accepts the same keyword options as check_all.

    Returns:
        CheckResult: The consistent result.

    Raises:
        CompletenessViolation: With the full per-category report.
        InvalidPattern: If a pattern cannot be compiled.
    """
    result = check_all(tree, root_dir, pattern, exclusions, **kwargs)
    if not result.ok:
        raise CompletenessViolation(result, render_report(result, compile_pattern(pattern)))
    return result


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _check_category(
        category: Category,
        root_abs: str,
        pattern: re.Pattern,
        exclusions: ExclusionSet,
        marker_files: tuple,
        recursive: bool,
        excluded_dirs: tuple,
) -> CategoryReport:
    directory = os.path.normpath(os.path.join(root_abs, category.rel_path))

    try:
        on_disk = scan_directory(directory, pattern, exclusions, marker_files)
        undeclared: List[str] = []
        if recursive:
            undeclared = _undeclared_dirs(
                directory, category.child_rel_paths, pattern, exclusions, marker_files, excluded_dirs
            )
    except DirectoryNotFound as e:
        logger.error(str(e))
        return CategoryReport(name=category.name, path=directory, error=str(e))
    except OSError as e:
        msg = f"Cannot read test data directory {directory}: {e}"
        logger.error(msg)
        return CategoryReport(name=category.name, path=directory, error=msg)

    declared = category.declared
    return CategoryReport(
        name=category.name,
        path=directory,
        missing=tuple(sorted(on_disk - declared)),
        stale=tuple(sorted(n for n in declared - on_disk if not exclusions.is_excluded(n))),
        undeclared_dirs=tuple(sorted(undeclared)),
    )


def _undeclared_dirs(
        directory: str,
        child_paths: FrozenSet[str],
        pattern: re.Pattern,
        exclusions: ExclusionSet,
        marker_files: tuple,
        excluded_dirs: tuple,
        prefix: str = "",
) -> List[str]:
    """
    List sample-holding subdirectories that no child category is bound to.

    A subdirectory is covered only by a child declared for exactly that
    path. An intermediate directory on the way to a deeper child is
    reported when it holds samples of its own, and is descended into so
    its other sample-holding subdirectories are reported too.
    """
    found: List[str] = []
    for name in sorted(find_sample_directories(
            directory, pattern, exclusions, marker_files, excluded_dirs
    )):
        rel = posixpath.join(prefix, name) if prefix else name
        if rel in child_paths:
            continue

        deeper = frozenset(c for c in child_paths if c.startswith(rel + "/"))
        if not deeper:
            found.append(rel)
            continue

        sub = os.path.join(directory, name)
        if scan_directory(sub, pattern, exclusions, marker_files):
            found.append(rel)
        found.extend(_undeclared_dirs(
            sub, deeper, pattern, exclusions, marker_files, excluded_dirs, prefix=rel
        ))
    return found
