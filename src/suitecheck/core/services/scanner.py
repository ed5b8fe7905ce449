from __future__ import annotations

"""
Sample Discovery Service.

Lists a single category directory and collects the filenames that qualify
as test data samples. Nested directories are never folded into the parent's
result: each one is bound to its own category and scanned on its own.
A second entry point reports which subdirectories hold samples at all, so
the checker can detect directories that no category covers.
"""

import logging
import os
import re
from typing import FrozenSet, Iterable, Iterator, List, Optional

from suitecheck.core.components.filters import (
    ExclusionSet,
    as_exclusion_set,
    is_hidden,
    is_marker_file,
    matches,
)
from suitecheck.domain.check_models import SampleFile
from suitecheck.domain.errors import DirectoryNotFound

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def yield_sample_files(
        directory: str,
        pattern: re.Pattern,
        exclusions: Optional[ExclusionSet] = None,
        marker_files: Optional[Iterable[str]] = None,
) -> Iterator[SampleFile]:
    """
    Yield the qualifying samples found directly inside a directory.

    Skips subdirectories, hidden entries and generator marker files. An
    entry is kept only if it fully matches the pattern and is not excluded.

    Args:
        directory: Category directory to list (one level only).
        pattern: Compiled sample pattern.
        exclusions: Optional exclusion set applied after matching.
        marker_files: Filenames that configure the generator.

    Yields:
        SampleFile: One record per qualifying file, sorted by name.

    Raises:
        DirectoryNotFound: If the directory does not exist.
    """
    excl = as_exclusion_set(exclusions)
    markers = frozenset(marker_files or ())

    for entry in _list_entries(directory):
        name = entry.name
        if is_hidden(name) or entry.is_dir():
            continue
        if is_marker_file(name, markers):
            logger.debug(f"Skipping marker file {name} in {directory}")
            continue
        if not matches(name, pattern):
            continue
        if excl.is_excluded(name):
            logger.debug(f"Excluded sample {name} in {directory}")
            continue
        yield SampleFile(rel_path=name, file_name=name)


def scan_directory(
        directory: str,
        pattern: re.Pattern,
        exclusions: Optional[ExclusionSet] = None,
        marker_files: Optional[Iterable[str]] = None,
) -> FrozenSet[str]:
    """
    Collect the names of qualifying samples in a category directory.

    Returns:
        FrozenSet[str]: Sample filenames present on disk.

    Raises:
        DirectoryNotFound: If the directory does not exist. A missing
                           directory is a broken data location, never an
                           empty category.
    """
    names = frozenset(s.file_name for s in yield_sample_files(
        directory, pattern, exclusions, marker_files
    ))
    logger.debug(f"Scanned {directory}: {len(names)} samples")
    return names


def find_sample_directories(
        directory: str,
        pattern: re.Pattern,
        exclusions: Optional[ExclusionSet] = None,
        marker_files: Optional[Iterable[str]] = None,
        excluded_dirs: Optional[Iterable[str]] = None,
) -> FrozenSet[str]:
    """
    Find immediate subdirectories that hold samples anywhere beneath them.

    Hidden directories and those named in excluded_dirs are pruned, at
    every depth.

    Args:
        directory: Category directory whose children are inspected.
        pattern: Compiled sample pattern.
        exclusions: Optional exclusion set.
        marker_files: Filenames that configure the generator.
        excluded_dirs: Directory names never expected to be categories.

    Returns:
        FrozenSet[str]: Basenames of subdirectories containing samples.

    Raises:
        DirectoryNotFound: If the directory does not exist.
    """
    skip = frozenset(excluded_dirs or ())
    found: List[str] = []

    for entry in _list_entries(directory):
        if not entry.is_dir() or is_hidden(entry.name) or entry.name in skip:
            continue
        if _holds_samples(entry.path, pattern, exclusions, marker_files, skip):
            found.append(entry.name)

    return frozenset(found)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _list_entries(directory: str) -> List[os.DirEntry]:
    """List a directory, translating absence into DirectoryNotFound."""
    if not os.path.isdir(directory):
        raise DirectoryNotFound(directory)
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda e: e.name)
    except FileNotFoundError as e:
        raise DirectoryNotFound(directory) from e


def _holds_samples(
        directory: str,
        pattern: re.Pattern,
        exclusions: Optional[ExclusionSet],
        marker_files: Optional[Iterable[str]],
        skip: FrozenSet[str],
) -> bool:
    excl = as_exclusion_set(exclusions)
    markers = frozenset(marker_files or ())

    for _root, dirs, files in os.walk(directory, onerror=_warn_unreadable):
        # In-place pruning keeps os.walk out of hidden and excluded trees
        dirs[:] = [d for d in dirs if not is_hidden(d) and d not in skip]
        for name in files:
            if is_hidden(name) or is_marker_file(name, markers):
                continue
            if matches(name, pattern) and not excl.is_excluded(name):
                return True
    return False


def _warn_unreadable(error: OSError) -> None:
    """Report a subtree os.walk had to skip; its samples go unseen."""
    logger.warning(f"Skipped unreadable directory {error.filename}: {error.strerror or error}")
