from __future__ import annotations

"""
Sample Filtering Engine.

Implements full-string regex matching of sample filenames, exact-name and
pattern-based exclusion, and recognition of hidden entries and generator
marker files that must never be treated as samples.
"""

import re
from typing import Iterable, Optional, Union

from suitecheck.domain.errors import InvalidPattern

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_pattern(pattern: Union[str, re.Pattern]) -> re.Pattern:
    """
    Compile a raw regex string into a Pattern object.

    Unlike a lenient filter list, a malformed sample pattern is fatal: a
    run cannot proceed without a valid matcher.

    Args:
        pattern: Raw regex string or an already compiled pattern.

    Returns:
        re.Pattern: Compiled regex object.

    Raises:
        InvalidPattern: If the string is not a valid regular expression.
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPattern(pattern, str(e)) from e
    except TypeError as e:
        raise InvalidPattern(repr(pattern), str(e)) from e


def matches(file_name: str, pattern: re.Pattern) -> bool:
    """
    Verify that a filename matches the pattern in its entirety.

    Args:
        file_name: Filename to evaluate.
        pattern: Compiled sample pattern.

    Returns:
        bool: True only for a full-string match.
    """
    return pattern.fullmatch(file_name) is not None


def derive_test_name(file_name: str, pattern: re.Pattern) -> str:
    """
    Derive the generated test entry name for a sample.

    Uses the first capture group of the pattern when present, otherwise the
    whole filename (e.g. 'a.kts' with '^(.+)\\.kts$' gives 'testA').
    """
    m = pattern.fullmatch(file_name)
    stem = file_name
    if m is not None and m.groups() and m.group(1):
        stem = m.group(1)

    parts = [p for p in re.split(r"[^0-9A-Za-z]+", stem) if p]
    if not parts:
        return "test"
    return "test" + "".join(p[0].upper() + p[1:] for p in parts)

# -----------------------------------------------------------------------------
# ENTRY CLASSIFICATION
# -----------------------------------------------------------------------------

def is_hidden(name: str) -> bool:
    """Dotfiles and dot-directories are never samples."""
    return name.startswith(".")


def is_marker_file(name: str, marker_files: Optional[Iterable[str]]) -> bool:
    """Check whether a filename is a known generator marker file."""
    if not marker_files:
        return False
    return name in set(marker_files)

# -----------------------------------------------------------------------------
# EXCLUSION
# -----------------------------------------------------------------------------

class ExclusionSet:
    """
    Filenames deliberately left out of the completeness check.

    Exclusion is by exact filename, optionally extended with a pattern
    that must match the whole filename. An absent list excludes nothing.
    """

    def __init__(
            self,
            names: Optional[Iterable[str]] = None,
            pattern: Union[str, re.Pattern, None] = None,
    ) -> None:
        self._names = frozenset(names) if names else frozenset()
        self._pattern = compile_pattern(pattern) if pattern else None

    @property
    def names(self) -> frozenset:
        return self._names

    @property
    def pattern(self) -> Optional[re.Pattern]:
        return self._pattern

    def is_excluded(self, file_name: str) -> bool:
        if file_name in self._names:
            return True
        if self._pattern is not None:
            return matches(file_name, self._pattern)
        return False

    def __bool__(self) -> bool:
        return bool(self._names) or self._pattern is not None

    def __repr__(self) -> str:
        pat = self._pattern.pattern if self._pattern is not None else None
        return f"ExclusionSet(names={sorted(self._names)!r}, pattern={pat!r})"


def as_exclusion_set(exclusions: Union[ExclusionSet, Iterable[str], None]) -> ExclusionSet:
    """Normalize None, a plain filename list, or an ExclusionSet."""
    if isinstance(exclusions, ExclusionSet):
        return exclusions
    return ExclusionSet(exclusions)
