from __future__ import annotations

"""
Verification Error Hierarchy.

Typed failures raised by the completeness checker. Configuration-level
errors abort a run immediately, scan errors are folded into the report of
the category that produced them, and the final violation carries the full
per-category detail.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from suitecheck.domain.check_models import CheckResult


class SuiteCheckError(Exception):
    """Base class for every error raised by suitecheck."""


class InvalidPattern(SuiteCheckError, ValueError):
    """
    A sample or exclusion pattern could not be compiled.

    Attributes:
        pattern: The raw pattern string.
        reason: Message of the underlying regex error.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class DirectoryNotFound(SuiteCheckError, FileNotFoundError):
    """A category directory does not exist or is not a directory."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Test data directory not found: {path}")

    def __str__(self) -> str:
        return f"Test data directory not found: {self.path}"


class DeclarationError(SuiteCheckError, ValueError):
    """The declared category hierarchy is malformed."""


class CompletenessViolation(SuiteCheckError, AssertionError):
    """
    On-disk samples and declared test entries disagree.

    Subclasses AssertionError so test runners report it as a failed
    assertion rather than an error.

    Attributes:
        result: The full check result, including consistent categories.
        report: Rendered text report of every failing category.
    """

    def __init__(self, result: "CheckResult", report: str) -> None:
        self.result = result
        self.report = report
        super().__init__(report)
