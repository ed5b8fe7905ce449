from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the verifier and translates the raw
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from suitecheck.domain.config import DEFAULT_SAMPLE_PATTERN

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the suitecheck CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="suitecheck",
        description=(
            "Verify that every sample file under a test data tree is covered "
            "by the declared test suite, and that no declared sample is gone."
        ),
    )

    # --- Inputs ---
    p.add_argument(
        "-r", "--root",
        dest="root_dir",
        default=None,
        help="Directory that category paths are relative to (default: cwd).",
    )
    p.add_argument(
        "-d", "--declaration",
        dest="declaration_path",
        default=None,
        help="JSON file describing the declared category hierarchy.",
    )
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON settings file; command-line flags take precedence.",
    )

    # --- Matching ---
    p.add_argument(
        "-p", "--pattern",
        dest="pattern",
        default=None,
        help=f"Regex a sample filename must fully match (default: {DEFAULT_SAMPLE_PATTERN}).",
    )
    p.add_argument(
        "--exclude",
        dest="exclusions",
        default=None,
        help="Comma-separated filenames left out of the check.",
    )
    p.add_argument(
        "--excluded-pattern",
        dest="excluded_pattern",
        default=None,
        help="Regex of filenames left out of the check.",
    )
    p.add_argument(
        "--markers",
        dest="marker_files",
        default=None,
        help="Comma-separated generator files that are never samples.",
    )

    # --- Traversal ---
    p.add_argument(
        "--exclude-dirs",
        dest="excluded_dirs",
        default=None,
        help="Comma-separated directory names exempt from the subdirectory check.",
    )
    p.add_argument(
        "--no-recursive",
        action="store_true",
        help="Do not report subdirectories that lack a declared category.",
    )
    p.add_argument(
        "-j", "--jobs",
        dest="jobs",
        type=int,
        default=None,
        help="Worker threads used to scan categories (default: 1).",
    )

    # --- Output and Diagnostics ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved settings and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides; None means "not given".
    """
    overrides: Dict[str, Any] = {
        "root_dir": args.root_dir,
        "declaration_path": args.declaration_path,
        "pattern": args.pattern,
        "excluded_pattern": args.excluded_pattern,
        "jobs": args.jobs,
    }

    if args.exclusions is not None:
        overrides["exclusions"] = _split_csv(args.exclusions)
    if args.marker_files is not None:
        overrides["marker_files"] = _split_csv(args.marker_files)
    if args.excluded_dirs is not None:
        overrides["excluded_dirs"] = _split_csv(args.excluded_dirs)
    if args.no_recursive:
        overrides["recursive"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of sanitized strings."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
