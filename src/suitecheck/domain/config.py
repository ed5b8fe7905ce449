from __future__ import annotations

"""
Configuration Domain Management.

Provides the default run settings of the verifier and loads optional JSON
settings files. Settings are plain dictionaries; validation and coercion
live in the pipeline validator.
"""

import json
import logging
import os
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_SAMPLE_PATTERN = r"^(.+)\.kts$"

# Files that sit next to samples but configure the generator instead
DEFAULT_MARKER_FILES: List[str] = [
    "settings.gradle.kts",
    "build.gradle.kts",
]


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default run configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "root_dir": os.getcwd(),
        "declaration_path": "",

        # Matching
        "pattern": DEFAULT_SAMPLE_PATTERN,
        "excluded_pattern": "",
        "exclusions": [],
        "marker_files": list(DEFAULT_MARKER_FILES),

        # Traversal
        "recursive": True,
        "excluded_dirs": [],
        "jobs": 1,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load a JSON settings file.

    Keys absent from the file are left for the defaults to fill in.

    Args:
        path: Path to the JSON settings file.

    Returns:
        Dict[str, Any]: The raw settings found in the file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a JSON object.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Settings file '{path}' must contain a JSON object.")

    logger.debug(f"Loaded {len(data)} settings from {path}")
    return data


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of known override keys into the base settings.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject; None values are ignored.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out
