from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A shared on-disk sample tree and the matching declaration.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_root(tmp_path: Path) -> Path:
    """
    Create a test data tree mirroring a generated suite.

    Structure:
    /data
      /singleByPsi
        a.kts
        b.kts
        .hidden.kts
        notes.txt
        settings.gradle.kts
        /assignments
          assign.kts
        /nonCalls
          (empty)
    """
    root = tmp_path / "data"
    base = root / "singleByPsi"
    (base / "assignments").mkdir(parents=True)
    (base / "nonCalls").mkdir()

    for name in ("a.kts", "b.kts", ".hidden.kts", "notes.txt", "settings.gradle.kts"):
        (base / name).write_text("// sample", encoding="utf-8")
    (base / "assignments" / "assign.kts").write_text("val x = 1", encoding="utf-8")

    return root


@pytest.fixture
def declaration_dict() -> Dict[str, Any]:
    """Return the nested declaration that exactly covers sample_root."""
    return {
        "name": "SingleByPsi",
        "path": "singleByPsi",
        "test_id": "ResolveCandidatesTestGenerated",
        "labels": {"frontend": "Fir", "module": "ScriptSource"},
        "declared": ["a.kts", "b.kts"],
        "children": [
            {
                "name": "Assignments",
                "path": "singleByPsi/assignments",
                "declared": ["assign.kts"],
            },
            {
                "name": "NonCalls",
                "path": "singleByPsi/nonCalls",
                "declared": [],
            },
        ],
    }
