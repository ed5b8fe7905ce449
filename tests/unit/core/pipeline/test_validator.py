from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.
"""

import os
from typing import Any, Dict

import pytest

from suitecheck.core.pipeline.validator import validate_config
from suitecheck.domain.config import (
    DEFAULT_MARKER_FILES,
    DEFAULT_SAMPLE_PATTERN,
    get_default_config,
    load_config_file,
    merge_config,
)


def test_validate_config_fills_defaults() -> None:
    conf, warnings = validate_config({})

    assert warnings == []
    assert conf["pattern"] == DEFAULT_SAMPLE_PATTERN
    assert conf["marker_files"] == DEFAULT_MARKER_FILES
    assert conf["recursive"] is True
    assert conf["jobs"] == 1
    assert os.path.isabs(conf["root_dir"])


def test_validate_config_rejects_non_dict() -> None:
    conf, warnings = validate_config("not a dict")

    assert conf == get_default_config()
    assert any("Invalid config type" in w for w in warnings)

    with pytest.raises(TypeError):
        validate_config(["x"], strict=True)


def test_validate_config_coerces_loose_types() -> None:
    raw: Dict[str, Any] = {
        "recursive": "no",
        "exclusions": "a.kts, b.kts",
        "jobs": "4",
    }

    conf, warnings = validate_config(raw)

    assert conf["recursive"] is False
    assert conf["exclusions"] == ["a.kts", "b.kts"]
    assert conf["jobs"] == 4
    assert len(warnings) == 3


def test_validate_config_keeps_empty_lists() -> None:
    """An empty marker list means 'no markers', not 'use the defaults'."""
    conf, _ = validate_config({"marker_files": []})

    assert conf["marker_files"] == []


@pytest.mark.parametrize("jobs", [0, -2, "many", 2.5, True])
def test_validate_config_bad_jobs_fall_back(jobs: Any) -> None:
    conf, warnings = validate_config({"jobs": jobs})

    assert conf["jobs"] == 1
    assert warnings


def test_validate_config_strict_raises_on_bad_bool() -> None:
    with pytest.raises(TypeError):
        validate_config({"recursive": "maybe"}, strict=True)


def test_merge_config_ignores_unknown_and_none() -> None:
    base = get_default_config()

    out = merge_config(base, {"pattern": r".*\.kt", "jobs": None, "bogus": 1})

    assert out["pattern"] == r".*\.kt"
    assert out["jobs"] == 1
    assert "bogus" not in out


def test_load_config_file(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('{"pattern": "^(.+)\\\\.kt$", "jobs": 2}', encoding="utf-8")

    data = load_config_file(str(path))

    assert data == {"pattern": r"^(.+)\.kt$", "jobs": 2}


def test_load_config_file_requires_object(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config_file(str(path))


def test_validate_config_keeps_patterns_verbatim() -> None:
    """Whitespace and the empty pattern are part of the regex."""
    conf, warnings = validate_config({"pattern": " a\\.kts", "excluded_pattern": "skip "})

    assert warnings == []
    assert conf["pattern"] == " a\\.kts"
    assert conf["excluded_pattern"] == "skip "

    conf, _ = validate_config({"pattern": ""})
    assert conf["pattern"] == ""


def test_validate_config_bad_pattern_type() -> None:
    conf, warnings = validate_config({"pattern": 5})

    assert conf["pattern"] == DEFAULT_SAMPLE_PATTERN
    assert any("'pattern'" in w for w in warnings)

    with pytest.raises(TypeError):
        validate_config({"excluded_pattern": ["x"]}, strict=True)
