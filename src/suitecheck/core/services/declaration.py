from __future__ import annotations

"""
Category Declaration Loader.

Builds the immutable CategoryTree from the structure the test generator
declares. Two JSON-compatible shapes are accepted:

1. Nested: a root object with optional 'children' objects.
2. Flat: an ordered list of entries, each naming its 'parent' (the first
   entry without a parent is the root).

Every entry carries 'name', 'path' and 'declared' (sample filenames), and
optionally 'test_id' and 'labels'.
"""

import json
import logging
import posixpath
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from suitecheck.domain.errors import DeclarationError
from suitecheck.domain.tree_models import Category, CategoryTree

logger = logging.getLogger(__name__)

Declaration = Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]


# ==============================================================================
# PUBLIC API
# ==============================================================================

def load_declaration(path: str) -> CategoryTree:
    """
    Read a JSON declaration file and build the category tree.

    Args:
        path: Path to the declaration file.

    Returns:
        CategoryTree: The validated hierarchy.

    Raises:
        DeclarationError: If the file is unreadable, not JSON, or malformed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise DeclarationError(f"Cannot read declaration '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise DeclarationError(f"Declaration '{path}' is not valid JSON: {e}") from e

    tree = build_tree(data)
    logger.debug(f"Loaded {len(tree)} categories from {path}")
    return tree


def build_tree(declaration: Declaration) -> CategoryTree:
    """
    Build a CategoryTree from a nested mapping or a flat entry list.

    Raises:
        DeclarationError: On missing fields, a child path not nested under
                          its parent, duplicate sibling names, unknown
                          parents, or a missing/ambiguous root.
    """
    if isinstance(declaration, Mapping):
        root = _build_nested(declaration, parent=None)
    elif isinstance(declaration, Sequence) and not isinstance(declaration, (str, bytes)):
        root = _build_flat(declaration)
    else:
        raise DeclarationError(
            f"Declaration must be an object or a list, received {type(declaration).__name__}."
        )
    return CategoryTree(root=root)


# ==============================================================================
# PRIVATE HELPERS: SHAPES
# ==============================================================================

def _build_nested(entry: Mapping[str, Any], parent: Optional[str]) -> Category:
    name, rel_path = _name_and_path(entry, parent)

    raw_children = entry.get("children") or []
    if not isinstance(raw_children, list):
        raise DeclarationError(f"Category '{name}': 'children' must be a list.")

    children = tuple(_build_nested(c, parent=rel_path) for c in raw_children)
    _check_unique_names(name, children)
    return _make_category(entry, name, rel_path, children)


def _build_flat(entries: Sequence[Mapping[str, Any]]) -> Category:
    if not entries:
        raise DeclarationError("Declaration list is empty.")

    by_name: Dict[str, Mapping[str, Any]] = {}
    kids: Dict[str, List[str]] = {}
    root_name: Optional[str] = None

    for entry in entries:
        if not isinstance(entry, Mapping):
            raise DeclarationError(f"Declaration entry must be an object: {entry!r}")
        name = _require_str(entry, "name", "<unnamed>")
        if name in by_name:
            raise DeclarationError(f"Duplicate category name '{name}'.")

        parent = entry.get("parent")
        if parent is not None and not isinstance(parent, str):
            raise DeclarationError(
                f"Category '{name}': 'parent' must be a category name."
            )
        if parent is None:
            if root_name is not None:
                raise DeclarationError(
                    f"Multiple root categories: '{root_name}' and '{name}'."
                )
            root_name = name
        elif parent not in by_name:
            raise DeclarationError(
                f"Category '{name}' names unknown parent '{parent}'."
            )
        else:
            kids[parent].append(name)

        by_name[name] = entry
        kids[name] = []

    if root_name is None:
        raise DeclarationError("Declaration has no root category.")

    def assemble(name: str, parent_path: Optional[str]) -> Category:
        entry = by_name[name]
        _, rel_path = _name_and_path(entry, parent_path)
        children = tuple(assemble(k, rel_path) for k in kids[name])
        return _make_category(entry, name, rel_path, children)

    return assemble(root_name, None)


# ==============================================================================
# PRIVATE HELPERS: VALIDATION
# ==============================================================================

def _name_and_path(entry: Mapping[str, Any], parent_path: Optional[str]) -> tuple:
    if not isinstance(entry, Mapping):
        raise DeclarationError(f"Category entry must be an object: {entry!r}")

    name = _require_str(entry, "name", "<unnamed>")
    rel_path = _normalize(_require_str(entry, "path", name))

    if parent_path is not None and not _is_nested(rel_path, parent_path):
        raise DeclarationError(
            f"Category '{name}' path '{rel_path}' is not nested under '{parent_path}'."
        )
    return name, rel_path


def _make_category(
        entry: Mapping[str, Any],
        name: str,
        rel_path: str,
        children: tuple,
) -> Category:
    declared = entry.get("declared") or []
    if not isinstance(declared, (list, tuple)) or not all(isinstance(d, str) for d in declared):
        raise DeclarationError(f"Category '{name}': 'declared' must be a list of filenames.")

    labels = entry.get("labels") or {}
    if not isinstance(labels, Mapping):
        raise DeclarationError(f"Category '{name}': 'labels' must be an object.")

    test_id = entry.get("test_id")
    return Category(
        name=name,
        rel_path=rel_path,
        declared=frozenset(declared),
        children=children,
        test_id=str(test_id) if test_id is not None else None,
        labels={str(k): str(v) for k, v in labels.items()},
    )


def _check_unique_names(parent: str, children: tuple) -> None:
    seen = set()
    for c in children:
        if c.name in seen:
            raise DeclarationError(f"Category '{parent}' declares '{c.name}' twice.")
        seen.add(c.name)


def _require_str(entry: Mapping[str, Any], key: str, owner: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value.strip():
        raise DeclarationError(f"Category '{owner}': missing or empty '{key}'.")
    return value.strip()


def _normalize(rel_path: str) -> str:
    return posixpath.normpath(rel_path.replace("\\", "/"))


def _is_nested(child: str, parent: str) -> bool:
    if parent == ".":
        return child != "." and not child.startswith("../")
    return child.startswith(parent.rstrip("/") + "/")
