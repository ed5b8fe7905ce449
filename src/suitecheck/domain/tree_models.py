from __future__ import annotations

"""
Category Hierarchy Data Models.

Defines the immutable tree of test categories that mirrors the test data
directory layout. Each node binds a name to one directory and carries the
set of sample filenames the generated suite declares for it.
"""

import posixpath
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Iterator, Mapping, Optional, Tuple

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Category:
    """
    A named node of the declared test hierarchy.

    Attributes:
        name: Display name of the category (e.g. the nested test class name).
        rel_path: Directory of the category relative to the check root.
        declared: Sample filenames the generated suite covers for this node.
        children: Nested categories in declaration order.
        test_id: Optional identifier of the generated test entry point.
        labels: Uninterpreted configurator labels (frontend, module kind...).
    """
    name: str
    rel_path: str
    declared: FrozenSet[str] = frozenset()
    children: Tuple[Category, ...] = ()
    test_id: Optional[str] = None
    labels: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)

    @property
    def child_rel_paths(self) -> FrozenSet[str]:
        """Directory of each immediate child, relative to this node."""
        return frozenset(_relative_to(c.rel_path, self.rel_path) for c in self.children)


@dataclass(frozen=True)
class CategoryTree:
    """
    Immutable category hierarchy rooted at a single category.

    Attributes:
        root: The top-level category.
    """
    root: Category

    def iter_categories(self) -> Iterator[Category]:
        """
        Yield every category depth-first, parent before children.

        Siblings are visited in declaration order.
        """
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def for_each_category(self, visitor: Callable[[Category], None]) -> None:
        """Invoke the visitor once for every category in traversal order."""
        for category in self.iter_categories():
            visitor(category)

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_categories())

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _relative_to(rel_path: str, parent_path: str) -> str:
    return posixpath.relpath(rel_path, parent_path)
