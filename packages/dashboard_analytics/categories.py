"""Category forest built from flat parent pointers.

The category provider hands over a flat list of :class:`CustomCategory`
rows. :class:`CategoryForest` turns that list into an owned tree (one node
per identifier) and resolves the full, root-to-leaf path of any category,
e.g. ``"Hogar > Servicios > Internet"``.

Rules
-----
- A ``parent_id`` that does not match any category makes the node a root.
- Parent cycles are broken with a visited set: traversal stops at the first
  node seen twice, so corrupted data never loops forever.
- A missing or unknown ``category_id`` resolves to :data:`UNCATEGORIZED`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .logging_setup import get_logger
from .models import CustomCategory, Transaction

UNCATEGORIZED = "Uncategorized"
UNKNOWN_BANK = "Unknown"
# Stand-in for an ancestor with an empty name
UNNAMED_CATEGORY = "Category"
PATH_SEPARATOR = " > "

_logger = get_logger("dashboard_analytics.categories")


@dataclass(slots=True)
class CategoryNode:
    category: CustomCategory
    children: list[CategoryNode] = field(default_factory=list)


class CategoryForest:
    """Tree view over a flat category list, built once per engine call."""

    __slots__ = ("_nodes", "_roots", "_paths")

    def __init__(self, categories: Iterable[CustomCategory] = ()) -> None:
        self._nodes: dict[str, CategoryNode] = {}
        for cat in categories:
            # First occurrence wins on duplicate identifiers.
            self._nodes.setdefault(cat.id, CategoryNode(cat))

        self._roots: list[CategoryNode] = []
        for node in self._nodes.values():
            parent_id = node.category.parent_id
            parent = self._nodes.get(parent_id) if parent_id else None
            if parent is None or parent is node:
                self._roots.append(node)
            else:
                parent.children.append(node)

        self._paths: dict[str, str] = {}
        for node, _depth, path in self.walk():
            # A nameless leaf reads as uncategorized; as an ancestor it is a placeholder.
            self._paths[node.category.id] = path if node.category.name else UNCATEGORIZED

        # Nodes on a pure parent cycle are unreachable from any root.
        for cat_id, node in self._nodes.items():
            if cat_id not in self._paths:
                _logger.debug("category %s is on a parent cycle; resolving by walk-up", cat_id)
                self._paths[cat_id] = self._walk_up(node.category)

    @property
    def roots(self) -> list[CategoryNode]:
        return list(self._roots)

    def __len__(self) -> int:
        return len(self._nodes)

    def walk(self) -> Iterator[tuple[CategoryNode, int, str]]:
        """Yield ``(node, depth, full_path)`` depth first, roots in input order."""

        visited: set[str] = set()
        stack: list[tuple[CategoryNode, int, str]] = [
            (root, 0, _leaf_name(root.category)) for root in reversed(self._roots)
        ]
        while stack:
            node, depth, path = stack.pop()
            if node.category.id in visited:
                continue
            visited.add(node.category.id)
            yield node, depth, path
            for child in reversed(node.children):
                child_path = path + PATH_SEPARATOR + _leaf_name(child.category)
                stack.append((child, depth + 1, child_path))

    def full_path(self, category_id: str | None) -> str:
        """Return the root-to-leaf path for ``category_id`` or the sentinel."""

        if not category_id:
            return UNCATEGORIZED
        return self._paths.get(category_id, UNCATEGORIZED)

    def root_name(self, category_id: str | None) -> str:
        return self.full_path(category_id).split(PATH_SEPARATOR, 1)[0]

    def category_of(self, tx: Transaction) -> str:
        return self.full_path(tx.category_id)

    def _walk_up(self, category: CustomCategory) -> str:
        if not category.name:
            return UNCATEGORIZED
        parts = [category.name]
        seen = {category.id}
        parent_id = category.parent_id
        while parent_id and parent_id not in seen:
            node = self._nodes.get(parent_id)
            if node is None:
                break
            seen.add(parent_id)
            parts.append(node.category.name or UNNAMED_CATEGORY)
            parent_id = node.category.parent_id
        return PATH_SEPARATOR.join(reversed(parts))


def _leaf_name(category: CustomCategory) -> str:
    return category.name or UNNAMED_CATEGORY


def bank_label(tx: Transaction) -> str:
    return tx.bank or UNKNOWN_BANK


__all__ = [
    "UNCATEGORIZED",
    "UNKNOWN_BANK",
    "PATH_SEPARATOR",
    "CategoryNode",
    "CategoryForest",
    "bank_label",
]
