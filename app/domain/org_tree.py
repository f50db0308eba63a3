"""In-memory organization tree built from (id, parent_id) rows.

Units are referenced by integer id; edges are held in a parent -> children
index. Every traversal uses an explicit worklist and a visited set so a
malformed hierarchy (a cycle introduced by a data bug) terminates instead
of recursing forever.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrgNode:
    """Minimal unit row needed for traversal and tree rendering."""

    id: int
    parent_id: int | None
    code: str = ""
    name: str = ""
    type: str = ""
    status: str = "active"


@dataclass
class OrgTree:
    """Parent/child index over a set of org units.

    Built once from rows loaded for the current request (or a test
    fixture). Not shared across requests.
    """

    nodes: dict[int, OrgNode] = field(default_factory=dict)
    _children: dict[int, set[int]] = field(
        default_factory=lambda: defaultdict(set), repr=False
    )

    @classmethod
    def from_rows(cls, rows: Iterable[OrgNode | tuple[int, int | None]]) -> "OrgTree":
        """Build the index from OrgNode objects or bare (id, parent_id) pairs."""
        tree = cls()
        for row in rows:
            node = row if isinstance(row, OrgNode) else OrgNode(id=row[0], parent_id=row[1])
            tree.add(node)
        return tree

    def add(self, node: OrgNode) -> None:
        """Insert or replace a node, re-linking it under its parent."""
        previous = self.nodes.get(node.id)
        if previous is not None and previous.parent_id is not None:
            self._children[previous.parent_id].discard(node.id)
        self.nodes[node.id] = node
        if node.parent_id is not None:
            self._children[node.parent_id].add(node.id)

    def __contains__(self, unit_id: object) -> bool:
        return unit_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def children_of(self, unit_id: int) -> frozenset[int]:
        """Direct children only."""
        return frozenset(self._children.get(unit_id, ()))

    def descendants_of(self, unit_id: int) -> frozenset[int]:
        """Subtree rooted at unit_id, including unit_id itself.

        Returns an empty set when unit_id is not a known unit.
        """
        if unit_id not in self.nodes:
            return frozenset()
        return self._expand([unit_id], set())

    def descendants_of_many(self, unit_ids: Iterable[int]) -> frozenset[int]:
        """Union of descendants_of for each id, sharing one visited set."""
        roots = [u for u in unit_ids if u in self.nodes]
        return self._expand(roots, set())

    def ancestors_of(self, unit_id: int) -> list[int]:
        """Parent chain from the direct parent up to the root.

        Stops at a repeated id, so a cyclic chain yields each id once.
        """
        chain: list[int] = []
        seen = {unit_id}
        node = self.nodes.get(unit_id)
        while node is not None and node.parent_id is not None:
            if node.parent_id in seen:
                logger.warning(
                    "Cycle in org hierarchy at unit %s -> parent %s",
                    node.id,
                    node.parent_id,
                )
                break
            seen.add(node.parent_id)
            chain.append(node.parent_id)
            node = self.nodes.get(node.parent_id)
        return chain

    def would_create_cycle(self, unit_id: int, new_parent_id: int | None) -> bool:
        """True if re-parenting unit_id under new_parent_id makes it its own ancestor."""
        if new_parent_id is None:
            return False
        if new_parent_id == unit_id:
            return True
        return new_parent_id in self.descendants_of(unit_id)

    def roots(self) -> list[int]:
        """Units with no parent, or whose parent is not in the tree (orphans)."""
        return sorted(
            n.id
            for n in self.nodes.values()
            if n.parent_id is None or n.parent_id not in self.nodes
        )

    def build_tree(
        self,
        root_ids: Iterable[int] | None = None,
        within: Iterable[int] | None = None,
    ) -> list[dict[str, Any]]:
        """Render nested dicts ({id, code, name, type, status, children}).

        within restricts rendering to a set of units; its top-most members
        become the roots. Each unit appears at most once; a back edge into an
        already rendered unit is dropped.
        """
        allowed = frozenset(within) if within is not None else None
        if root_ids is not None:
            starts = sorted(root_ids)
        elif allowed is not None:
            starts = sorted(
                u
                for u in allowed
                if u in self.nodes and self.nodes[u].parent_id not in allowed
            )
        else:
            starts = self.roots()
        visited: set[int] = set()
        rendered: list[dict[str, Any]] = []
        for root_id in starts:
            if root_id not in self.nodes or root_id in visited:
                continue
            if allowed is not None and root_id not in allowed:
                continue
            visited.add(root_id)
            top = self._render(root_id)
            rendered.append(top)
            stack = [(root_id, top)]
            while stack:
                current, out = stack.pop()
                for child_id in sorted(self._children.get(current, ())):
                    if child_id in visited or child_id not in self.nodes:
                        continue
                    if allowed is not None and child_id not in allowed:
                        continue
                    visited.add(child_id)
                    child_out = self._render(child_id)
                    out["children"].append(child_out)
                    stack.append((child_id, child_out))
        return rendered

    def _render(self, unit_id: int) -> dict[str, Any]:
        node = self.nodes[unit_id]
        return {
            "id": node.id,
            "code": node.code,
            "name": node.name,
            "type": node.type,
            "status": node.status,
            "children": [],
        }

    def _expand(self, roots: list[int], visited: set[int]) -> frozenset[int]:
        # origin maps each visited unit to the root it was reached from; a
        # visited child that is not a separate root, or that is the root of
        # the current walk, can only be reached again through a cycle.
        origin: dict[int, int] = {}
        root_set = set(roots)
        worklist = [(r, r) for r in roots]
        while worklist:
            current, root = worklist.pop()
            if current in visited:
                continue
            visited.add(current)
            origin[current] = root
            for child_id in self._children.get(current, ()):
                if child_id in visited:
                    if child_id not in root_set or origin.get(child_id) == root:
                        logger.warning(
                            "Skipping cycle edge in org hierarchy: %s -> %s",
                            current,
                            child_id,
                        )
                    continue
                worklist.append((child_id, root))
        return frozenset(visited)
