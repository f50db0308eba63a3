"""Organization hierarchy queries over the unit store.

One instance per request. Child lookups are memoized for the lifetime of
the instance only, so a structural edit is visible to the next request.
Expansion is level by level with a visited set: a cycle in parent_id data
stops at the first repeated unit instead of looping.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from app.application.interfaces.repositories import IOrgUnitReader
from app.domain.org_tree import OrgTree
from app.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


class OrgHierarchyService:
    """children_of / descendants_of over IOrgUnitReader with per-request memo."""

    def __init__(self, unit_reader: IOrgUnitReader) -> None:
        self.unit_reader = unit_reader
        self._children: dict[int, frozenset[int]] = {}
        self._known: dict[int, bool] = {}

    async def children_of(self, unit_id: int) -> frozenset[int]:
        """Direct children only."""
        await self._load_children([unit_id])
        return self._children.get(unit_id, frozenset())

    async def descendants_of(self, unit_id: int) -> frozenset[int]:
        """Subtree including unit_id. Empty set for an unknown unit."""
        return await self.descendants_of_many([unit_id])

    @traced("org_hierarchy.descendants_of_many")
    async def descendants_of_many(self, unit_ids: Iterable[int]) -> frozenset[int]:
        """Union of subtrees rooted at unit_ids, sharing one visited set."""
        roots = [u for u in dict.fromkeys(unit_ids) if await self._exists(u)]
        visited: set[int] = set(roots)
        # Root each unit was reached from; a visited child reached again from
        # the same root, or a visited non-root child, means a cycle edge.
        origin: dict[int, int] = {r: r for r in roots}
        root_set = set(roots)
        frontier = list(roots)
        while frontier:
            await self._load_children(frontier)
            next_frontier: list[int] = []
            for parent_id in frontier:
                for child_id in self._children.get(parent_id, frozenset()):
                    if child_id in visited:
                        if child_id not in root_set or origin[child_id] == origin[parent_id]:
                            logger.warning(
                                "Skipping cycle edge in org hierarchy: %s -> %s",
                                parent_id,
                                child_id,
                            )
                        continue
                    visited.add(child_id)
                    origin[child_id] = origin[parent_id]
                    next_frontier.append(child_id)
            frontier = next_frontier
        return frozenset(visited)

    async def load_tree(self) -> OrgTree:
        """Build an in-memory OrgTree of all non-deleted units (tree view)."""
        return OrgTree.from_rows(await self.unit_reader.list_tree_nodes())

    async def _exists(self, unit_id: int) -> bool:
        if unit_id not in self._known:
            self._known[unit_id] = await self.unit_reader.exists(unit_id)
        return self._known[unit_id]

    async def _load_children(self, parent_ids: Iterable[int]) -> None:
        missing = [p for p in parent_ids if p not in self._children]
        if not missing:
            return
        grouped: dict[int, set[int]] = {p: set() for p in missing}
        for child_id, parent_id in await self.unit_reader.list_child_ids(missing):
            grouped.setdefault(parent_id, set()).add(child_id)
        for parent_id, children in grouped.items():
            self._children[parent_id] = frozenset(children)
