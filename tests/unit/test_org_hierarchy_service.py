"""Tests for OrgHierarchyService over an in-memory unit reader."""

from app.application.services.org_hierarchy_service import OrgHierarchyService
from tests.fakes import FakeOrgUnitReader

# Root(1) -> Faculty(2) -> Dept1(3), Dept2(4); Root -> Faculty2(5)
PARENTS = {1: None, 2: 1, 3: 2, 4: 2, 5: 1}


async def test_children_of_returns_direct_children_only() -> None:
    """children_of does not descend past the first level."""
    svc = OrgHierarchyService(FakeOrgUnitReader(PARENTS))
    assert await svc.children_of(1) == {2, 5}
    assert await svc.children_of(3) == frozenset()


async def test_descendants_of_includes_root() -> None:
    svc = OrgHierarchyService(FakeOrgUnitReader(PARENTS))
    assert await svc.descendants_of(2) == {2, 3, 4}
    assert await svc.descendants_of(1) == {1, 2, 3, 4, 5}


async def test_descendants_of_unknown_unit_is_empty() -> None:
    """An id with no row is not its own subtree."""
    svc = OrgHierarchyService(FakeOrgUnitReader(PARENTS))
    assert await svc.descendants_of(99) == frozenset()


async def test_descendants_of_many_shares_visited_set() -> None:
    """Nested roots do not duplicate work or results."""
    svc = OrgHierarchyService(FakeOrgUnitReader(PARENTS))
    assert await svc.descendants_of_many([2, 4, 5]) == {2, 3, 4, 5}
    assert await svc.descendants_of_many([]) == frozenset()


async def test_cycle_terminates_and_returns_each_unit_once() -> None:
    """A.parent = B, B.parent = A must not loop."""
    svc = OrgHierarchyService(FakeOrgUnitReader({10: 11, 11: 10}))
    assert await svc.descendants_of(10) == {10, 11}
    assert await svc.descendants_of(11) == {10, 11}


async def test_children_are_memoized_per_instance() -> None:
    """A second expansion of the same subtree issues no new child queries."""
    reader = FakeOrgUnitReader(PARENTS)
    svc = OrgHierarchyService(reader)
    await svc.descendants_of(1)
    queries = reader.child_queries
    await svc.descendants_of(2)
    await svc.children_of(5)
    assert reader.child_queries == queries


async def test_new_instance_sees_structural_change() -> None:
    """Memo lives only as long as the instance (one request)."""
    parents = dict(PARENTS)
    reader = FakeOrgUnitReader(parents)
    assert await OrgHierarchyService(reader).descendants_of(5) == {5}
    parents[3] = 5
    assert await OrgHierarchyService(reader).descendants_of(5) == {3, 5}


async def test_load_tree_builds_org_tree() -> None:
    tree = await OrgHierarchyService(FakeOrgUnitReader(PARENTS)).load_tree()
    assert len(tree) == 5
    assert tree.descendants_of(2) == {2, 3, 4}
    assert tree.nodes[2].code == "U2"
