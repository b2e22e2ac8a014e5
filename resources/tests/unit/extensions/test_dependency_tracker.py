"""
Unit tests for DependencyTracker.
"""

import pytest

from resources.tests.helpers.extensions import make_editor, make_general
from workbench.extensions.dependencies import DependencyTracker

pytestmark = pytest.mark.unit


@pytest.fixture
def tracker():
    return DependencyTracker()


class TestEdges:
    """Test used-by bookkeeping."""

    def test_add_edge_is_unique(self, tracker):
        dep = make_general("ext/d")
        user = make_general("ext/c")

        tracker.add_edge(dep, user)
        tracker.add_edge(dep, user)

        assert dep.used_by == [user]
        assert user.used_by == []

    def test_only_registered_users_block(self, tracker):
        dep = make_general("ext/d")
        active = make_general("ext/active")
        gone = make_general("ext/gone")
        active.registered = True
        tracker.add_edge(dep, active)
        tracker.add_edge(dep, gone)

        assert tracker.blocking_dependents(dep) == ["ext/active"]
        assert not tracker.can_unregister(dep)

        active.registered = False
        assert tracker.can_unregister(dep)


class TestShutdownOrder:
    """Test get_shutdown_order()."""

    def test_dependents_come_first(self, tracker):
        base = make_general("ext/base")
        middle = make_general("ext/middle", deps=[base])
        top = make_editor("ext/top", ["text/plain"], deps=[middle])

        order = tracker.get_shutdown_order([base, middle, top])

        assert [ext.path for ext in order] == ["ext/top", "ext/middle", "ext/base"]

    def test_shared_dependency_waits_for_all_users(self, tracker):
        shared = make_general("ext/shared")
        first = make_general("ext/first", deps=[shared])
        second = make_general("ext/second", deps=[shared])

        order = tracker.get_shutdown_order([shared, first, second])

        assert order.index(shared) > order.index(first)
        assert order.index(shared) > order.index(second)

    def test_independent_extensions_keep_registration_order(self, tracker):
        exts = [make_general(f"ext/{name}") for name in ("a", "b", "c")]

        assert tracker.get_shutdown_order(exts) == exts

    def test_dependencies_outside_the_set_are_ignored(self, tracker):
        outside = make_general("ext/outside")
        user = make_general("ext/user", deps=[outside])

        assert tracker.get_shutdown_order([user]) == [user]

    def test_cycle_members_are_appended(self, tracker):
        a = make_general("ext/a")
        b = make_general("ext/b", deps=[a])
        a.deps.append(b)
        free = make_general("ext/free")

        order = tracker.get_shutdown_order([a, b, free])

        assert order[0] is free
        assert set(order[1:]) == {a, b}
        assert len(order) == 3
