"""
Unit tests for LifecycleController: dependency initialization and layout modes.
"""

import pytest

from resources.tests.helpers.extensions import make_editor, make_general, make_layout
from workbench.extensions import (
    ExtensionConfigurationError,
    ExtensionInitializationError,
    UnknownLayoutModeError,
)

pytestmark = pytest.mark.unit


class TestInitExtension:
    """Test init_extension()."""

    def test_dependency_is_registered_and_initialized_first(self, manager, call_log):
        dep = make_general("ext/d", log=call_log)
        user = make_general("ext/c", deps=[dep], alone=True, log=call_log)

        manager.register("ext/c", user)

        assert dep.registered and dep.inited
        assert user in dep.used_by
        assert call_log == [("ext/d", "init"), ("ext/c", "init")]
        assert manager.get_extension("ext/d") is dep

    def test_markup_is_inserted_before_init(self, manager, markup_inserter):
        tools = make_general("ext/tools", alone=True, markup="<toolbar id='tools'/>")

        manager.register("ext/tools", tools)

        assert markup_inserter.inserted == ["<toolbar id='tools'/>"]

    def test_repeated_init_keeps_edges_unique(self, manager):
        dep = make_general("ext/d")
        user = make_general("ext/c", deps=[dep], alone=True)
        manager.register("ext/c", user)

        manager.lifecycle.init_extension(user)

        assert dep.used_by == [user]
        assert dep.calls == ["init"]
        assert user.calls == ["init", "init"]

    def test_dependency_without_path_is_rejected(self, manager):
        anonymous = make_general(None)
        user = make_general("ext/c", deps=[anonymous], alone=True)

        with pytest.raises(ExtensionConfigurationError):
            manager.register("ext/c", user)

        assert not user.inited

    def test_init_failure_is_wrapped(self, manager):
        broken = make_general("ext/broken", fail_init=1)

        with pytest.raises(ExtensionInitializationError) as exc_info:
            manager.register("ext/broken", broken, force=True)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "ext/broken" in str(exc_info.value)
        assert exc_info.value.context == {"extension_path": "ext/broken"}

    def test_failing_dependency_leaves_dependent_uninitialized(self, manager):
        dep = make_general("ext/d", fail_init=1)
        user = make_general("ext/c", deps=[dep], alone=True)

        with pytest.raises(ExtensionInitializationError):
            manager.register("ext/c", user)

        assert user.calls == []
        assert not user.inited
        assert dep.registered and not dep.inited


class TestLayoutMode:
    """Test set_layout_mode()."""

    def test_switching_layout_modes(self, manager, call_log):
        split = make_layout("ext/split", log=call_log)
        zen = make_layout("ext/zen", log=call_log)
        manager.register("ext/split", split)
        manager.register("ext/zen", zen)

        assert manager.set_layout_mode("ext/split") is True
        assert manager.current_layout_mode is split

        assert manager.set_layout_mode("ext/zen") is True
        assert manager.current_layout_mode is zen
        assert call_log == [
            ("ext/split", "init"),
            ("ext/split", "enable"),
            ("ext/split", "disable"),
            ("ext/zen", "init"),
            ("ext/zen", "enable"),
        ]

    def test_layout_is_initialized_once(self, manager):
        split = make_layout("ext/split")
        manager.register("ext/split", split)

        manager.set_layout_mode("ext/split")
        manager.set_layout_mode("ext/split")

        assert split.calls == ["init", "enable", "disable", "enable"]

    def test_unknown_mode_clears_current(self, manager):
        split = make_layout("ext/split")
        manager.register("ext/split", split)
        manager.set_layout_mode("ext/split")

        assert manager.set_layout_mode("ext/missing") is False

        assert manager.current_layout_mode is None
        assert split.calls[-1] == "disable"

    def test_non_layout_path_is_not_a_mode(self, manager):
        editor = make_editor("ext/code", ["text/plain"])
        manager.register("ext/code", editor)

        assert manager.set_layout_mode("ext/code") is False
        assert editor.calls == []

    def test_failed_layout_init_clears_current_mode(self, manager):
        split = make_layout("ext/split")
        zen = make_layout("ext/zen", fail_init=1)
        manager.register("ext/split", split)
        manager.register("ext/zen", zen)
        manager.set_layout_mode("ext/split")

        with pytest.raises(ExtensionInitializationError):
            manager.set_layout_mode("ext/zen")

        assert manager.current_layout_mode is None
        assert split.calls == ["init", "enable", "disable"]

        assert manager.set_layout_mode("ext/zen") is True
        assert manager.current_layout_mode is zen
        assert split.calls.count("disable") == 1
        assert zen.calls == ["init", "init", "enable"]

    def test_require_layout_mode_raises(self, manager):
        with pytest.raises(UnknownLayoutModeError) as exc_info:
            manager.lifecycle.require_layout_mode("ext/missing")

        assert exc_info.value.extension_path == "ext/missing"

    def test_require_layout_mode_returns_mode(self, manager):
        split = make_layout("ext/split")
        manager.register("ext/split", split)

        assert manager.lifecycle.require_layout_mode("ext/split") is split
