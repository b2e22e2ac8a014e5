"""
Extension registry for the Workbench extension host.

This module keeps the lookup table of registered extensions, the manifest of
known paths, and the per-kind bookkeeping done on register and unregister.
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from workbench.core.interfaces import IDialogPresenter, ILayoutSelector
from workbench.extensions.dependencies import DependencyTracker
from workbench.extensions.errors import (
    DependencyInUseError,
    ExtensionConfigurationError,
    ExtensionNotFoundError,
)
from workbench.extensions.interfaces import ActiveExtensions, Extension, ExtensionType
from workbench.extensions.manifest import ManifestStore
from workbench.extensions.router import ContentTypeRouter
from workbench.extensions.validation import ExtensionValidator

if TYPE_CHECKING:
    from workbench.extensions.lifecycle import LifecycleController

logger = logging.getLogger(__name__)

# Kinds that are initialized as soon as they are registered. Layouts and
# editors are initialized on first use.
EAGER_TYPES = frozenset({ExtensionType.GENERAL, ExtensionType.EDITOR_PLUGIN})


def format_in_use_message(blocking: list[str]) -> str:
    return (
        "This extension cannot be disabled, because it is still in use by the following extensions:"
        "<br /><br /> - " + "<br /> - ".join(blocking)
        + "<br /><br /> Please disable those extensions first."
    )


class ExtensionRegistry:
    """Registry of extensions keyed by their unique path."""

    def __init__(
        self,
        tracker: DependencyTracker,
        router: ContentTypeRouter,
        layout_selector: ILayoutSelector,
        dialogs: IDialogPresenter,
        active: ActiveExtensions,
        manifest: ManifestStore | None = None,
        validator: ExtensionValidator | None = None,
    ):
        self.tracker = tracker
        self.router = router
        self.layout_selector = layout_selector
        self.dialogs = dialogs
        self.active = active
        self.manifest = manifest if manifest is not None else ManifestStore()
        self.validator = validator if validator is not None else ExtensionValidator()
        self.lifecycle: "LifecycleController | None" = None

        self._extensions: dict[str, Extension] = {}

        self._on_register: dict[ExtensionType, Callable[[Extension], None]] = {
            ExtensionType.GENERAL: self._init_now,
            ExtensionType.LAYOUT: self._register_layout,
            ExtensionType.EDITOR: self._register_editor,
            ExtensionType.EDITOR_PLUGIN: self._init_now,
        }
        self._on_unregister: dict[ExtensionType, Callable[[Extension], None]] = {
            ExtensionType.GENERAL: lambda extension: None,
            ExtensionType.LAYOUT: self._unregister_layout,
            ExtensionType.EDITOR: self._unregister_editor,
            ExtensionType.EDITOR_PLUGIN: lambda extension: None,
        }

        logger.info("Extension registry initialized")

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, path: str, extension: Extension, force: bool = False) -> Extension:
        """Register an extension under ``path``.

        Registering an already registered extension returns it unchanged,
        except that a failed initialization is retried. General extensions
        that are not ``alone`` are only declared unless ``force`` is set;
        they get registered once something depends on them.

        Args:
            path: Unique identifier of the extension
            extension: Extension instance
            force: Register a General extension even if nothing needs it yet

        Returns:
            The extension instance

        Raises:
            ExtensionConfigurationError: If the declaration is invalid or the
                path belongs to another extension
            ExtensionInitializationError: If the extension's init() fails
        """
        if extension.registered:
            if extension.type in EAGER_TYPES and not extension.inited:
                logger.info(f"Retrying initialization of {extension.path}")
                self._init_now(extension)
            return extension

        result = self.validator.validate_declaration(extension, path)
        for warning in result.warnings:
            logger.warning(warning)
        if not result.valid:
            raise ExtensionConfigurationError("; ".join(result.errors), path or None)

        existing = self._extensions.get(path)
        if existing is not None and existing is not extension:
            raise ExtensionConfigurationError(f"Path {path} is already registered by another extension", path)

        self.manifest.upsert(path, extension)
        extension.path = path

        if not force and extension.type is ExtensionType.GENERAL and not extension.alone:
            logger.debug(f"Extension declared: {path}")
            return extension

        extension.registered = True
        self._extensions[path] = extension
        logger.info(f"Registered extension: {path} ({extension.type.value})")

        self._on_register[extension.type](extension)
        return extension

    def unregister(self, extension: Extension, silent: bool = False, *, ignore_dependents: bool = False) -> bool:
        """Unregister an extension and the General dependencies only it used.

        Args:
            extension: Extension to unregister
            silent: Do not alert the user when the extension is still in use
            ignore_dependents: Skip the in-use check (used during shutdown)

        Returns:
            True if the extension was unregistered
        """
        return self._unregister(extension, silent, ignore_dependents, set())

    def require_unregister(self, extension: Extension) -> None:
        """Unregister or raise DependencyInUseError without alerting.

        Raises:
            ExtensionNotFoundError: If the extension is not registered
            DependencyInUseError: If registered extensions still use it
        """
        if not extension.registered:
            raise ExtensionNotFoundError(f"Extension {extension.path} is not registered", extension.path)
        blocking = self.tracker.blocking_dependents(extension)
        if blocking:
            raise DependencyInUseError(
                f"Extension {extension.path} is still in use", blocking, extension.path
            )
        self._unregister(extension, True, False, set())

    def _unregister(self, extension: Extension, silent: bool, ignore_dependents: bool, visited: set[int]) -> bool:
        if id(extension) in visited:
            return False
        visited.add(id(extension))

        if not extension.registered:
            logger.debug(f"Extension {extension.path} is not registered")
            return False

        if not ignore_dependents:
            blocking = self.tracker.blocking_dependents(extension)
            if blocking:
                logger.warning(f"Extension {extension.path} is still in use by: {blocking}")
                if not silent:
                    self.dialogs.alert(
                        "Could not disable extension",
                        "Extension is still in use",
                        format_in_use_message(blocking),
                    )
                return False

        extension.registered = False
        if self._extensions.get(extension.path) is extension:
            del self._extensions[extension.path]

        for dep in extension.deps:
            if dep.registered and dep.type is ExtensionType.GENERAL and not dep.alone:
                self._unregister(dep, True, False, visited)

        self._on_unregister[extension.type](extension)
        self.manifest.set_enabled(extension.path, False)

        if extension.inited:
            extension.destroy()
            extension.inited = False

        logger.info(f"Unregistered extension: {extension.path}")
        return True

    # ------------------------------------------------------------------
    # Per-kind bookkeeping
    # ------------------------------------------------------------------

    def _init_now(self, extension: Extension) -> None:
        if self.lifecycle is None:
            raise RuntimeError("Registry has no lifecycle controller attached")
        self.lifecycle.init_extension(extension)

    def _register_layout(self, extension: Extension) -> None:
        extension.layout_item = self.layout_selector.add_item(extension.path, extension.name or extension.path)

    def _register_editor(self, extension: Extension) -> None:
        self.router.register_editor(extension)

    def _unregister_layout(self, extension: Extension) -> None:
        if extension.layout_item is not None:
            self.layout_selector.remove_item(extension.layout_item)
            extension.layout_item = None

        if self.active.layout_mode is extension:
            if extension.inited:
                extension.disable()
            self.active.layout_mode = None
            logger.info(f"Current layout mode {extension.path} cleared")

    def _unregister_editor(self, extension: Extension) -> None:
        self.router.unregister_editor(extension)

        if self.active.editor is extension:
            if extension.inited:
                extension.disable()
            self.active.editor = None
            logger.info(f"Current editor {extension.path} cleared")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, path: str) -> Extension | None:
        return self._extensions.get(path)

    def require(self, path: str) -> Extension:
        """Like get() but raises ExtensionNotFoundError."""
        extension = self._extensions.get(path)
        if extension is None:
            raise ExtensionNotFoundError(f"Extension {path} is not registered", path)
        return extension

    def is_registered(self, path: str) -> bool:
        return path in self._extensions

    def list_extensions(self) -> list[Extension]:
        """Registered extensions in registration order."""
        return list(self._extensions.values())

    def list_paths(self) -> list[str]:
        return list(self._extensions.keys())

    def get_shutdown_order(self) -> list[Extension]:
        return self.tracker.get_shutdown_order(self.list_extensions())

    def get_registry_stats(self) -> dict[str, Any]:
        """Counts by kind and status for diagnostics."""
        type_counts: dict[str, int] = {}
        status_counts: dict[str, int] = {}

        for extension in self._extensions.values():
            type_counts[extension.type.value] = type_counts.get(extension.type.value, 0) + 1
            status_counts[extension.status.value] = status_counts.get(extension.status.value, 0) + 1

        return {
            "total_extensions": len(self._extensions),
            "manifest_records": len(self.manifest),
            "type_counts": type_counts,
            "status_counts": status_counts,
            "content_types": sorted(self.router.mapping()),
        }
