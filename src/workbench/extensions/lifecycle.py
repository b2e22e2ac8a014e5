"""
Extension lifecycle controller.

Drives init -> enable -> disable -> destroy for single extensions and
initializes missing dependencies first.
"""

import logging
from typing import TYPE_CHECKING, Any

from workbench.core.interfaces import IMarkupInserter
from workbench.extensions.dependencies import DependencyTracker
from workbench.extensions.errors import (
    ExtensionConfigurationError,
    ExtensionInitializationError,
    UnknownLayoutModeError,
)
from workbench.extensions.interfaces import ActiveExtensions, Extension, ExtensionType

if TYPE_CHECKING:
    from workbench.extensions.registry import ExtensionRegistry

logger = logging.getLogger(__name__)


class LifecycleController:
    """Initializes extensions and switches the current layout mode."""

    def __init__(
        self,
        registry: "ExtensionRegistry",
        tracker: DependencyTracker,
        markup_inserter: IMarkupInserter,
        active: ActiveExtensions,
    ):
        self.registry = registry
        self.tracker = tracker
        self.markup_inserter = markup_inserter
        self.active = active

    def init_extension(self, extension: Extension, parent: Any = None) -> None:
        """Initialize an extension after registering its dependencies.

        Args:
            extension: Registered extension to initialize
            parent: Surface passed to the extension's init()

        Raises:
            ExtensionInitializationError: If the extension's init() fails.
                The extension stays registered and can be retried.
        """
        if extension.markup is not None:
            self.markup_inserter.insert_markup(extension.markup)

        for dep in extension.deps:
            if not dep.registered:
                if not dep.path:
                    raise ExtensionConfigurationError(
                        f"Dependency of {extension.path} has no path", extension.path
                    )
                self.registry.register(dep.path, dep, force=True)
            self.tracker.add_edge(dep, extension)

        try:
            extension.init(parent)
        except Exception as e:
            logger.error(f"Extension {extension.path} failed to initialize: {e}")
            raise ExtensionInitializationError(
                f"Failed to initialize extension {extension.path}: {e!s}", extension.path, e
            ) from e

        extension.inited = True
        logger.info(f"Extension initialized: {extension.path}")

    def set_layout_mode(self, path: str) -> bool:
        """Make the layout extension at ``path`` the current layout mode.

        The previous mode is disabled first. An unknown path clears the
        current mode.

        Returns:
            True if the mode was activated, False if ``path`` is unknown
        """
        if self.active.layout_mode is not None:
            self.active.layout_mode.disable()
            logger.debug(f"Layout mode disabled: {self.active.layout_mode.path}")
            self.active.layout_mode = None

        module = self.registry.get(path)
        if module is None or module.type is not ExtensionType.LAYOUT:
            self.active.layout_mode = None
            logger.warning(f"Unknown layout mode: {path}")
            return False

        if not module.inited:
            self.init_extension(module)

        module.enable()
        self.active.layout_mode = module
        logger.info(f"Layout mode set to {path}")
        return True

    def require_layout_mode(self, path: str) -> Extension:
        """Like set_layout_mode() but raises for an unknown path."""
        if not self.set_layout_mode(path):
            raise UnknownLayoutModeError(f"No layout extension registered at {path}", path)
        return self.active.layout_mode
