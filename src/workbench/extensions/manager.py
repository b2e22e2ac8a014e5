"""
Extension manager for the Workbench extension host.

This module wires the registry, dependency tracker, lifecycle controller,
content-type router and session manager into one object, and exposes the
entry points the hosting shell calls.
"""

from collections.abc import Callable
from contextlib import contextmanager
from enum import Enum
from typing import Any

from workbench.core.host import (
    InMemoryLayoutSelector,
    InMemoryTabHost,
    LoggingDialogPresenter,
    NullMarkupInserter,
)
from workbench.core.interfaces import (
    IActionTracker,
    IDialogPresenter,
    IDocumentModel,
    ILayoutSelector,
    IMarkupInserter,
    ITabHost,
)
from workbench.extensions.dependencies import DependencyTracker
from workbench.extensions.errors import ExtensionConfigurationError
from workbench.extensions.interfaces import ActiveExtensions, Extension
from workbench.extensions.lifecycle import LifecycleController
from workbench.extensions.loader import ExtensionLoader
from workbench.extensions.manifest import ManifestStore
from workbench.extensions.registry import ExtensionRegistry
from workbench.extensions.router import ContentTypeRouter
from workbench.extensions.session import Session, SessionManager
from workbench.extensions.validation import ExtensionValidator
from workbench.models.document import ActionTracker, DocumentModel
from workbench.utils.config import WorkbenchSettings, get_settings
from workbench.utils.logging import setup_logging

logger = setup_logging(__name__)


class HostEvent(str, Enum):
    """Notifications the hosting shell forwards to the manager."""
    DOCUMENT_OPENED = "document_opened"
    BEFORE_SWITCH = "before_switch"
    AFTER_SWITCH = "after_switch"
    DOCUMENT_CLOSED = "document_closed"


class ExtensionManager:
    """High-level extension host."""

    def __init__(
        self,
        settings: WorkbenchSettings,
        markup_inserter: IMarkupInserter,
        dialogs: IDialogPresenter,
        tab_host: ITabHost,
        layout_selector: ILayoutSelector,
        model_factory: Callable[[], IDocumentModel],
        tracker_factory: Callable[[], IActionTracker],
    ):
        """Initialize the extension manager.

        Prefer create_manager(), which fills in default collaborators.
        """
        self.settings = settings
        self.dialogs = dialogs if settings.dialogs_enabled else LoggingDialogPresenter()
        self.active = ActiveExtensions()

        self.manifest = ManifestStore()
        self.validator = ExtensionValidator()
        self.loader = ExtensionLoader()
        self.tracker = DependencyTracker()
        self.router = ContentTypeRouter()
        self.registry = ExtensionRegistry(
            tracker=self.tracker,
            router=self.router,
            layout_selector=layout_selector,
            dialogs=self.dialogs,
            active=self.active,
            manifest=self.manifest,
            validator=self.validator,
        )
        self.lifecycle = LifecycleController(
            registry=self.registry,
            tracker=self.tracker,
            markup_inserter=markup_inserter,
            active=self.active,
        )
        self.registry.lifecycle = self.lifecycle
        self.sessions = SessionManager(
            registry=self.registry,
            router=self.router,
            lifecycle=self.lifecycle,
            tab_host=tab_host,
            dialogs=self.dialogs,
            active=self.active,
            model_factory=model_factory,
            tracker_factory=tracker_factory,
        )

        self._event_handlers: dict[HostEvent, Callable[..., Any]] = {
            HostEvent.DOCUMENT_OPENED: self.sessions.open_document,
            HostEvent.BEFORE_SWITCH: self.sessions.before_switch,
            HostEvent.AFTER_SWITCH: self.sessions.after_switch,
            HostEvent.DOCUMENT_CLOSED: self.sessions.close_session,
        }
        self._shut_down = False

        logger.info("Extension manager initialized")

    # ------------------------------------------------------------------
    # Extension API
    # ------------------------------------------------------------------

    def register(self, path: str, extension: Extension, force: bool = False) -> Extension:
        return self.registry.register(path, extension, force)

    def unregister(self, extension: Extension | str, silent: bool = False) -> bool:
        if isinstance(extension, str):
            found = self.registry.get(extension)
            if found is None:
                logger.warning(f"Cannot unregister unknown extension {extension}")
                return False
            extension = found
        return self.registry.unregister(extension, silent)

    def get_extension(self, path: str) -> Extension | None:
        return self.registry.get(path)

    def set_layout_mode(self, path: str) -> bool:
        return self.lifecycle.set_layout_mode(path)

    def resolve(self, content_type: str | None) -> Extension | None:
        return self.router.resolve(content_type)

    @property
    def current_editor(self) -> Extension | None:
        return self.active.editor

    @property
    def current_layout_mode(self) -> Extension | None:
        return self.active.layout_mode

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------

    def open_document(self, identifier: str, document_node: Any, content_type: str | None = None) -> Session:
        return self.sessions.open_document(identifier, document_node, content_type)

    def before_switch(self, next_session: Session) -> bool:
        return self.sessions.before_switch(next_session)

    def after_switch(self, previous_session: Session | None, next_session: Session) -> None:
        self.sessions.after_switch(previous_session, next_session)

    def close_session(self, session: Session | str) -> bool:
        return self.sessions.close_session(session)

    def handle_event(self, event: HostEvent | str, **payload: Any) -> Any:
        """Dispatch a host notification.

        Args:
            event: One of HostEvent (or its string value)
            **payload: Keyword arguments of the matching handler, e.g.
                ``identifier``/``document_node`` for DOCUMENT_OPENED

        Returns:
            Whatever the handler returns
        """
        handler = self._event_handlers[HostEvent(event)]
        logger.debug(f"Host event {HostEvent(event).value}")
        return handler(**payload)

    # ------------------------------------------------------------------
    # Startup and shutdown
    # ------------------------------------------------------------------

    def load_auto_extensions(self) -> list[Extension]:
        """Load, configure and register the extensions named in settings.

        Raises:
            ExtensionLoadError: If a target cannot be imported
            ExtensionConfigurationError: If a configuration fails validation
        """
        loaded: list[Extension] = []

        for path, target in self.settings.extensions_auto_load.items():
            extension = self.loader.load(target)
            extension.path = extension.path or path
            config = self.settings.extensions_config.get(path, {})

            result = self.validator.validate_configuration(extension, config)
            for warning in result.warnings:
                logger.warning(warning)
            if not result.valid:
                raise ExtensionConfigurationError("; ".join(result.errors), path)

            extension.configure(config)
            loaded.append(self.registry.register(path, extension))

        logger.info(f"Auto-loaded {len(loaded)} extensions")

        if self.settings.default_layout_mode:
            self.lifecycle.set_layout_mode(self.settings.default_layout_mode)

        return loaded

    def shutdown(self) -> None:
        """Close all sessions and unregister every extension, dependents first."""
        if self._shut_down:
            logger.debug("Extension manager already shut down")
            return

        closed = self.sessions.close_all()
        logger.info(f"Shutting down extension host ({closed} sessions closed)")

        if self.active.layout_mode is not None:
            self.active.layout_mode.disable()
            self.active.layout_mode = None

        for extension in self.registry.get_shutdown_order():
            if not extension.registered:
                continue
            try:
                self.registry.unregister(extension, silent=True)
            except Exception as e:
                logger.error(f"Error shutting down extension {extension.path}: {e}")

        # Whatever is left uses itself through a dependency cycle
        for extension in self.registry.list_extensions():
            self.registry.unregister(extension, silent=True, ignore_dependents=True)

        self.active.editor = None

        manifest_path = self.settings.get_manifest_path()
        if manifest_path is not None:
            self.manifest.save(manifest_path)

        self._shut_down = True
        logger.info("Extension host shutdown complete")

    @contextmanager
    def managed_lifecycle(self):
        """Context manager for the extension host lifecycle.

        Usage:
            with create_manager().managed_lifecycle() as manager:
                manager.open_document("notes.txt", {"content_type": "text/plain"})
            # Extensions are unregistered
        """
        try:
            self.load_auto_extensions()
            yield self
        finally:
            self.shutdown()

    def get_status(self) -> dict[str, Any]:
        """Snapshot of extension and session state for diagnostics."""
        default = self.router.default
        return {
            "extensions": {
                ext.path: {"type": ext.type.value, "status": ext.status.value}
                for ext in self.registry.list_extensions()
            },
            "sessions": {
                session.content_key: {
                    "editor": session.editor_handler.path,
                    "state": session.state.value,
                }
                for session in self.sessions.list_sessions()
            },
            "current_editor": self.active.editor.path if self.active.editor else None,
            "current_layout_mode": self.active.layout_mode.path if self.active.layout_mode else None,
            "default_editor": default.path if default else None,
            "registry_stats": self.registry.get_registry_stats(),
        }


def create_manager(
    settings: WorkbenchSettings | None = None,
    *,
    markup_inserter: IMarkupInserter | None = None,
    dialogs: IDialogPresenter | None = None,
    tab_host: ITabHost | None = None,
    layout_selector: ILayoutSelector | None = None,
    model_factory: Callable[[], IDocumentModel] | None = None,
    tracker_factory: Callable[[], IActionTracker] | None = None,
) -> ExtensionManager:
    """Create an extension manager, filling in headless collaborators."""
    return ExtensionManager(
        settings=settings if settings is not None else get_settings(),
        markup_inserter=markup_inserter if markup_inserter is not None else NullMarkupInserter(),
        dialogs=dialogs if dialogs is not None else LoggingDialogPresenter(),
        tab_host=tab_host if tab_host is not None else InMemoryTabHost(),
        layout_selector=layout_selector if layout_selector is not None else InMemoryLayoutSelector(),
        model_factory=model_factory if model_factory is not None else DocumentModel,
        tracker_factory=tracker_factory if tracker_factory is not None else ActionTracker,
    )


def shutdown(manager: ExtensionManager) -> None:
    """Shut a manager created by create_manager() down."""
    manager.shutdown()
