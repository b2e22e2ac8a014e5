"""
Workbench Extension System.

This package registers editor extensions, tracks their dependencies, keeps
activation and deactivation in a safe order, routes documents to the editor
that can handle them and follows the user as they switch between documents.

Key Components:
- Extension: Base class for all extensions (General, Layout, Editor, Editor Plugin)
- ExtensionRegistry: Registration, unregistration and the manifest
- DependencyTracker: used-by edges and unregister safety
- LifecycleController: Initialization and layout modes
- ContentTypeRouter: Content type to editor mapping
- SessionManager: Open documents and editor switching
- ExtensionManager: Facade wiring the above together

Usage:
    from workbench.extensions import EditorExtension, create_manager

    manager = create_manager()
    manager.register("ext/code", CodeEditor(content_types=["text/plain"]))

    session = manager.open_document("notes.txt", {"content_type": "text/plain"})
    ...
    manager.close_session(session)
    manager.shutdown()
"""

from workbench.extensions.dependencies import DependencyTracker
from workbench.extensions.errors import (
    DependencyInUseError,
    ExtensionConfigurationError,
    ExtensionError,
    ExtensionInitializationError,
    ExtensionLoadError,
    ExtensionNotFoundError,
    NoEditorAvailableError,
    UnknownLayoutModeError,
)
from workbench.extensions.interfaces import (
    ActiveExtensions,
    EditorExtension,
    EditorPluginExtension,
    Extension,
    ExtensionStatus,
    ExtensionType,
    GeneralExtension,
    LayoutExtension,
    ManifestRecord,
)
from workbench.extensions.lifecycle import LifecycleController
from workbench.extensions.loader import ExtensionLoader
from workbench.extensions.manager import ExtensionManager, HostEvent, create_manager, shutdown
from workbench.extensions.manifest import ManifestStore
from workbench.extensions.registry import ExtensionRegistry
from workbench.extensions.router import ContentTypeRouter
from workbench.extensions.session import EditorSurface, Session, SessionManager, SessionState
from workbench.extensions.validation import ExtensionValidator

__all__ = [
    # Core interfaces
    "Extension",
    "ExtensionType",
    "ExtensionStatus",
    "GeneralExtension",
    "LayoutExtension",
    "EditorExtension",
    "EditorPluginExtension",
    "ManifestRecord",
    "ActiveExtensions",

    # Main components
    "ExtensionManager",
    "ExtensionRegistry",
    "DependencyTracker",
    "LifecycleController",
    "ContentTypeRouter",
    "SessionManager",
    "Session",
    "SessionState",
    "EditorSurface",
    "ManifestStore",
    "ExtensionLoader",
    "ExtensionValidator",
    "HostEvent",
    "create_manager",
    "shutdown",

    # Exceptions
    "ExtensionError",
    "ExtensionLoadError",
    "ExtensionInitializationError",
    "ExtensionConfigurationError",
    "ExtensionNotFoundError",
    "DependencyInUseError",
    "NoEditorAvailableError",
    "UnknownLayoutModeError",
]
