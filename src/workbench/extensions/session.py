"""
Editing sessions and editor switching.

A session binds an open document to the editor extension that owns it,
together with the document's model and undo history. Sessions of the same
editor share a single editing surface; switching between them rebinds the
surface instead of creating a new one.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from workbench.core.interfaces import IActionTracker, IDialogPresenter, IDocumentModel, ITabHost
from workbench.extensions.errors import NoEditorAvailableError
from workbench.extensions.interfaces import ActiveExtensions, Extension
from workbench.extensions.lifecycle import LifecycleController
from workbench.extensions.registry import ExtensionRegistry
from workbench.extensions.router import ContentTypeRouter, normalize_content_type

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    OPENING = "opening"
    OPEN = "open"
    ACTIVE = "active"
    CLOSED = "closed"


@dataclass(eq=False)
class Session:
    """An open document bound to its editor extension."""
    content_key: str
    editor_handler: Extension
    document_model: IDocumentModel
    action_tracker: IActionTracker
    page: Any = None
    state: SessionState = SessionState.OPENING


@dataclass(eq=False)
class EditorSurface:
    """The editing surface shared by all sessions of one editor."""
    path: str
    page: Any = None
    document_model: IDocumentModel | None = None
    action_tracker: IActionTracker | None = None
    session: Session | None = None
    rebind_count: int = 0

    def bind(self, session: Session) -> bool:
        """Point the surface at ``session``'s model and tracker.

        Returns:
            True if anything had to be rebound
        """
        changed = False
        if self.document_model is not session.document_model:
            self.document_model = session.document_model
            changed = True
        if self.action_tracker is not session.action_tracker:
            self.action_tracker = session.action_tracker
            changed = True
        self.session = session
        if changed:
            self.rebind_count += 1
        return changed

    def unbind(self) -> None:
        self.document_model = None
        self.action_tracker = None
        self.session = None


def content_type_of(document_node: Any) -> str:
    """Read the content type a host attached to a document node."""
    if isinstance(document_node, Mapping):
        return document_node.get("content_type") or document_node.get("contenttype") or ""
    return getattr(document_node, "content_type", "") or ""


@dataclass
class SessionManager:
    """Keeps exactly one editor extension enabled for the active document."""

    registry: ExtensionRegistry
    router: ContentTypeRouter
    lifecycle: LifecycleController
    tab_host: ITabHost
    dialogs: IDialogPresenter
    active: ActiveExtensions
    model_factory: Callable[[], IDocumentModel]
    tracker_factory: Callable[[], IActionTracker]
    sessions: dict[str, Session] = field(default_factory=dict)
    surfaces: dict[str, EditorSurface] = field(default_factory=dict)
    active_session: Session | None = None

    @property
    def current_editor(self) -> Extension | None:
        return self.active.editor

    @property
    def current_layout_mode(self) -> Extension | None:
        return self.active.layout_mode

    def open_document(self, identifier: str, document_node: Any, content_type: str | None = None) -> Session:
        """Open a document, or reactivate it if it is already open.

        Args:
            identifier: Document key (usually the file name)
            document_node: Content handed to the new document model
            content_type: Overrides the content type read from the node

        Returns:
            The session for ``identifier``

        Raises:
            NoEditorAvailableError: If no editor extension is registered
            ExtensionInitializationError: If the editor fails to initialize
        """
        existing = self.sessions.get(identifier)
        if existing is not None:
            logger.debug(f"Document {identifier} already open, reactivating")
            self.tab_host.set(identifier)
            return existing

        if content_type is None:
            content_type = content_type_of(document_node)

        editor = self.router.resolve(content_type)
        if editor is None:
            self.dialogs.alert(
                "No editor is registered",
                "Could not find any editor to display content",
                "There is something wrong with the configuration of your IDE. No editor plugin is found.",
            )
            raise NoEditorAvailableError(
                f"No editor available for content type {normalize_content_type(content_type)!r}",
                content_type=content_type,
                document_key=identifier,
            )

        surface = self._ensure_surface(editor)

        if self.active.editor is not None and self.active.editor is not editor:
            self.active.editor.disable()
            logger.debug(f"Editor disabled: {self.active.editor.path}")

        session = Session(
            content_key=identifier,
            editor_handler=editor,
            document_model=self.model_factory(),
            action_tracker=self.tracker_factory(),
        )
        session.document_model.load(document_node)
        session.page = self.tab_host.add(identifier, identifier, editor.path)
        session.state = SessionState.OPEN
        self.sessions[identifier] = session

        surface.bind(session)
        self.tab_host.set(identifier)
        self._activate(session)

        editor.enable()
        self.active.editor = editor
        logger.info(f"Opened {identifier} with {editor.path}")
        return session

    def before_switch(self, next_session: Session) -> bool:
        """Rebind the shared surface to ``next_session`` before it is shown.

        Returns:
            True if the surface had to be rebound
        """
        surface = self.surfaces.get(next_session.editor_handler.path)
        if surface is None:
            return False
        changed = surface.bind(next_session)
        if changed:
            logger.debug(f"Surface {surface.path} rebound to {next_session.content_key}")
        return changed

    def after_switch(self, previous_session: Session | None, next_session: Session) -> None:
        """Swap the enabled editor if the new document has a different one."""
        to_handler = self.registry.get(next_session.editor_handler.path)
        from_handler = None
        if previous_session is not None and previous_session is not next_session:
            from_handler = self.registry.get(previous_session.editor_handler.path)

        if from_handler is not to_handler:
            if from_handler is not None:
                from_handler.disable()
            if to_handler is not None:
                to_handler.enable()
            logger.debug(
                f"Editor switch {from_handler.path if from_handler else None} -> "
                f"{to_handler.path if to_handler else None}"
            )

        self.active.editor = to_handler
        self._activate(next_session)

    def close_session(self, session: Session | str) -> bool:
        """Release a closed document's model and undo history.

        Returns:
            False if the session is unknown or already closed
        """
        if isinstance(session, str):
            session = self.sessions.get(session)
        if session is None or session.state is SessionState.CLOSED:
            return False

        session.document_model.destroy()
        session.action_tracker.reset()
        session.action_tracker.destroy()

        surface = self.surfaces.get(session.editor_handler.path)
        if surface is not None and surface.session is session:
            surface.unbind()

        session.state = SessionState.CLOSED
        if self.sessions.get(session.content_key) is session:
            del self.sessions[session.content_key]
        self.tab_host.remove(session.content_key)
        if self.active_session is session:
            self.active_session = None

        logger.info(f"Closed {session.content_key}")
        return True

    def close_all(self) -> int:
        """Close every open session; returns how many were closed."""
        return sum(1 for session in list(self.sessions.values()) if self.close_session(session))

    def get_session(self, key: str) -> Session | None:
        return self.sessions.get(key)

    def list_sessions(self) -> list[Session]:
        return list(self.sessions.values())

    def _ensure_surface(self, editor: Extension) -> EditorSurface:
        surface = self.surfaces.get(editor.path)
        if surface is None:
            surface = EditorSurface(path=editor.path, page=self.tab_host.add_surface(editor.path))
            self.surfaces[editor.path] = surface
        if not editor.inited:
            self.lifecycle.init_extension(editor, surface)
        return surface

    def _activate(self, session: Session) -> None:
        if self.active_session is not None and self.active_session is not session:
            if self.active_session.state is SessionState.ACTIVE:
                self.active_session.state = SessionState.OPEN
        session.state = SessionState.ACTIVE
        self.active_session = session
