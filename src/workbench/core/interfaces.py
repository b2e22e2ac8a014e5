"""
Host collaborator interfaces.

The extension host never renders anything itself. Markup, dialogs, the tab
strip, the layout-mode selector and the per-document resources are provided
by the surrounding application through these abstract base classes.
"""

from abc import ABC, abstractmethod
from typing import Any


class IMarkupInserter(ABC):
    """Renders an opaque UI fragment into the document tree."""

    @abstractmethod
    def insert_markup(self, markup: Any) -> None:
        """Insert the fragment. The return value is never consumed."""
        pass


class IDialogPresenter(ABC):
    """Presents user-facing alerts."""

    @abstractmethod
    def alert(self, title: str, summary: str, body_html: str) -> None:
        """Show an alert dialog."""
        pass


class ITabHost(ABC):
    """Page bookkeeping of the tab strip widget."""

    @abstractmethod
    def get_page(self, key: str) -> Any | None:
        """Return the page handle for ``key`` or None."""
        pass

    @abstractmethod
    def add(self, key: str, caption: str, page_type: str) -> Any:
        """Add a document page and return its handle."""
        pass

    @abstractmethod
    def set(self, key: str) -> None:
        """Make the page for ``key`` the active tab."""
        pass

    @abstractmethod
    def add_surface(self, path: str) -> Any:
        """Create the hidden page hosting an editor's shared surface."""
        pass

    def remove(self, key: str) -> None:
        """Forget the page for ``key``. Optional for hosts."""
        pass


class ILayoutSelector(ABC):
    """The layout-mode selector control."""

    @abstractmethod
    def add_item(self, value: str, caption: str) -> Any:
        """Add an entry and return a handle usable with remove_item()."""
        pass

    @abstractmethod
    def remove_item(self, handle: Any) -> None:
        """Remove a previously added entry."""
        pass


class IDocumentModel(ABC):
    """Content of one open document."""

    @abstractmethod
    def load(self, node: Any) -> None:
        """Load document content."""
        pass

    @abstractmethod
    def destroy(self) -> None:
        """Release the content."""
        pass


class IActionTracker(ABC):
    """Undo/redo history of one open document."""

    @abstractmethod
    def reset(self) -> None:
        """Clear the undo and redo history."""
        pass

    @abstractmethod
    def destroy(self) -> None:
        """Tear the tracker down."""
        pass
