"""
Host integration layer for the Workbench extension host.

This package contains the collaborator interfaces the extension core calls
into, and headless defaults for running without a UI.
"""

from .host import (
    InMemoryLayoutSelector,
    InMemoryTabHost,
    LoggingDialogPresenter,
    NullMarkupInserter,
)
from .interfaces import (
    IActionTracker,
    IDialogPresenter,
    IDocumentModel,
    ILayoutSelector,
    IMarkupInserter,
    ITabHost,
)

__all__ = [
    "IActionTracker",
    "IDialogPresenter",
    "IDocumentModel",
    "ILayoutSelector",
    "IMarkupInserter",
    "ITabHost",
    "InMemoryLayoutSelector",
    "InMemoryTabHost",
    "LoggingDialogPresenter",
    "NullMarkupInserter",
]
