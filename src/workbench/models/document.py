"""
Document resources owned by an editing session.

A session owns exactly one DocumentModel (the loaded content) and one
ActionTracker (its undo/redo history). Both are discarded when the session
closes.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from workbench.core.interfaces import IActionTracker, IDocumentModel


class ResourceDestroyedError(RuntimeError):
    """Raised when a destroyed model or tracker is used again."""


class DocumentModel(IDocumentModel):
    """In-memory document content."""

    def __init__(self) -> None:
        self.data: Any = None
        self.loaded = False
        self.destroyed = False

    def load(self, node: Any) -> None:
        if self.destroyed:
            raise ResourceDestroyedError("Cannot load into a destroyed model")
        self.data = node
        self.loaded = True

    def destroy(self) -> None:
        self.data = None
        self.loaded = False
        self.destroyed = True


@dataclass
class Action:
    """A reversible edit."""
    do: Callable[[], Any]
    undo: Callable[[], Any]
    name: str = ""


class ActionTracker(IActionTracker):
    """Undo/redo stacks for one document."""

    def __init__(self) -> None:
        self.undo_stack: list[Action] = []
        self.redo_stack: list[Action] = []
        self.destroyed = False

    def _check(self) -> None:
        if self.destroyed:
            raise ResourceDestroyedError("Action tracker has been destroyed")

    def execute(self, action: Action) -> Any:
        """Run an action and record it; clears the redo stack."""
        self._check()
        result = action.do()
        self.undo_stack.append(action)
        self.redo_stack.clear()
        return result

    def undo(self) -> bool:
        self._check()
        if not self.undo_stack:
            return False
        action = self.undo_stack.pop()
        action.undo()
        self.redo_stack.append(action)
        return True

    def redo(self) -> bool:
        self._check()
        if not self.redo_stack:
            return False
        action = self.redo_stack.pop()
        action.do()
        self.undo_stack.append(action)
        return True

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def reset(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()

    def destroy(self) -> None:
        self.undo_stack = []
        self.redo_stack = []
        self.destroyed = True
