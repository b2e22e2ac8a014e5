"""
Content-type routing to editor extensions.
"""

import logging

from workbench.extensions.interfaces import Extension

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"


def normalize_content_type(content_type: str | None) -> str:
    """Drop parameters such as ``;charset=utf-8`` and surrounding whitespace."""
    return (content_type or "").split(";", 1)[0].strip()


class ContentTypeRouter:
    """Maps content types to the editor extension responsible for them.

    Whenever at least one editor is registered there is exactly one default
    editor; it is used for content types nobody claims.
    """

    def __init__(self) -> None:
        self._content_types: dict[str, Extension] = {}
        self._editors: list[Extension] = []
        self._default: Extension | None = None

    @property
    def default(self) -> Extension | None:
        return self._default

    @default.setter
    def default(self, editor: Extension) -> None:
        if editor not in self._editors:
            raise ValueError(f"{editor.path} is not a registered editor")
        self._default = editor
        logger.info(f"Default editor set to {editor.path}")

    def register_editor(self, editor: Extension) -> None:
        if editor not in self._editors:
            self._editors.append(editor)

        for content_type in editor.content_types:
            previous = self._content_types.get(content_type)
            if previous is not None and previous is not editor:
                logger.warning(f"Content type {content_type} moves from {previous.path} to {editor.path}")
            self._content_types[content_type] = editor

        if self._default is None:
            self._default = editor
            logger.debug(f"{editor.path} is the default editor")

    def unregister_editor(self, editor: Extension) -> None:
        if editor in self._editors:
            self._editors.remove(editor)

        for content_type in [ct for ct, ext in self._content_types.items() if ext is editor]:
            del self._content_types[content_type]

        if self._default is editor:
            self._default = self._editors[0] if self._editors else None
            if self._default is not None:
                logger.info(f"Default editor reassigned to {self._default.path}")
            else:
                logger.info("No editor left to act as default")

    def resolve(self, content_type: str | None) -> Extension | None:
        """Return the editor for ``content_type``, falling back to the default."""
        key = normalize_content_type(content_type)
        editor = self._content_types.get(key)
        if editor is None:
            editor = self._default
        return editor

    def mapping(self) -> dict[str, Extension]:
        """Snapshot of the routing table including the ``default`` entry."""
        snapshot = dict(self._content_types)
        if self._default is not None:
            snapshot[DEFAULT_KEY] = self._default
        return snapshot

    @property
    def editors(self) -> list[Extension]:
        return list(self._editors)
