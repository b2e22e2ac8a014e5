"""
Default host collaborators.

Headless implementations used when the embedding application does not
provide its own: they keep an in-memory record of what was asked of them
and log it.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from workbench.core.interfaces import (
    IDialogPresenter,
    ILayoutSelector,
    IMarkupInserter,
    ITabHost,
)

logger = logging.getLogger(__name__)


class NullMarkupInserter(IMarkupInserter):
    """Records markup fragments without rendering them."""

    def __init__(self) -> None:
        self.inserted: list[Any] = []

    def insert_markup(self, markup: Any) -> None:
        self.inserted.append(markup)
        logger.debug(f"Markup fragment inserted ({type(markup).__name__})")


@dataclass
class Alert:
    """An alert that was presented."""
    title: str
    summary: str
    body_html: str


class LoggingDialogPresenter(IDialogPresenter):
    """Writes alerts to the log and keeps them for inspection."""

    def __init__(self) -> None:
        self.alerts: list[Alert] = []

    def alert(self, title: str, summary: str, body_html: str) -> None:
        self.alerts.append(Alert(title, summary, body_html))
        logger.warning(f"{title}: {summary}")


@dataclass
class TabPage:
    """A page in the in-memory tab strip."""
    key: str
    caption: str
    page_type: str
    visible: bool = True


@dataclass
class InMemoryTabHost(ITabHost):
    """Tab strip bookkeeping without a widget."""

    pages: dict[str, TabPage] = field(default_factory=dict)
    active_key: str | None = None

    def get_page(self, key: str) -> TabPage | None:
        return self.pages.get(key)

    def add(self, key: str, caption: str, page_type: str) -> TabPage:
        page = TabPage(key=key, caption=caption, page_type=page_type)
        self.pages[key] = page
        return page

    def set(self, key: str) -> None:
        if key not in self.pages:
            raise KeyError(f"No page for {key!r}")
        self.active_key = key

    def add_surface(self, path: str) -> TabPage:
        page = TabPage(key=path, caption=path, page_type=path, visible=False)
        self.pages[path] = page
        return page

    def remove(self, key: str) -> None:
        self.pages.pop(key, None)
        if self.active_key == key:
            self.active_key = None


class InMemoryLayoutSelector(ILayoutSelector):
    """Layout-mode selector entries kept as (value, caption) pairs."""

    def __init__(self) -> None:
        self.items: list[tuple[str, str]] = []

    def add_item(self, value: str, caption: str) -> tuple[str, str]:
        item = (value, caption)
        self.items.append(item)
        return item

    def remove_item(self, handle: tuple[str, str]) -> None:
        if handle in self.items:
            self.items.remove(handle)

    @property
    def values(self) -> list[str]:
        return [value for value, _ in self.items]
