"""Pytest configuration for resources/tests.

Ensures the repository root is on sys.path so tests can import
helpers via absolute package path like `resources.tests.helpers`.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from workbench.core.host import (  # noqa: E402
    InMemoryLayoutSelector,
    InMemoryTabHost,
    LoggingDialogPresenter,
    NullMarkupInserter,
)
from workbench.extensions import create_manager  # noqa: E402
from workbench.utils.config import WorkbenchSettings  # noqa: E402


@pytest.fixture
def settings() -> WorkbenchSettings:
    return WorkbenchSettings(_env_file=None, manifest_path=None)


@pytest.fixture
def dialogs() -> LoggingDialogPresenter:
    return LoggingDialogPresenter()


@pytest.fixture
def tab_host() -> InMemoryTabHost:
    return InMemoryTabHost()


@pytest.fixture
def layout_selector() -> InMemoryLayoutSelector:
    return InMemoryLayoutSelector()


@pytest.fixture
def markup_inserter() -> NullMarkupInserter:
    return NullMarkupInserter()


@pytest.fixture
def call_log() -> list:
    return []


@pytest.fixture
def manager(settings, dialogs, tab_host, layout_selector, markup_inserter):
    manager = create_manager(
        settings,
        dialogs=dialogs,
        tab_host=tab_host,
        layout_selector=layout_selector,
        markup_inserter=markup_inserter,
    )
    yield manager
    manager.shutdown()
