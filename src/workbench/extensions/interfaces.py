"""
Extension interfaces for the Workbench extension host.

This module defines the abstract base class every extension derives from,
the closed set of extension kinds, and the manifest record kept for each
registered path.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ExtensionType(str, Enum):
    """Kind of extension. The value is the label shown in the manifest."""
    GENERAL = "General"
    LAYOUT = "Layout"
    EDITOR = "Editor"
    EDITOR_PLUGIN = "Editor Plugin"


class ExtensionStatus(str, Enum):
    """Lifecycle status derived from the registered/inited flags."""
    DECLARED = "declared"
    REGISTERED = "registered"
    INITED = "inited"


class ManifestRecord(BaseModel):
    """Introspection record for a registered extension path."""
    type: str
    name: str = ""
    path: str
    dev: str = ""
    enabled: bool = True

    model_config = ConfigDict(extra="ignore")


class Extension(ABC):
    """Abstract base class for all extensions.

    Subclasses set ``type`` and implement the four lifecycle capabilities.
    ``deps`` are other Extension instances; they are registered and
    initialized on demand before this extension's own ``init`` runs.
    """

    type: ExtensionType = ExtensionType.GENERAL

    def __init__(
        self,
        path: str | None = None,
        name: str = "",
        dev: str = "",
        deps: Iterable["Extension"] | None = None,
        content_types: Iterable[str] | None = None,
        alone: bool = False,
        markup: Any = None,
        configuration_schema: dict[str, Any] | None = None,
    ):
        self.path = path
        self.name = name
        self.dev = dev
        self.deps: list[Extension] = list(deps or [])
        self.content_types: list[str] = list(dict.fromkeys(content_types or []))
        self.alone = alone
        self.markup = markup
        self.configuration_schema: dict[str, Any] = configuration_schema or {}

        self.registered = False
        self.inited = False
        self.used_by: list[Extension] = []
        self.layout_item: Any = None
        self.config: dict[str, Any] = {}

    @property
    def status(self) -> ExtensionStatus:
        if not self.registered:
            return ExtensionStatus.DECLARED
        if not self.inited:
            return ExtensionStatus.REGISTERED
        return ExtensionStatus.INITED

    def configure(self, config: dict[str, Any]) -> None:
        """Receive validated configuration before registration."""
        self.config = dict(config)

    @abstractmethod
    def init(self, parent: Any = None) -> None:
        """Create the extension's resources.

        Args:
            parent: Surface to build into. Editors receive their shared
                editing surface; other kinds usually receive None.
        """
        pass

    @abstractmethod
    def enable(self) -> None:
        """Activate the extension's UI and behaviour."""
        pass

    @abstractmethod
    def disable(self) -> None:
        """Deactivate without releasing resources."""
        pass

    @abstractmethod
    def destroy(self) -> None:
        """Release everything created by init()."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} path={self.path!r} type={self.type.value} status={self.status.value}>"


class GeneralExtension(Extension):
    """Shared infrastructure, usually only initialized as a dependency."""
    type = ExtensionType.GENERAL


class LayoutExtension(Extension):
    """A mutually exclusive UI arrangement."""
    type = ExtensionType.LAYOUT


class EditorExtension(Extension):
    """Edits documents of its content types on a shared surface."""
    type = ExtensionType.EDITOR


class EditorPluginExtension(Extension):
    """Adds features to existing editors."""
    type = ExtensionType.EDITOR_PLUGIN


@dataclass
class ActiveExtensions:
    """The extensions currently enabled by the session layer.

    At most one editor and at most one layout mode are active at a time.
    """
    editor: Extension | None = None
    layout_mode: Extension | None = None
