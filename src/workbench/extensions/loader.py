"""
Extension loader for the Workbench extension host.

This module imports extension objects named in configuration, such as
``"my_package.editors:MarkdownEditor"``.
"""

import importlib
import inspect
import logging

from workbench.extensions.errors import ExtensionLoadError
from workbench.extensions.interfaces import Extension

logger = logging.getLogger(__name__)


def split_target(target: str) -> tuple[str, str]:
    """Split ``module:attr`` or ``module.attr`` into module and attribute names."""
    target = target.strip()
    if ":" in target:
        module_name, _, attr = target.partition(":")
    else:
        module_name, _, attr = target.rpartition(".")
    if not module_name or not attr:
        raise ExtensionLoadError(f"Invalid extension target {target!r}, expected 'module:attr'")
    return module_name, attr


class ExtensionLoader:
    """Imports and instantiates extensions from dotted targets."""

    def __init__(self) -> None:
        self.loaded: dict[str, Extension] = {}

    def load(self, target: str) -> Extension:
        """Load the extension named by ``target``.

        Classes are instantiated without arguments; module-level instances
        are returned as is. Loading the same target twice returns the same
        instance.

        Raises:
            ExtensionLoadError: If the target cannot be imported or is not
                an extension
        """
        if target in self.loaded:
            return self.loaded[target]

        module_name, attr = split_target(target)

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.error(f"Failed to import extension module {module_name}: {e}")
            raise ExtensionLoadError(f"Cannot import {module_name}: {e!s}", cause=e) from e

        try:
            obj = getattr(module, attr)
        except AttributeError as e:
            raise ExtensionLoadError(f"Module {module_name} has no attribute {attr}", cause=e) from e

        if inspect.isclass(obj):
            if not issubclass(obj, Extension) or inspect.isabstract(obj):
                raise ExtensionLoadError(f"{target} is not a concrete Extension class")
            try:
                obj = obj()
            except Exception as e:
                logger.error(f"Failed to instantiate {target}: {e}")
                raise ExtensionLoadError(f"Failed to instantiate {target}: {e!s}", cause=e) from e

        if not isinstance(obj, Extension):
            raise ExtensionLoadError(f"{target} is not an Extension (got {type(obj).__name__})")

        self.loaded[target] = obj
        logger.debug(f"Loaded extension object from {target}")
        return obj
