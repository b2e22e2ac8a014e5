"""
Extension-specific error classes for the Workbench extension host.

This module defines custom exceptions for extension system operations.
"""

from workbench.utils.errors import WorkbenchError


class ExtensionError(WorkbenchError):
    """Base exception for extension-related errors."""

    def __init__(self, message: str, extension_path: str | None = None, cause: Exception | None = None):
        super().__init__(message, context={"extension_path": extension_path} if extension_path else None)
        self.extension_path = extension_path
        self.cause = cause


class ExtensionLoadError(ExtensionError):
    """Exception raised when an extension object cannot be imported."""
    pass


class ExtensionInitializationError(ExtensionError):
    """Exception raised when an extension's init capability fails.

    The extension stays registered but not inited; registering it again
    retries the initialization.
    """
    pass


class ExtensionConfigurationError(ExtensionError):
    """Exception raised when an extension declaration or configuration is invalid."""
    pass


class ExtensionNotFoundError(ExtensionError):
    """Exception raised when a requested extension is not registered."""
    pass


class DependencyInUseError(ExtensionError):
    """Exception raised when an extension is still required by registered dependents."""

    def __init__(self, message: str, blocking: list[str], extension_path: str | None = None):
        super().__init__(message, extension_path)
        self.blocking = blocking
        self.suggestions = [f"Unregister {path} first" for path in blocking]


class NoEditorAvailableError(ExtensionError):
    """Exception raised when no editor extension can open a document."""

    def __init__(self, message: str, content_type: str, document_key: str | None = None):
        super().__init__(message)
        self.content_type = content_type
        self.document_key = document_key
        self.suggestions = ["Register at least one editor extension"]


class UnknownLayoutModeError(ExtensionError):
    """Exception raised when a layout mode path is not a registered layout extension."""
    pass
