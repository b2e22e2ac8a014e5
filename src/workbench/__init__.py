"""
Workbench - extension host for editor-style applications.

This package provides:
- Registration of extensions with dependency tracking
- Safe activation and deactivation ordering
- Content-type routing of documents to editor extensions
- Editor and layout-mode switching as the user moves between documents
"""

__version__ = "0.1.0"
