"""
Dependency tracking between extensions.

``used_by`` edges are recorded lazily: when an extension is initialized,
each of its dependencies learns that it is now used by that extension.
An extension cannot be unregistered while any registered extension uses it.
"""

import logging

from workbench.extensions.interfaces import Extension

logger = logging.getLogger(__name__)


class DependencyTracker:
    """Maintains used-by edges and answers unregister-safety questions."""

    def add_edge(self, dependency: Extension, dependent: Extension) -> None:
        """Record that ``dependent`` uses ``dependency``."""
        if dependent not in dependency.used_by:
            dependency.used_by.append(dependent)
            logger.debug(f"{dependent.path} now uses {dependency.path}")

    def blocking_dependents(self, extension: Extension) -> list[str]:
        """Paths of registered extensions that still use ``extension``."""
        return [user.path for user in extension.used_by if user.registered]

    def can_unregister(self, extension: Extension) -> bool:
        return not self.blocking_dependents(extension)

    def get_shutdown_order(self, extensions: list[Extension]) -> list[Extension]:
        """Order ``extensions`` so that dependents come before their dependencies.

        Args:
            extensions: Extensions in registration order

        Returns:
            The same extensions, safe to unregister front to back
        """
        members = {id(ext): ext for ext in extensions}

        # Kahn's algorithm: an extension is ready once nothing left depends on it
        pending_users = dict.fromkeys(members, 0)
        for ext in extensions:
            for dep in ext.deps:
                if id(dep) in members and dep is not ext:
                    pending_users[id(dep)] += 1

        queue = [ext for ext in extensions if pending_users[id(ext)] == 0]
        result: list[Extension] = []
        done: set[int] = set()

        while queue:
            current = queue.pop(0)
            if id(current) in done:
                continue
            done.add(id(current))
            result.append(current)

            for dep in current.deps:
                key = id(dep)
                if key in members and key not in done and dep is not current:
                    pending_users[key] -= 1
                    if pending_users[key] == 0:
                        queue.append(dep)

        if len(result) != len(members):
            logger.warning("Circular dependencies detected between extensions")
            result.extend(ext for ext in extensions if id(ext) not in done)

        return result
