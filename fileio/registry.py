"""
Cache of live backend instances, keyed by backend identifier.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from fileio.backends.base import FileIO

__all__ = ["BackendRegistry"]

logger = logging.getLogger(__name__)


class BackendRegistry:
    """
    Thread-safe, lazily populated map of identifier to backend.

    Hits are served without taking the lock. A miss takes the lock, checks
    again, and only then creates the backend, so concurrent callers for the
    same identifier trigger a single creation. An entry is stored only
    after it is fully constructed. The lock is reentrant so a creator may
    look up other identifiers on the same registry.
    """

    def __init__(self) -> None:
        self._instances: dict[str, FileIO] = {}
        self._lock = threading.RLock()

    def get(self, identifier: str) -> FileIO | None:
        """Return the cached backend, if any."""
        return self._instances.get(identifier)

    def get_or_create(
        self, identifier: str, create: Callable[[], FileIO]
    ) -> FileIO:
        """
        Return the cached backend for ``identifier``, creating it on a miss.

        Args:
            identifier: Backend identifier.
            create: Called under the lock to build the backend. Errors
                propagate and nothing is cached.

        Returns:
            The single live backend for the identifier.
        """
        io = self._instances.get(identifier)
        if io is not None:
            return io

        with self._lock:
            # double check while holding the lock
            io = self._instances.get(identifier)
            if io is not None:
                logger.debug(f"Backend {identifier} created by a concurrent caller")
                return io

            io = create()
            self._instances[identifier] = io

        return io

    def clear_all(self) -> list[FileIO]:
        """
        Remove every cached backend and return them.

        The caller is responsible for closing the returned backends; this
        keeps slow closes outside the lock.
        """
        with self._lock:
            instances = list(self._instances.values())
            self._instances.clear()

        logger.debug(f"Cleared {len(instances)} cached backends")
        return instances

    def __len__(self) -> int:
        return len(self._instances)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._instances
