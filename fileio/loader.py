"""
Backend loader.

Backends are registered explicitly as factories keyed by identifier, either
on a :class:`BackendLoader` instance or on the module-level
``default_loader`` through the :func:`register_backend` decorator.

Example:
    >>> from fileio.loader import register_backend
    >>> @register_backend("s3")
    ... def _s3_factory():
    ...     from my_project.s3 import S3FileIO
    ...     return S3FileIO()
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from fileio.backends.base import Configurable, FileIO
from fileio.exceptions import BackendLoadError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    BackendFactory = Callable[[], Any]

__all__ = ["BackendLoader", "default_loader", "register_backend"]

logger = logging.getLogger(__name__)


class BackendLoader:
    """
    Registry of backend factories.

    A factory is a zero-argument callable returning a new backend instance.
    Loading an identifier constructs an instance, hands it the shared
    configuration if it is :class:`Configurable`, and initializes it with
    the given properties.
    """

    def __init__(self) -> None:
        self._factories: dict[str, BackendFactory] = {}
        self._lock = threading.Lock()

    def register(self, identifier: str, factory: BackendFactory) -> None:
        """
        Register a factory for an identifier.

        Registering the same identifier again replaces the previous factory.
        """
        with self._lock:
            if identifier in self._factories:
                logger.info(f"Replacing backend factory for {identifier}")
            self._factories[identifier] = factory

    def unregister(self, identifier: str) -> bool:
        """Remove a factory. Returns False if none was registered."""
        with self._lock:
            return self._factories.pop(identifier, None) is not None

    def registered(self) -> list[str]:
        """Return the registered identifiers, sorted."""
        with self._lock:
            return sorted(self._factories)

    def load(
        self,
        identifier: str,
        properties: Mapping[str, str],
        configuration: Any = None,
    ) -> FileIO:
        """
        Construct, configure and initialize a backend.

        Args:
            identifier: Backend identifier to load.
            properties: Properties passed to the backend's ``initialize``.
            configuration: Shared configuration for Configurable backends.

        Returns:
            The initialized backend instance.

        Raises:
            BackendLoadError: If no factory is registered, the factory fails,
                or it returns something that is not a FileIO.
        """
        with self._lock:
            factory = self._factories.get(identifier)

        if factory is None:
            raise BackendLoadError(identifier, "No backend registered")

        try:
            io = factory()
        except Exception as e:
            raise BackendLoadError(
                identifier, f"Cannot construct backend ({type(e).__name__}: {e})"
            ) from e

        if not isinstance(io, FileIO):
            raise BackendLoadError(
                identifier, f"{type(io).__name__} does not implement FileIO"
            )

        try:
            if configuration is not None and isinstance(io, Configurable):
                io.set_configuration(configuration)

            initialize = getattr(io, "initialize", None)
            if initialize is not None:
                initialize(properties)
        except BaseException:
            # the caller never sees this instance, release it here
            try:
                io.close()
            except Exception as close_error:
                logger.warning(
                    f"Failed to close backend {identifier} after setup error: {close_error}"
                )
            raise

        logger.info(f"Loaded backend {identifier}: {type(io).__name__}")
        return io

    def __getstate__(self) -> dict[str, Any]:
        with self._lock:
            return {"factories": dict(self._factories)}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self._factories = state["factories"]
        self._lock = threading.Lock()


default_loader = BackendLoader()


def register_backend(
    identifier: str, loader: BackendLoader | None = None
) -> Callable[[BackendFactory], BackendFactory]:
    """Decorator registering a factory on ``loader`` (default: ``default_loader``)."""
    target = loader if loader is not None else default_loader

    def decorator(factory: BackendFactory) -> BackendFactory:
        target.register(identifier, factory)
        return factory

    return decorator
