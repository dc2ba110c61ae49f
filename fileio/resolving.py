"""
FileIO that picks its backend from the location scheme.

Example:
    >>> from fileio import ResolvingFileIO
    >>> io = ResolvingFileIO()
    >>> io.initialize({"s3.region": "us-east-1"})
    >>> io.set_configuration({"fs.defaultFS": "file:///"})
    >>> out = io.new_output_file("s3://bucket/path/data.parquet")
    >>> io.delete_file("/tmp/scratch/data.parquet")
    >>> io.close()
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from fileio.backends.base import BaseFileIO
from fileio.exceptions import BackendCloseError, BackendLoadError, ConfigurationError
from fileio.loader import default_loader
from fileio.registry import BackendRegistry
from fileio.schemes import FALLBACK_BACKEND, resolve_backend_id
from fileio.serialization import SerializableConfiguration

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    from fileio.backends.base import FileIO, InputFile, OutputFile
    from fileio.loader import BackendLoader

__all__ = ["ResolvingFileIO"]

logger = logging.getLogger(__name__)


class ResolvingFileIO(BaseFileIO):
    """
    FileIO that delegates each call to the backend serving the location.

    Backends are loaded on first use, once per backend identifier, and
    shared by every location that resolves to that identifier until
    :meth:`close` or :meth:`initialize` is called. If the resolved backend
    cannot be loaded, the fallback backend is used instead.

    Attributes:
        loader: The backend loader used to construct backends.
    """

    def __init__(
        self,
        loader: BackendLoader | None = None,
        properties: Mapping[str, str] | None = None,
    ) -> None:
        self.loader = loader if loader is not None else default_loader
        self._registry = BackendRegistry()
        self._properties: Mapping[str, str] = MappingProxyType(dict(properties or {}))
        self._conf_supplier: Callable[[], Any] | None = None

    def new_input_file(self, location: str) -> InputFile:
        return self.io_for(location).new_input_file(location)

    def new_output_file(self, location: str) -> OutputFile:
        return self.io_for(location).new_output_file(location)

    def delete_file(self, location: str) -> None:
        self.io_for(location).delete_file(location)

    def initialize(self, properties: Mapping[str, str]) -> None:
        """
        Discard all cached backends and store new properties.

        Backends loaded afterwards are initialized with ``properties``. If a
        cached backend fails to close, the new properties are still stored
        and the close error is raised.

        A backend loaded by a concurrent caller while this call runs may
        still be initialized with the old properties and stay cached. Do not
        initialize a resolver that other threads are using.
        """
        try:
            self.close()
        finally:
            self._properties = MappingProxyType(dict(properties))

    def properties(self) -> Mapping[str, str]:
        """Return a read-only view of the current properties."""
        return self._properties

    def close(self) -> None:
        """
        Close and discard all cached backends.

        Every backend is closed even if some fail. A single failure is
        re-raised as is; several are raised together as a BackendCloseError.
        """
        errors: list[Exception] = []

        for io in self._registry.clear_all():
            try:
                io.close()
            except Exception as e:
                logger.error(f"Failed to close backend {type(io).__name__}: {e}")
                errors.append(e)

        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise BackendCloseError(errors) from errors[0]

    def get_configuration(self) -> Any:
        """Return the shared configuration, or None if none was set."""
        if self._conf_supplier is None:
            return None
        return self._conf_supplier()

    def set_configuration(self, configuration: Any) -> None:
        self._conf_supplier = SerializableConfiguration(configuration).get

    def with_configuration_transform(
        self, transform: Callable[[Any], Callable[[], Any]]
    ) -> None:
        """
        Replace the configuration supplier with ``transform(configuration)``.

        Used to swap in a supplier that can travel to other processes.

        Raises:
            ConfigurationError: If no configuration has been set, or the
                transform does not return a callable supplier.
        """
        if self._conf_supplier is None:
            raise ConfigurationError("No configuration to transform")

        supplier = transform(self._conf_supplier())
        if not callable(supplier):
            raise ConfigurationError(
                f"Configuration transform must return a supplier, got {type(supplier).__name__}"
            )
        self._conf_supplier = supplier

    def io_for(self, location: str) -> FileIO:
        """Return the backend serving ``location``, loading it if needed."""
        identifier = resolve_backend_id(location)
        return self._registry.get_or_create(identifier, lambda: self._load(identifier))

    def _load(self, identifier: str) -> FileIO:
        conf = self.get_configuration()

        try:
            return self.loader.load(identifier, self._properties, conf)
        except BackendLoadError as e:
            logger.warning(
                f"Failed to load backend: {identifier}, falling back to {FALLBACK_BACKEND}",
                exc_info=e,
            )
            try:
                return self.loader.load(FALLBACK_BACKEND, self._properties, conf)
            except BackendLoadError as fallback_error:
                logger.warning(
                    f"Failed to load backend: {FALLBACK_BACKEND} (fallback)",
                    exc_info=fallback_error,
                )
                # surface the original error, keep the fallback's for diagnosis
                e.secondary = fallback_error
                raise e

    def __getstate__(self) -> dict[str, Any]:
        # cached backends and the registry lock stay behind
        return {
            "loader": None if self.loader is default_loader else self.loader,
            "properties": dict(self._properties),
            "conf_supplier": self._conf_supplier,
        }

    def __setstate__(self, state: dict[str, Any]) -> None:
        loader = state["loader"]
        self.loader = loader if loader is not None else default_loader
        self._registry = BackendRegistry()
        self._properties = MappingProxyType(state["properties"])
        self._conf_supplier = state["conf_supplier"]
