"""
Interfaces for storage backends.

Backends are matched by capability rather than by inheritance: anything that
provides ``new_input_file``, ``new_output_file``, ``delete_file`` and
``close`` is a :class:`FileIO`. A backend that also wants the shared
configuration additionally provides the :class:`Configurable` methods.

:class:`BaseFileIO` is an optional convenience base with no-op lifecycle
methods and context manager support.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, BinaryIO, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

__all__ = [
    "InputFile",
    "OutputFile",
    "FileIO",
    "Configurable",
    "BaseFileIO",
]


@runtime_checkable
class InputFile(Protocol):
    """A handle for reading a single file."""

    def location(self) -> str:
        """Return the location this handle reads from."""
        ...

    def get_length(self) -> int:
        """Return the total length of the file in bytes."""
        ...

    def new_stream(self) -> BinaryIO:
        """Open a new seekable stream over the file contents."""
        ...

    def exists(self) -> bool:
        """Return True if the file exists."""
        ...


@runtime_checkable
class OutputFile(Protocol):
    """A handle for writing a single file."""

    def location(self) -> str:
        """Return the location this handle writes to."""
        ...

    def create(self) -> BinaryIO:
        """
        Create the file and return a stream for writing it.

        Raises:
            FileExistsError: If the file already exists.
        """
        ...

    def create_or_overwrite(self) -> BinaryIO:
        """Create the file, replacing any existing one, and return a stream."""
        ...

    def to_input_file(self) -> InputFile:
        """Return an input handle for the same location."""
        ...


@runtime_checkable
class FileIO(Protocol):
    """Base capability set every backend must provide."""

    def new_input_file(self, location: str) -> InputFile:
        """Get an input handle for a location."""
        ...

    def new_output_file(self, location: str) -> OutputFile:
        """Get an output handle for a location."""
        ...

    def delete_file(self, location: str) -> None:
        """Delete the file at a location."""
        ...

    def close(self) -> None:
        """Release any resources held by the backend."""
        ...


@runtime_checkable
class Configurable(Protocol):
    """Extended capability for backends that accept the shared configuration."""

    def get_configuration(self) -> Any:
        ...

    def set_configuration(self, configuration: Any) -> None:
        ...

    def with_configuration_transform(
        self, transform: Callable[[Any], Callable[[], Any]]
    ) -> None:
        ...


class BaseFileIO(ABC):
    """
    Convenience base class for backends.

    Subclasses implement the three file operations. ``initialize`` and
    ``close`` are no-ops unless overridden.
    """

    @abstractmethod
    def new_input_file(self, location: str) -> InputFile:
        ...

    @abstractmethod
    def new_output_file(self, location: str) -> OutputFile:
        ...

    @abstractmethod
    def delete_file(self, location: str) -> None:
        ...

    def initialize(self, properties: Mapping[str, str]) -> None:
        """
        Configure the backend from catalog properties.

        Called once by the loader, right after construction.
        """

    def close(self) -> None:
        """Release any resources held by the backend."""

    def __enter__(self) -> BaseFileIO:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
