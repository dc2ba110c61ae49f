"""
Transport for the shared configuration object.

The configuration reaches backends through a zero-argument supplier. The
default supplier is the bound ``get`` of a :class:`SerializableConfiguration`,
which pickles along with whatever holds it. That lets a resolver and its
configuration be shipped to worker processes together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any

__all__ = ["SerializableConfiguration"]


class SerializableConfiguration:
    """
    Picklable holder for a configuration object.

    The value is held by reference. Callers that keep mutating their
    configuration after handing it over should pass a copy.

    Example:
        >>> conf = SerializableConfiguration({"fs.defaultFS": "file:///"})
        >>> supplier = conf.get
        >>> supplier()["fs.defaultFS"]
        'file:///'
    """

    def __init__(self, configuration: Any) -> None:
        self._configuration = configuration

    def get(self) -> Any:
        """Return the wrapped configuration."""
        return self._configuration

    def __repr__(self) -> str:
        return f"SerializableConfiguration({self._configuration!r})"
