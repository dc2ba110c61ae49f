"""
Storage backend interfaces for the resolving FileIO.

Concrete backends live outside this package and are made available by
registering a factory with a :class:`fileio.loader.BackendLoader`.
"""

from fileio.backends.base import (
    BaseFileIO,
    Configurable,
    FileIO,
    InputFile,
    OutputFile,
)

__all__ = [
    "BaseFileIO",
    "Configurable",
    "FileIO",
    "InputFile",
    "OutputFile",
]
