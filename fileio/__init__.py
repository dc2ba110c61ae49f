"""
Resolving FileIO - one entry point for files across storage backends.

The backend serving a location is picked from its scheme:
- ``s3:``, ``s3a:`` and ``s3n:`` locations go to the ``s3`` backend
- everything else, including plain paths, goes to the ``hadoop`` backend

Backends are registered as factories and loaded on first use, once per
backend, even under concurrent access. If a backend cannot be loaded, the
``hadoop`` backend is used instead.

Example:
    >>> from fileio import ResolvingFileIO, register_backend
    >>> @register_backend("hadoop")
    ... def _hadoop_factory():
    ...     from my_project.hadoop import HadoopFileIO
    ...     return HadoopFileIO()
    >>> with ResolvingFileIO() as io:
    ...     io.initialize({"warehouse": "/data/warehouse"})
    ...     handle = io.new_input_file("/data/warehouse/t/data.parquet")
"""

from fileio.backends import (
    BaseFileIO,
    Configurable,
    FileIO,
    InputFile,
    OutputFile,
)
from fileio.exceptions import (
    BackendCloseError,
    BackendLoadError,
    ConfigurationError,
    FileIOError,
)
from fileio.loader import BackendLoader, default_loader, register_backend
from fileio.registry import BackendRegistry
from fileio.resolving import ResolvingFileIO
from fileio.schemes import (
    DEFAULT_SCHEME,
    FALLBACK_BACKEND,
    S3_BACKEND,
    SCHEME_TO_BACKEND,
    resolve_backend_id,
    scheme,
)
from fileio.serialization import SerializableConfiguration

__version__ = "0.1.0"

__all__ = [
    # Core
    "ResolvingFileIO",
    "BackendRegistry",
    "BackendLoader",
    "default_loader",
    "register_backend",
    "SerializableConfiguration",
    # Schemes
    "DEFAULT_SCHEME",
    "FALLBACK_BACKEND",
    "S3_BACKEND",
    "SCHEME_TO_BACKEND",
    "scheme",
    "resolve_backend_id",
    # Backend interfaces
    "BaseFileIO",
    "Configurable",
    "FileIO",
    "InputFile",
    "OutputFile",
    # Exceptions
    "FileIOError",
    "BackendLoadError",
    "BackendCloseError",
    "ConfigurationError",
]
