"""
Custom exceptions for the resolving FileIO.

This module defines specific exception types for failures that happen while
picking, loading, configuring, or closing storage backends. Errors raised by a
backend's own file operations are never wrapped in these types.
"""

from __future__ import annotations


class FileIOError(Exception):
    """Base exception for all resolving FileIO errors."""

    pass


class BackendLoadError(FileIOError):
    """
    Raised when a backend cannot be constructed.

    When both the resolved backend and the fallback backend fail, the error
    for the resolved backend is raised and the fallback's error is attached
    as ``secondary``.

    Attributes:
        identifier: The backend identifier that failed to load.
        secondary: Load error from a follow-up attempt, if any.
    """

    def __init__(
        self,
        identifier: str,
        message: str = "Failed to load backend",
        secondary: BackendLoadError | None = None,
    ) -> None:
        super().__init__(f"{message}: {identifier}")
        self.identifier = identifier
        self.secondary = secondary

    def __str__(self) -> str:
        text = super().__str__()
        if self.secondary is not None:
            text += f" (fallback also failed: {self.secondary})"
        return text


class BackendCloseError(FileIOError):
    """Raised when more than one cached backend fails to close."""

    def __init__(self, errors: list[BaseException]) -> None:
        summary = "; ".join(f"{type(e).__name__}: {e}" for e in errors)
        super().__init__(f"Failed to close {len(errors)} backends: {summary}")
        self.errors = list(errors)


class ConfigurationError(FileIOError):
    """Raised when the shared configuration is missing or invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
