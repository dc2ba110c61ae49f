"""
Location scheme resolution.

Maps a location string to the identifier of the backend that serves it.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_SCHEME",
    "FALLBACK_BACKEND",
    "S3_BACKEND",
    "SCHEME_TO_BACKEND",
    "scheme",
    "resolve_backend_id",
]

DEFAULT_SCHEME = "fs"
FALLBACK_BACKEND = "hadoop"
S3_BACKEND = "s3"

SCHEME_TO_BACKEND: dict[str, str] = {
    DEFAULT_SCHEME: FALLBACK_BACKEND,
    "s3": S3_BACKEND,
    "s3a": S3_BACKEND,
    "s3n": S3_BACKEND,
}


def scheme(location: str) -> str:
    """
    Extract the scheme from a location.

    The scheme is everything before the first colon. A location without a
    colon, or one that starts with a colon, has the default scheme.

    Example:
        >>> scheme("s3a://bucket/key")
        's3a'
        >>> scheme("/tmp/table/data.parquet")
        'fs'
    """
    colon_pos = location.find(":")
    if colon_pos > 0:
        return location[:colon_pos]

    return DEFAULT_SCHEME


def resolve_backend_id(location: str) -> str:
    """Return the backend identifier for a location, or the fallback."""
    return SCHEME_TO_BACKEND.get(scheme(location), FALLBACK_BACKEND)
