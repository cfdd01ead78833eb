"""File-level errors raised while verifying a geofeed.

Fatal errors stop processing before any result is meaningful. Aggregate errors
are attached to a finished report so callers can still show partial output.
"""
from __future__ import annotations


class GeofeedError(Exception):
    """Base class for every file-level geofeed failure."""


class GeofeedReadError(GeofeedError):
    """The geofeed could not be opened, or a CSV record could not be read."""


class DatabaseOpenError(GeofeedError):
    """A reference database could not be opened."""


class NotUTF8Error(GeofeedError):
    def __init__(self, message: str = "geofeed is not valid UTF-8") -> None:
        super().__init__(message)


class EmptyGeofeedError(GeofeedError):
    def __init__(self, message: str = "geofeed is empty") -> None:
        super().__init__(message)


class InvalidGeofeedError(GeofeedError):
    def __init__(self, message: str = "geofeed does not comply with the RFC 8805 standards") -> None:
        super().__init__(message)
