"""Exceptions raised at the skypass API boundary.

Malformed input derives from ``ValueError`` so callers that already guard
TLE parsing with ``except ValueError`` keep working.
"""

from __future__ import annotations


class SkypassError(Exception):
    """Base class for all skypass errors."""


class DataSourceError(SkypassError, ValueError):
    """The TLE record is missing, unreadable or malformed."""


class InvalidParameterError(SkypassError, ValueError):
    """An observer or search parameter is non-numeric or out of range.

    Attributes:
        field: Name of the offending parameter.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class SearchCancelled(SkypassError):
    """A pass search was aborted by its cancellation callback."""
