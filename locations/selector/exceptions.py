"""
Location Selector — Exceptions

@file locations/selector/exceptions.py
"""


class SelectorError(Exception):
    """Base class for location selector errors."""


class FetchError(SelectorError):
    """Network or service failure while talking to the location service."""

    def __init__(self, message='Failed to fetch location data.', *, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class LocationNotLoadedError(SelectorError, LookupError):
    """A province was referenced before the root hierarchy listed it."""
