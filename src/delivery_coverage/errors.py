"""Exceptions raised at the coverage service boundaries."""

from __future__ import annotations


class CoverageError(Exception):
    """Base class for coverage service failures."""


class InvalidCoordinateError(CoverageError, ValueError):
    """Raised when a query coordinate is missing, non-numeric, non-finite or out of range."""


class SnapshotUnavailableError(CoverageError):
    """Raised when the branch snapshot cannot be read from storage."""
