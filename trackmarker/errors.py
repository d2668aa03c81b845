"""Exception types raised by the track marker engine."""
from __future__ import annotations


class TrackMarkerError(Exception):
    """Base class for every error raised by :mod:`trackmarker`."""


class InvalidPathError(TrackMarkerError, ValueError):
    """The supplied path does not contain at least two resolvable points."""


class InvalidSpeedError(TrackMarkerError, ValueError):
    """A playback speed that is not a finite, strictly positive number."""
