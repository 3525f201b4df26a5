"""Playback exceptions.

Playback commands never raise; these cover session construction only.
"""

from music_session.domain.library.models import TrackSource


class PlaybackError(Exception):
    """Base exception for playback session errors."""

    pass


class BackendUnavailableError(PlaybackError):
    """Raised when no backend is registered for a track source."""

    def __init__(self, source: TrackSource, message: str | None = None):
        self.source = source
        super().__init__(message or f"No playback backend registered for source '{source.value}'")
