"""
Playback state values.

PlaybackStatus is the single status of a backend or session; SessionSnapshot
is a consistent read of the whole session taken under the session lock.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from music_session.domain.library.models import Track, TrackSource


class PlaybackStatus(str, Enum):
    """Playback status. Initial value is STOPPED; there is no terminal state."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"
    LOADING = "loading"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of the playback session at one instant."""

    current_track: Optional[Track]
    status: PlaybackStatus
    elapsed: float  # seconds
    duration: float  # seconds, 0 when no track
    volume: float  # 0.0 - 1.0
    source: TrackSource
    queue: tuple[Track, ...]

    @property
    def progress(self) -> float:
        """Fraction of the current track played (0.0 when duration is 0)."""
        if self.duration <= 0:
            return 0.0
        return min(self.elapsed / self.duration, 1.0)
