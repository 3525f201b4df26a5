"""
Music library domain models.

Contains the immutable value types for tracks and albums.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TrackSource(str, Enum):
    """Which playback backend owns a track."""

    LOCAL = "local"
    REMOTE = "remote"

    @property
    def display_name(self) -> str:
        return "Local" if self is TrackSource.LOCAL else "Spotify"

    def __str__(self) -> str:
        return self.value


def format_time(seconds: float) -> str:
    """Format seconds as m:ss (e.g. 354 -> "5:54")."""
    total = int(max(seconds, 0))
    return f"{total // 60}:{total % 60:02d}"


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, eq=False)
class Track:
    """Represents a playable track.

    Tracks are value data: the coordinator references them but never owns or
    mutates them. Equality and hashing are keyed on ``id`` alone, so two
    records with the same id are the same track even if metadata differs.
    """

    title: str
    artist: str
    duration: float  # in seconds
    source: TrackSource
    url: str  # playable locator (mock://local/..., spotify://track/...)
    album: Optional[str] = None
    artwork_url: Optional[str] = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"Track duration must be non-negative, got {self.duration}")
        # Accept plain strings ("local" / "remote") for convenience
        if not isinstance(self.source, TrackSource):
            object.__setattr__(self, "source", TrackSource(self.source))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Track):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.artist} - {self.title}"

    @property
    def formatted_duration(self) -> str:
        return format_time(self.duration)


@dataclass(frozen=True, eq=False)
class Album:
    """Represents an album: ordered tracks plus album-level metadata.

    Track order is insertion order.
    """

    title: str
    artist: str
    source: TrackSource
    tracks: tuple[Track, ...] = ()
    year: Optional[int] = None
    artwork_url: Optional[str] = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if not isinstance(self.tracks, tuple):
            object.__setattr__(self, "tracks", tuple(self.tracks))
        if not isinstance(self.source, TrackSource):
            object.__setattr__(self, "source", TrackSource(self.source))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Album):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def duration(self) -> float:
        """Total duration of all tracks in seconds."""
        return sum(track.duration for track in self.tracks)

    @property
    def track_count(self) -> int:
        return len(self.tracks)

    @property
    def formatted_duration(self) -> str:
        return format_time(self.duration)

    @property
    def formatted_year(self) -> str:
        return str(self.year) if self.year is not None else "Unknown Year"
