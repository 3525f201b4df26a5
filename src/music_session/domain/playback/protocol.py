"""
Playback backend capability interface.

Backends are interchangeable behind PlaybackBackend and selected by the
coordinator from a registry keyed by TrackSource. They share plumbing by
composition (BackendStreams, PendingLoad), not inheritance.
"""

from concurrent.futures import Future
import math
from typing import Optional, Protocol

from music_session.domain.library.models import Track, TrackSource

from .events import Observable, ReadOnlyObservable
from .scheduler import TimerHandle
from .state import PlaybackStatus


class PlaybackBackend(Protocol):
    """Simulated player for one track source.

    Exposes three independently observable streams (status, elapsed,
    current_track), each emitting only on change.
    """

    source: TrackSource
    status: ReadOnlyObservable[PlaybackStatus]
    elapsed: ReadOnlyObservable[float]
    current_track: ReadOnlyObservable[Optional[Track]]

    @property
    def duration(self) -> float: ...

    def load(self, track: Track) -> "Future[Track]": ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def stop(self) -> None: ...

    def seek(self, time: float) -> None: ...

    def set_volume(self, level: float) -> None: ...

    def activate(self) -> None: ...

    def deactivate(self) -> None: ...


class BackendStreams:
    """The three observable values every backend publishes.

    The backend keeps this object private and exposes only the read-only
    views from ``views()``.
    """

    def __init__(self, name: str):
        self.status: Observable[PlaybackStatus] = Observable(f"{name}.status", PlaybackStatus.STOPPED)
        self.elapsed: Observable[float] = Observable(f"{name}.elapsed", 0.0)
        self.current_track: Observable[Optional[Track]] = Observable(f"{name}.track", None)

    def views(self) -> tuple[ReadOnlyObservable, ReadOnlyObservable, ReadOnlyObservable]:
        """Read-only (status, elapsed, current_track)."""
        return self.status.read_only(), self.elapsed.read_only(), self.current_track.read_only()

    def reset(self) -> None:
        """Return to Stopped with no track.

        Elapsed and track are cleared before the status changes, mirroring
        start(), so a status observer never sees Stopped with stale values.
        """
        self.elapsed.set(0.0)
        self.current_track.set(None)
        self.status.set(PlaybackStatus.STOPPED)

    def start(self, track: Track) -> None:
        """Publish a completed load: elapsed 0, then track, then Playing.

        Status goes last so a status observer always sees the new track and
        elapsed already in place.
        """
        self.elapsed.set(0.0)
        self.current_track.set(track)
        self.status.set(PlaybackStatus.PLAYING)


class PendingLoad:
    """An in-flight Loading -> Playing transition.

    ``deferred_status`` records a pause/resume issued while loading; it is
    applied once Playing is reached (last command wins).
    """

    def __init__(self, track: Track, handle: TimerHandle):
        self.track = track
        self.handle = handle
        self.future: "Future[Track]" = Future()
        self.deferred_status: Optional[PlaybackStatus] = None

    def cancel(self) -> None:
        self.handle.cancel()
        self.future.cancel()


def clamp_volume(level: float) -> float:
    """Clamp to 0.0 - 1.0. NaN becomes 0.0."""
    level = float(level)
    if math.isnan(level):
        return 0.0
    return min(max(level, 0.0), 1.0)


def clamp_time(time: float, duration: float) -> float:
    """Clamp to 0 - duration. NaN becomes 0.0."""
    time = float(time)
    if math.isnan(time):
        return 0.0
    return min(max(time, 0.0), duration)
