"""
Stubbed audio output for the local backend.

No audio is decoded or played. SimulatedAudioOutput only keeps a playback
clock that runs while "playing", so the local backend has something to read
on each tick, the way a real player reads its device position.
"""

from typing import Callable, Optional, Protocol

from loguru import logger

from music_session.domain.library.models import Track


class AudioOutput(Protocol):
    """Minimal audio device surface the local backend drives."""

    @property
    def position(self) -> float: ...

    @property
    def is_open(self) -> bool: ...

    volume: float

    def open(self, track: Track) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek(self, position: float) -> None: ...

    def close(self) -> None: ...


class SimulatedAudioOutput:
    """Audio output whose position advances with a supplied clock.

    The position is clamped to the open track's duration; reaching the end
    does not stop or notify anything.
    """

    def __init__(self, clock: Callable[[], float]):
        self._clock = clock
        self._track: Optional[Track] = None
        self._anchor_position = 0.0
        self._anchor_time = 0.0
        self._running = False
        self.volume = 1.0

    @property
    def is_open(self) -> bool:
        return self._track is not None

    @property
    def duration(self) -> float:
        return self._track.duration if self._track else 0.0

    @property
    def position(self) -> float:
        if self._track is None:
            return 0.0
        position = self._anchor_position
        if self._running:
            position += self._clock() - self._anchor_time
        return round(min(max(position, 0.0), self.duration), 3)

    def open(self, track: Track) -> None:
        logger.debug(f"Audio output opened: {track.url}")
        self._track = track
        self._anchor_position = 0.0
        self._anchor_time = self._clock()
        self._running = False

    def play(self) -> None:
        if self._track is None or self._running:
            return
        self._anchor_time = self._clock()
        self._running = True

    def pause(self) -> None:
        if not self._running:
            return
        self._anchor_position = self.position
        self._running = False

    def seek(self, position: float) -> None:
        self._anchor_position = min(max(position, 0.0), self.duration)
        self._anchor_time = self._clock()

    def close(self) -> None:
        self._track = None
        self._anchor_position = 0.0
        self._running = False
