"""
RemotePlayer - simulated streaming-service playback.

Provides the same interface as LocalPlayer. Loading models remote stream
negotiation (2.0s by default). There is no device clock to read, so the
100ms tick advances ``elapsed`` itself while Playing and, on reaching the
track duration, stops: status -> Stopped, elapsed -> 0, track kept.
"""

from concurrent.futures import Future
from typing import Optional

from loguru import logger

from music_session.domain.library.models import Track, TrackSource

from .protocol import BackendStreams, PendingLoad, clamp_time, clamp_volume
from .scheduler import Scheduler, TimerHandle
from .state import PlaybackStatus


class RemotePlayer:
    """Streaming backend with a self-advancing clock."""

    source = TrackSource.REMOTE

    def __init__(self, scheduler: Scheduler, load_delay: float = 2.0, tick_interval: float = 0.1):
        """Initialize remote player.

        Args:
            scheduler: Timer scheduler; its lock serializes all mutations
            load_delay: Simulated stream negotiation time in seconds
            tick_interval: Clock tick period in seconds; also the elapsed step
        """
        self._scheduler = scheduler
        self.load_delay = load_delay
        self.tick_interval = tick_interval
        self.volume = 1.0

        self._streams = BackendStreams("remote")
        self.status, self.elapsed, self.current_track = self._streams.views()

        self._pending: Optional[PendingLoad] = None
        self._ticker: Optional[TimerHandle] = None

    @property
    def duration(self) -> float:
        track = self.current_track.value
        return track.duration if track else 0.0

    @property
    def active(self) -> bool:
        return self._ticker is not None

    def load(self, track: Track) -> "Future[Track]":
        """Start streaming a track; Playing is reached after ``load_delay``."""
        with self._scheduler.lock:
            self._cancel_pending_load()
            logger.info(f"Negotiating remote stream: {track.url}")
            handle = self._scheduler.call_later(self.load_delay, self._finish_load)
            self._pending = PendingLoad(track, handle)
            self._streams.status.set(PlaybackStatus.LOADING)
            return self._pending.future

    def _finish_load(self) -> None:
        pending, self._pending = self._pending, None
        if pending is None:
            return

        self._streams.start(pending.track)
        logger.info(f"Streaming remote track: {pending.track.url}")

        if pending.deferred_status is PlaybackStatus.PAUSED:
            self.pause()
        pending.future.set_result(pending.track)

    def _cancel_pending_load(self) -> None:
        if self._pending is not None:
            logger.debug(f"Cancelled remote load: {self._pending.track.url}")
            self._pending.cancel()
            self._pending = None

    def pause(self) -> None:
        with self._scheduler.lock:
            if self._pending is not None:
                self._pending.deferred_status = PlaybackStatus.PAUSED
                logger.debug("Pause requested while negotiating; deferred")
                return
            if self.current_track.value is None:
                return
            self._streams.status.set(PlaybackStatus.PAUSED)

    def resume(self) -> None:
        with self._scheduler.lock:
            if self._pending is not None:
                self._pending.deferred_status = PlaybackStatus.PLAYING
                return
            if self.current_track.value is None:
                return
            self._streams.status.set(PlaybackStatus.PLAYING)

    def stop(self) -> None:
        with self._scheduler.lock:
            self._cancel_pending_load()
            self._streams.reset()

    def seek(self, time: float) -> None:
        with self._scheduler.lock:
            if self._pending is not None or self.current_track.value is None:
                return
            self._streams.elapsed.set(clamp_time(time, self.duration))

    def set_volume(self, level: float) -> None:
        """Set volume on the remote device (simulated network call)."""
        with self._scheduler.lock:
            self.volume = clamp_volume(level)
            logger.info(f"Spotify volume set to: {self.volume}")

    def activate(self) -> None:
        with self._scheduler.lock:
            if self._ticker is None:
                self._ticker = self._scheduler.call_every(self.tick_interval, self._tick)

    def deactivate(self) -> None:
        with self._scheduler.lock:
            if self._ticker is not None:
                self._ticker.cancel()
                self._ticker = None

    def _tick(self) -> None:
        if self.status.value is not PlaybackStatus.PLAYING:
            return
        # The final step lands on the duration, never past it
        elapsed = min(round(self.elapsed.value + self.tick_interval, 3), self.duration)
        self._streams.elapsed.set(elapsed)
        if elapsed >= self.duration:
            logger.info(f"Remote track finished: {self.current_track.value}")
            self._streams.elapsed.set(0.0)
            self._streams.status.set(PlaybackStatus.STOPPED)
