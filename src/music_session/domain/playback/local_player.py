"""
LocalPlayer - simulated playback of local files.

Loading models a file open (1.0s by default). A 100ms tick copies the audio
output's clock into ``elapsed``. The local player never detects end of track:
at the end the output clock stops at the track duration and status stays
Playing.
"""

from concurrent.futures import Future
from typing import Optional

from loguru import logger

from music_session.domain.library.models import Track, TrackSource

from .audio import AudioOutput, SimulatedAudioOutput
from .protocol import BackendStreams, PendingLoad, clamp_time, clamp_volume
from .scheduler import Scheduler, TimerHandle
from .state import PlaybackStatus


class LocalPlayer:
    """Local file backend driving an AudioOutput."""

    source = TrackSource.LOCAL

    def __init__(
        self,
        scheduler: Scheduler,
        output: Optional[AudioOutput] = None,
        load_delay: float = 1.0,
        tick_interval: float = 0.1,
    ):
        """Initialize local player.

        Args:
            scheduler: Timer scheduler; its lock serializes all mutations
            output: Audio output to drive (default: SimulatedAudioOutput on the scheduler clock)
            load_delay: Simulated file-open time in seconds
            tick_interval: Clock tick period in seconds
        """
        self._scheduler = scheduler
        self._output = output or SimulatedAudioOutput(scheduler.now)
        self.load_delay = load_delay
        self.tick_interval = tick_interval

        self._streams = BackendStreams("local")
        self.status, self.elapsed, self.current_track = self._streams.views()

        self._pending: Optional[PendingLoad] = None
        self._ticker: Optional[TimerHandle] = None

    @property
    def output(self) -> AudioOutput:
        return self._output

    @property
    def duration(self) -> float:
        track = self.current_track.value
        return track.duration if track else 0.0

    @property
    def active(self) -> bool:
        return self._ticker is not None

    def load(self, track: Track) -> "Future[Track]":
        """Start loading a track; Playing is reached after ``load_delay``.

        Returns immediately. The returned future resolves with the track when
        the load completes and is cancelled if the load is superseded.
        """
        with self._scheduler.lock:
            self._cancel_pending_load()
            logger.info(f"Loading local track: {track.url}")
            handle = self._scheduler.call_later(self.load_delay, self._finish_load)
            self._pending = PendingLoad(track, handle)
            self._streams.status.set(PlaybackStatus.LOADING)
            return self._pending.future

    def _finish_load(self) -> None:
        pending, self._pending = self._pending, None
        if pending is None:
            return

        self._output.open(pending.track)
        self._output.play()
        self._streams.start(pending.track)
        logger.info(f"Playing local track: {pending.track.url}")

        if pending.deferred_status is PlaybackStatus.PAUSED:
            self.pause()
        pending.future.set_result(pending.track)

    def _cancel_pending_load(self) -> None:
        if self._pending is not None:
            logger.debug(f"Cancelled local load: {self._pending.track.url}")
            self._pending.cancel()
            self._pending = None

    def pause(self) -> None:
        with self._scheduler.lock:
            if self._pending is not None:
                self._pending.deferred_status = PlaybackStatus.PAUSED
                logger.debug("Pause requested while loading; deferred")
                return
            if self.current_track.value is None:
                logger.debug("Pause ignored: no local track")
                return
            self._output.pause()
            self._streams.status.set(PlaybackStatus.PAUSED)

    def resume(self) -> None:
        with self._scheduler.lock:
            if self._pending is not None:
                self._pending.deferred_status = PlaybackStatus.PLAYING
                return
            if self.current_track.value is None:
                logger.debug("Resume ignored: no local track")
                return
            self._output.play()
            self._streams.status.set(PlaybackStatus.PLAYING)

    def stop(self) -> None:
        with self._scheduler.lock:
            self._cancel_pending_load()
            self._output.close()
            self._streams.reset()

    def seek(self, time: float) -> None:
        with self._scheduler.lock:
            if self._pending is not None or self.current_track.value is None:
                logger.debug(f"Seek to {time} ignored: no loaded local track")
                return
            position = clamp_time(time, self.duration)
            self._output.seek(position)
            self._streams.elapsed.set(position)

    def set_volume(self, level: float) -> None:
        with self._scheduler.lock:
            self._output.volume = clamp_volume(level)

    def activate(self) -> None:
        """Start the clock tick. Idempotent."""
        with self._scheduler.lock:
            if self._ticker is None:
                self._ticker = self._scheduler.call_every(self.tick_interval, self._tick)

    def deactivate(self) -> None:
        """Cancel the clock tick. Idempotent."""
        with self._scheduler.lock:
            if self._ticker is not None:
                self._ticker.cancel()
                self._ticker = None

    def _tick(self) -> None:
        if not self._output.is_open:
            return
        if self.status.value in (PlaybackStatus.PLAYING, PlaybackStatus.PAUSED):
            self._streams.elapsed.set(self._output.position)
