"""
SessionCoordinator - the single authoritative handle for playback.

Owns the active backend selection, the play queue, and the republished
session streams. Views talk only to the coordinator.

Threading: every public method runs under the scheduler's session lock,
the same lock timer callbacks hold, so the (status, elapsed, track) triple
never tears and observers see changes in order.

Backend swap: the coordinator listens to exactly one backend at a time.
Switching cancels all subscriptions to the old backend (and its tick and any
in-flight load) before subscribing to the new one, all under the lock, so a
superseded backend can never publish into the session.
"""

from concurrent.futures import Future
from typing import Iterable, Mapping, Optional, Union

from loguru import logger

from music_session.core.config import PlayerConfig
from music_session.domain.library.models import Track, TrackSource

from . import queue as queue_ops
from .events import Observable, ReadOnlyObservable, SubscriptionBag
from .exceptions import BackendUnavailableError
from .local_player import LocalPlayer
from .protocol import PlaybackBackend, clamp_volume
from .remote_player import RemotePlayer
from .scheduler import Scheduler, ThreadScheduler
from .state import PlaybackStatus, SessionSnapshot


class SessionCoordinator:
    """Mediates between interchangeable backends and session observers."""

    def __init__(
        self,
        scheduler: Scheduler,
        backends: Mapping[TrackSource, PlaybackBackend],
        volume: float = 0.5,
        initial_source: TrackSource = TrackSource.LOCAL,
    ):
        """Initialize the coordinator.

        Args:
            scheduler: Scheduler whose lock serializes all session mutations
            backends: Registry of one backend per TrackSource
            volume: Initial session volume (clamped to 0.0 - 1.0)
            initial_source: Backend active before anything is played

        Raises:
            BackendUnavailableError: If a TrackSource has no backend
        """
        for source in TrackSource:
            if source not in backends:
                raise BackendUnavailableError(source)

        self._scheduler = scheduler
        self._backends = dict(backends)
        self._bindings = SubscriptionBag()

        # Republished session streams; only the coordinator writes them
        self._status: Observable[PlaybackStatus] = Observable("session.status", PlaybackStatus.STOPPED)
        self._elapsed: Observable[float] = Observable("session.elapsed", 0.0)
        self._current_track: Observable[Optional[Track]] = Observable("session.track", None)
        self._duration: Observable[float] = Observable("session.duration", 0.0)
        self._volume: Observable[float] = Observable("session.volume", clamp_volume(volume))
        self._queue: Observable[tuple[Track, ...]] = Observable("session.queue", ())
        self._source: Observable[TrackSource] = Observable("session.source", initial_source)

        self.status: ReadOnlyObservable[PlaybackStatus] = self._status.read_only()
        self.elapsed: ReadOnlyObservable[float] = self._elapsed.read_only()
        self.current_track: ReadOnlyObservable[Optional[Track]] = self._current_track.read_only()
        self.duration: ReadOnlyObservable[float] = self._duration.read_only()
        self.volume: ReadOnlyObservable[float] = self._volume.read_only()
        self.queue: ReadOnlyObservable[tuple[Track, ...]] = self._queue.read_only()
        self.source: ReadOnlyObservable[TrackSource] = self._source.read_only()

        self._active: PlaybackBackend = self._backends[initial_source]
        with self._scheduler.lock:
            self._bind(self._active)

    # ── Backend selection ──

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def active_backend(self) -> PlaybackBackend:
        return self._active

    def backend_for(self, source: TrackSource) -> PlaybackBackend:
        return self._backends[source]

    def switch_backend(self, source: TrackSource) -> None:
        """Stop the active backend and make the backend for ``source`` active.

        The old backend is stopped while still bound, so its Stopped state
        reaches observers; then every old subscription is cancelled before the
        new backend is bound.
        """
        source = TrackSource(source)
        with self._scheduler.lock:
            old = self._active
            old.stop()
            self._bindings.cancel_all()
            old.deactivate()

            self._active = self._backends[source]
            self._source.set(source)
            self._bind(self._active)
            logger.debug(f"Active backend: {source.value}")

    def _bind(self, backend: PlaybackBackend) -> None:
        backend.set_volume(self._volume.value)
        backend.activate()

        # Sync with the new backend's current values (change-only emission)
        self._on_track(backend.current_track.value)
        self._elapsed.set(backend.elapsed.value)
        self._status.set(backend.status.value)

        self._bindings.add(backend.status.subscribe(self._status.set))
        self._bindings.add(backend.elapsed.subscribe(self._elapsed.set))
        self._bindings.add(backend.current_track.subscribe(self._on_track))

    def _on_track(self, track: Optional[Track]) -> None:
        self._current_track.set(track)
        self._duration.set(track.duration if track else 0.0)

    # ── Transport commands ──

    def play(self, track: Track) -> "Future[Track]":
        """Activate the track's backend and start loading it.

        Returns immediately; the Loading -> Playing transition arrives on the
        status stream. The returned future resolves with the track when it
        starts playing and is cancelled if the load is superseded.
        """
        with self._scheduler.lock:
            self.switch_backend(track.source)
            logger.info(f"Play: {track} ({track.source.value})")
            return self._active.load(track)

    def pause(self) -> None:
        with self._scheduler.lock:
            self._active.pause()

    def resume(self) -> None:
        with self._scheduler.lock:
            self._active.resume()

    def stop(self) -> None:
        with self._scheduler.lock:
            self._active.stop()

    def seek(self, time: float) -> None:
        with self._scheduler.lock:
            self._active.seek(time)

    def set_volume(self, level: float) -> None:
        with self._scheduler.lock:
            self._volume.set(clamp_volume(level))
            self._active.set_volume(self._volume.value)

    # ── Queue management ──

    def enqueue(self, track: Track) -> None:
        """Append a track to the queue tail. Duplicates are allowed."""
        with self._scheduler.lock:
            self._queue.set(self._queue.value + (track,))

    def enqueue_all(self, tracks: Iterable[Track]) -> None:
        with self._scheduler.lock:
            self._queue.set(self._queue.value + tuple(tracks))

    def dequeue(self, index: int) -> None:
        """Remove the entry at ``index``; out of range is a no-op."""
        with self._scheduler.lock:
            self._queue.set(tuple(queue_ops.remove_at(self._queue.value, index)))

    def move_in_queue(self, from_indices: Union[int, Iterable[int]], to_offset: int) -> None:
        """Move a block of entries before ``to_offset``, keeping their order."""
        with self._scheduler.lock:
            self._queue.set(tuple(queue_ops.move_items(self._queue.value, from_indices, to_offset)))

    def clear_queue(self) -> None:
        with self._scheduler.lock:
            self._queue.set(())

    def play_next(self) -> Optional["Future[Track]"]:
        """Play the entry after the current track's first queue match.

        Returns:
            The load future, or None if there was nothing to advance to
        """
        return self._play_adjacent(1)

    def play_previous(self) -> Optional["Future[Track]"]:
        """Play the entry before the current track's first queue match."""
        return self._play_adjacent(-1)

    def _play_adjacent(self, offset: int) -> Optional["Future[Track]"]:
        with self._scheduler.lock:
            current = self.current_track.value
            target = queue_ops.get_adjacent_track(
                self._queue.value, current.id if current else None, offset
            )
            if target is None:
                logger.debug(f"No queue entry at offset {offset} from {current}")
                return None
            return self.play(target)

    # ── Reads ──

    def snapshot(self) -> SessionSnapshot:
        """Consistent read of the whole session."""
        with self._scheduler.lock:
            return SessionSnapshot(
                current_track=self.current_track.value,
                status=self.status.value,
                elapsed=self.elapsed.value,
                duration=self.duration.value,
                volume=self._volume.value,
                source=self.source.value,
                queue=self._queue.value,
            )

    def close(self) -> None:
        """Stop playback, detach from the backend and cancel its tick."""
        with self._scheduler.lock:
            self._active.stop()
            self._bindings.cancel_all()
            for backend in self._backends.values():
                backend.deactivate()


def build_coordinator(
    config: Optional[PlayerConfig] = None, scheduler: Optional[Scheduler] = None
) -> SessionCoordinator:
    """Construct the session coordinator with both standard backends.

    Called once at startup; the result is passed explicitly to consumers.

    Args:
        config: Player settings (delays, tick interval, initial volume)
        scheduler: Scheduler to run on (default: a new ThreadScheduler)
    """
    config = config or PlayerConfig()
    scheduler = scheduler or ThreadScheduler()
    backends = {
        TrackSource.LOCAL: LocalPlayer(
            scheduler, load_delay=config.local_load_delay, tick_interval=config.tick_interval
        ),
        TrackSource.REMOTE: RemotePlayer(
            scheduler, load_delay=config.remote_load_delay, tick_interval=config.tick_interval
        ),
    }
    return SessionCoordinator(scheduler, backends, volume=config.volume)
