"""
Presentation adapters.

PlayerPresenter mirrors the coordinator's streams for a view and adds the
display helpers the now-playing and library screens need. SearchPresenter
drives the search screen from an injected lookup function. Neither holds
playback state of its own; all commands go to the coordinator.
"""

from concurrent.futures import Future
from typing import Callable, Iterable, List, Optional, Sequence

from loguru import logger

from music_session.domain.library.catalog import albums_by_source, search_albums
from music_session.domain.library.exceptions import TrackLookupError
from music_session.domain.library.models import Album, Track, TrackSource, format_time
from music_session.domain.playback.coordinator import SessionCoordinator
from music_session.domain.playback.events import SubscriptionBag
from music_session.domain.playback.state import PlaybackStatus


class PlayerPresenter:
    """Read-only view of the session plus forwarding commands."""

    def __init__(self, coordinator: SessionCoordinator, albums: Iterable[Album] = ()):
        self._coordinator = coordinator
        self.albums: List[Album] = list(albums)
        self.is_loading = False
        self.error_message: Optional[str] = None
        self._load_future: Optional[Future] = None
        self._on_change: List[Callable[[str, object], None]] = []

        self._subscriptions = SubscriptionBag()
        for name in ("status", "elapsed", "current_track", "duration", "volume", "queue", "source"):
            observable = getattr(coordinator, name)
            self._subscriptions.add(observable.subscribe(self._relay(name)))

    def _relay(self, name: str) -> Callable[[object], None]:
        def relay(value: object) -> None:
            for callback in list(self._on_change):
                callback(name, value)

        return relay

    def on_change(self, callback: Callable[[str, object], None]) -> None:
        """Register ``callback(stream_name, value)`` for every session change."""
        self._on_change.append(callback)

    def close(self) -> None:
        self._subscriptions.cancel_all()
        self._on_change.clear()

    # ── Mirrored state ──

    @property
    def current_track(self) -> Optional[Track]:
        return self._coordinator.current_track.value

    @property
    def status(self) -> PlaybackStatus:
        return self._coordinator.status.value

    @property
    def current_time(self) -> float:
        return self._coordinator.elapsed.value

    @property
    def duration(self) -> float:
        return self._coordinator.duration.value

    @property
    def volume(self) -> float:
        return self._coordinator.volume.value

    @property
    def queue(self) -> Sequence[Track]:
        return self._coordinator.queue.value

    @property
    def current_source(self) -> TrackSource:
        return self._coordinator.source.value

    # ── Display helpers ──

    @property
    def formatted_current_time(self) -> str:
        return format_time(self.current_time)

    @property
    def formatted_duration(self) -> str:
        return format_time(self.duration)

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 0.0
        return min(self.current_time / self.duration, 1.0)

    @property
    def is_playing(self) -> bool:
        return self.status is PlaybackStatus.PLAYING

    @property
    def can_play(self) -> bool:
        return self.current_track is not None and self.status is not PlaybackStatus.LOADING

    @property
    def can_pause(self) -> bool:
        return self.status is PlaybackStatus.PLAYING

    @property
    def can_stop(self) -> bool:
        return self.status in (PlaybackStatus.PLAYING, PlaybackStatus.PAUSED)

    # ── Commands ──

    def play(self, track: Track) -> "Future[Track]":
        """Play a track, tracking ``is_loading`` until the load settles."""
        self.error_message = None
        future = self._coordinator.play(track)
        self._load_future = future
        self.is_loading = True
        future.add_done_callback(self._load_settled)
        return future

    def _load_settled(self, future: "Future[Track]") -> None:
        # A superseded load settling must not clear the newer load's flag
        if future is self._load_future:
            self.is_loading = False
            self._load_future = None

    def toggle_play_pause(self) -> None:
        """Playing -> pause; Paused/Stopped with a track -> play it again."""
        status = self.status
        if status is PlaybackStatus.PLAYING:
            self.pause()
        elif status in (PlaybackStatus.PAUSED, PlaybackStatus.STOPPED):
            track = self.current_track
            if track is not None:
                self.play(track)

    def pause(self) -> None:
        self._coordinator.pause()

    def resume(self) -> None:
        self._coordinator.resume()

    def stop(self) -> None:
        self._coordinator.stop()

    def seek(self, time: float) -> None:
        self._coordinator.seek(time)

    def set_volume(self, level: float) -> None:
        self._coordinator.set_volume(level)

    def play_next(self) -> None:
        self._coordinator.play_next()

    def play_previous(self) -> None:
        self._coordinator.play_previous()

    def add_to_queue(self, track: Track) -> None:
        self._coordinator.enqueue(track)

    def remove_from_queue(self, index: int) -> None:
        self._coordinator.dequeue(index)

    def move_in_queue(self, from_indices, to_offset: int) -> None:
        self._coordinator.move_in_queue(from_indices, to_offset)

    def clear_error(self) -> None:
        self.error_message = None

    # ── Library helpers ──

    def albums_by_source(self, source: Optional[TrackSource]) -> List[Album]:
        return albums_by_source(self.albums, source)

    def albums_by_search(self, search_text: str) -> List[Album]:
        return search_albums(self.albums, search_text)


class SearchPresenter:
    """Search screen state: results, loading flag, and error message.

    A lookup failure sets ``error_message`` and clears nothing else; the
    playback session is never touched by a failed search.
    """

    def __init__(
        self,
        search: Callable[[str], List[Track]],
        search_by_artist_and_title: Optional[Callable[[str, str], List[Track]]] = None,
        player: Optional[PlayerPresenter] = None,
    ):
        self._search = search
        self._search_by_artist_and_title = search_by_artist_and_title
        self._player = player
        self.search_text = ""
        self.search_results: List[Track] = []
        self.is_loading = False
        self.error_message: Optional[str] = None

    @staticmethod
    def split_query(query: str) -> tuple[str, str]:
        """Split "artist - title" into (artist, title); otherwise ("", query)."""
        parts = query.split(" - ")
        if len(parts) > 1:
            return parts[0].strip(), parts[1].strip()
        return "", query

    def perform_search(self, query: str) -> List[Track]:
        """Run a lookup and store results or the failure description."""
        self.search_text = query
        if not query:
            self.search_results = []
            return self.search_results

        self.is_loading = True
        self.error_message = None
        artist, title = self.split_query(query)
        try:
            if artist and title and self._search_by_artist_and_title is not None:
                self.search_results = self._search_by_artist_and_title(artist, title)
            else:
                self.search_results = self._search(query)
        except TrackLookupError as e:
            logger.warning(f"Search failed for {query!r}: {e.description}")
            self.error_message = e.description
        finally:
            self.is_loading = False
        return self.search_results

    def clear_search(self) -> None:
        self.search_text = ""
        self.search_results = []
        self.error_message = None

    def play_result(self, track: Track) -> None:
        if self._player is not None:
            self._player.play(track)

    def enqueue_result(self, track: Track) -> None:
        if self._player is not None:
            self._player.add_to_queue(track)
