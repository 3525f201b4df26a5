"""Shared fixtures for the music session test suite."""

import pytest

from music_session.core.config import PlayerConfig
from music_session.domain.library.models import Track, TrackSource
from music_session.domain.playback.coordinator import SessionCoordinator, build_coordinator
from music_session.domain.playback.scheduler import ManualScheduler


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual-clock scheduler; nothing fires until advance() is called."""
    return ManualScheduler()


@pytest.fixture
def coordinator(scheduler: ManualScheduler) -> SessionCoordinator:
    """Coordinator with default delays (local 1.0s, remote 2.0s, tick 0.1s)."""
    coordinator = build_coordinator(PlayerConfig(), scheduler=scheduler)
    yield coordinator
    coordinator.close()


@pytest.fixture
def local_track() -> Track:
    return Track(
        id="local:bohemian",
        title="Bohemian Rhapsody",
        artist="Queen",
        duration=354.0,
        source=TrackSource.LOCAL,
        url="mock://local/bohemian",
    )


@pytest.fixture
def remote_track() -> Track:
    return Track(
        id="remote:stan",
        title="Stan",
        artist="Eminem",
        duration=404.0,
        source=TrackSource.REMOTE,
        url="spotify://track/stan",
    )


@pytest.fixture
def make_track():
    """Factory for tracks whose id, title, and locator all derive from a name."""

    def make(name: str, source: TrackSource = TrackSource.LOCAL, duration: float = 200.0) -> Track:
        if source is TrackSource.LOCAL:
            url = f"mock://local/{name}"
        else:
            url = f"spotify://track/{name}"
        return Track(
            id=f"{source.value}:{name}",
            title=name,
            artist="Test Artist",
            duration=duration,
            source=source,
            url=url,
        )

    return make
