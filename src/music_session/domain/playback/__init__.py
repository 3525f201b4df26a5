"""Playback domain - simulated backends and the session coordinator.

This domain handles:
- Local and remote playback backends behind one capability interface
- Observable playback state (status, elapsed time, current track)
- Timer scheduling serialized on one session lock
- The play queue and next/previous navigation
"""

# State
from .state import PlaybackStatus, SessionSnapshot

# Events
from .events import Observable, ReadOnlyObservable, Subscription, SubscriptionBag

# Scheduling
from .scheduler import ManualScheduler, Scheduler, ThreadScheduler, TimerHandle

# Backends
from .audio import AudioOutput, SimulatedAudioOutput
from .local_player import LocalPlayer
from .protocol import PlaybackBackend
from .remote_player import RemotePlayer

# Queue
from .queue import (
    get_adjacent_track,
    get_next_track,
    get_previous_track,
    get_track_position,
    move_items,
    remove_at,
)

# Coordinator
from .coordinator import SessionCoordinator, build_coordinator
from .exceptions import BackendUnavailableError, PlaybackError

__all__ = [
    # State
    "PlaybackStatus",
    "SessionSnapshot",
    # Events
    "Observable",
    "ReadOnlyObservable",
    "Subscription",
    "SubscriptionBag",
    # Scheduling
    "ManualScheduler",
    "Scheduler",
    "ThreadScheduler",
    "TimerHandle",
    # Backends
    "AudioOutput",
    "LocalPlayer",
    "PlaybackBackend",
    "RemotePlayer",
    "SimulatedAudioOutput",
    # Queue
    "get_adjacent_track",
    "get_next_track",
    "get_previous_track",
    "get_track_position",
    "move_items",
    "remove_at",
    # Coordinator
    "BackendUnavailableError",
    "PlaybackError",
    "SessionCoordinator",
    "build_coordinator",
]
