"""
Play queue algorithms.

Pure functions over ordered track sequences; the coordinator owns the
actual queue and applies these. Tracks may appear more than once, and
navigation is always relative to the FIRST entry matching the current
track's id.
"""

from typing import Iterable, Optional, Sequence, Union

from music_session.domain.library.models import Track


def get_track_position(tracks: Sequence[Track], track_id: str) -> Optional[int]:
    """
    Get the position (0-based index) of the first track with ``track_id``.

    Args:
        tracks: Ordered queue contents
        track_id: ID of the track to find

    Returns:
        0-based position of the first match, or None if not found
    """
    for i, track in enumerate(tracks):
        if track.id == track_id:
            return i
    return None


def get_adjacent_track(
    tracks: Sequence[Track], current_track_id: Optional[str], offset: int
) -> Optional[Track]:
    """
    Get the track ``offset`` positions away from the current track.

    No wraparound: stepping past either end returns None.

    Args:
        tracks: Ordered queue contents
        current_track_id: ID of the current track, or None if nothing is loaded
        offset: +1 for next, -1 for previous

    Returns:
        The adjacent track, or None if there is no current track, the
        current track is not queued, or there is no entry in that direction
    """
    if current_track_id is None:
        return None

    position = get_track_position(tracks, current_track_id)
    if position is None:
        return None

    target = position + offset
    if 0 <= target < len(tracks):
        return tracks[target]
    return None


def get_next_track(tracks: Sequence[Track], current_track_id: Optional[str]) -> Optional[Track]:
    return get_adjacent_track(tracks, current_track_id, 1)


def get_previous_track(tracks: Sequence[Track], current_track_id: Optional[str]) -> Optional[Track]:
    return get_adjacent_track(tracks, current_track_id, -1)


def remove_at(tracks: Sequence[Track], index: int) -> list[Track]:
    """Return a copy without the entry at ``index``; out of range is a no-op."""
    items = list(tracks)
    if 0 <= index < len(items):
        del items[index]
    return items


def move_items(
    tracks: Sequence[Track], from_indices: Union[int, Iterable[int]], to_offset: int
) -> list[Track]:
    """
    Move the entries at ``from_indices`` so they sit before ``to_offset``.

    ``to_offset`` is a position in the queue as it was BEFORE the move (so
    ``len(tracks)`` means "to the end"). Moved entries keep their relative
    order. Indices outside the queue are ignored; ``to_offset`` is clamped.

    Examples:
        move_items([A, B, C, D], 0, 3)       -> [B, C, A, D]
        move_items([A, B, C, D], {2, 3}, 0)  -> [C, D, A, B]
    """
    items = list(tracks)
    if isinstance(from_indices, int):
        from_indices = [from_indices]
    selected = sorted({i for i in from_indices if 0 <= i < len(items)})
    if not selected:
        return items

    to_offset = min(max(to_offset, 0), len(items))
    selected_set = set(selected)
    moved = [items[i] for i in selected]
    remaining = [item for i, item in enumerate(items) if i not in selected_set]
    insert_at = to_offset - sum(1 for i in selected if i < to_offset)
    return remaining[:insert_at] + moved + remaining[insert_at:]
