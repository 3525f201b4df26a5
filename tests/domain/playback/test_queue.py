"""Tests for play queue algorithms."""

import pytest

from music_session.domain.playback.queue import (
    get_adjacent_track,
    get_next_track,
    get_previous_track,
    get_track_position,
    move_items,
    remove_at,
)


@pytest.fixture
def abcd(make_track):
    return [make_track(name) for name in "ABCD"]


def titles(tracks) -> list[str]:
    return [track.title for track in tracks]


class TestTrackPosition:
    """Tests for get_track_position."""

    def test_found(self, abcd) -> None:
        assert get_track_position(abcd, abcd[2].id) == 2

    def test_not_found(self, abcd) -> None:
        assert get_track_position(abcd, "local:missing") is None

    def test_first_match_wins(self, make_track) -> None:
        a, b = make_track("A"), make_track("B")
        assert get_track_position([b, a, b, a], a.id) == 1


class TestAdjacentTrack:
    """Tests for next/previous navigation."""

    def test_next(self, abcd) -> None:
        assert get_next_track(abcd, abcd[1].id) == abcd[2]

    def test_previous(self, abcd) -> None:
        assert get_previous_track(abcd, abcd[1].id) == abcd[0]

    def test_no_wraparound_at_end(self, abcd) -> None:
        assert get_next_track(abcd, abcd[-1].id) is None

    def test_no_wraparound_at_start(self, abcd) -> None:
        assert get_previous_track(abcd, abcd[0].id) is None

    def test_no_current_track(self, abcd) -> None:
        assert get_adjacent_track(abcd, None, 1) is None

    def test_current_not_in_queue(self, abcd) -> None:
        assert get_next_track(abcd, "remote:elsewhere") is None

    def test_empty_queue(self) -> None:
        assert get_next_track([], "local:A") is None

    def test_duplicate_ids_use_first_entry(self, make_track) -> None:
        """[A, B, A] with current A: next is B, never the second A."""
        a, b = make_track("A"), make_track("B")
        queue = [a, b, a]
        assert get_next_track(queue, a.id) is b
        assert get_previous_track(queue, a.id) is None


class TestRemoveAt:
    """Tests for remove_at."""

    def test_removes_index(self, abcd) -> None:
        assert titles(remove_at(abcd, 1)) == ["A", "C", "D"]

    def test_does_not_mutate_input(self, abcd) -> None:
        remove_at(abcd, 0)
        assert titles(abcd) == ["A", "B", "C", "D"]

    @pytest.mark.parametrize("index", [-1, 4, 100])
    def test_out_of_range_is_no_op(self, abcd, index: int) -> None:
        assert titles(remove_at(abcd, index)) == ["A", "B", "C", "D"]


class TestMoveItems:
    """Tests for block moves (destination is an offset in the original list)."""

    def test_move_forward(self, abcd) -> None:
        assert titles(move_items(abcd, 0, 3)) == ["B", "C", "A", "D"]

    def test_move_to_end(self, abcd) -> None:
        assert titles(move_items(abcd, 0, 4)) == ["B", "C", "D", "A"]

    def test_move_backward(self, abcd) -> None:
        assert titles(move_items(abcd, 3, 1)) == ["A", "D", "B", "C"]

    def test_move_block_to_front(self, abcd) -> None:
        assert titles(move_items(abcd, {2, 3}, 0)) == ["C", "D", "A", "B"]

    def test_block_keeps_relative_order(self, abcd) -> None:
        assert titles(move_items(abcd, [3, 0], 2)) == ["B", "A", "D", "C"]

    def test_move_onto_itself_is_no_op(self, abcd) -> None:
        assert titles(move_items(abcd, 1, 1)) == ["A", "B", "C", "D"]
        assert titles(move_items(abcd, 1, 2)) == ["A", "B", "C", "D"]

    def test_invalid_indices_ignored(self, abcd) -> None:
        assert titles(move_items(abcd, [9, -1], 0)) == ["A", "B", "C", "D"]

    def test_offset_is_clamped(self, abcd) -> None:
        assert titles(move_items(abcd, 0, 99)) == ["B", "C", "D", "A"]
