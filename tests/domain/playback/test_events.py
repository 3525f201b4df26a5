"""Tests for observable values and subscriptions."""

import pytest

from music_session.domain.playback.events import Observable, ReadOnlyObservable, SubscriptionBag


class TestObservable:
    """Tests for change-only emission."""

    def test_initial_value(self) -> None:
        observable = Observable("test", 1)
        assert observable.value == 1
        assert observable.subscriber_count == 0

    def test_set_notifies_on_change(self) -> None:
        """Subscribers receive each new value in order."""
        observable = Observable("test", 0)
        seen = []
        observable.subscribe(seen.append)

        assert observable.set(1) is True
        assert observable.set(2) is True
        assert seen == [1, 2]
        assert observable.value == 2

    def test_set_same_value_does_not_notify(self) -> None:
        observable = Observable("test", "a")
        seen = []
        observable.subscribe(seen.append)

        assert observable.set("a") is False
        assert seen == []

    def test_equal_numbers_do_not_notify(self) -> None:
        """0 and 0.0 compare equal, so no emission."""
        observable = Observable("test", 0.0)
        seen = []
        observable.subscribe(seen.append)

        observable.set(0)
        assert seen == []

    def test_replay_delivers_current_value(self) -> None:
        observable = Observable("test", "current")
        seen = []
        observable.subscribe(seen.append, replay=True)
        assert seen == ["current"]

    def test_cancelled_subscription_stops_receiving(self) -> None:
        observable = Observable("test", 0)
        seen = []
        subscription = observable.subscribe(seen.append)

        observable.set(1)
        subscription.cancel()
        observable.set(2)

        assert seen == [1]
        assert not subscription.active
        assert observable.subscriber_count == 0

    def test_cancel_twice_is_safe(self) -> None:
        observable = Observable("test", 0)
        subscription = observable.subscribe(lambda value: None)
        subscription.cancel()
        subscription.cancel()
        assert observable.subscriber_count == 0

    def test_raising_observer_does_not_block_others(self) -> None:
        """A failing callback is logged; later subscribers still get the value."""
        observable = Observable("test", 0)
        seen = []

        def broken(value):
            raise RuntimeError("boom")

        observable.subscribe(broken)
        observable.subscribe(seen.append)

        observable.set(5)
        assert seen == [5]
        assert observable.value == 5

    def test_cancel_during_delivery(self) -> None:
        """A subscriber may cancel another during delivery of the same value."""
        observable = Observable("test", 0)
        seen = []
        later = None

        def cancel_later(value):
            later.cancel()

        observable.subscribe(cancel_later)
        later = observable.subscribe(seen.append)

        observable.set(1)
        observable.set(2)
        # Cancelled before its turn came, so it never receives a value
        assert seen == []
        assert observable.subscriber_count == 1


class TestReadOnlyObservable:
    """Tests for the subscribe-only view."""

    def test_view_follows_source(self) -> None:
        observable = Observable("test", 0)
        view = observable.read_only()
        seen = []
        view.subscribe(seen.append, replay=True)

        observable.set(3)
        assert view.value == 3
        assert view.name == "test"
        assert view.subscriber_count == 1
        assert seen == [0, 3]

    def test_view_is_cached(self) -> None:
        observable = Observable("test", 0)
        assert observable.read_only() is observable.read_only()
        assert isinstance(observable.read_only(), ReadOnlyObservable)

    def test_view_cannot_set(self) -> None:
        view = Observable("test", 0).read_only()
        with pytest.raises(AttributeError):
            view.set(1)
        with pytest.raises(AttributeError):
            view.value = 1
        assert view.value == 0

    def test_cancel_through_view(self) -> None:
        observable = Observable("test", 0)
        seen = []
        subscription = observable.read_only().subscribe(seen.append)
        subscription.cancel()
        observable.set(1)
        assert seen == []
        assert observable.subscriber_count == 0


class TestSubscriptionBag:
    """Tests for grouped teardown."""

    def test_cancel_all(self) -> None:
        first = Observable("first", 0)
        second = Observable("second", 0)
        seen = []

        bag = SubscriptionBag()
        bag.add(first.subscribe(seen.append))
        bag.add(second.subscribe(seen.append))
        assert len(bag) == 2

        bag.cancel_all()
        first.set(1)
        second.set(2)

        assert seen == []
        assert len(bag) == 0
        assert first.subscriber_count == 0
        assert second.subscriber_count == 0
