"""Tests for the in-memory trip store."""

from datetime import datetime, timedelta, timezone

import pytest

from backend.app.db.inmemory import InMemoryTripStore
from backend.app.models.ai_reply import ItineraryReply
from backend.app.models.preferences import TripPreferences
from backend.app.orchestration.normalize import normalize_itinerary


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))


def test_create_sets_defaults(trip_store: InMemoryTripStore, preferences: TripPreferences) -> None:
    """Test that a new trip has an id, no itinerary and is not booked."""
    trip = trip_store.create(preferences)

    assert trip.id
    assert trip.destination == "Goa"
    assert trip.group_size == 2
    assert trip.interests == ["beaches"]
    assert trip.generated_itinerary is None
    assert trip.is_booked is False
    assert trip.created_at is not None
    assert trip_store.get(trip.id) == trip


def test_ids_are_unique(trip_store: InMemoryTripStore, preferences: TripPreferences) -> None:
    """Test that every create generates a fresh id."""
    ids = {trip_store.create(preferences).id for _ in range(50)}

    assert len(ids) == 50
    assert len(trip_store) == 50


def test_get_unknown_returns_none(trip_store: InMemoryTripStore) -> None:
    """Test that an unknown id is absent, not an error."""
    assert trip_store.get("missing") is None


def test_attach_itinerary(
    trip_store: InMemoryTripStore, preferences: TripPreferences, ai_reply: ItineraryReply
) -> None:
    """Test that attaching replaces the itinerary and keeps other fields."""
    trip = trip_store.create(preferences)
    itinerary = normalize_itinerary(ai_reply, preferences)

    updated = trip_store.attach_itinerary(trip.id, itinerary)

    assert updated is not None
    assert updated.generated_itinerary == itinerary
    assert updated.created_at == trip.created_at
    assert updated.is_booked is False
    assert trip_store.get(trip.id) == updated


def test_updates_on_unknown_id_return_none(
    trip_store: InMemoryTripStore, preferences: TripPreferences, ai_reply: ItineraryReply
) -> None:
    """Test that attach/mark on an unknown id return None without raising."""
    itinerary = normalize_itinerary(ai_reply, preferences)

    assert trip_store.attach_itinerary("missing", itinerary) is None
    assert trip_store.mark_booked("missing") is None
    assert len(trip_store) == 0


def test_mark_booked_is_idempotent(
    trip_store: InMemoryTripStore, preferences: TripPreferences
) -> None:
    """Test that marking twice yields is_booked True both times."""
    trip = trip_store.create(preferences)

    first = trip_store.mark_booked(trip.id)
    second = trip_store.mark_booked(trip.id)

    assert first is not None and first.is_booked is True
    assert second is not None and second.is_booked is True
    assert second.created_at == trip.created_at


def test_list_all_newest_first(preferences: TripPreferences, clock: ManualClock) -> None:
    """Test that list_all orders by creation time, most recent first."""
    store = InMemoryTripStore(clock=clock)

    first = store.create(preferences)
    clock.advance(minutes=1)
    second = store.create(preferences)
    clock.advance(minutes=1)
    third = store.create(preferences)

    assert [t.id for t in store.list_all()] == [third.id, second.id, first.id]


def test_list_all_same_timestamp_keeps_newest_first(
    preferences: TripPreferences, clock: ManualClock
) -> None:
    """Test that trips created at the same instant still list newest first."""
    store = InMemoryTripStore(clock=clock)

    first = store.create(preferences)
    second = store.create(preferences)

    assert [t.id for t in store.list_all()] == [second.id, first.id]


def test_list_all_empty(trip_store: InMemoryTripStore) -> None:
    assert trip_store.list_all() == []


def test_retention_purges_old_records(preferences: TripPreferences, clock: ManualClock) -> None:
    """Test that records older than the retention window disappear."""
    store = InMemoryTripStore(retention=timedelta(hours=24), clock=clock)

    old = store.create(preferences)
    clock.advance(hours=23)
    recent = store.create(preferences)

    clock.advance(hours=2)

    assert store.get(old.id) is None
    assert store.mark_booked(old.id) is None
    assert store.get(recent.id) is not None
    assert [t.id for t in store.list_all()] == [recent.id]


def test_no_retention_keeps_records(preferences: TripPreferences, clock: ManualClock) -> None:
    """Test that a store without retention never expires records."""
    store = InMemoryTripStore(retention=None, clock=clock)

    trip = store.create(preferences)
    clock.advance(days=365)

    assert store.get(trip.id) is not None


def test_stores_are_isolated(preferences: TripPreferences) -> None:
    """Test that separately constructed stores share no state."""
    a = InMemoryTripStore()
    b = InMemoryTripStore()

    trip = a.create(preferences)

    assert a.get(trip.id) is not None
    assert b.get(trip.id) is None
