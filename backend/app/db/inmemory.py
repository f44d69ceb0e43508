"""In-memory implementation of the trip store."""

import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from backend.app.models.itinerary import GeneratedItinerary
from backend.app.models.preferences import TripPreferences
from backend.app.models.trip import Trip


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryTripStore:
    """In-memory implementation of TripStore.

    One instance per process. Updates replace the stored record; concurrent
    updates to the same id are last-write-wins.
    """

    def __init__(
        self,
        retention: timedelta | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize trip store.

        Args:
            retention: Records older than this are purged (None keeps forever)
            clock: Source of the current time (injectable for tests)
        """
        self._trips: dict[str, Trip] = {}
        self._retention = retention
        self._clock = clock

    def __len__(self) -> int:
        return len(self._trips)

    def _purge_expired(self) -> None:
        if self._retention is None:
            return

        cutoff = self._clock() - self._retention
        expired = [trip_id for trip_id, trip in self._trips.items() if trip.created_at < cutoff]
        for trip_id in expired:
            del self._trips[trip_id]

    def create(self, preferences: TripPreferences) -> Trip:
        """Create a new trip record."""
        self._purge_expired()

        trip = Trip(
            id=str(uuid.uuid4()),
            **preferences.model_dump(),
            generated_itinerary=None,
            is_booked=False,
            created_at=self._clock(),
        )

        self._trips[trip.id] = trip
        return trip

    def get(self, trip_id: str) -> Trip | None:
        """Get trip by id."""
        self._purge_expired()
        return self._trips.get(trip_id)

    def attach_itinerary(self, trip_id: str, itinerary: GeneratedItinerary) -> Trip | None:
        """Attach a generated itinerary to a trip."""
        return self._update(trip_id, generated_itinerary=itinerary)

    def mark_booked(self, trip_id: str) -> Trip | None:
        """Mark a trip as booked."""
        return self._update(trip_id, is_booked=True)

    def list_all(self) -> list[Trip]:
        """List all trips, newest first."""
        self._purge_expired()

        # Newest insertion first so equal timestamps keep newest-first order
        results = list(reversed(self._trips.values()))
        results.sort(key=lambda t: t.created_at, reverse=True)
        return results

    def _update(self, trip_id: str, **changes: object) -> Trip | None:
        self._purge_expired()

        record = self._trips.get(trip_id)
        if record is None:
            return None

        updated = record.model_copy(update=changes)
        self._trips[trip_id] = updated
        return updated
