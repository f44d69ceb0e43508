"""Repository protocol interfaces for data access."""

from typing import Protocol

from backend.app.models.itinerary import GeneratedItinerary
from backend.app.models.preferences import TripPreferences
from backend.app.models.trip import Trip


class TripStore(Protocol):
    """Keyed storage of trip records.

    Lookups and updates on an unknown id return None; callers decide whether
    that is a 404 or an internal failure.
    """

    def create(self, preferences: TripPreferences) -> Trip:
        """Create a trip with a fresh id, no itinerary and is_booked False.

        Args:
            preferences: Validated preferences to record

        Returns:
            The stored Trip
        """
        ...

    def get(self, trip_id: str) -> Trip | None:
        """Get trip by id."""
        ...

    def attach_itinerary(self, trip_id: str, itinerary: GeneratedItinerary) -> Trip | None:
        """Replace the trip's itinerary.

        Returns:
            Updated Trip, or None if the id is unknown
        """
        ...

    def mark_booked(self, trip_id: str) -> Trip | None:
        """Set is_booked True. Idempotent.

        Returns:
            Updated Trip, or None if the id is unknown
        """
        ...

    def list_all(self) -> list[Trip]:
        """List all trips, most recent first."""
        ...
