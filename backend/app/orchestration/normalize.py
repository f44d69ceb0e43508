"""Itinerary normalization - provisional AI reply to canonical itinerary.

This is the only place totals are computed. Everything displayed or billed
downstream relies on the totals produced here being mutually consistent:

    total_budget == summary.total == sum(day.total_cost) == sum(activity.cost)

The total declared by the generation capability is discarded.
"""

import logging
import uuid
from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal

from backend.app.models.ai_reply import ItineraryReply, ReplyDay
from backend.app.models.common import SUMMARY_BUCKETS
from backend.app.models.itinerary import Activity, CostSummary, DayPlan, GeneratedItinerary
from backend.app.models.preferences import TripPreferences

logger = logging.getLogger(__name__)


def new_activity_id() -> str:
    """Generate a fresh activity identifier."""
    return str(uuid.uuid4())


def to_whole_units(cost: float) -> int:
    """Round a cost to whole currency units (half up), clamping at zero."""
    rounded = Decimal(str(cost)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return max(0, int(rounded))


def duration_label(duration: int) -> str:
    """Label for the requested trip length, e.g. "3 Days, 2 Nights"."""
    return f"{duration} Days, {duration - 1} Nights"


def normalize_day(day: ReplyDay, id_factory: Callable[[], str] = new_activity_id) -> DayPlan:
    """Assign activity ids, coerce costs, and total a single day."""
    activities = [
        Activity(
            id=id_factory(),
            time=a.time,
            title=a.title,
            description=a.description,
            location=a.location,
            cost=to_whole_units(a.cost),
            type=a.type,
        )
        for a in day.activities
    ]

    return DayPlan(
        day=day.day,
        date=day.date,
        activities=activities,
        total_cost=sum(a.cost for a in activities),
    )


def summarize_costs(days: list[DayPlan]) -> CostSummary:
    """Fold every activity cost into its category bucket."""
    buckets = {bucket: 0 for bucket in SUMMARY_BUCKETS.values()}
    for day in days:
        for activity in day.activities:
            buckets[SUMMARY_BUCKETS[activity.type]] += activity.cost
    return CostSummary(**buckets)


def normalize_itinerary(
    reply: ItineraryReply,
    preferences: TripPreferences,
    id_factory: Callable[[], str] = new_activity_id,
) -> GeneratedItinerary:
    """Transform a parsed AI reply into a GeneratedItinerary.

    Args:
        reply: Strictly parsed provisional itinerary
        preferences: Preferences the itinerary was requested for
        id_factory: Activity id generator (injectable for tests)

    Returns:
        GeneratedItinerary with recomputed, internally consistent totals
    """
    days = [normalize_day(day, id_factory) for day in reply.days]
    summary = summarize_costs(days)

    if len(days) != preferences.duration:
        logger.warning(
            f"[normalize] {reply.destination}: requested {preferences.duration} days, "
            f"AI returned {len(days)}; duration label follows the request"
        )

    # Compared as floats; the declared value may be fractional or non-finite
    if reply.total_budget is not None and reply.total_budget != summary.total:
        logger.info(
            f"[normalize] {reply.destination}: discarding declared total "
            f"{reply.total_budget:g} in favour of computed {summary.total}"
        )

    return GeneratedItinerary(
        destination=reply.destination,
        duration=duration_label(preferences.duration),
        total_budget=summary.total,
        days=days,
        summary=summary,
    )
