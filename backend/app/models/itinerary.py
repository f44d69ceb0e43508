"""Itinerary models - canonical, cost-consistent output for user consumption."""

from pydantic import Field, model_validator

from backend.app.models.common import ActivityType, CamelModel


class Activity(CamelModel):
    """Single costed line item within a day."""

    id: str
    time: str = Field(..., description="HH:MM")
    title: str
    description: str
    location: str
    cost: int = Field(..., ge=0, description="Whole currency units")
    type: ActivityType


class DayPlan(CamelModel):
    """Itinerary for a single day; activities kept in display order."""

    day: int = Field(..., ge=1)
    date: str
    activities: list[Activity]
    total_cost: int

    @model_validator(mode="after")
    def validate_total_cost(self) -> "DayPlan":
        """Ensure total_cost is the sum of activity costs."""
        expected = sum(a.cost for a in self.activities)
        if self.total_cost != expected:
            raise ValueError(f"day {self.day} total_cost {self.total_cost} != {expected}")
        return self


class CostSummary(CamelModel):
    """Aggregate cost per category across all days."""

    accommodation: int = 0
    transport: int = 0
    activities: int = 0
    meals: int = 0

    @property
    def total(self) -> int:
        return self.accommodation + self.transport + self.activities + self.meals


class GeneratedItinerary(CamelModel):
    """Complete itinerary attached to a trip.

    Invariant: total_budget == summary.total == sum(day.total_cost).
    """

    destination: str
    duration: str = Field(..., description='Label such as "3 Days, 2 Nights"')
    total_budget: int
    days: list[DayPlan]
    summary: CostSummary

    @model_validator(mode="after")
    def validate_totals(self) -> "GeneratedItinerary":
        """Ensure aggregate totals agree with each other."""
        day_total = sum(d.total_cost for d in self.days)
        if not self.total_budget == self.summary.total == day_total:
            raise ValueError(
                f"inconsistent totals: total_budget={self.total_budget}, "
                f"summary={self.summary.total}, days={day_total}"
            )
        return self
