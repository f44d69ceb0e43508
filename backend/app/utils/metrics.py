"""Prometheus metrics for generation, booking and payments."""

from prometheus_client import Counter, Histogram

itinerary_generation_latency_ms = Histogram(
    "itinerary_generation_latency_ms",
    "Itinerary generation latency in milliseconds",
    ["outcome"],
    buckets=[500, 1000, 2000, 5000, 10000, 20000, 40000, 60000, 90000],
)

itinerary_generation_total = Counter(
    "itinerary_generation_total",
    "Total itinerary generation requests",
    ["outcome"],
)

trip_bookings_total = Counter(
    "trip_bookings_total",
    "Total trip booking attempts",
    ["outcome"],
)

payment_operations_total = Counter(
    "payment_operations_total",
    "Total payment provider operations",
    ["operation", "outcome"],
)


class PrometheusTripMetrics:
    """Prometheus-based metrics for the trip pipeline."""

    def record_generation(self, outcome: str, latency_ms: float | None = None) -> None:
        """Record a generation outcome and, when a call was made, its latency."""
        itinerary_generation_total.labels(outcome=outcome).inc()
        if latency_ms is not None:
            itinerary_generation_latency_ms.labels(outcome=outcome).observe(latency_ms)

    def inc_booking(self, outcome: str) -> None:
        trip_bookings_total.labels(outcome=outcome).inc()

    def inc_payment(self, operation: str, outcome: str) -> None:
        payment_operations_total.labels(operation=operation, outcome=outcome).inc()
