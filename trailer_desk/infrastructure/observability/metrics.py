"""Prometheus metrics for calculator usage, pricing outcomes and lead recalculation"""

from prometheus_client import Counter, Histogram

# Calculator metrics
calculation_counter = Counter(
    "trailer_desk_calculation_total",
    "Calculator invocations",
    ["kind"],  # finance | payment | matrix | cash | cash_discount | rto
)

apr_solve_counter = Counter(
    "trailer_desk_apr_solve_total",
    "APR solves by outcome",
    ["status"],  # converged | max_iterations_exceeded | stalled | degenerate
)

# Pricing metrics
pricing_outcome_counter = Counter(
    "trailer_desk_pricing_total",
    "Selling price computations by status",
    ["status"],  # PRICED | ASK_FOR_PRICING
)

price_range_check_counter = Counter(
    "trailer_desk_price_range_check_total",
    "Listed-price guardrail checks",
    ["result"],  # valid | invalid
)

# Lead scoring metrics
lead_recalculation_counter = Counter(
    "trailer_desk_lead_recalculation_records_total",
    "Customers processed by the lead recalculation job",
    ["outcome"],  # updated | error
)

lead_temperature_counter = Counter(
    "trailer_desk_lead_temperature_total",
    "Lead temperatures assigned",
    ["temperature"],  # hot | warm | cold | dead
)

lead_recalculation_duration_histogram = Histogram(
    "trailer_desk_lead_recalculation_seconds",
    "Duration of a full lead recalculation run",
    buckets=[0.5, 1.0, 5.0, 15.0, 30.0, 60.0, 300.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(kind: str) -> None:
    calculation_counter.labels(kind=kind).inc()


def record_pricing(status: str) -> None:
    pricing_outcome_counter.labels(status=status).inc()


def record_price_range_check(valid: bool) -> None:
    price_range_check_counter.labels(result="valid" if valid else "invalid").inc()
