"""Prometheus metrics for monitoring plan outcomes, projections and simulations"""

from typing import Optional
from prometheus_client import Counter, Histogram

# Strategy engine metrics
strategy_plan_counter = Counter(
    "catalyst_strategy_plans_total",
    "Total pay-cycle plans generated",
    ["method"],  # promo-sprint | cfi-override | avalanche | none
)

negative_cash_flow_counter = Counter(
    "catalyst_negative_cash_flow_total",
    "Plans where checking sat below the floor",
)

# FIRE metrics
fire_projection_counter = Counter(
    "catalyst_fire_projections_total",
    "Total FIRE projections",
    ["status", "reason"],
)

# Simulator metrics
simulation_counter = Counter(
    "catalyst_payoff_simulations_total",
    "Total debt payoff simulations",
    ["strategy", "capped"],
)

simulation_months_histogram = Histogram(
    "catalyst_payoff_simulation_months",
    "Simulated months to payoff",
    buckets=[6, 12, 24, 36, 60, 120, 240, 360],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_strategy_plan(method: Optional[str], is_negative_cash_flow: bool) -> None:
    """Record which override branch chose the debt target"""
    strategy_plan_counter.labels(method=method or "none").inc()
    if is_negative_cash_flow:
        negative_cash_flow_counter.inc()


def record_fire_projection(status: str, reason: Optional[str]) -> None:
    fire_projection_counter.labels(status=status, reason=reason or "none").inc()


def record_simulation(strategy: str, months: int, capped: bool) -> None:
    simulation_counter.labels(strategy=strategy, capped="true" if capped else "false").inc()
    simulation_months_histogram.observe(months)
