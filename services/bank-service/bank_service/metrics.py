"""Prometheus instruments for the deposit and sign-up flows."""

from __future__ import annotations

from prometheus_client import Counter

FLOW_OUTCOMES = Counter(
    "bank_flow_outcomes_total",
    "Completed form submissions by flow and outcome.",
    ["flow", "outcome"],
)


def record_outcome(flow: str, outcome: str) -> None:
    FLOW_OUTCOMES.labels(flow=flow, outcome=outcome).inc()
