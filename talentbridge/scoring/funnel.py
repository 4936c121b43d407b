"""
Funnel conversion analytics.

Counts are cumulative: a hired submission has also opted in, been
interviewed and received an offer.
"""

import logging
from typing import Iterable, Optional

import numpy as np

from talentbridge.models import FunnelMetrics

logger = logging.getLogger(__name__)


OPTED_IN_STATUSES = frozenset({"opted_in", "interview", "second_interview", "offer", "hired"})
INTERVIEWED_STATUSES = frozenset({"interview", "second_interview", "offer", "hired"})
OFFERED_STATUSES = frozenset({"offer", "hired"})
PLACED_STATUSES = frozenset({"hired"})

FUNNEL_STAGES = (
    ("submitted", "Eingereicht"),
    ("opted_in", "Opt-In"),
    ("interviewed", "Interview"),
    ("offered", "Angebot"),
    ("placed", "Platziert"),
)


def conversion_rate(numerator: int, denominator: int) -> float:
    """Percentage with 2 decimals; 0.0 when there is nothing to convert."""
    if denominator <= 0:
        return 0.0
    return round(numerator / denominator * 100, 2)


def average_time_to_fill(fill_times_days: Optional[Iterable[float]]) -> Optional[float]:
    """Mean days from submission to placement, 1 decimal, None without data."""
    times = [t for t in fill_times_days or [] if t is not None]
    if not times:
        return None
    return round(float(np.mean(times)), 1)


def calculate_funnel_metrics(
    statuses: Iterable[Optional[str]],
    fill_times_days: Optional[Iterable[float]] = None,
) -> FunnelMetrics:
    """
    Build funnel metrics from submission statuses.

    Args:
        statuses: Current status of every submission in the period
        fill_times_days: Days from submission to placement per placement

    Returns:
        FunnelMetrics with stage counts and step-to-step conversion rates
    """
    statuses = [s or "" for s in statuses]

    total = len(statuses)
    opted_in = sum(1 for s in statuses if s in OPTED_IN_STATUSES)
    interviewed = sum(1 for s in statuses if s in INTERVIEWED_STATUSES)
    offered = sum(1 for s in statuses if s in OFFERED_STATUSES)
    placed = sum(1 for s in statuses if s in PLACED_STATUSES)

    metrics = FunnelMetrics(
        total_submissions=total,
        opted_in=opted_in,
        interviewed=interviewed,
        offered=offered,
        placed=placed,
        opt_in_rate=conversion_rate(opted_in, total),
        interview_rate=conversion_rate(interviewed, opted_in),
        offer_rate=conversion_rate(offered, interviewed),
        acceptance_rate=conversion_rate(placed, offered),
        avg_time_to_fill_days=average_time_to_fill(fill_times_days),
    )
    logger.debug(f"Funnel: {total} submitted, {placed} placed")
    return metrics


def drop_offs_by_stage(metrics: FunnelMetrics) -> dict[str, int]:
    """How many submissions were lost between consecutive funnel stages."""
    counts = [
        metrics.total_submissions,
        metrics.opted_in,
        metrics.interviewed,
        metrics.offered,
        metrics.placed,
    ]
    drop_offs = {}
    for i in range(1, len(FUNNEL_STAGES)):
        stage = FUNNEL_STAGES[i - 1][0]
        drop_offs[stage] = max(0, counts[i - 1] - counts[i])
    return drop_offs


def funnel_steps(metrics: FunnelMetrics) -> list[tuple[str, int]]:
    """(label, count) per funnel stage, in funnel order, for charting."""
    counts = (
        metrics.total_submissions,
        metrics.opted_in,
        metrics.interviewed,
        metrics.offered,
        metrics.placed,
    )
    return [(label, count) for (_, label), count in zip(FUNNEL_STAGES, counts)]
