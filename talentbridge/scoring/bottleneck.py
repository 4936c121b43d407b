"""
Pipeline bottleneck detection.

Candidates are grouped by their current stage; a stage whose average
dwell time reaches 3 days is reported as a bottleneck.
"""

import logging
from typing import Iterable, Optional, Union

import numpy as np

from talentbridge.models import (
    BottleneckRules,
    Severity,
    StageBottleneck,
    StageDwell,
    StageStatistics,
)

logger = logging.getLogger(__name__)


DEFAULT_BOTTLENECK_RULES = BottleneckRules()

STAGE_LABELS = {
    "submitted": "Eingereicht",
    "screening": "Screening",
    "opt_in_pending": "Opt-In ausstehend",
    "interview": "Interview",
    "second_interview": "Zweitgespräch",
    "offer": "Angebot",
    "hired": "Eingestellt",
    "rejected": "Abgelehnt",
}

SEVERITY_LABELS = {
    Severity.CRITICAL: "Kritisch",
    Severity.HIGH: "Hoch",
    Severity.MEDIUM: "Mittel",
    Severity.LOW: "Niedrig",
}


def get_stage_label(stage: str) -> str:
    return STAGE_LABELS.get(stage, stage)


def classify_dwell(
    hours: float,
    rules: BottleneckRules = DEFAULT_BOTTLENECK_RULES,
) -> Optional[Severity]:
    """Severity for an average dwell time; None below the medium cut point."""
    days = hours / 24
    if days >= rules.critical_days:
        return Severity.CRITICAL
    if days >= rules.high_days:
        return Severity.HIGH
    if days >= rules.medium_days:
        return Severity.MEDIUM
    return None


def _as_dwell(entry: Union[StageDwell, dict, tuple]) -> StageDwell:
    if isinstance(entry, StageDwell):
        return entry
    if isinstance(entry, tuple):
        stage, hours = entry
        return StageDwell(stage=stage, hours_in_stage=hours)
    return StageDwell.model_validate(entry)


def stage_statistics(entries: Iterable[Union[StageDwell, dict, tuple]]) -> list[StageStatistics]:
    """
    Count and average dwell per current stage.
    Stages keep the order in which they first appear.
    """
    hours_by_stage: dict[str, list[float]] = {}
    for entry in entries:
        dwell = _as_dwell(entry)
        hours_by_stage.setdefault(dwell.stage, []).append(dwell.hours_in_stage)

    return [
        StageStatistics(
            stage=stage,
            count=len(hours),
            avg_hours=float(np.mean(hours)),
        )
        for stage, hours in hours_by_stage.items()
    ]


def detect_bottlenecks(
    entries: Iterable[Union[StageDwell, dict, tuple]],
    rules: BottleneckRules = DEFAULT_BOTTLENECK_RULES,
) -> list[StageBottleneck]:
    """
    Stages whose average dwell reaches a severity threshold.
    Sorted by severity, then by average dwell, worst first.
    """
    bottlenecks = []
    for stats in stage_statistics(entries):
        severity = classify_dwell(stats.avg_hours, rules)
        if severity is None:
            continue
        bottlenecks.append(StageBottleneck(
            stage=stats.stage,
            count=stats.count,
            avg_hours=stats.avg_hours,
            severity=severity,
            label=get_stage_label(stats.stage),
        ))

    bottlenecks.sort(key=lambda b: (b.severity.rank, b.avg_hours), reverse=True)

    if bottlenecks:
        logger.debug(f"Detected {len(bottlenecks)} bottleneck(s): {[b.stage for b in bottlenecks]}")
    return bottlenecks


def summarize_bottlenecks(bottlenecks: list[StageBottleneck]) -> str:
    """One-line summary for the dashboard widget."""
    if not bottlenecks:
        return "Keine Engpässe erkannt"

    worst = bottlenecks[0]
    days = round(worst.avg_days, 1)
    if len(bottlenecks) == 1:
        return f"1 Engpass: {worst.label} (Ø {days} Tage, {SEVERITY_LABELS[worst.severity]})"
    return (
        f"{len(bottlenecks)} Engpässe, am stärksten: {worst.label} "
        f"(Ø {days} Tage, {SEVERITY_LABELS[worst.severity]})"
    )
