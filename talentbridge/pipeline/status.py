"""
Job pipeline stage classifier.

The stage is derived from submission counts in strict priority order:
the furthest stage with at least one submission wins. A paused job
short-circuits and is never classified from counts.
"""

import logging
from typing import Union

from talentbridge.models import (
    PipelineCounts,
    PipelineHealth,
    PipelineStage,
    PipelineStatus,
)

logger = logging.getLogger(__name__)


STAGE_LABELS = {
    PipelineStage.NEW: "Neu",
    PipelineStage.SOURCING: "Sourcing",
    PipelineStage.SCREENING: "Screening",
    PipelineStage.INTERVIEWING: "Interviews",
    PipelineStage.OFFERING: "Angebot",
    PipelineStage.FILLED: "Besetzt",
    PipelineStage.PAUSED: "Pausiert",
}

HEALTH_LABELS = {
    PipelineHealth.HEALTHY: "Gesund",
    PipelineHealth.NEEDS_ATTENTION: "Braucht Aufmerksamkeit",
    PipelineHealth.CRITICAL: "Kritisch",
    PipelineHealth.PAUSED: "Pausiert",
}

# Stages that are healthy regardless of pipeline depth
ADVANCED_STAGES = frozenset({
    PipelineStage.FILLED,
    PipelineStage.OFFERING,
    PipelineStage.INTERVIEWING,
})

HEALTHY_MIN_ACTIVE = 3
ATTENTION_MIN_ACTIVE = 1


def _as_counts(counts: Union[PipelineCounts, dict]) -> PipelineCounts:
    if isinstance(counts, PipelineCounts):
        return counts
    return PipelineCounts.model_validate(counts or {})


def classify_pipeline_stage(counts: Union[PipelineCounts, dict]) -> PipelineStage:
    counts = _as_counts(counts)

    if counts.hired > 0:
        return PipelineStage.FILLED
    if counts.offers_out > 0:
        return PipelineStage.OFFERING
    if counts.in_interview > 0:
        return PipelineStage.INTERVIEWING
    if counts.in_screening > 0:
        return PipelineStage.SCREENING
    if counts.total > 0:
        return PipelineStage.SOURCING
    return PipelineStage.NEW


def pipeline_health(stage: PipelineStage, counts: PipelineCounts) -> PipelineHealth:
    """Advanced stages are healthy; earlier ones depend on non-rejected submissions."""
    if stage in ADVANCED_STAGES:
        return PipelineHealth.HEALTHY

    active = counts.total - counts.rejected
    if active >= HEALTHY_MIN_ACTIVE:
        return PipelineHealth.HEALTHY
    if active >= ATTENTION_MIN_ACTIVE:
        return PipelineHealth.NEEDS_ATTENTION
    return PipelineHealth.CRITICAL


def get_pipeline_status(
    counts: Union[PipelineCounts, dict],
    is_paused: bool = False,
) -> PipelineStatus:
    """
    Stage plus health for a job card.

    Args:
        counts: Submission counts for the job
        is_paused: Manual pause override; counts are not evaluated

    Returns:
        PipelineStatus with German display labels
    """
    if is_paused:
        stage = PipelineStage.PAUSED
        health = PipelineHealth.PAUSED
    else:
        counts = _as_counts(counts)
        stage = classify_pipeline_stage(counts)
        health = pipeline_health(stage, counts)

    logger.debug(f"Pipeline {stage.value} / {health.value}")

    return PipelineStatus(
        stage=stage,
        health=health,
        label=STAGE_LABELS[stage],
        health_label=HEALTH_LABELS[health],
    )
