"""
Deterministic, rule-based health scoring.

Each factor adds points against fixed cut points and may append an issue.
The total maps to excellent/good/warning/critical. Job health and
recruiting health keep separate rule sets.
"""

import logging

from talentbridge.models import (
    HealthLevel,
    HealthResult,
    JobHealthRules,
    RecruitingHealthRules,
)

logger = logging.getLogger(__name__)


DEFAULT_JOB_HEALTH_RULES = JobHealthRules()
DEFAULT_RECRUITING_HEALTH_RULES = RecruitingHealthRules()

LEVEL_LABELS = {
    HealthLevel.EXCELLENT: "Exzellent",
    HealthLevel.GOOD: "Gut",
    HealthLevel.WARNING: "Achtung",
    HealthLevel.CRITICAL: "Kritisch",
}

JOB_MESSAGES = {
    HealthLevel.EXCELLENT: "Pipeline läuft optimal",
    HealthLevel.GOOD: "Pipeline ist aktiv",
    HealthLevel.WARNING: "Stelle braucht Aufmerksamkeit",
    HealthLevel.CRITICAL: "Keine Aktivität auf dieser Stelle",
}

RECRUITING_MESSAGES = {
    HealthLevel.EXCELLENT: "Ihr Recruiting läuft optimal",
    HealthLevel.GOOD: "Recruiting-Prozess ist aktiv",
    HealthLevel.WARNING: "Pipeline braucht Aufmerksamkeit",
    HealthLevel.CRITICAL: "Keine aktive Recruiting-Aktivität",
}

# Issue texts
NO_CANDIDATES = "Keine Kandidaten"
FEW_CANDIDATES = "Wenige Kandidaten"
NO_INTERVIEWS = "Keine Interviews"
NO_INTERVIEWS_PLANNED = "Keine Interviews geplant"
FEW_RECRUITERS = "Wenige Recruiter"
STALE_JOB = "Stelle veraltet"
NO_NEW_CANDIDATES = "Keine neuen Kandidaten"


def health_level(score: float, excellent: int, good: int, warning: int) -> HealthLevel:
    """Map an accumulated score onto a level. Total over all numbers."""
    if score >= excellent:
        return HealthLevel.EXCELLENT
    if score >= good:
        return HealthLevel.GOOD
    if score >= warning:
        return HealthLevel.WARNING
    return HealthLevel.CRITICAL


def _build_result(score: int, level: HealthLevel, issues: list[str], messages: dict) -> HealthResult:
    primary = issues[0] if issues else None
    if level in (HealthLevel.WARNING, HealthLevel.CRITICAL) and primary:
        message = primary
    else:
        message = messages[level]

    return HealthResult(
        level=level,
        label=LEVEL_LABELS[level],
        score=score,
        issues=issues,
        primary_issue=primary,
        message=message,
    )


# =========================================
# Job health
# =========================================

def compute_candidate_points(candidates: int, rules: JobHealthRules) -> tuple[int, list[str]]:
    high, mid, low = rules.candidates_points
    if candidates >= rules.candidates_high:
        return high, []
    if candidates >= rules.candidates_mid:
        return mid, []
    if candidates >= rules.candidates_low:
        return low, []
    return 0, [NO_CANDIDATES]


def compute_interview_points(
    interviews: int,
    candidates: int,
    days_open: float,
    rules: JobHealthRules,
) -> tuple[int, list[str]]:
    high, low = rules.interviews_points
    if interviews >= rules.interviews_high:
        return high, []
    if interviews >= rules.interviews_low:
        return low, []
    # Only worth flagging once candidates had time to be interviewed
    if candidates > rules.no_interview_min_candidates and days_open > rules.no_interview_min_days_open:
        return 0, [NO_INTERVIEWS]
    return 0, []


def compute_recruiter_points(
    recruiters: int,
    days_open: float,
    rules: JobHealthRules,
) -> tuple[int, list[str]]:
    high, low = rules.recruiters_points
    if recruiters >= rules.recruiters_high:
        return high, []
    if recruiters >= rules.recruiters_low:
        return low, []
    if days_open > rules.few_recruiters_min_days_open:
        return 0, [FEW_RECRUITERS]
    return 0, []


def compute_recency_points(
    days_open: float,
    candidates: int,
    rules: JobHealthRules,
) -> tuple[int, list[str]]:
    fresh, recent = rules.recency_points
    if days_open < rules.fresh_days:
        return fresh, []
    if days_open < rules.recent_days:
        return recent, []
    if days_open > rules.stale_days and candidates < rules.stale_max_candidates:
        return 0, [STALE_JOB]
    return 0, []


def score_job_health(
    candidates: int,
    interviews: int,
    recruiters: int,
    days_open: float,
    rules: JobHealthRules = DEFAULT_JOB_HEALTH_RULES,
) -> HealthResult:
    """
    Health of a single job posting.

    Pipeline:
    1. Candidates in pipeline (0-30)
    2. Interview activity (0-30)
    3. Recruiter engagement (0-25)
    4. Recency of the posting (0-15)

    Total: 0-100
    """
    score = 0
    issues: list[str] = []

    for points, reasons in (
        compute_candidate_points(candidates, rules),
        compute_interview_points(interviews, candidates, days_open, rules),
        compute_recruiter_points(recruiters, days_open, rules),
        compute_recency_points(days_open, candidates, rules),
    ):
        score += points
        issues.extend(reasons)

    level = health_level(score, rules.excellent, rules.good, rules.warning)
    logger.debug(f"Job health {score} -> {level.value} (issues: {issues})")

    return _build_result(score, level, issues, JOB_MESSAGES)


# =========================================
# Recruiting health (client dashboard)
# =========================================

def compute_pipeline_depth_points(
    active_jobs: int,
    total_candidates: int,
    rules: RecruitingHealthRules,
) -> tuple[int, list[str]]:
    """Candidates per active job. Zero active jobs means there is no data."""
    if active_jobs > 0 and total_candidates > 0:
        per_job = total_candidates / active_jobs
        high, mid, low = rules.per_job_points
        if per_job >= rules.per_job_high:
            return high, []
        if per_job >= rules.per_job_mid:
            return mid, []
        if per_job >= rules.per_job_low:
            return low, []
        return 0, [FEW_CANDIDATES]
    if active_jobs > 0:
        return 0, [NO_CANDIDATES]
    return 0, []


def compute_pending_interview_points(
    pending_interviews: int,
    total_candidates: int,
    rules: RecruitingHealthRules,
) -> tuple[int, list[str]]:
    high, low = rules.interviews_points
    if pending_interviews >= rules.interviews_high:
        return high, []
    if pending_interviews >= rules.interviews_low:
        return low, []
    if total_candidates > rules.no_interview_min_candidates:
        return 0, [NO_INTERVIEWS_PLANNED]
    return 0, []


def compute_new_candidate_points(
    new_candidates_last_7_days: int,
    active_jobs: int,
    rules: RecruitingHealthRules,
) -> tuple[int, list[str]]:
    high, low = rules.new_candidates_points
    if new_candidates_last_7_days >= rules.new_candidates_high:
        return high, []
    if new_candidates_last_7_days >= rules.new_candidates_low:
        return low, []
    if active_jobs > 0:
        return 0, [NO_NEW_CANDIDATES]
    return 0, []


def compute_conversion_points(
    placements: int,
    total_candidates: int,
    rules: RecruitingHealthRules,
) -> tuple[int, list[str]]:
    if placements > 0:
        return rules.placement_points, []
    if total_candidates > rules.pipeline_min_candidates:
        return rules.pipeline_points, []
    return 0, []


def score_recruiting_health(
    active_jobs: int,
    total_candidates: int,
    pending_interviews: int,
    placements: int,
    new_candidates_last_7_days: int = 0,
    rules: RecruitingHealthRules = DEFAULT_RECRUITING_HEALTH_RULES,
) -> HealthResult:
    """
    Overall recruiting health for a client.

    Pipeline:
    1. Candidates per active job (0-30)
    2. Pending interviews (0-25)
    3. New candidates in the last 7 days (0-25)
    4. Conversion (0-20)

    Total: 0-100
    """
    score = 0
    issues: list[str] = []

    for points, reasons in (
        compute_pipeline_depth_points(active_jobs, total_candidates, rules),
        compute_pending_interview_points(pending_interviews, total_candidates, rules),
        compute_new_candidate_points(new_candidates_last_7_days, active_jobs, rules),
        compute_conversion_points(placements, total_candidates, rules),
    ):
        score += points
        issues.extend(reasons)

    level = health_level(score, rules.excellent, rules.good, rules.warning)
    logger.debug(f"Recruiting health {score} -> {level.value} (issues: {issues})")

    return _build_result(score, level, issues, RECRUITING_MESSAGES)


if __name__ == "__main__":
    # Quick look at both scorers
    healthy = score_job_health(candidates=6, interviews=3, recruiters=4, days_open=5)
    print(f"Job health: {healthy.score} {healthy.level.value} - {healthy.message}")

    stale = score_job_health(candidates=0, interviews=0, recruiters=0, days_open=50)
    print(f"Stale job: {stale.score} {stale.level.value} - {stale.issues}")

    client = score_recruiting_health(
        active_jobs=3,
        total_candidates=12,
        pending_interviews=1,
        placements=0,
        new_candidates_last_7_days=2,
    )
    print(f"Recruiting health: {client.score} {client.level.value} - {client.message}")
