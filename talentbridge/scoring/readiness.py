"""
Exposé readiness and company profile completeness.

Both checklists have exactly 7 entries, so only round(100 * k / 7)
for k in 0..7 is reachable.
"""

import logging
from typing import Callable, Optional, Union

from talentbridge.models import (
    CandidateRecord,
    CompanyCompleteness,
    CompanyProfile,
    ReadinessLevel,
    ReadinessResult,
    ReadinessRules,
)
from talentbridge.utils.text import has_positive, is_blank

logger = logging.getLogger(__name__)


DEFAULT_READINESS_RULES = ReadinessRules()

ALL_DATA_MISSING = "Alle Daten fehlen"

READINESS_BADGES = {
    ReadinessLevel.READY: "Exposé-Ready",
    ReadinessLevel.PARTIAL: "Teilweise",
    ReadinessLevel.INCOMPLETE: "Unvollständig",
}


def _candidate_checklist(rules: ReadinessRules) -> tuple[tuple[str, Callable[[CandidateRecord], bool]], ...]:
    return (
        (f"Mind. {rules.min_skills} Skills",
         lambda c: len([s for s in c.skills if not is_blank(s)]) >= rules.min_skills),
        ("Berufserfahrung", lambda c: has_positive(c.experience_years)),
        ("Gehaltsvorstellung", lambda c: has_positive(c.expected_salary)),
        ("Verfügbarkeit",
         lambda c: not is_blank(c.availability_date) or not is_blank(c.notice_period)),
        ("Standort", lambda c: not is_blank(c.city)),
        ("CV-Zusammenfassung (KI)", lambda c: not is_blank(c.cv_ai_summary)),
        ("CV-Highlights (KI)", lambda c: any(not is_blank(b) for b in c.cv_ai_bullets)),
    )


COMPANY_CHECKLIST: tuple[tuple[str, Callable[[CompanyProfile], bool]], ...] = (
    ("Firmenname", lambda p: not is_blank(p.name)),
    ("Website", lambda p: not is_blank(p.website)),
    ("Beschreibung", lambda p: not is_blank(p.description)),
    ("Mitarbeiterzahl", lambda p: has_positive(p.headcount)),
    ("Umsatz", lambda p: not is_blank(p.revenue)),
    ("Gründungsjahr", lambda p: has_positive(p.founded_year)),
    ("USP", lambda p: not is_blank(p.usp)),
)


def completeness_percent(passed: int, total: int) -> int:
    """Percentage of satisfied checklist entries, 0 for an empty checklist."""
    if total <= 0:
        return 0
    return round(100 * passed / total)


def readiness_level(score: int, rules: ReadinessRules = DEFAULT_READINESS_RULES) -> ReadinessLevel:
    if score >= rules.ready:
        return ReadinessLevel.READY
    if score >= rules.partial:
        return ReadinessLevel.PARTIAL
    return ReadinessLevel.INCOMPLETE


def score_expose_readiness(
    candidate: Optional[Union[CandidateRecord, dict]],
    rules: ReadinessRules = DEFAULT_READINESS_RULES,
) -> ReadinessResult:
    """
    Score how ready a candidate is for an exposé.

    Checklist (in order):
    1. At least 3 skills
    2. Experience years > 0
    3. Expected salary > 0
    4. Availability date or notice period
    5. City
    6. AI CV summary
    7. AI CV bullet points

    A missing candidate scores 0 with a single "all data missing" entry.
    """
    checklist = _candidate_checklist(rules)

    if candidate is None:
        return ReadinessResult(
            score=0,
            missing_fields=[ALL_DATA_MISSING],
            level=ReadinessLevel.INCOMPLETE,
            badge=READINESS_BADGES[ReadinessLevel.INCOMPLETE],
            passed=0,
            total=len(checklist),
        )

    if not isinstance(candidate, CandidateRecord):
        candidate = CandidateRecord.model_validate(candidate)

    missing = [label for label, check in checklist if not check(candidate)]
    passed = len(checklist) - len(missing)
    score = completeness_percent(passed, len(checklist))
    level = readiness_level(score, rules)

    logger.debug(f"Readiness {score}% ({passed}/{len(checklist)}) -> {level.value}")

    return ReadinessResult(
        score=score,
        missing_fields=missing,
        level=level,
        badge=READINESS_BADGES[level],
        passed=passed,
        total=len(checklist),
    )


def score_company_completeness(
    profile: Optional[Union[CompanyProfile, dict]],
) -> CompanyCompleteness:
    """
    Check the client company profile against its 7-field checklist.
    No tiers: either complete (card hidden) or a list of missing fields.
    """
    if profile is None:
        profile = CompanyProfile()
    elif not isinstance(profile, CompanyProfile):
        profile = CompanyProfile.model_validate(profile)

    missing = [label for label, check in COMPANY_CHECKLIST if not check(profile)]
    passed = len(COMPANY_CHECKLIST) - len(missing)

    return CompanyCompleteness(
        score=completeness_percent(passed, len(COMPANY_CHECKLIST)),
        missing_fields=missing,
        is_complete=not missing,
    )
