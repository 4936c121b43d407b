"""
Deal health for a single submission.

Weighted blend of phase progress, SLA state, activity, participant
behaviour and match score, plus bottleneck and drop-off estimation.
All inputs are pre-computed day counts; nothing here reads a clock.
"""

import logging
from typing import Optional, Union

from talentbridge.models import (
    BottleneckRules,
    DealBottleneck,
    DealHealthInput,
    DealHealthResult,
    Severity,
)
from talentbridge.scoring.bottleneck import DEFAULT_BOTTLENECK_RULES, classify_dwell

logger = logging.getLogger(__name__)


# Expected days per stage before the phase score starts dropping
EXPECTED_STAGE_DAYS = {
    "submitted": 2,
    "in_review": 5,
    "shortlisted": 7,
    "interview": 14,
    "offer": 7,
}
DEFAULT_EXPECTED_DAYS = 7

# stage -> who is holding the deal up
STAGE_BOTTLENECKS = {
    "submitted": "client_review",
    "in_review": "client_decision",
    "opt_in_pending": "candidate_opt_in",
    "interview": "interview_scheduling",
}
BOTTLENECK_MIN_DAYS = 2  # strictly greater than

BOTTLENECK_LABELS = {
    "candidate_response": "Kandidaten-Antwort",
    "candidate_opt_in": "Kandidaten-Opt-In",
    "client_review": "Kunden-Review",
    "interview_scheduling": "Interview-Planung",
    "offer_pending": "Angebot ausstehend",
    "recruiter_action": "Recruiter-Aktion",
    "client_decision": "Kunden-Entscheidung",
}

WEIGHTS = {
    "phase": 0.25,
    "sla": 0.25,
    "activity": 0.20,
    "behavior": 0.15,
    "match": 0.15,
}

NEUTRAL_SCORE = 50
LOW_MATCH_SCORE = 60


def dwell_severity(
    hours_in_stage: float,
    rules: BottleneckRules = DEFAULT_BOTTLENECK_RULES,
) -> Optional[Severity]:
    """Stall severity of a submission in its current stage."""
    return classify_dwell(hours_in_stage, rules)


def get_bottleneck_label(bottleneck: Optional[str]) -> str:
    if not bottleneck:
        return "-"
    return BOTTLENECK_LABELS.get(bottleneck, bottleneck)


def calculate_phase_score(stage: str, age_days: int) -> int:
    expected = EXPECTED_STAGE_DAYS.get(stage, DEFAULT_EXPECTED_DAYS)
    if age_days <= expected:
        return 100
    if age_days <= expected * 2:
        return 70
    if age_days <= expected * 3:
        return 40
    return 20


def calculate_sla_score(active: int, breached: int = 0, warning: int = 0) -> int:
    if active <= 0:
        return 100
    return max(0, 100 - breached * 30 - warning * 15 - active * 5)


def calculate_behavior_score(
    recruiter_risk: Optional[float],
    client_risk: Optional[float],
) -> int:
    """Lower risk on both sides means a healthier deal."""
    r_risk = recruiter_risk or NEUTRAL_SCORE
    c_risk = client_risk or NEUTRAL_SCORE
    return round(100 - (r_risk + c_risk) / 2)


def calculate_activity_score(days_since_activity: int) -> int:
    if days_since_activity <= 0:
        return 100
    if days_since_activity <= 1:
        return 90
    if days_since_activity <= 3:
        return 70
    if days_since_activity <= 7:
        return 50
    if days_since_activity <= 14:
        return 30
    return 10


def get_risk_level(score: float) -> Severity:
    if score >= 80:
        return Severity.LOW
    if score >= 60:
        return Severity.MEDIUM
    if score >= 40:
        return Severity.HIGH
    return Severity.CRITICAL


def identify_bottleneck(
    stage: str,
    days_since_update: int,
    breached_sla_days: Optional[int] = None,
    breached_sla_rule: Optional[str] = None,
) -> DealBottleneck:
    """
    A breached SLA is always the bottleneck. Otherwise waiting stages
    become one after more than two days without an update.
    """
    if breached_sla_days is not None:
        return DealBottleneck(
            bottleneck=f"submission_{breached_sla_rule or 'unknown'}",
            days=max(0, breached_sla_days),
        )

    if stage in STAGE_BOTTLENECKS and days_since_update > BOTTLENECK_MIN_DAYS:
        return DealBottleneck(bottleneck=STAGE_BOTTLENECKS[stage], days=days_since_update)

    return DealBottleneck()


def calculate_drop_off_probability(
    health: int,
    inactive_days: int,
    bottleneck: DealBottleneck,
) -> int:
    probability = 100 - health
    if inactive_days > 7:
        probability += 15
    if inactive_days > 14:
        probability += 20
    if bottleneck.bottleneck:
        probability += 10
    if bottleneck.days > 5:
        probability += 15
    return min(95, max(5, probability))


def generate_recommendations(
    data: DealHealthInput,
    bottleneck: DealBottleneck,
) -> tuple[list[str], list[str]]:
    """Returns (recommendations, risk_factors)."""
    recommendations = []
    risk_factors = []

    if data.days_since_last_activity > 3:
        recommendations.append("Kontaktieren Sie den verantwortlichen Ansprechpartner")
        risk_factors.append(f"{data.days_since_last_activity} Tage ohne Aktivität")

    if bottleneck.bottleneck == "client_review":
        recommendations.append("Erinnerung an Client senden")
        risk_factors.append("Kandidat wartet auf Client-Review")

    if bottleneck.bottleneck == "candidate_opt_in":
        recommendations.append("Kandidaten-Opt-In nachfassen")
        risk_factors.append("Opt-In ausstehend")

    if data.breached_slas > 0:
        recommendations.append("SLA-Breach eskalieren")
        risk_factors.append(f"{data.breached_slas} SLA(s) überschritten")

    if not data.match_score or data.match_score < LOW_MATCH_SCORE:
        risk_factors.append("Niedriger Match-Score")

    if not recommendations:
        recommendations.append("Prozess läuft planmäßig - weiter beobachten")

    return recommendations, risk_factors


def generate_assessment(
    health: int,
    risk: Severity,
    bottleneck: DealBottleneck,
    risk_factors: list[str],
) -> str:
    if risk == Severity.CRITICAL:
        detail = (
            f"Hauptengpass: {get_bottleneck_label(bottleneck.bottleneck)}"
            if bottleneck.bottleneck else "Dringend Maßnahmen erforderlich."
        )
        return f"Kritischer Deal-Status ({health}%). {detail}"
    if risk == Severity.HIGH:
        detail = risk_factors[0] if risk_factors else "Aktive Betreuung empfohlen."
        return f"Erhöhtes Risiko ({health}%). {detail}"
    if risk == Severity.MEDIUM:
        return f"Deal im Normalbereich ({health}%). Leichte Verzögerungen möglich."
    return f"Gesunder Deal ({health}%). Alle Prozesse laufen planmäßig."


def score_deal_health(data: Union[DealHealthInput, dict]) -> DealHealthResult:
    """
    Score a single deal (submission).

    Weights:
    - Phase progress vs. expected stage duration: 25%
    - SLA state: 25%
    - Recent activity: 20%
    - Recruiter/client behaviour: 15%
    - Match score (neutral 50 when unknown): 15%
    """
    if not isinstance(data, DealHealthInput):
        data = DealHealthInput.model_validate(data)

    bottleneck = identify_bottleneck(
        data.stage,
        data.days_since_update,
        data.breached_sla_days,
        data.breached_sla_rule,
    )

    scores = {
        "phase": calculate_phase_score(data.stage, data.submission_age_days),
        "sla": calculate_sla_score(data.active_slas, data.breached_slas, data.warning_slas),
        "activity": calculate_activity_score(data.days_since_last_activity),
        "behavior": calculate_behavior_score(data.recruiter_risk_score, data.client_risk_score),
        "match": data.match_score or NEUTRAL_SCORE,
    }
    health = round(sum(scores[key] * weight for key, weight in WEIGHTS.items()))

    risk = get_risk_level(health)
    drop_off = calculate_drop_off_probability(health, data.days_since_last_activity, bottleneck)
    recommendations, risk_factors = generate_recommendations(data, bottleneck)

    logger.debug(f"Deal health {health} ({risk.value}), components: {scores}")

    return DealHealthResult(
        health_score=health,
        risk_level=risk,
        drop_off_probability=drop_off,
        days_since_last_activity=data.days_since_last_activity,
        bottleneck=bottleneck.bottleneck,
        bottleneck_days=bottleneck.days,
        assessment=generate_assessment(health, risk, bottleneck, risk_factors),
        recommended_actions=recommendations,
        risk_factors=risk_factors,
    )
