"""
Deal health tests for single submissions.
"""

import pytest

from talentbridge.models import BottleneckRules, DealBottleneck, DealHealthInput, Severity
from talentbridge.scoring.deal_health import (
    calculate_activity_score,
    calculate_behavior_score,
    calculate_drop_off_probability,
    calculate_phase_score,
    calculate_sla_score,
    dwell_severity,
    get_bottleneck_label,
    get_risk_level,
    identify_bottleneck,
    score_deal_health,
)


@pytest.fixture
def healthy_deal():
    return DealHealthInput(
        stage="interview",
        submission_age_days=5,
        recruiter_risk_score=10,
        client_risk_score=10,
        match_score=90,
    )


@pytest.fixture
def stalled_deal():
    return DealHealthInput(
        stage="submitted",
        submission_age_days=10,
        days_since_last_activity=20,
        days_since_update=20,
        active_slas=2,
        breached_slas=1,
        warning_slas=1,
        breached_sla_days=3,
        breached_sla_rule="initial_review",
        recruiter_risk_score=80,
        client_risk_score=80,
    )


class TestComponentScores:

    @pytest.mark.parametrize("stage, age_days, score", [
        ("interview", 14, 100),
        ("interview", 28, 70),
        ("interview", 42, 40),
        ("interview", 43, 20),
        ("submitted", 2, 100),
        ("submitted", 3, 70),
        ("unknown_stage", 8, 70),
    ])
    def test_phase_score(self, stage, age_days, score):
        assert calculate_phase_score(stage, age_days) == score

    @pytest.mark.parametrize("active, breached, warning, score", [
        (0, 5, 5, 100),
        (1, 0, 0, 95),
        (3, 2, 1, 10),
        (4, 3, 2, 0),
    ])
    def test_sla_score(self, active, breached, warning, score):
        assert calculate_sla_score(active, breached, warning) == score

    def test_behavior_score(self):
        assert calculate_behavior_score(None, None) == 50
        assert calculate_behavior_score(20, 40) == 70

    @pytest.mark.parametrize("days, score", [
        (0, 100), (1, 90), (3, 70), (7, 50), (14, 30), (15, 10),
    ])
    def test_activity_score(self, days, score):
        assert calculate_activity_score(days) == score

    @pytest.mark.parametrize("score, level", [
        (80, Severity.LOW),
        (79, Severity.MEDIUM),
        (60, Severity.MEDIUM),
        (59, Severity.HIGH),
        (40, Severity.HIGH),
        (39, Severity.CRITICAL),
    ])
    def test_risk_level(self, score, level):
        assert get_risk_level(score) == level


class TestBottleneck:

    def test_breached_sla_wins(self):
        bottleneck = identify_bottleneck("submitted", 10, breached_sla_days=3, breached_sla_rule="feedback")
        assert bottleneck == DealBottleneck(bottleneck="submission_feedback", days=3)

    def test_waiting_for_client(self):
        bottleneck = identify_bottleneck("submitted", 4)
        assert bottleneck == DealBottleneck(bottleneck="client_review", days=4)
        assert get_bottleneck_label(bottleneck.bottleneck) == "Kunden-Review"

    def test_two_days_is_not_yet_a_bottleneck(self):
        assert identify_bottleneck("opt_in_pending", 2).bottleneck is None

    def test_stage_without_owner(self):
        assert identify_bottleneck("offer", 30).bottleneck is None

    def test_dwell_severity_uses_bottleneck_cut_points(self):
        assert dwell_severity(200) == Severity.CRITICAL
        assert dwell_severity(10) is None

    def test_dwell_severity_with_custom_rules(self):
        rules = BottleneckRules(critical_days=2, high_days=1.5, medium_days=1)
        assert dwell_severity(48, rules) == Severity.CRITICAL
        assert dwell_severity(30, rules) == Severity.MEDIUM
        assert dwell_severity(48) is None


class TestDropOff:

    def test_clamped_low(self):
        assert calculate_drop_off_probability(100, 0, DealBottleneck()) == 5

    def test_clamped_high(self):
        bottleneck = DealBottleneck(bottleneck="client_review", days=10)
        assert calculate_drop_off_probability(0, 20, bottleneck) == 95

    def test_inactivity_penalties(self):
        assert calculate_drop_off_probability(70, 10, DealBottleneck()) == 45


class TestScoreDealHealth:

    def test_healthy_deal(self, healthy_deal):
        result = score_deal_health(healthy_deal)

        assert result.health_score == 97
        assert result.risk_level == Severity.LOW
        assert result.drop_off_probability == 5
        assert result.bottleneck is None
        assert result.risk_factors == []
        assert result.recommended_actions == ["Prozess läuft planmäßig - weiter beobachten"]
        assert result.assessment == "Gesunder Deal (97%). Alle Prozesse laufen planmäßig."

    def test_stalled_deal(self, stalled_deal):
        result = score_deal_health(stalled_deal)

        assert result.health_score == 29
        assert result.risk_level == Severity.CRITICAL
        assert result.drop_off_probability == 95
        assert result.bottleneck == "submission_initial_review"
        assert result.bottleneck_days == 3
        assert result.risk_factors == [
            "20 Tage ohne Aktivität",
            "1 SLA(s) überschritten",
            "Niedriger Match-Score",
        ]
        assert "SLA-Breach eskalieren" in result.recommended_actions
        assert result.assessment.startswith("Kritischer Deal-Status (29%).")

    def test_accepts_mapping(self):
        result = score_deal_health({"stage": "submitted", "days_since_update": 4, "match_score": 90})

        assert result.bottleneck == "client_review"
        assert "Erinnerung an Client senden" in result.recommended_actions
        assert "Kandidat wartet auf Client-Review" in result.risk_factors

    def test_score_in_range(self, stalled_deal, healthy_deal):
        for deal in (stalled_deal, healthy_deal):
            result = score_deal_health(deal)
            assert 0 <= result.health_score <= 100
            assert 5 <= result.drop_off_probability <= 95

    def test_idempotent(self, stalled_deal):
        assert score_deal_health(stalled_deal) == score_deal_health(stalled_deal)
