"""
Data models for the TalentBridge rules engine.
All models are Pydantic for validation and serialization.

Input records are read-only snapshots handed over by the backend.
Result models are what the UI layer renders.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum


class HealthLevel(str, Enum):
    """Discrete health level for job/recruiting health."""
    EXCELLENT = "excellent"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class ReadinessLevel(str, Enum):
    """Exposé readiness tier."""
    READY = "ready"              # >= 85%
    PARTIAL = "partial"          # >= 50%
    INCOMPLETE = "incomplete"


class Severity(str, Enum):
    """Severity for bottlenecks and fraud signals."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}


class PipelineStage(str, Enum):
    """Job pipeline stage, derived from submission counts."""
    NEW = "new"
    SOURCING = "sourcing"
    SCREENING = "screening"
    INTERVIEWING = "interviewing"
    OFFERING = "offering"
    FILLED = "filled"
    PAUSED = "paused"            # override only, never derived from counts


class PipelineHealth(str, Enum):
    HEALTHY = "healthy"
    NEEDS_ATTENTION = "needs_attention"
    CRITICAL = "critical"
    PAUSED = "paused"


class FraudSignalType(str, Enum):
    DUPLICATE_CANDIDATE = "duplicate_candidate"
    VELOCITY_ABUSE = "velocity_abuse"
    DATA_INCONSISTENCY = "data_inconsistency"
    CIRCUMVENTION_ATTEMPT = "circumvention_attempt"
    SUSPICIOUS_IP = "suspicious_ip"
    CV_SIMILARITY = "cv_similarity"
    SUSPICIOUS_PROFILE_CHANGES = "suspicious_profile_changes"


# =========================================
# Input snapshots
# =========================================

def _drop_nulls(value):
    """Backend rows may carry null instead of an empty list, or null entries."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [item for item in value if item is not None]
    return value


class CandidateRecord(BaseModel):
    """
    Candidate snapshot as fetched by the backend.
    Identity fields are only read by the reveal-aware helpers.
    """
    id: Optional[str] = None
    full_name: Optional[str] = None

    skills: list[str] = Field(default_factory=list)
    experience_years: Optional[float] = None
    expected_salary: Optional[float] = None

    # Availability
    availability_date: Optional[str] = None
    notice_period: Optional[str] = None

    city: Optional[str] = None

    # AI-derived CV fields (populated by an external service)
    cv_ai_summary: Optional[str] = None
    cv_ai_bullets: list[str] = Field(default_factory=list)

    @field_validator("skills", "cv_ai_bullets", mode="before")
    @classmethod
    def _null_list(cls, value):
        return _drop_nulls(value)


class CompanyAttributes(BaseModel):
    """Structured attributes used to describe a company without naming it."""
    name: Optional[str] = None
    industry: Optional[str] = None
    company_size_band: Optional[str] = None
    funding_stage: Optional[str] = None
    tech_stack: list[str] = Field(default_factory=list)
    remote_type: Optional[str] = None  # remote / hybrid / onsite
    city: Optional[str] = None
    urgency: Optional[str] = None      # standard / urgent / hot

    @field_validator("tech_stack", mode="before")
    @classmethod
    def _null_list(cls, value):
        return _drop_nulls(value)


class CompanyProfile(BaseModel):
    """Client company profile checked for completeness."""
    name: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    headcount: Optional[int] = None
    revenue: Optional[str] = None
    founded_year: Optional[int] = None
    usp: Optional[str] = None
    linkedin_url: Optional[str] = None


class PipelineCounts(BaseModel):
    """Per-job submission counts. Not guaranteed to be disjoint."""
    total: int = 0
    in_screening: int = 0
    in_interview: int = 0
    offers_out: int = 0
    hired: int = 0
    rejected: int = 0


class StageDwell(BaseModel):
    """How long one candidate has been sitting in their current stage."""
    stage: str
    hours_in_stage: float


class DealHealthInput(BaseModel):
    """
    Pre-computed inputs for a single submission's deal health.
    All durations are whole days computed upstream.
    """
    stage: str
    submission_age_days: int = 0
    days_since_last_activity: int = 0
    days_since_update: int = 0

    # SLA deadlines attached to the submission
    active_slas: int = 0
    breached_slas: int = 0
    warning_slas: int = 0
    breached_sla_days: Optional[int] = None
    breached_sla_rule: Optional[str] = None

    # Behaviour risk scores (0-100, higher = riskier)
    recruiter_risk_score: Optional[float] = None
    client_risk_score: Optional[float] = None

    match_score: Optional[float] = None


# =========================================
# Results
# =========================================

class HealthResult(BaseModel):
    """
    Outcome of a health scorer.
    Issues are kept in accumulation order for detail views.
    """
    level: HealthLevel
    label: str
    score: int
    issues: list[str] = Field(default_factory=list)
    primary_issue: Optional[str] = None
    message: str = ""


class ReadinessResult(BaseModel):
    score: int
    missing_fields: list[str] = Field(default_factory=list)
    level: ReadinessLevel
    badge: str
    passed: int = 0
    total: int = 7


class CompanyCompleteness(BaseModel):
    score: int
    missing_fields: list[str] = Field(default_factory=list)
    is_complete: bool = False

    @property
    def show_card(self) -> bool:
        """The completeness card is hidden once the profile is complete."""
        return not self.is_complete


class StageStatistics(BaseModel):
    stage: str
    count: int
    avg_hours: float

    @property
    def avg_days(self) -> float:
        return self.avg_hours / 24


class StageBottleneck(StageStatistics):
    severity: Severity
    label: str = ""


class PipelineStatus(BaseModel):
    stage: PipelineStage
    health: PipelineHealth
    label: str
    health_label: str


class AnonymizedCandidate(BaseModel):
    anonymous_id: str
    skills: list[str] = Field(default_factory=list)
    experience_range: str
    salary_expectation: str
    region: str
    availability: Optional[str] = None
    match_score: Optional[float] = None
    summary: Optional[str] = None  # never personal, filled by the exposé generator


class ColorLabel(BaseModel):
    """Label plus a semantic color (green/amber/red/gray) for badges."""
    model_config = ConfigDict(frozen=True)

    label: str
    color: str


class DealBottleneck(BaseModel):
    bottleneck: Optional[str] = None
    days: int = 0


class DealHealthResult(BaseModel):
    health_score: int
    risk_level: Severity
    drop_off_probability: int
    days_since_last_activity: int
    bottleneck: Optional[str] = None
    bottleneck_days: int = 0
    assessment: str = ""
    recommended_actions: list[str] = Field(default_factory=list)
    risk_factors: list[str] = Field(default_factory=list)


class FunnelMetrics(BaseModel):
    total_submissions: int = 0
    opted_in: int = 0
    interviewed: int = 0
    offered: int = 0
    placed: int = 0

    # Percentages, 2 decimals
    opt_in_rate: float = 0.0
    interview_rate: float = 0.0
    offer_rate: float = 0.0
    acceptance_rate: float = 0.0

    avg_time_to_fill_days: Optional[float] = None


class FraudSignal(BaseModel):
    signal_type: FraudSignalType
    severity: Severity
    confidence_score: int
    details: dict = Field(default_factory=dict)
    evidence: list[str] = Field(default_factory=list)


class SlaTimeRemaining(BaseModel):
    text: str
    is_overdue: bool


# =========================================
# Rule sets (loaded from config/rules.yaml)
# =========================================

class _Rules(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class JobHealthRules(_Rules):
    """Cut points and weights for the per-job health indicator."""
    candidates_high: int = 5
    candidates_mid: int = 2
    candidates_low: int = 1
    candidates_points: tuple[int, int, int] = (30, 20, 10)

    interviews_high: int = 2
    interviews_low: int = 1
    interviews_points: tuple[int, int] = (30, 20)
    no_interview_min_candidates: int = 3   # strictly greater than
    no_interview_min_days_open: int = 14   # strictly greater than

    recruiters_high: int = 3
    recruiters_low: int = 1
    recruiters_points: tuple[int, int] = (25, 15)
    few_recruiters_min_days_open: int = 7

    fresh_days: int = 14
    recent_days: int = 30
    recency_points: tuple[int, int] = (15, 10)
    stale_days: int = 45
    stale_max_candidates: int = 3          # strictly less than

    excellent: int = 70
    good: int = 45
    warning: int = 20


class RecruitingHealthRules(_Rules):
    """Cut points and weights for the client dashboard health score."""
    per_job_high: float = 5
    per_job_mid: float = 2
    per_job_low: float = 1
    per_job_points: tuple[int, int, int] = (30, 20, 10)

    interviews_high: int = 2
    interviews_low: int = 1
    interviews_points: tuple[int, int] = (25, 15)
    no_interview_min_candidates: int = 3

    new_candidates_high: int = 3
    new_candidates_low: int = 1
    new_candidates_points: tuple[int, int] = (25, 15)

    placement_points: int = 20
    pipeline_points: int = 10
    pipeline_min_candidates: int = 10

    excellent: int = 80
    good: int = 50
    warning: int = 25


class ReadinessRules(_Rules):
    min_skills: int = 3
    ready: int = 85
    partial: int = 50


class BottleneckRules(_Rules):
    """Average dwell in days per severity."""
    critical_days: float = 7
    high_days: float = 5
    medium_days: float = 3


class FraudRules(_Rules):
    max_submissions_per_hour: int = 10
    max_submissions_per_day: int = 50
    cv_similarity_threshold: float = 0.7
    cv_min_summary_length: int = 100
    max_profile_changes: int = 5


class RulesSettings(BaseModel):
    """
    Loaded from config/rules.yaml.
    Every section falls back to the code defaults when absent.
    """
    model_config = ConfigDict(extra="forbid")

    job_health: JobHealthRules = Field(default_factory=JobHealthRules)
    recruiting_health: RecruitingHealthRules = Field(default_factory=RecruitingHealthRules)
    readiness: ReadinessRules = Field(default_factory=ReadinessRules)
    bottleneck: BottleneckRules = Field(default_factory=BottleneckRules)
    fraud: FraudRules = Field(default_factory=FraudRules)
