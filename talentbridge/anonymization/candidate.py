"""
Triple-Blind candidate anonymization.

Buckets identifying attributes into disclosure-safe ranges and builds the
anonymous view a client sees before the candidate opts in.
Every helper is total: missing data degrades to a fallback label.
"""

import math
from typing import Optional, Union

from talentbridge.models import AnonymizedCandidate, CandidateRecord, ColorLabel
from talentbridge.utils.text import clean_text, is_blank


NOT_SPECIFIED = "Nicht angegeben"
NOT_RELEASED = "Nicht freigegeben"
HIDDEN_FIELD_PLACEHOLDER = "🔒 Verborgen bis Opt-In"

ANONYMOUS_ID_PREFIX = "Kandidat #"
ANONYMOUS_ID_LENGTH = 8
ANONYMOUS_ID_FALLBACK = "ANONYM"

SALARY_BUCKET = 10_000

# (region, city/country keywords) - ordered, first match wins
BROAD_REGIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Süddeutschland", (
        "münchen", "munich", "augsburg", "nürnberg", "regensburg",
        "stuttgart", "ulm", "freiburg", "karlsruhe",
    )),
    ("Norddeutschland", (
        "berlin", "hamburg", "bremen", "hannover", "kiel", "rostock",
        "lübeck", "schwerin",
    )),
    ("Westdeutschland", (
        "köln", "düsseldorf", "dortmund", "essen", "frankfurt", "bonn",
        "aachen", "wiesbaden", "mainz",
    )),
    ("Ostdeutschland", (
        "dresden", "leipzig", "chemnitz", "erfurt", "magdeburg", "potsdam",
    )),
    ("Österreich", (
        "wien", "vienna", "graz", "linz", "salzburg", "innsbruck",
        "klagenfurt", "österreich", "austria",
    )),
    ("Schweiz", (
        "zürich", "zurich", "basel", "bern", "genf", "geneva", "lausanne",
        "schweiz", "switzerland",
    )),
    ("EU - Benelux", ("amsterdam", "netherlands", "niederlande")),
    ("EU - Frankreich", ("paris", "france", "frankreich")),
    ("UK", ("london", "uk", "england")),
    ("EU - Südeuropa", ("spain", "spanien", "madrid", "barcelona")),
    ("EU - Osteuropa", ("poland", "polen", "warsaw", "krakow")),
    ("Deutschland", ("germany", "deutschland")),
)
DEFAULT_BROAD_REGION = "DACH"


def generate_anonymous_id(identifier: Optional[str]) -> str:
    """
    Display token for a candidate or submission.

    Only a truncated, upper-cased prefix of the identifier - reproducible
    from the id and not meant to be unguessable.
    """
    if is_blank(identifier):
        return f"{ANONYMOUS_ID_PREFIX}{ANONYMOUS_ID_FALLBACK}"
    return f"{ANONYMOUS_ID_PREFIX}{identifier[:ANONYMOUS_ID_LENGTH].upper()}"


def display_candidate_name(
    full_name: Optional[str],
    identifier: Optional[str],
    revealed: bool = False,
) -> str:
    """Real name after opt-in, anonymous token before."""
    if revealed and not is_blank(full_name):
        return full_name.strip()
    return generate_anonymous_id(identifier)


def display_contact_field(value: Optional[str], revealed: bool = False) -> str:
    """Contact data (email, phone, LinkedIn) stays locked until opt-in."""
    if not revealed:
        return HIDDEN_FIELD_PLACEHOLDER
    if is_blank(value):
        return NOT_SPECIFIED
    return value.strip()


def anonymize_experience(years: Optional[float]) -> str:
    if years is None:
        return NOT_SPECIFIED
    if years < 2:
        return "0-2 Jahre"
    if years < 5:
        return "3-5 Jahre"
    if years < 10:
        return "5-10 Jahre"
    return "10+ Jahre"


def anonymize_salary(salary: Optional[float]) -> str:
    """Floor to the 10k bucket: 55000 -> "€50,000 - €60,000"."""
    if not salary or not math.isfinite(salary):
        return NOT_RELEASED
    lower = int(salary // SALARY_BUCKET) * SALARY_BUCKET
    upper = lower + SALARY_BUCKET
    return f"€{lower:,} - €{upper:,}"


def anonymize_region(city: Optional[str]) -> str:
    """Token before the first comma: "Berlin, Germany" -> "Berlin Area"."""
    if is_blank(city):
        return NOT_SPECIFIED
    token = clean_text(city.split(",")[0])
    if not token:
        return NOT_SPECIFIED
    return f"{token} Area"


def anonymize_region_broad(city: Optional[str]) -> str:
    """Coarse region (Süddeutschland, Schweiz, ...) instead of a city."""
    if is_blank(city):
        return DEFAULT_BROAD_REGION

    lowered = city.lower()
    for region, keywords in BROAD_REGIONS:
        if any(keyword in lowered for keyword in keywords):
            return region
    return DEFAULT_BROAD_REGION


def format_availability(
    availability_date: Optional[str],
    notice_period: Optional[str],
) -> Optional[str]:
    if not is_blank(availability_date):
        return availability_date.strip()
    if not is_blank(notice_period):
        return notice_period.strip()
    return None


def anonymize_candidate(
    candidate: Union[CandidateRecord, dict],
    submission_id: Optional[str],
    match_score: Optional[float] = None,
    location: Optional[str] = None,
    broad_region: bool = False,
) -> AnonymizedCandidate:
    """
    Build the anonymous candidate view for a submission.

    Args:
        candidate: Candidate snapshot (model or plain mapping)
        submission_id: Source of the anonymous display token
        match_score: Optional match score to pass through
        location: Overrides the candidate's city for the region
        broad_region: Use coarse regions instead of "<city> Area"

    Returns:
        AnonymizedCandidate without name, contact data or summary
    """
    if not isinstance(candidate, CandidateRecord):
        candidate = CandidateRecord.model_validate(candidate or {})

    city = location if not is_blank(location) else candidate.city
    region = anonymize_region_broad(city) if broad_region else anonymize_region(city)

    return AnonymizedCandidate(
        anonymous_id=generate_anonymous_id(submission_id),
        skills=list(candidate.skills),
        experience_range=anonymize_experience(candidate.experience_years),
        salary_expectation=anonymize_salary(candidate.expected_salary),
        region=region,
        availability=format_availability(
            candidate.availability_date, candidate.notice_period
        ),
        match_score=match_score or None,
        summary=None,
    )


def explain_missing_field(field_type: str, has_interview: bool = False) -> str:
    """Explain why an exposé field is empty instead of showing a blank."""
    not_captured = "Nicht erfasst (Interview noch nicht geführt)"
    explanations = {
        "motivation": "Im Interview nicht besprochen" if has_interview else not_captured,
        "salary": NOT_RELEASED,
        "availability": "Noch nicht besprochen",
        "skills": "Nicht erfasst",
        "risks": "Keine Risiken identifiziert" if has_interview else not_captured,
        "strengths": "Noch keine Stärken identifiziert" if has_interview else not_captured,
        "career_goals": "Im Interview nicht besprochen" if has_interview else not_captured,
        "region": NOT_SPECIFIED,
        "experience": NOT_SPECIFIED,
        "seniority": NOT_SPECIFIED,
        "work_model": NOT_SPECIFIED,
    }
    return explanations.get(field_type, "Keine Angabe")


FIT_LABELS = {
    "geeignet": ColorLabel(label="Geeignet", color="green"),
    "grenzwertig": ColorLabel(label="Grenzwertig", color="amber"),
    "nicht_geeignet": ColorLabel(label="Nicht geeignet", color="red"),
}
NOT_RATED = ColorLabel(label="Nicht bewertet", color="gray")


def get_fit_label(
    score: Optional[float],
    fit_assessment: Optional[str] = None,
) -> ColorLabel:
    """Fit label for a match score; an explicit assessment wins."""
    if fit_assessment in FIT_LABELS:
        return FIT_LABELS[fit_assessment]

    if score is None:
        return NOT_RATED
    if score >= 75:
        return FIT_LABELS["geeignet"]
    if score >= 50:
        return FIT_LABELS["grenzwertig"]
    return FIT_LABELS["nicht_geeignet"]


MOTIVATION_LABELS = {
    "hoch": ColorLabel(label="Hoch", color="green"),
    "mittel": ColorLabel(label="Mittel", color="amber"),
    "gering": ColorLabel(label="Gering", color="red"),
}
UNKNOWN_MOTIVATION = ColorLabel(label="Unbekannt", color="gray")


def get_motivation_status(status: Optional[str]) -> ColorLabel:
    return MOTIVATION_LABELS.get(status or "", UNKNOWN_MOTIVATION)
