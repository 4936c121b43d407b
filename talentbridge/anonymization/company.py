"""
Anonymous company descriptors for Triple-Blind job listings.

Before the reveal a candidate only sees a bracketed, pipe-delimited
descriptor such as "[FinTech | 51-200 MA | Series A | React/Node.js | Hybrid · Berlin]".
"""

import logging
from typing import Optional, Union

from talentbridge.models import CompanyAttributes
from talentbridge.utils.text import contains_ignore_case, humanize_code, is_blank

logger = logging.getLogger(__name__)


COMPANY_FALLBACK = "Unternehmen"
MASKED_DESCRIPTOR = "[***]"
TECH_STACK_PREVIEW = 3

COMPANY_SIZE_LABELS = {
    "1-10": "1-10 MA",
    "11-50": "11-50 MA",
    "51-200": "51-200 MA",
    "201-500": "201-500 MA",
    "501-1000": "501-1000 MA",
    "1001-5000": "1001-5000 MA",
    "5000+": "5000+ MA",
    "startup": "Startup",
    "smb": "KMU",
    "mid_market": "Mittelstand",
    "enterprise": "Konzern",
}

FUNDING_STAGE_LABELS = {
    "bootstrapped": "Bootstrapped",
    "pre_seed": "Pre-Seed",
    "seed": "Seed",
    "series_a": "Series A",
    "series_b": "Series B",
    "series_c": "Series C",
    "series_d_plus": "Series D+",
    "profitable": "Profitabel",
    "public": "Börsennotiert",
}

WORK_MODEL_LABELS = {
    "remote": "Full Remote",
    "hybrid": "Hybrid",
    "onsite": "Vor Ort",
    "flexible": "Flexibel",
}

URGENCY_STANDARD = "standard"
URGENCY_LABELS = {
    "urgent": "Dringend",
    "hot": "Sehr dringend",
}


def _label(code: Optional[str], labels: dict) -> Optional[str]:
    """Look up a display label; unknown codes are humanized, blanks dropped."""
    if is_blank(code):
        return None
    key = code.strip()
    return labels.get(key.lower(), labels.get(key, humanize_code(key)))


def format_company_size(band: Optional[str]) -> Optional[str]:
    return _label(band, COMPANY_SIZE_LABELS)


def format_funding_stage(stage: Optional[str]) -> Optional[str]:
    return _label(stage, FUNDING_STAGE_LABELS)


def format_work_model(remote_type: Optional[str], city: Optional[str]) -> Optional[str]:
    """Work model and city ("Hybrid · Berlin"), or whichever is present."""
    work_model = _label(remote_type, WORK_MODEL_LABELS)
    location = None if is_blank(city) else city.strip()
    parts = [part for part in (work_model, location) if part]
    if not parts:
        return None
    return " · ".join(parts)


def format_urgency(urgency: Optional[str]) -> Optional[str]:
    """Standard urgency is not worth mentioning."""
    if is_blank(urgency) or urgency.strip().lower() == URGENCY_STANDARD:
        return None
    return _label(urgency, URGENCY_LABELS)


def format_tech_preview(tech_stack: list[str]) -> Optional[str]:
    entries = [t.strip() for t in tech_stack or [] if not is_blank(t)]
    if not entries:
        return None
    return "/".join(entries[:TECH_STACK_PREVIEW])


def anonymize_company_name(industry: Optional[str]) -> str:
    """Single-field variant: "[FinTech] Unternehmen" or "[Unternehmen]"."""
    if is_blank(industry):
        return f"[{COMPANY_FALLBACK}]"
    return f"[{industry.strip()}] {COMPANY_FALLBACK}"


def format_anonymous_company(
    attributes: Union[CompanyAttributes, dict],
    revealed: bool = False,
) -> str:
    """
    Company display name for the current disclosure stage.

    Args:
        attributes: Company attributes (model or plain mapping)
        revealed: True once the identity has been unlocked

    Returns:
        The real name when revealed, otherwise the anonymous descriptor.
        The descriptor never contains the real name: parts that would
        leak it are dropped.
    """
    if not isinstance(attributes, CompanyAttributes):
        attributes = CompanyAttributes.model_validate(attributes or {})

    name = None if is_blank(attributes.name) else attributes.name.strip()
    if revealed and name:
        return name

    industry = None if is_blank(attributes.industry) else attributes.industry.strip()
    if not industry or contains_ignore_case(industry, name):
        industry = COMPANY_FALLBACK

    details = [
        format_company_size(attributes.company_size_band),
        format_funding_stage(attributes.funding_stage),
        format_tech_preview(attributes.tech_stack),
        format_work_model(attributes.remote_type, attributes.city),
        format_urgency(attributes.urgency),
    ]

    parts = [industry]
    for part in details:
        if not part:
            continue
        if contains_ignore_case(part, name):
            logger.debug("Dropped descriptor part that contains the company name")
            continue
        parts.append(part)

    descriptor = f"[{' | '.join(parts)}]"
    if contains_ignore_case(descriptor, name):
        return MASKED_DESCRIPTOR
    return descriptor
