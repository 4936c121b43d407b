"""
SLA deadline labels for the warning banner.
Callers pass hours until the deadline; nothing here reads a clock.
"""

from typing import Iterable, Optional

from talentbridge.models import SlaTimeRemaining


# Deadlines inside this window show up in the banner
URGENT_WINDOW_HOURS = 48

BREACHED_STATUS = "breached"

SLA_TYPE_LABELS = {
    "initial_review": "Erstprüfung",
    "interview_scheduling": "Interview-Planung",
    "feedback": "Feedback",
    "decision": "Entscheidung",
    "offer": "Angebot",
}


def get_time_remaining(hours_until_deadline: float) -> SlaTimeRemaining:
    """
    Countdown text for a deadline. Partial hours are truncated toward zero.

    >>> get_time_remaining(-5).text
    '5h überfällig'
    >>> get_time_remaining(50).text
    '2d verbleibend'
    """
    hours = int(hours_until_deadline)
    if hours < 0:
        return SlaTimeRemaining(text=f"{abs(hours)}h überfällig", is_overdue=True)
    if hours < 24:
        return SlaTimeRemaining(text=f"{hours}h verbleibend", is_overdue=False)
    return SlaTimeRemaining(text=f"{hours // 24}d verbleibend", is_overdue=False)


def get_sla_type_label(code: Optional[str]) -> str:
    if not code:
        return "SLA"
    return SLA_TYPE_LABELS.get(code, code)


def is_urgent(hours_until_deadline: float) -> bool:
    return hours_until_deadline <= URGENT_WINDOW_HOURS


def summarize_deadlines(statuses: Iterable[Optional[str]]) -> tuple[int, int]:
    """Returns (breached, urgent) counts; anything not breached counts as urgent."""
    breached = 0
    urgent = 0
    for status in statuses:
        if status == BREACHED_STATUS:
            breached += 1
        else:
            urgent += 1
    return breached, urgent
