"""
Fraud signal rules.

Each check takes values the backend already looked up (duplicate counts,
submission velocity, free text) and returns a FraudSignal or None.
No check talks to a database.
"""

import logging
import re
from typing import Iterable, Optional

from talentbridge.models import FraudRules, FraudSignal, FraudSignalType, Severity
from talentbridge.utils.text import (
    EMAIL_PATTERN,
    PHONE_PATTERN,
    contains_contact_details,
    jaccard_similarity,
    significant_words,
)

logger = logging.getLogger(__name__)


DEFAULT_FRAUD_RULES = FraudRules()

DISPOSABLE_DOMAIN_MARKERS = ("temp", "disposable")

CIRCUMVENTION_PATTERNS = (
    (PHONE_PATTERN, "Telefonnummer"),
    (EMAIL_PATTERN, "E-Mail-Adresse"),
    (re.compile(r'kontaktieren?\s*(sie)?\s*(mich)?\s*(direkt|privat)', re.IGNORECASE),
     "Direktkontakt-Aufforderung"),
    (re.compile(r'whatsapp|telegram|signal', re.IGNORECASE), "Messenger-Referenz"),
)


def check_duplicate_candidate(
    email: Optional[str],
    email_duplicates: int,
    same_recruiter: bool = False,
    phone: Optional[str] = None,
    phone_duplicates: int = 0,
) -> Optional[FraudSignal]:
    """Same email (or phone) already registered for another candidate."""
    if email_duplicates > 0:
        return FraudSignal(
            signal_type=FraudSignalType.DUPLICATE_CANDIDATE,
            severity=Severity.LOW if same_recruiter else Severity.HIGH,
            confidence_score=95,
            details={
                "match_field": "email",
                "duplicate_count": email_duplicates,
                "same_recruiter": same_recruiter,
            },
            evidence=[
                f"Email {email} bereits bei {email_duplicates} anderen Kandidaten gefunden",
                "Gleiches Recruiter-Konto" if same_recruiter
                else "Verschiedene Recruiter-Konten (verdächtig)",
            ],
        )

    if phone and phone_duplicates > 0:
        return FraudSignal(
            signal_type=FraudSignalType.DUPLICATE_CANDIDATE,
            severity=Severity.MEDIUM,
            confidence_score=85,
            details={"match_field": "phone", "duplicate_count": phone_duplicates},
            evidence=[f"Telefonnummer {phone} bereits bei anderen Kandidaten gefunden"],
        )

    return None


def check_velocity_abuse(
    submissions_last_hour: int,
    submissions_last_day: int,
    rules: FraudRules = DEFAULT_FRAUD_RULES,
) -> Optional[FraudSignal]:
    if submissions_last_hour > rules.max_submissions_per_hour:
        return FraudSignal(
            signal_type=FraudSignalType.VELOCITY_ABUSE,
            severity=Severity.HIGH,
            confidence_score=90,
            details={
                "submissions_per_hour": submissions_last_hour,
                "submissions_per_day": submissions_last_day,
            },
            evidence=[
                f"{submissions_last_hour} Einreichungen in der letzten Stunde "
                f"(Limit: {rules.max_submissions_per_hour})"
            ],
        )

    if submissions_last_day > rules.max_submissions_per_day:
        return FraudSignal(
            signal_type=FraudSignalType.VELOCITY_ABUSE,
            severity=Severity.MEDIUM,
            confidence_score=75,
            details={"submissions_per_day": submissions_last_day},
            evidence=[
                f"{submissions_last_day} Einreichungen in den letzten 24 Stunden "
                f"(Limit: {rules.max_submissions_per_day})"
            ],
        )

    return None


def check_data_inconsistency(
    full_name: Optional[str],
    email: Optional[str],
    linkedin_url: Optional[str] = None,
    summary: Optional[str] = None,
) -> Optional[FraudSignal]:
    """LinkedIn/name mismatch, throwaway email domains, contact data in the summary."""
    evidence = []
    severity = Severity.LOW

    if linkedin_url:
        linkedin_path = linkedin_url.lower()
        name_parts = (full_name or "").lower().split()
        if not any(len(part) > 2 and part in linkedin_path for part in name_parts):
            evidence.append("LinkedIn-URL enthält keinen Teil des Namens")
            severity = Severity.MEDIUM

    domain = email.split("@")[1].lower() if email and "@" in email else ""
    if domain and any(marker in domain for marker in DISPOSABLE_DOMAIN_MARKERS):
        evidence.append("Verdächtige E-Mail-Domain (Wegwerf-Adresse)")
        severity = Severity.HIGH

    if contains_contact_details(summary):
        evidence.append("Kontaktdaten im Freitext gefunden (Umgehungsversuch)")
        severity = Severity.HIGH

    if not evidence:
        return None

    return FraudSignal(
        signal_type=FraudSignalType.DATA_INCONSISTENCY,
        severity=severity,
        confidence_score=70,
        details={"checks_failed": len(evidence)},
        evidence=evidence,
    )


def check_circumvention_attempt(texts: Iterable[Optional[str]]) -> Optional[FraudSignal]:
    """Contact details or off-platform invitations in summaries and notes."""
    evidence = []
    for text in texts:
        if not text:
            continue
        for pattern, description in CIRCUMVENTION_PATTERNS:
            if pattern.search(text):
                evidence.append(f"{description} im Text gefunden")

    if not evidence:
        return None

    return FraudSignal(
        signal_type=FraudSignalType.CIRCUMVENTION_ATTEMPT,
        severity=Severity.HIGH,
        confidence_score=85,
        details={"patterns_found": len(evidence)},
        evidence=evidence,
    )


def check_shared_ip(ip_address: str, client_users_on_ip: int) -> Optional[FraudSignal]:
    """A recruiter submitting from an IP that clients also use."""
    if client_users_on_ip <= 0:
        return None

    return FraudSignal(
        signal_type=FraudSignalType.SUSPICIOUS_IP,
        severity=Severity.CRITICAL,
        confidence_score=95,
        details={"ip_address": ip_address, "shared_with_clients": client_users_on_ip},
        evidence=[
            f"Gleiche IP-Adresse wurde von {client_users_on_ip} Client(s) verwendet",
            "Möglicher Interessenkonflikt oder Selbst-Einreichung",
        ],
    )


def check_cv_similarity(
    summary: Optional[str],
    other_summaries: Iterable[tuple[str, Optional[str]]],
    rules: FraudRules = DEFAULT_FRAUD_RULES,
) -> Optional[FraudSignal]:
    """
    Jaccard similarity on words longer than 4 characters against CVs
    from other recruiters. Returns the first match above the threshold.

    Args:
        summary: The candidate's CV summary
        other_summaries: (candidate_name, summary) pairs to compare with
    """
    if not summary or len(summary) < rules.cv_min_summary_length:
        return None

    words = significant_words(summary)
    for other_name, other_summary in other_summaries:
        if not other_summary:
            continue

        similarity = jaccard_similarity(words, significant_words(other_summary))
        if similarity > rules.cv_similarity_threshold:
            percent = round(similarity * 100)
            return FraudSignal(
                signal_type=FraudSignalType.CV_SIMILARITY,
                severity=Severity.HIGH,
                confidence_score=percent,
                details={"similar_to_candidate": other_name, "similarity_score": similarity},
                evidence=[
                    f"CV-Inhalt zu {percent}% ähnlich zu Kandidat {other_name}",
                    "Mögliche Dublette oder Copy-Paste",
                ],
            )

    return None


def check_profile_changes(
    recent_changes: int,
    rules: FraudRules = DEFAULT_FRAUD_RULES,
) -> Optional[FraudSignal]:
    if recent_changes <= rules.max_profile_changes:
        return None

    return FraudSignal(
        signal_type=FraudSignalType.SUSPICIOUS_PROFILE_CHANGES,
        severity=Severity.MEDIUM,
        confidence_score=70,
        details={"change_count": recent_changes},
        evidence=[f"{recent_changes} Profiländerungen in kurzer Zeit"],
    )


def calculate_overall_risk(signals: list[FraudSignal]) -> Severity:
    """Combine signals: worst severity, average confidence and signal count."""
    if not signals:
        return Severity.LOW

    max_rank = max(s.severity.rank for s in signals)
    avg_confidence = sum(s.confidence_score for s in signals) / len(signals)

    if max_rank >= Severity.CRITICAL.rank or (max_rank >= Severity.HIGH.rank and avg_confidence > 80):
        return Severity.CRITICAL
    if max_rank >= Severity.HIGH.rank or (max_rank >= Severity.MEDIUM.rank and len(signals) >= 3):
        return Severity.HIGH
    if max_rank >= Severity.MEDIUM.rank or len(signals) >= 2:
        return Severity.MEDIUM
    return Severity.LOW


def determine_auto_action(risk: Severity, signals: list[FraudSignal]) -> Optional[str]:
    """blocked / flagged / warned, or None when no action is needed."""
    if risk == Severity.CRITICAL:
        return "blocked"
    if risk == Severity.HIGH:
        return "flagged"
    if any(s.signal_type == FraudSignalType.CIRCUMVENTION_ATTEMPT for s in signals):
        return "warned"
    return None


def evaluate_signals(signals: Iterable[Optional[FraudSignal]]) -> tuple[list[FraudSignal], Severity, Optional[str]]:
    """
    Drop empty check results and derive the overall risk and auto action.
    Returns (signals, risk_level, auto_action).
    """
    found = [s for s in signals if s is not None]
    risk = calculate_overall_risk(found)
    action = determine_auto_action(risk, found)

    if found:
        logger.info(
            f"{len(found)} fraud signal(s), risk {risk.value}, action {action or 'none'}"
        )
    return found, risk, action
