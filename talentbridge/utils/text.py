"""
Text processing utilities.
"""

import re
from typing import Optional


# Contact details that must not leak through free text before opt-in
PHONE_PATTERN = re.compile(r'\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b')
LONG_NUMBER_PATTERN = re.compile(r'\b\d{10,}\b')
EMAIL_PATTERN = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')


def clean_text(text: Optional[str]) -> str:
    """
    Clean and normalize text for processing.
    - Remove excessive whitespace
    - Strip leading/trailing whitespace
    """
    if not text:
        return ""

    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def is_blank(value) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def has_positive(value) -> bool:
    """True for numbers greater than zero."""
    return value is not None and value > 0


def contains_ignore_case(text: str, needle: Optional[str]) -> bool:
    """Case-insensitive substring check. An empty needle never matches."""
    if not needle or not needle.strip():
        return False
    return needle.strip().lower() in text.lower()


def humanize_code(code: str) -> str:
    """Turn an enum-like code ("series_a") into display text ("Series A")."""
    words = code.replace("_", " ").replace("-", " ").split()
    return " ".join(w if w.isupper() else w.capitalize() for w in words)


def significant_words(text: Optional[str], min_length: int = 5) -> set[str]:
    """Lowercased words of at least min_length characters."""
    if not text:
        return set()
    return {w for w in text.lower().split() if len(w) >= min_length}


def jaccard_similarity(a: set[str], b: set[str]) -> float:
    """Jaccard similarity of two word sets, 0.0 when both are empty."""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def contains_contact_details(text: Optional[str]) -> bool:
    """Check if free text carries a phone number or an email address."""
    if not text:
        return False
    return bool(LONG_NUMBER_PATTERN.search(text) or EMAIL_PATTERN.search(text))
