"""Contact-channel completeness checks for individual leads."""
from __future__ import annotations

from typing import List, Optional

from .config import round_half_up
from .models import BusinessLead, CompletenessResult, clean_text

CONTACT_FIELDS = ("Email", "Phone", "Website")
MIN_PHONE_DIGITS = 10


def has_valid_email(value: Optional[str]) -> bool:
    text = clean_text(value)
    return text is not None and "@" in text


def has_valid_phone(value: Optional[str]) -> bool:
    text = clean_text(value)
    if text is None:
        return False
    return sum(1 for c in text if c.isdigit()) >= MIN_PHONE_DIGITS


def has_valid_website(value: Optional[str]) -> bool:
    text = clean_text(value)
    return text is not None and "." in text


def evaluate_completeness(lead: BusinessLead) -> CompletenessResult:
    """Count the valid contact channels on ``lead``.

    Missing or malformed values count as missing; this never raises.
    """

    checks = (
        has_valid_email(lead.email),
        has_valid_phone(lead.phone),
        has_valid_website(lead.website),
    )
    missing: List[str] = [name for name, present in zip(CONTACT_FIELDS, checks) if not present]
    score = sum(checks)
    return CompletenessResult(
        score=score,
        percentage=round_half_up(score / len(CONTACT_FIELDS) * 100),
        missing_fields=tuple(missing),
        total=len(CONTACT_FIELDS),
    )
