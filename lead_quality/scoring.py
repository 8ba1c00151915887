"""Quality scoring and tier classification for individual leads."""
from __future__ import annotations

from typing import List, Optional

from .completeness import evaluate_completeness
from .config import DEFAULT_POLICY, ScoringPolicy, round_half_up
from .location import evaluate_location
from .models import BusinessLead, CompletenessResult, QualityResult, Tier


def classify_score(score: int, policy: ScoringPolicy = DEFAULT_POLICY) -> Tier:
    """Map a 0-100 score onto a tier; thresholds are lower-inclusive."""

    if score >= policy.excellent_threshold:
        return Tier.EXCELLENT
    if score >= policy.okay_threshold:
        return Tier.OKAY
    return Tier.POOR


def _contact_reasons(completeness: CompletenessResult) -> List[str]:
    return [
        "Has email" if completeness.has_email else "Missing email",
        "Has phone" if completeness.has_phone else "Missing phone",
        "Has website" if completeness.has_website else "Missing website",
    ]


def combine_scores(
    contact_completeness: int,
    location_relevance: int,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> int:
    weighted = policy.contact_weight * contact_completeness + policy.location_weight * location_relevance
    return max(0, min(100, round_half_up(weighted)))


def score_lead(
    lead: BusinessLead,
    search_location: Optional[str],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> QualityResult:
    """Score ``lead`` against the searched location.

    Reasons always come in the same order: email, phone, website, location.
    """

    completeness = evaluate_completeness(lead)
    location = evaluate_location(lead, search_location, policy)
    score = combine_scores(completeness.percentage, location.relevance, policy)
    reasons = _contact_reasons(completeness)
    reasons.append(location.reason)
    return QualityResult(
        score=score,
        tier=classify_score(score, policy),
        reasons=tuple(reasons),
        contact_completeness=completeness.percentage,
        location_relevance=location.relevance,
    )
