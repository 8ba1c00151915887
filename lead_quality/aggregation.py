"""Group and summarise a whole result set by quality tier."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .completeness import evaluate_completeness
from .config import DEFAULT_POLICY, ScoringPolicy, round_half_up
from .models import BusinessLead, GroupedLeads, QualityStats, ScoredLead, Tier
from .scoring import score_lead

LOGGER = logging.getLogger(__name__)


def name_key(lead: BusinessLead) -> Tuple[str, str, str]:
    """Case-insensitive name ordering; the raw name and then the lead key break exact ties."""

    return (lead.name.casefold(), lead.name, lead.key)


def ordering_key(score: int, lead: BusinessLead) -> Tuple[int, str, str, str]:
    """Sort key for descending score, ties broken by name, then identity."""

    return (-score, *name_key(lead))


def score_leads(
    leads: Iterable[BusinessLead],
    search_location: Optional[str],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> List[ScoredLead]:
    """Score every lead once, keeping input order."""

    return [ScoredLead(lead=lead, quality=score_lead(lead, search_location, policy)) for lead in leads]


def _sorted(scored: Iterable[ScoredLead]) -> List[ScoredLead]:
    return sorted(scored, key=lambda item: ordering_key(item.quality.score, item.lead))


def rank_leads(
    leads: Iterable[BusinessLead],
    search_location: Optional[str],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> List[ScoredLead]:
    """Return every lead scored and sorted best first, regardless of tier."""

    return _sorted(score_leads(leads, search_location, policy))


def group_leads(
    leads: Iterable[BusinessLead],
    search_location: Optional[str],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> GroupedLeads:
    """Bucket leads by tier, each bucket sorted by descending score then name."""

    grouped = GroupedLeads()
    for item in rank_leads(leads, search_location, policy):
        grouped[item.quality.tier].append(item)
    LOGGER.debug(
        "Grouped %s leads: %s excellent, %s okay, %s poor",
        grouped.total,
        len(grouped.excellent),
        len(grouped.okay),
        len(grouped.poor),
    )
    return grouped


def stats_for_scored(scored: Sequence[ScoredLead]) -> QualityStats:
    """Summarise already-scored leads; contact totals ignore tiering."""

    if not scored:
        return QualityStats()

    counts = {tier: 0 for tier in Tier}
    with_email = with_phone = with_website = 0
    for item in scored:
        counts[item.quality.tier] += 1
        completeness = evaluate_completeness(item.lead)
        with_email += completeness.has_email
        with_phone += completeness.has_phone
        with_website += completeness.has_website

    average = round_half_up(sum(item.quality.score for item in scored) / len(scored))
    return QualityStats(
        excellent=counts[Tier.EXCELLENT],
        okay=counts[Tier.OKAY],
        poor=counts[Tier.POOR],
        average_score=average,
        total_with_email=with_email,
        total_with_phone=with_phone,
        total_with_website=with_website,
    )


def quality_stats(
    leads: Iterable[BusinessLead],
    search_location: Optional[str],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> QualityStats:
    """Compute tier counts, average score, and contact totals for ``leads``."""

    return stats_for_scored(score_leads(leads, search_location, policy))
