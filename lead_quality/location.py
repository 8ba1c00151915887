"""Textual comparison of a lead's address against the searched location."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .config import DEFAULT_POLICY, ScoringPolicy, round_half_up
from .models import BusinessLead, clean_text

_TOKEN_RE = re.compile(r"[^\W_]{2,}", re.UNICODE)

# Suburbs treated as part of a target city's area.
NEARBY_AREAS: Dict[str, Tuple[str, ...]] = {
    "dublin": ("dun laoghaire", "blackrock", "howth", "malahide", "swords", "tallaght", "blanchardstown"),
    "london": ("croydon", "bromley", "kingston", "richmond", "harrow", "barnet", "enfield"),
    "manchester": ("salford", "stockport", "oldham", "rochdale", "bolton", "bury"),
    "cork": ("ballincollig", "carrigaline", "cobh", "midleton"),
    "galway": ("salthill", "oranmore", "claregalway"),
}

REASON_NO_ADDRESS = "No address to verify location"
REASON_NO_TARGET = "No target location to compare"
REASON_IN_AREA = "Located in target area"
REASON_NEARBY = "Located in nearby area"
REASON_PARTIAL = "Partially matches target area"
REASON_OUTSIDE = "Outside target area"


@dataclass(frozen=True, slots=True)
class LocationMatch:
    relevance: int
    reason: str


def _tokens(text: str) -> List[str]:
    seen: List[str] = []
    for token in _TOKEN_RE.findall(text.lower()):
        if token not in seen:
            seen.append(token)
    return seen


def _contains_phrase(phrase: str, text: str) -> bool:
    """Whole-word match, so "bury" does not match inside "canterbury"."""

    return re.search(rf"(?<!\w){re.escape(phrase)}(?!\w)", text) is not None


def _components(search_location: str) -> List[str]:
    return [part.strip() for part in search_location.lower().split(",") if part.strip()]


def evaluate_location(
    lead: BusinessLead,
    search_location: Optional[str],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> LocationMatch:
    """Return how well ``lead.address`` matches ``search_location`` as a percentage.

    An absent address is a data-quality gap rather than a mismatch, so it
    scores ``policy.unknown_location_relevance`` instead of zero.
    """

    address = clean_text(lead.address)
    if address is None:
        return LocationMatch(policy.unknown_location_relevance, REASON_NO_ADDRESS)

    target = clean_text(search_location)
    components = _components(target) if target else []
    if not components:
        return LocationMatch(policy.unknown_location_relevance, REASON_NO_TARGET)

    address_lc = address.lower()
    city = components[0]
    if _contains_phrase(city, address_lc):
        return LocationMatch(100, REASON_IN_AREA)

    if any(_contains_phrase(area, address_lc) for area in NEARBY_AREAS.get(city, ())):
        return LocationMatch(policy.nearby_area_relevance, REASON_NEARBY)

    target_tokens = _tokens(target)
    if not target_tokens:
        return LocationMatch(0, REASON_OUTSIDE)
    address_tokens = set(_tokens(address))
    matched = sum(1 for token in target_tokens if token in address_tokens)
    relevance = round_half_up(100 * matched / len(target_tokens))
    if relevance <= 0:
        return LocationMatch(0, REASON_OUTSIDE)
    if relevance >= 100:
        return LocationMatch(100, REASON_IN_AREA)
    return LocationMatch(relevance, REASON_PARTIAL)


def location_relevance(
    lead: BusinessLead,
    search_location: Optional[str],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> int:
    return evaluate_location(lead, search_location, policy).relevance
