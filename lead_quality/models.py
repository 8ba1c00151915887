"""Data models shared by the scoring engine, freemium selector, and review session."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


def clean_text(value: Optional[str]) -> Optional[str]:
    """Return ``value`` stripped, or ``None`` when it is missing or blank."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


# --- Input Models ---

@dataclass(frozen=True, slots=True)
class BusinessLead:
    """A business contact record produced by a directory search."""

    name: str
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    instagram: Optional[str] = None
    category: Optional[str] = None
    rating: Optional[float] = None
    source: Optional[str] = None
    description: Optional[str] = None
    lead_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not str(self.name).strip():
            raise ValueError("BusinessLead requires a non-empty name.")

    @property
    def key(self) -> str:
        """Stable identity used for selection, independent of display position."""

        if self.lead_id:
            return self.lead_id
        parts = [
            self.name.strip().lower(),
            (clean_text(self.address) or "").lower(),
            (clean_text(self.email) or "").lower(),
            "".join(c for c in (self.phone or "") if c.isdigit()),
            (clean_text(self.website) or "").lower(),
            (clean_text(self.source) or "").lower(),
        ]
        digest = hashlib.sha1("\x1f".join(parts).encode("utf-8")).hexdigest()
        return f"lead-{digest[:16]}"


# --- Derived Models ---

@dataclass(frozen=True, slots=True)
class CompletenessResult:
    """Which of the three contact channels are present and structurally valid."""

    score: int
    percentage: int
    missing_fields: Tuple[str, ...] = ()
    total: int = 3

    @property
    def has_email(self) -> bool:
        return "Email" not in self.missing_fields

    @property
    def has_phone(self) -> bool:
        return "Phone" not in self.missing_fields

    @property
    def has_website(self) -> bool:
        return "Website" not in self.missing_fields

    @property
    def is_complete(self) -> bool:
        return self.score == self.total


class Tier(str, Enum):
    """Discrete quality tiers, best first."""

    EXCELLENT = "excellent"
    OKAY = "okay"
    POOR = "poor"

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @property
    def rank(self) -> int:
        """Higher is better; gives the tiers a total order."""

        return _TIER_RANKS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank >= other.rank


_TIER_LABELS = {Tier.EXCELLENT: "Excellent", Tier.OKAY: "Good", Tier.POOR: "Basic"}
_TIER_RANKS = {Tier.EXCELLENT: 3, Tier.OKAY: 2, Tier.POOR: 1}
TIER_ORDER: Tuple[Tier, ...] = (Tier.EXCELLENT, Tier.OKAY, Tier.POOR)


@dataclass(frozen=True, slots=True)
class QualityResult:
    """Combined quality score for one lead against one search location."""

    score: int
    tier: Tier
    reasons: Tuple[str, ...]
    contact_completeness: int
    location_relevance: int

    @property
    def label(self) -> str:
        return self.tier.label


@dataclass(frozen=True, slots=True)
class ScoredLead:
    """A lead paired with the quality result computed for it."""

    lead: BusinessLead
    quality: QualityResult

    @property
    def key(self) -> str:
        return self.lead.key


@dataclass(slots=True)
class GroupedLeads:
    """Scored leads bucketed by tier; every tier is always present."""

    groups: Dict[Tier, List[ScoredLead]] = field(
        default_factory=lambda: {tier: [] for tier in TIER_ORDER}
    )

    def __getitem__(self, tier: Tier) -> List[ScoredLead]:
        return self.groups[tier]

    def __iter__(self) -> Iterator[Tier]:
        return iter(TIER_ORDER)

    @property
    def total(self) -> int:
        """Number of scored leads across every tier."""

        return sum(len(items) for items in self.groups.values())

    @property
    def excellent(self) -> List[ScoredLead]:
        return self.groups[Tier.EXCELLENT]

    @property
    def okay(self) -> List[ScoredLead]:
        return self.groups[Tier.OKAY]

    @property
    def poor(self) -> List[ScoredLead]:
        return self.groups[Tier.POOR]

    def flatten(self) -> List[ScoredLead]:
        """Return every scored lead, best tier first, keeping in-tier order."""

        return [item for tier in TIER_ORDER for item in self.groups[tier]]


@dataclass(frozen=True, slots=True)
class QualityStats:
    """Summary counts for a whole result set."""

    excellent: int = 0
    okay: int = 0
    poor: int = 0
    average_score: int = 0
    total_with_email: int = 0
    total_with_phone: int = 0
    total_with_website: int = 0

    @property
    def total(self) -> int:
        return self.excellent + self.okay + self.poor


@dataclass(frozen=True, slots=True)
class PreviewQuality:
    """Completeness breakdown of the leads shown in a free preview."""

    complete: int = 0
    partial: int = 0
    minimal: int = 0


@dataclass(frozen=True, slots=True)
class FreemiumPreview:
    """Bounded free slice of a result set and the price to unlock the rest."""

    preview: Tuple[BusinessLead, ...]
    hidden_count: int
    unlock_price_units: int
    preview_quality: PreviewQuality = PreviewQuality()

    @property
    def preview_size(self) -> int:
        return len(self.preview)

    @property
    def total(self) -> int:
        return self.preview_size + self.hidden_count
