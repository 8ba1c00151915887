"""Lead quality scoring, tiering, and freemium preview selection."""

from . import models  # noqa: F401
from .aggregation import group_leads, quality_stats, rank_leads, score_leads
from .completeness import evaluate_completeness
from .config import DEFAULT_POLICY, ConfigurationError, ScoringPolicy, load_policy
from .freemium import preview_size, select_preview, unlock_price
from .location import evaluate_location, location_relevance
from .models import (
    BusinessLead,
    CompletenessResult,
    FreemiumPreview,
    GroupedLeads,
    PreviewQuality,
    QualityResult,
    QualityStats,
    ScoredLead,
    Tier,
)
from .scoring import classify_score, score_lead
from .selection import SelectionManager

__version__ = "0.1.0"

__all__ = [
    "BusinessLead",
    "CompletenessResult",
    "ConfigurationError",
    "DEFAULT_POLICY",
    "FreemiumPreview",
    "GroupedLeads",
    "PreviewQuality",
    "QualityResult",
    "QualityStats",
    "ScoredLead",
    "ScoringPolicy",
    "SelectionManager",
    "Tier",
    "classify_score",
    "evaluate_completeness",
    "evaluate_location",
    "group_leads",
    "load_policy",
    "location_relevance",
    "preview_size",
    "quality_stats",
    "rank_leads",
    "score_lead",
    "score_leads",
    "select_preview",
    "unlock_price",
    "ingestion",
    "review",
    "storage",
]
