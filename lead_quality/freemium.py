"""Free preview selection and unlock pricing."""
from __future__ import annotations

import logging
import math
from typing import Sequence

from .aggregation import ordering_key
from .completeness import evaluate_completeness
from .config import DEFAULT_POLICY, ScoringPolicy
from .models import BusinessLead, FreemiumPreview, PreviewQuality

LOGGER = logging.getLogger(__name__)


def preview_size(total: int, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    """Number of leads shown for free out of ``total``."""

    # round() first so float error cannot drop an exact product below an integer
    proportional = math.floor(round(total * policy.preview_ratio, 9))
    bounded = max(policy.preview_min, min(policy.preview_max, proportional))
    return min(total, bounded)


def unlock_price(total: int, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    """Price, in pricing units, to unlock all ``total`` leads."""

    return math.ceil(total / policy.price_block_size) * policy.price_per_block


def _preview_quality(preview: Sequence[BusinessLead]) -> PreviewQuality:
    complete = partial = minimal = 0
    for lead in preview:
        result = evaluate_completeness(lead)
        if result.is_complete:
            complete += 1
        elif result.score == 0:
            minimal += 1
        else:
            partial += 1
    return PreviewQuality(complete=complete, partial=partial, minimal=minimal)


def select_preview(leads: Sequence[BusinessLead], policy: ScoringPolicy = DEFAULT_POLICY) -> FreemiumPreview:
    """Pick the most complete leads for the free preview.

    Leads are ordered by completeness score (descending) then by name, so the
    preview never depends on the order leads arrived in.
    """

    total = len(leads)
    size = preview_size(total, policy)
    ranked = sorted(leads, key=lambda lead: ordering_key(evaluate_completeness(lead).score, lead))
    preview = tuple(ranked[:size])
    result = FreemiumPreview(
        preview=preview,
        hidden_count=max(0, total - size),
        unlock_price_units=unlock_price(total, policy),
        preview_quality=_preview_quality(preview),
    )
    LOGGER.debug(
        "Selected %s of %s leads for preview (unlock price %s)",
        size,
        total,
        result.unlock_price_units,
    )
    return result
