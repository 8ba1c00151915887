"""Review session that backs the grouped, ranked, and freemium result views."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..aggregation import group_leads, rank_leads, stats_for_scored
from ..config import DEFAULT_POLICY, ScoringPolicy
from ..freemium import select_preview
from ..ingestion.exporters import LeadExporter, default_export_filename, export_leads
from ..models import BusinessLead, FreemiumPreview, GroupedLeads, QualityStats, ScoredLead, Tier, clean_text
from ..selection import SelectionManager
from ..storage import SearchStore

LOGGER = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]


def log_notifier(title: str, description: str) -> None:
    LOGGER.info("%s: %s", title, description)


def matches_search_term(lead: BusinessLead, term: Optional[str]) -> bool:
    """Case-insensitive match of ``term`` against the lead's searchable fields."""

    needle = clean_text(term)
    if needle is None:
        return True
    needle = needle.lower()
    haystacks = (lead.name, lead.email, lead.phone, lead.website, lead.address, lead.instagram)
    return any(value and needle in value.lower() for value in haystacks)


class ReviewSession:
    """One user's view over a search's results.

    Every derived structure is recomputed from the current leads, search term,
    and policy on each call. The session owns its :class:`SelectionManager`
    and resets it whenever the lead list is replaced.
    """

    def __init__(
        self,
        leads: Iterable[BusinessLead],
        search_location: str,
        search_business_type: str = "",
        *,
        policy: ScoringPolicy = DEFAULT_POLICY,
        exporter: LeadExporter = export_leads,
        store: Optional[SearchStore] = None,
        notifier: Notifier = log_notifier,
        directory: str = "mixed",
    ) -> None:
        self._leads: List[BusinessLead] = list(leads)
        self._search_location = search_location
        self._search_business_type = search_business_type
        self._policy = policy
        self._exporter = exporter
        self._store = store
        self._notifier = notifier
        self._directory = directory
        self._search_term = ""
        self.selection = SelectionManager()

    @property
    def leads(self) -> List[BusinessLead]:
        return list(self._leads)

    @property
    def search_location(self) -> str:
        return self._search_location

    @property
    def search_business_type(self) -> str:
        return self._search_business_type

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy

    @property
    def search_term(self) -> str:
        return self._search_term

    def replace_leads(self, leads: Iterable[BusinessLead]) -> None:
        self._leads = list(leads)
        self.selection.clear_all()

    def set_search_term(self, term: Optional[str]) -> None:
        """Change the text filter; selected rows that are no longer visible are dropped."""

        self._search_term = term or ""
        self.selection.prune(self.visible())

    # Derived views --------------------------------------------------------
    def grouped(self) -> GroupedLeads:
        return group_leads(self._leads, self._search_location, self._policy)

    def ranked(self) -> List[ScoredLead]:
        return rank_leads(self._leads, self._search_location, self._policy)

    def stats(self) -> QualityStats:
        return stats_for_scored(self.ranked())

    def preview(self) -> FreemiumPreview:
        return select_preview(self._leads, self._policy)

    def visible(self, tier: Optional[Tier] = None) -> List[ScoredLead]:
        """Rows currently on screen: one tier, or every tier in order, after the text filter."""

        grouped = self.grouped()
        rows = grouped[tier] if tier is not None else grouped.flatten()
        return [item for item in rows if matches_search_term(item.lead, self._search_term)]

    # Actions --------------------------------------------------------------
    def export_selected(
        self,
        tier: Optional[Tier] = None,
        filename: Optional[str] = None,
        *,
        suffix: str = ".csv",
    ) -> Any:
        """Export the selected visible rows, or all visible rows when none of them is selected."""

        rows = self.visible(tier)
        if any(self.selection.is_selected(item.key) for item in rows):
            leads = self.selection.resolve(rows)
        else:
            leads = [item.lead for item in rows]
        target = filename or default_export_filename(self._search_business_type, self._search_location, suffix)
        result = self._exporter(leads, target)
        label = Path(target).suffix.lstrip(".").upper() or "file"
        self._notifier("Export Successful", f"Exported {len(leads)} leads to {label}")
        return result

    def save_search(self, name: str) -> str:
        """Persist the visible leads under ``name`` through the injected store."""

        if self._store is None:
            raise RuntimeError("ReviewSession was created without a search store")
        cleaned = clean_text(name)
        if cleaned is None:
            raise ValueError("Saved searches require a name")

        leads: Sequence[BusinessLead] = [item.lead for item in self.visible()]
        search_id = self._store.save_search(
            name=cleaned,
            location=self._search_location,
            business_type=self._search_business_type,
            directory=self._directory,
            leads=leads,
        )
        self._notifier("Search Saved", f'Saved search "{cleaned}" with {len(leads)} leads')
        return search_id

    def record_history(self) -> None:
        """Add this search to the store's history, if a store was supplied."""

        if self._store is None:
            return
        self._store.add_to_history(
            location=self._search_location,
            business_type=self._search_business_type,
            directory=self._directory,
            results_count=len(self._leads),
        )
