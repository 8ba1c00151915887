"""Saved searches and search history kept for the current process."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from .models import BusinessLead

LOGGER = logging.getLogger(__name__)

HISTORY_LIMIT = 50


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SearchHistoryEntry:
    """A search the user ran, without its results."""

    id: str
    location: str
    business_type: str
    directory: str
    results_count: int
    timestamp: datetime


@dataclass(frozen=True)
class SavedSearch:
    """A named search together with the leads it produced."""

    id: str
    name: str
    location: str
    business_type: str
    directory: str
    leads: Tuple[BusinessLead, ...] = ()
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


class SearchStore(Protocol):
    """Persistence collaborator used by review sessions."""

    def save_search(
        self,
        name: str,
        location: str,
        business_type: str,
        directory: str,
        leads: Sequence[BusinessLead],
    ) -> str:  # pragma: no cover - runtime protocol
        """Persist a named search and return its id."""

    def add_to_history(
        self, location: str, business_type: str, directory: str, results_count: int
    ) -> SearchHistoryEntry:  # pragma: no cover - runtime protocol
        """Record that a search was run."""


class InMemorySearchStore:
    """Reference :class:`SearchStore` holding everything in memory."""

    _UPDATABLE = {"name", "location", "business_type", "directory", "leads"}

    def __init__(self, history_limit: int = HISTORY_LIMIT) -> None:
        self._history_limit = history_limit
        self._history: List[SearchHistoryEntry] = []
        self._saved: Dict[str, SavedSearch] = {}

    # Search history -------------------------------------------------------
    def add_to_history(
        self, location: str, business_type: str, directory: str, results_count: int
    ) -> SearchHistoryEntry:
        entry = SearchHistoryEntry(
            id=uuid.uuid4().hex,
            location=location,
            business_type=business_type,
            directory=directory,
            results_count=results_count,
            timestamp=_now(),
        )
        self._history.insert(0, entry)
        del self._history[self._history_limit:]
        return entry

    def get_search_history(self) -> List[SearchHistoryEntry]:
        """Return history entries, newest first."""

        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    # Saved searches -------------------------------------------------------
    def save_search(
        self,
        name: str,
        location: str,
        business_type: str,
        directory: str,
        leads: Sequence[BusinessLead],
    ) -> str:
        search = SavedSearch(
            id=uuid.uuid4().hex,
            name=name,
            location=location,
            business_type=business_type,
            directory=directory,
            leads=tuple(leads),
        )
        self._saved[search.id] = search
        LOGGER.debug("Saved search %s (%s) with %s leads", search.id, name, len(search.leads))
        return search.id

    def get_saved_searches(self) -> List[SavedSearch]:
        return list(self._saved.values())

    def get_saved_search(self, search_id: str) -> Optional[SavedSearch]:
        return self._saved.get(search_id)

    def update_saved_search(self, search_id: str, **updates: Any) -> bool:
        """Apply ``updates`` to a saved search; returns ``False`` if it does not exist."""

        current = self._saved.get(search_id)
        if current is None:
            return False
        unknown = set(updates) - self._UPDATABLE
        if unknown:
            raise ValueError(f"Cannot update saved search fields: {sorted(unknown)}")
        if "leads" in updates:
            updates["leads"] = tuple(updates["leads"])
        self._saved[search_id] = replace(current, updated_at=_now(), **updates)
        return True

    def delete_saved_search(self, search_id: str) -> bool:
        return self._saved.pop(search_id, None) is not None
