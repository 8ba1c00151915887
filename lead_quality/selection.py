"""Row selection for bulk export, keyed by lead identity rather than display position."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Set, Union

from .models import BusinessLead, ScoredLead

Row = Union[BusinessLead, ScoredLead]


def _lead_of(row: Row) -> BusinessLead:
    return row.lead if isinstance(row, ScoredLead) else row


class SelectionManager:
    """Tracks which displayed leads the user has chosen.

    Keys come from :attr:`BusinessLead.key`, so re-sorting or re-filtering a
    view never makes a selection point at a different lead. An empty selection
    means "everything currently displayed".
    """

    def __init__(self) -> None:
        self._selected: Set[str] = set()

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, key: object) -> bool:
        return key in self._selected

    @property
    def selected_keys(self) -> Set[str]:
        return set(self._selected)

    def is_selected(self, key: str) -> bool:
        return key in self._selected

    def select(self, key: str) -> None:
        self._selected.add(key)

    def deselect(self, key: str) -> None:
        self._selected.discard(key)

    def toggle(self, key: str) -> bool:
        """Flip ``key`` and return whether it is now selected."""

        if key in self._selected:
            self._selected.remove(key)
            return False
        self._selected.add(key)
        return True

    def select_all(self, keys: Iterable[str]) -> None:
        self._selected.update(keys)

    def toggle_all(self, keys: Iterable[str]) -> bool:
        """Select ``keys`` unless all are already selected, in which case clear them."""

        wanted = list(keys)
        if wanted and all(key in self._selected for key in wanted):
            self._selected.difference_update(wanted)
            return False
        self._selected.update(wanted)
        return bool(wanted)

    def clear_all(self) -> None:
        self._selected.clear()

    def prune(self, rows: Iterable[Row]) -> None:
        """Forget keys that no longer belong to any of ``rows``."""

        visible = {_lead_of(row).key for row in rows}
        self._selected.intersection_update(visible)

    def resolve(self, rows: Sequence[Row]) -> List[BusinessLead]:
        """Return the selected leads in display order, or all of ``rows`` when nothing is selected."""

        leads = [_lead_of(row) for row in rows]
        if not self._selected:
            return leads

        resolved: List[BusinessLead] = []
        seen: Set[str] = set()
        for lead in leads:
            key = lead.key
            if key in self._selected and key not in seen:
                seen.add(key)
                resolved.append(lead)
        return resolved
