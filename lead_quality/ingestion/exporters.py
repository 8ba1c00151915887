"""Export utilities for business leads and their quality scores."""
from __future__ import annotations

import re
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable, List, MutableMapping, Optional, Protocol, Sequence, Union

import pandas as pd

from ..models import BusinessLead, ScoredLead

PathLike = Union[str, Path]

LEAD_COLUMNS = [
    "name",
    "email",
    "phone",
    "website",
    "address",
    "instagram",
    "category",
    "rating",
    "source",
    "description",
]

QUALITY_COLUMNS = [
    "quality_score",
    "quality_tier",
    "quality_label",
    "contact_completeness",
    "location_relevance",
    "quality_reasons",
]

DEFAULT_EXPORT_FILENAME = "business-leads.csv"


class LeadExporter(Protocol):
    """Collaborator that turns an ordered list of leads into a downloadable file."""

    def __call__(
        self, leads: Sequence[BusinessLead], filename: Optional[str] = None
    ) -> Any:  # pragma: no cover - runtime protocol
        """Export ``leads``, optionally to ``filename``."""


def default_export_filename(business_type: str, location: str, suffix: str = ".csv") -> str:
    """Build a ``<type>-<location>-leads`` filename safe for most filesystems."""

    parts = [_slug(business_type), _slug(location)]
    stem = "-".join(part for part in parts if part)
    return f"{stem}-leads{suffix}" if stem else f"business-leads{suffix}"


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", (value or "").lower()).strip("-")


def export_leads(
    leads: Sequence[BusinessLead],
    path: PathLike = DEFAULT_EXPORT_FILENAME,
    *,
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write leads to a CSV, TSV, Excel, or JSON file."""

    output_path = Path(path)
    _write_dataframe(leads_to_dataframe(leads), output_path, exporter_kwargs=exporter_kwargs)
    return output_path


def export_scored_leads(
    scored: Sequence[ScoredLead],
    path: PathLike,
    *,
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write leads along with their quality columns."""

    output_path = Path(path)
    _write_dataframe(scored_leads_to_dataframe(scored), output_path, exporter_kwargs=exporter_kwargs)
    return output_path


def leads_to_dataframe(leads: Iterable[BusinessLead]) -> pd.DataFrame:
    """Convert leads into a :class:`pandas.DataFrame` with a fixed column order."""

    records = [_lead_to_row(lead) for lead in leads]
    return pd.DataFrame(records, columns=LEAD_COLUMNS)


def scored_leads_to_dataframe(scored: Iterable[ScoredLead]) -> pd.DataFrame:
    records: List[MutableMapping[str, object]] = []
    for item in scored:
        row = _lead_to_row(item.lead)
        quality = item.quality
        row.update(
            {
                "quality_score": quality.score,
                "quality_tier": quality.tier.value,
                "quality_label": quality.label,
                "contact_completeness": quality.contact_completeness,
                "location_relevance": quality.location_relevance,
                "quality_reasons": "; ".join(quality.reasons),
            }
        )
        records.append(row)
    return pd.DataFrame(records, columns=LEAD_COLUMNS + QUALITY_COLUMNS)


def _lead_to_row(lead: BusinessLead) -> MutableMapping[str, object]:
    data = asdict(lead)
    return {column: data.get(column) for column in LEAD_COLUMNS}


def _write_dataframe(
    dataframe: pd.DataFrame,
    path: Path,
    *,
    exporter_kwargs: Optional[MutableMapping[str, object]],
) -> None:
    exporter_kwargs = dict(exporter_kwargs or {})
    suffix = path.suffix.lower()
    path.parent.mkdir(parents=True, exist_ok=True)

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            exporter_kwargs.setdefault("sep", "\t")
        dataframe.to_csv(path, index=False, **exporter_kwargs)
        return

    if suffix in {".xls", ".xlsx", ".xlsm", ".xlsb"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        sheet_name = exporter_kwargs.pop("sheet_name", None) or "Leads"
        dataframe.to_excel(path, index=False, sheet_name=sheet_name, engine=engine, **exporter_kwargs)
        return

    if suffix == ".json":
        exporter_kwargs.setdefault("indent", 2)
        dataframe.to_json(path, orient="records", **exporter_kwargs)
        return

    raise ValueError(f"Unsupported export file extension: {suffix}")


__all__ = [
    "LeadExporter",
    "default_export_filename",
    "export_leads",
    "export_scored_leads",
    "leads_to_dataframe",
    "scored_leads_to_dataframe",
]
