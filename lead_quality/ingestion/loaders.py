"""Utilities for loading business leads from spreadsheets."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..models import BusinessLead

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

_FIELD_SYNONYMS: Mapping[str, Sequence[str]] = {
    "lead_id": ("lead_id", "id", "record_id", "place_id"),
    "name": ("name", "business_name", "company", "title"),
    "address": ("address", "full_address", "street_address", "location"),
    "email": ("email", "email_address", "primary_email"),
    "phone": ("phone", "phone_number", "telephone", "primary_phone"),
    "website": ("website", "url", "web", "homepage"),
    "instagram": ("instagram", "instagram_url"),
    "category": ("category", "business_type", "type"),
    "rating": ("rating", "stars"),
    "source": ("source", "directory", "provider"),
    "description": ("description", "summary"),
}


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to the loader."""


def load_leads(
    path: PathLike,
    *,
    column_mapping: Optional[Mapping[str, str]] = None,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> List[BusinessLead]:
    """Load business leads from a spreadsheet.

    Parameters
    ----------
    path:
        Path to the CSV/TSV/XLSX file to be loaded.
    column_mapping:
        Optional mapping of :class:`BusinessLead` field names to column names.
        Unmapped fields are matched against common column name synonyms.
    sheet_name:
        Sheet selector passed to :func:`pandas.read_excel` when loading an Excel
        file. Ignored for CSV files.
    loader_kwargs:
        Extra keyword arguments forwarded to :func:`pandas.read_csv` or
        :func:`pandas.read_excel`.

    Rows without a business name are skipped and logged.
    """

    dataframe = _read_dataframe(path, sheet_name=sheet_name, loader_kwargs=loader_kwargs)
    mapping = dict(column_mapping or {})
    resolved = {field: _resolve_column(field, dataframe.columns, mapping) for field in _FIELD_SYNONYMS}
    leads: List[BusinessLead] = []

    for index, row in dataframe.iterrows():
        if _row_is_empty(row):
            continue
        lead = _row_to_lead(row, resolved)
        if lead is None:
            LOGGER.warning("Skipping row %s of %s: no business name", index, path)
            continue
        leads.append(lead)

    LOGGER.debug("Loaded %s leads from %s", len(leads), path)
    return leads


def _read_dataframe(
    path: PathLike,
    *,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> pd.DataFrame:
    loader_kwargs = dict(loader_kwargs or {})
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            loader_kwargs.setdefault("sep", "\t")
        loader_kwargs.setdefault("dtype", str)
        return pd.read_csv(path_obj, **loader_kwargs)

    if suffix in {".xls", ".xlsx", ".xlsm", ".xlsb"}:
        loader_kwargs.setdefault("dtype", str)
        engine = loader_kwargs.pop("engine", None) or "openpyxl"
        return pd.read_excel(path_obj, sheet_name=sheet_name, engine=engine, **loader_kwargs)

    raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")


def _row_is_empty(row: pd.Series) -> bool:
    return all(pd.isna(value) or (isinstance(value, str) and not value.strip()) for value in row.values)


def _row_to_lead(row: pd.Series, columns: Mapping[str, Optional[str]]) -> Optional[BusinessLead]:
    values = {field: _extract_scalar(row, column) for field, column in columns.items()}
    name = values.pop("name")
    if name is None:
        return None
    rating = values.pop("rating")
    return BusinessLead(name=name, rating=_parse_rating(rating), **values)


def _resolve_column(
    field: str,
    available_columns: Iterable[str],
    mapping: Mapping[str, str],
) -> Optional[str]:
    if field in mapping:
        return mapping[field]

    synonyms = tuple(name.lower() for name in _FIELD_SYNONYMS.get(field, (field,)))
    normalised = {str(column).strip().lower().replace(" ", "_"): column for column in available_columns}
    for synonym in synonyms:
        if synonym in normalised:
            return normalised[synonym]
    return None


def _extract_scalar(row: pd.Series, column: Optional[str]) -> Optional[str]:
    if column is None or column not in row:
        return None
    return _clean_text(row[column])


def _parse_rating(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        LOGGER.debug("Ignoring non-numeric rating %r", value)
        return None


def _clean_text(value: Any) -> Optional[str]:
    if pd.isna(value):
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    text = str(value).strip()
    return text or None


__all__ = ["load_leads", "UnsupportedFileTypeError"]
