"""Spreadsheet ingestion and export helpers for business leads."""

from .exporters import (
    LeadExporter,
    default_export_filename,
    export_leads,
    export_scored_leads,
    leads_to_dataframe,
    scored_leads_to_dataframe,
)
from .loaders import UnsupportedFileTypeError, load_leads

__all__ = [
    "LeadExporter",
    "UnsupportedFileTypeError",
    "default_export_filename",
    "export_leads",
    "export_scored_leads",
    "leads_to_dataframe",
    "load_leads",
    "scored_leads_to_dataframe",
]
