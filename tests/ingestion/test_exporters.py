import json

import pandas as pd
import pytest

from lead_quality.aggregation import rank_leads
from lead_quality.ingestion.exporters import (
    LEAD_COLUMNS,
    QUALITY_COLUMNS,
    default_export_filename,
    export_leads,
    export_scored_leads,
    leads_to_dataframe,
)
from lead_quality.models import BusinessLead


def _sample_leads():
    return [
        BusinessLead(
            name="Bean There",
            address="1 Dame Street, Dublin",
            email="hello@beanthere.ie",
            phone="+353 1 555 0100",
            website="beanthere.ie",
            rating=4.5,
            source="google",
        ),
        BusinessLead(name="Grind House"),
    ]


def test_leads_to_dataframe_uses_fixed_columns():
    dataframe = leads_to_dataframe(_sample_leads())

    assert list(dataframe.columns) == LEAD_COLUMNS
    assert dataframe.loc[0, "email"] == "hello@beanthere.ie"


def test_empty_export_still_has_header(tmp_path):
    path = export_leads([], tmp_path / "empty.csv")

    assert path.read_text(encoding="utf-8").strip() == ",".join(LEAD_COLUMNS)


def test_export_leads_to_csv_json_and_excel(tmp_path):
    leads = _sample_leads()

    csv_path = export_leads(leads, tmp_path / "out" / "leads.csv")
    json_path = export_leads(leads, tmp_path / "leads.json")

    csv_frame = pd.read_csv(csv_path)
    assert csv_frame["name"].tolist() == ["Bean There", "Grind House"]

    records = json.loads(json_path.read_text(encoding="utf-8"))
    assert records[0]["website"] == "beanthere.ie"
    assert records[1]["email"] is None

    pytest.importorskip("openpyxl", reason="Excel export requires openpyxl")
    excel_path = export_leads(leads, tmp_path / "leads.xlsx")
    excel_frame = pd.read_excel(excel_path)
    assert excel_frame.loc[0, "source"] == "google"


def test_export_scored_leads_includes_quality_columns(tmp_path):
    scored = rank_leads(_sample_leads(), "Dublin, Ireland")

    path = export_scored_leads(scored, tmp_path / "scored.csv")

    frame = pd.read_csv(path)
    assert list(frame.columns) == LEAD_COLUMNS + QUALITY_COLUMNS
    assert frame.loc[0, "quality_tier"] == "excellent"
    assert frame.loc[0, "quality_score"] == 100
    assert frame.loc[1, "quality_reasons"].startswith("Missing email")


def test_unsupported_export_extension(tmp_path):
    with pytest.raises(ValueError):
        export_leads(_sample_leads(), tmp_path / "leads.txt")


def test_default_export_filename():
    assert default_export_filename("Coffee Shop", "Dublin, Ireland") == "coffee-shop-dublin-ireland-leads.csv"
    assert default_export_filename("", "", ".json") == "business-leads.json"
