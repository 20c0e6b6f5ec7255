"""File upload parsing — CSV/XLSX/JSON into raw record lists for the normalizer."""

import json
import pandas as pd
from typing import List, Tuple


def dataframe_to_records(df: pd.DataFrame) -> List[dict]:
    """DataFrame rows as dicts, with missing cells as None rather than NaN."""
    cleaned = df.astype(object).where(pd.notna(df), None)
    return cleaned.to_dict("records")


def load_file(uploaded_file):
    """Load an uploaded file into raw records.

    CSV and XLSX give a list of row dicts. JSON is returned as decoded, so an
    upstream response envelope can be saved to disk and uploaded unchanged.
    """
    name = uploaded_file.name.lower()
    if name.endswith(".json"):
        raw = uploaded_file.read()
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return json.loads(raw)
    elif name.endswith(".csv"):
        return dataframe_to_records(pd.read_csv(uploaded_file))
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return dataframe_to_records(pd.read_excel(uploaded_file, engine="openpyxl"))
    else:
        raise ValueError(f"Unsupported file format: {name}. Use JSON, CSV or XLSX.")


# Expected sheet names for multi-tab Excel (case-insensitive matching)
SHEET_ALIASES = {
    "schools": ["schools", "school", "capacity", "school capacity", "capacity analysis"],
    "travel": ["travel", "travel time", "travel times", "heatmap", "travel samples"],
    "sites": ["sites", "optimal sites", "optimal locations", "recommendations"],
}


def _match_sheet(sheet_names: List[str], category: str, required: bool = True):
    """Find a sheet name matching the given category. Returns the matched name, None, or raises."""
    aliases = SHEET_ALIASES[category]
    lower_map = {s.lower().strip(): s for s in sheet_names}
    for alias in aliases:
        if alias in lower_map:
            return lower_map[alias]
    if not required:
        return None
    raise ValueError(
        f"Could not find a sheet for '{category}'. "
        f"Expected one of: {aliases}. "
        f"Found sheets: {sheet_names}"
    )


def load_multi_sheet_excel(uploaded_file) -> Tuple[List[dict], List[dict], List[dict]]:
    """Load a single Excel file with Schools, Travel and (optional) Sites tabs.

    Returns (school_records, travel_records, site_records).
    """
    xl = pd.ExcelFile(uploaded_file, engine="openpyxl")
    sheet_names = xl.sheet_names

    schools_sheet = _match_sheet(sheet_names, "schools")
    travel_sheet = _match_sheet(sheet_names, "travel")
    sites_sheet = _match_sheet(sheet_names, "sites", required=False)

    schools = dataframe_to_records(pd.read_excel(xl, sheet_name=schools_sheet))
    travel = dataframe_to_records(pd.read_excel(xl, sheet_name=travel_sheet))
    sites = dataframe_to_records(pd.read_excel(xl, sheet_name=sites_sheet)) if sites_sheet else []

    return schools, travel, sites
