from typing import List, Dict
import pandas as pd

from shared.core.schemas import ExportResponse


def export_to_excel(
    data: List[Dict],
    filename: str = "export.xlsx",
    column_map: Dict[str, str] | None = None,
) -> ExportResponse:
    """
    Shape a list of dictionaries into spreadsheet rows with friendly headers.

    Args:
        data: List of dictionaries (each dict = row)
        filename: Name of the file the client should save
        column_map: Mapping of data keys -> friendly column names
    """
    if not data:
        return ExportResponse(filename=filename, data=[])

    df = pd.DataFrame(data)

    if column_map:
        # Fill missing keys so every mapped column exists
        for key in column_map:
            if key not in df.columns:
                df[key] = None
        df = df[list(column_map.keys())].rename(columns=column_map)

    # NaN is not valid JSON
    df = df.astype(object).where(pd.notna(df), None)

    return ExportResponse(filename=filename, data=df.to_dict(orient="records"))
