from typing import List, Dict
import pandas as pd

from shared.core.schemas import ExportResponse


def export_to_excel(
    data: List[Dict],
    filename: str = "export.xlsx",
    column_map: Dict[str, str] | None = None,
) -> ExportResponse:
    """
    Shape a list of dictionaries into export rows with friendly headers.

    Args:
        data: List of dictionaries (each dict = row)
        filename: Name of the exported file
        column_map: Mapping of data keys -> friendly column names
    """
    if not data:
        return ExportResponse(filename=filename, data=[])

    rows = [dict(row) for row in data]

    # Fill missing keys to avoid KeyError
    if column_map:
        for key in column_map.keys():
            for row in rows:
                row.setdefault(key, None)

    df = pd.DataFrame(rows)

    if column_map:
        df = df.rename(columns=column_map)
        existing_columns = [
            col for col in column_map.values() if col in df.columns]
        df = df[existing_columns]

    # NaN is not valid JSON
    df = df.astype(object).where(pd.notnull(df), None)
    return ExportResponse(filename=filename, data=df.to_dict(orient="records"))
