import pandas as pd
from typing import List, Mapping, Sequence

# --- Configuration ---
TABLE_LIMIT = 1000  # Limit for table view
MISSING_TEXT = 'N/A'


def project(records: Sequence[Mapping], limit: int = TABLE_LIMIT) -> List[Mapping]:
    """The first `limit` records, in their original order."""
    return list(records[:limit])

def columns(records: Sequence[Mapping]) -> List[str]:
    """Column names taken from the first record, or an empty list."""
    return list(records[0].keys()) if records else []

def column_title(column: str) -> str:
    return column.replace('_', ' ')

def cell_text(record: Mapping, column: str) -> str:
    value = record.get(column)
    if value is None or value == '':
        return MISSING_TEXT
    return str(value)

def table_frame(records: Sequence[Mapping], limit: int = TABLE_LIMIT) -> pd.DataFrame:
    """
    Build the table view as a DataFrame.

    Only the columns of the first record are shown, in its key order, and
    any missing value is shown as 'N/A'.
    """
    cols = columns(records)
    rows = [[cell_text(record, column) for column in cols] for record in project(records, limit)]
    return pd.DataFrame(rows, columns=[column_title(column) for column in cols])

def table_html(records: Sequence[Mapping], limit: int = TABLE_LIMIT) -> str:
    return table_frame(records, limit).to_html(index=False, border=0, classes='crime-table')
