"""Decoding of Craft table blocks.

A table is an ordered list of rows, each row an ordered list of cells shaped
``{"value": "...", "attributes": [...]}``.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

Cell = Mapping[str, Any]
Row = Sequence[Optional[Cell]]


def cell_text(cell: Optional[Cell]) -> str:
    """Trimmed text of a cell, "" for a missing cell or value."""
    if not cell:
        return ""
    value = cell.get("value")
    if value is None:
        return ""
    return str(value).strip()


def table_rows(table: Optional[Mapping[str, Any]]) -> List[Row]:
    if not table:
        return []
    return list(table.get("rows") or [])


def to_key_value(table: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Read a two-column table as key/value pairs.

    Rows with fewer than two cells or a blank key are skipped; a repeated key
    keeps the last value.
    """
    result: Dict[str, str] = {}
    for row in table_rows(table):
        if len(row) < 2:
            continue
        key = cell_text(row[0])
        if key:
            result[key] = cell_text(row[1])
    return result


def to_record_list(table: Optional[Mapping[str, Any]]) -> List[Dict[str, str]]:
    """Read a table whose first row is a header into one record per row.

    Rows whose cells are all blank are dropped. Duplicate headers let the
    later column win.
    """
    rows = table_rows(table)
    if len(rows) < 2:
        return []

    headers = [cell_text(cell) for cell in rows[0]]

    records: List[Dict[str, str]] = []
    for row in rows[1:]:
        record: Dict[str, str] = {}
        has_data = False
        for position, header in enumerate(headers):
            value = cell_text(row[position]) if position < len(row) else ""
            record[header] = value
            if value:
                has_data = True
        if has_data:
            records.append(record)
    return records
