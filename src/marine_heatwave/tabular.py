"""
Delimited text import/export.

Reads comma- or tab-delimited tables with a header row and writes
comma-delimited tables.
"""

import csv
import io
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union


def detect_delimiter(text: str) -> str:
    """
    Pick the delimiter for a table.

    Tab is used when the header line has a tab and no comma; otherwise comma.
    """
    header_line = text.lstrip("\ufeff").split("\n", 1)[0]
    if "\t" in header_line and "," not in header_line:
        return "\t"
    return ","


def parse_table(text: str) -> Tuple[List[str], List[Dict[str, str]]]:
    """
    Parse delimited text into header and row dictionaries.

    Blank lines are skipped and a UTF-8 byte order mark is ignored. Short
    rows are padded with ''; cells beyond the header are dropped. When a
    column name repeats, the first non-blank cell under that name is kept.

    Args:
        text: Table text with a header row

    Returns:
        Tuple of (header, rows)
    """
    text = text.lstrip("\ufeff")
    if not text.strip():
        return [], []

    reader = csv.reader(io.StringIO(text), delimiter=detect_delimiter(text))
    header: List[str] = []
    rows: List[Dict[str, str]] = []

    for cells in reader:
        if not any(cell.strip() for cell in cells):
            continue
        if not header:
            header = [cell.strip() for cell in cells]
            continue
        padded = list(cells) + [""] * (len(header) - len(cells))
        row: Dict[str, str] = {}
        for name, cell in zip(header, padded):
            # repeated column names keep the first non-blank cell
            if name not in row or not row[name].strip():
                row[name] = cell
        rows.append(row)

    return header, rows


def read_table(path: Union[str, Path]) -> Tuple[List[str], List[Dict[str, str]]]:
    """
    Read and parse a delimited file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        return parse_table(f.read())


def format_value(value: Any) -> str:
    """Render a cell; None becomes '' and floats use their shortest exact form."""
    if value is None:
        return ""
    if isinstance(value, float):
        return repr(value)
    return str(value)


def format_table(columns: Sequence[str], rows: Sequence[Mapping[str, Any]]) -> str:
    """
    Render rows as comma-delimited text with a header line.

    Args:
        columns: Column order
        rows: Row dictionaries; missing keys render as ''

    Returns:
        Table text, lines joined with '\\n'
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(columns)
    for row in rows:
        writer.writerow([format_value(row.get(column)) for column in columns])
    return buffer.getvalue()
