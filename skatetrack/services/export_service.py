"""
Tabular export helpers for the SkateTrack dashboard.

Every reporting page offers two downloads: delimited text and an .xlsx
workbook. Both are produced in memory from plain lists of rows.
"""
import csv
import io
import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

import pandas as pd

from ..utils import now_dt

logger = logging.getLogger(__name__)

CSV_MIMETYPE = "text/csv;charset=utf-8"
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXPORT_FORMATS = ("csv", "xlsx")


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def to_delimited_text(
    rows: Iterable[Sequence[Any]],
    headers: Optional[Sequence[Any]] = None,
    quote: bool = False,
) -> str:
    """
    Join rows into comma separated text.

    By default fields are written as-is: a value containing a comma or a
    newline is not quoted and will shift the columns of that row. Pass
    ``quote=True`` for standard CSV quoting.

    Args:
        rows: Data rows
        headers: Optional header row written first
        quote: Quote fields the way the csv module does

    Returns:
        Rows joined by newlines, without a trailing newline
    """
    all_rows = ([list(headers)] if headers is not None else []) + [list(r) for r in rows]

    if quote:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerows([[_cell(v) for v in row] for row in all_rows])
        text = buffer.getvalue()
        buffer.close()
        return text[:-1] if text.endswith("\n") else text

    return "\n".join(",".join(_cell(v) for v in row) for row in all_rows)


def to_workbook(sheets: Mapping[str, Iterable[Sequence[Any]]]) -> bytes:
    """
    Build an .xlsx workbook with one sheet per named row set.

    Rows are written exactly as given, header rows included, keeping both
    row and column order.

    Returns:
        Workbook file contents
    """
    if not sheets:
        raise ValueError("A workbook needs at least one sheet")

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            frame = pd.DataFrame([list(r) for r in rows], dtype=object)
            frame.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    blob = buffer.getvalue()
    buffer.close()
    logger.info("Built workbook with sheets %s (%d bytes)", ", ".join(sheets), len(blob))
    return blob


def export_filename(
    report_kind: str,
    extension: str,
    qualifier: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """
    Name a download as ``<kind>_<qualifier>_<iso-date>.<ext>``.

    Example:
        >>> export_filename("analytics_report", "csv", "week", date(2023, 6, 14))
        'analytics_report_week_2023-06-14.csv'
    """
    today = today or now_dt().date()
    parts = [report_kind]
    if qualifier:
        parts.append(qualifier)
    parts.append(today.isoformat())
    return f"{'_'.join(parts)}.{extension.lower()}"


def render_export(
    export_format: str,
    sheets: Mapping[str, Sequence[Sequence[Any]]],
    text_rows: Optional[Sequence[Sequence[Any]]] = None,
) -> bytes:
    """
    Render rows in the requested download format.

    CSV output uses ``text_rows`` when given, otherwise the rows of the first
    sheet.

    Raises:
        ValueError: If the format is not csv or xlsx
    """
    export_format = (export_format or "").lower()
    if export_format == "csv":
        rows = text_rows if text_rows is not None else next(iter(sheets.values()))
        return to_delimited_text(rows).encode("utf-8")
    if export_format == "xlsx":
        return to_workbook(sheets)
    raise ValueError(f"Unsupported export format: {export_format}")
