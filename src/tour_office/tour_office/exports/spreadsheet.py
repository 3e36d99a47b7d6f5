from __future__ import annotations

import csv
import io
from typing import Any, Mapping, Sequence

import pandas as pd

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EMPTY_MARKER = "Veri yok"


def _frame(rows: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame({EMPTY_MARKER: []})
    return pd.DataFrame(list(rows))


def sheets_to_xlsx(sheets: Mapping[str, Sequence[Mapping[str, Any]]]) -> io.BytesIO:
    """Write one sheet per mapping entry into an in-memory workbook.

    An empty row list still produces its sheet, holding only the
    ``Veri yok`` header cell.
    """

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        if not sheets:
            _frame([]).to_excel(writer, index=False, sheet_name="Sayfa1")
        for name, rows in sheets.items():
            # Excel limits sheet names to 31 characters.
            _frame(rows).to_excel(writer, index=False, sheet_name=str(name)[:31] or "Sayfa1")
    output.seek(0)
    return output


def rows_to_xlsx(rows: Sequence[Mapping[str, Any]], sheet_name: str = "Rapor") -> io.BytesIO:
    return sheets_to_xlsx({sheet_name: rows})


def rows_to_csv(rows: Sequence[Mapping[str, Any]]) -> bytes:
    """CSV with a BOM so Excel opens Turkish characters correctly."""

    out = io.StringIO()
    if rows:
        writer = csv.DictWriter(out, fieldnames=list(rows[0].keys()), extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")
