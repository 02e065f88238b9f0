"""Spreadsheet Writer — renders vote reports as in-memory .xlsx workbooks.

Invariants:
    - Writes to a BytesIO buffer, never to disk
    - Header row bold on grey fill; data rows exactly as built by core/vote_report.py

Design Decisions:
    - openpyxl: pure-Python xlsx writer, no office install needed
    - Column widths fixed per column (auto-fit is not supported by the format)
"""

import io

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

SHEET_TITLE = "Votos"
XLSX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)

_HEADER_FILL = PatternFill(start_color="CCCCCC", end_color="CCCCCC", fill_type="solid")
_COLUMN_WIDTHS = [30, 30, 40, 30, 18, 12, 10, 50]


def build_workbook(headers: list[str], rows: list[list[str]]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = Font(bold=True)
        cell.fill = _HEADER_FILL
        cell.alignment = Alignment(horizontal="center")

    for row_idx, values in enumerate(rows, 2):
        for col, value in enumerate(values, 1):
            ws.cell(row=row_idx, column=col, value=value)

    for col, width in enumerate(_COLUMN_WIDTHS[:len(headers)], 1):
        ws.column_dimensions[get_column_letter(col)].width = width

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
