"""Spreadsheet Writer — workbook content and header styling."""

import io

from openpyxl import load_workbook

from votecerto.core.vote_report import SPREADSHEET_COLUMNS
from votecerto.infrastructure.spreadsheet import SHEET_TITLE, build_workbook


def test_workbook_has_header_and_rows():
    rows = [["Eleição", "Chapa A", "", "Ana", "123.456.789-**", "01/03/2026", "10:30:05", ""]]
    content = build_workbook(SPREADSHEET_COLUMNS, rows)

    ws = load_workbook(io.BytesIO(content))[SHEET_TITLE]
    assert [c.value for c in ws[1]] == SPREADSHEET_COLUMNS
    assert ws["B2"].value == "Chapa A"
    assert ws["E2"].value == "123.456.789-**"
    assert ws["A1"].font.bold
