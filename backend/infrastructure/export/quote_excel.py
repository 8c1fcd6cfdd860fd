"""
Quote export to Excel.

Produces the workbook that is imported into Dynamics: one sheet with
SKU, Description, Quantity and Config ID columns.
"""

import logging
from datetime import date
from io import BytesIO
from typing import Iterable, Optional

import openpyxl
from openpyxl.styles import Font

from domain.configurator.entities import QuoteLine
from domain.configurator.quote import QUOTE_HEADERS, config_id_label

logger = logging.getLogger(__name__)

SHEET_TITLE = "Quote for Dynamics"


def quote_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"TippingPoint_Quote_{today.isoformat()}.xlsx"


def build_quote_workbook(lines: Iterable[QuoteLine]) -> openpyxl.Workbook:
    lines = list(lines)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    # Header style
    header_font = Font(bold=True)
    for col, header in enumerate(QUOTE_HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font

    # Data
    for row, line in enumerate(lines, 2):
        ws.cell(row=row, column=1, value=line.part)
        ws.cell(row=row, column=2, value=line.description)
        ws.cell(row=row, column=3, value=line.qty)
        ws.cell(row=row, column=4, value=config_id_label(line.config_id))

    # Column widths
    ws.column_dimensions['A'].width = max([12] + [len(l.part) for l in lines])
    ws.column_dimensions['B'].width = max([20] + [len(l.description) for l in lines])
    ws.column_dimensions['C'].width = 10
    ws.column_dimensions['D'].width = 10

    return wb


def quote_workbook_bytes(lines: Iterable[QuoteLine]) -> bytes:
    lines = list(lines)
    buffer = BytesIO()
    build_quote_workbook(lines).save(buffer)
    logger.info(f"Exported quote with {len(lines)} lines to Excel")
    return buffer.getvalue()
