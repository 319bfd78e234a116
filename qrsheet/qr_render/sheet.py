# qrsheet/qr_render/sheet.py

"""
Printable A4 sheet of numbered QR codes.

Cells are placed with the cut-and-stack collator, so cutting the printed
pages along the grid and stacking same-position pieces gives back the
original order.
"""

from __future__ import annotations

import html
import logging
from typing import List, Optional, Sequence

from qrcode.exceptions import DataOverflowError

from qrsheet.collator import collate
from qrsheet.config import GRID_COLS, GRID_ROWS
from qrsheet.records import QRRecord
from .qr_engine import render_qr_data_uri

logger = logging.getLogger("qrsheet.sheet")

INVALID_PLACEHOLDER = "Invalid URL"
OVERFLOW_PLACEHOLDER = "URL too long for a QR code"

SHEET_CSS = """
@page {
    size: A4;
    margin: 10mm;
}

* {
    -webkit-print-color-adjust: exact !important;
    print-color-adjust: exact !important;
    box-sizing: border-box;
}

body {
    margin: 0;
    font-family: Arial, Helvetica, sans-serif;
    background: white;
    color: #000;
}

.print-page {
    page-break-after: always;
    width: 100%;
    height: 270mm;
    display: flex;
    align-items: center;
    justify-content: center;
}

.print-page:last-child {
    page-break-after: avoid;
}

.print-grid {
    display: grid;
    grid-template-columns: repeat(__COLS__, 1fr);
    grid-template-rows: repeat(__ROWS__, 1fr);
    width: 100%;
    height: 90%;
    max-width: 190mm;
    max-height: 260mm;
    border: 1px solid #000;
}

.print-qr-item {
    display: flex;
    flex-direction: column;
    align-items: center;
    justify-content: center;
    padding: 8px;
    text-align: center;
    border-right: 1px solid #000;
    border-bottom: 1px solid #000;
}

.qr-number {
    font-weight: bold;
    font-size: 12px;
    margin-bottom: 4px;
}

.qr-code {
    width: 140px;
    height: 140px;
    margin: 4px 0;
    image-rendering: pixelated;
}

.qr-url {
    font-size: 7px;
    color: #333;
    word-break: break-all;
    margin-top: 4px;
    max-width: 140px;
    line-height: 1.1;
}

.qr-warning {
    font-size: 7px;
    color: #a60;
    margin-top: 2px;
    max-width: 140px;
}

.qr-error {
    width: 140px;
    height: 140px;
    background: #fee;
    border: 1px solid #fcc;
    display: flex;
    align-items: center;
    justify-content: center;
    font-size: 10px;
    color: #c33;
    margin: 4px 0;
}
"""


def _glyph_html(record: QRRecord) -> str:
    if not record.is_valid:
        return f'<div class="qr-error">{INVALID_PLACEHOLDER}</div>'
    try:
        src = render_qr_data_uri(record.url)
    except DataOverflowError:
        logger.warning("record %d does not fit in a QR code", record.id)
        return f'<div class="qr-error">{OVERFLOW_PLACEHOLDER}</div>'
    return f'<img class="qr-code" src="{src}" alt="QR #{record.id}">'


def render_cell(record: Optional[QRRecord]) -> str:
    if record is None:
        return '<div class="print-qr-item empty"></div>'

    parts = [
        f'<div class="qr-number">#{record.id}</div>',
        _glyph_html(record),
        f'<div class="qr-url">{html.escape(record.display_url)}</div>',
    ]
    if record.has_warning and record.warning_message:
        parts.append(f'<div class="qr-warning">{html.escape(record.warning_message)}</div>')

    return '<div class="print-qr-item">' + "".join(parts) + "</div>"


def render_pages(
    records: Sequence[QRRecord],
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
) -> List[str]:
    pages = []
    for layout in collate(len(records), rows, cols):
        cells = [
            render_cell(records[n - 1] if n is not None else None)
            for grid_row in layout
            for n in grid_row
        ]
        pages.append(
            '<section class="print-page"><div class="print-grid">'
            + "".join(cells)
            + "</div></section>"
        )
    return pages


def build_print_sheet(
    records: Sequence[QRRecord],
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    title: str = "QR Codes",
) -> str:
    css = SHEET_CSS.replace("__COLS__", str(cols)).replace("__ROWS__", str(rows))
    body = "\n".join(render_pages(records, rows, cols))
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="UTF-8">\n'
        f"<title>{html.escape(title)} ({len(records)})</title>\n"
        f"<style>{css}</style>\n"
        "</head>\n<body>\n"
        f"{body}\n"
        "</body>\n</html>\n"
    )
