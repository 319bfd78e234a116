# qrsheet/qr_render/__init__.py

"""
QR glyph rendering and the printable sheet.

Exposes:

    render_qr_png(payload: str) -> bytes
    build_print_sheet(records, rows, cols) -> str
"""

from .qr_engine import render_qr_png, render_qr_data_uri
from .sheet import build_print_sheet
