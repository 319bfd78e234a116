# qrsheet/qr_render/qr_engine.py

from __future__ import annotations

import base64
import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage
from PIL import Image

DEFAULT_PIXEL_SIZE = 280
DEFAULT_BORDER = 2


# ---------------------------------------------------------
# QR ENCODING
# ---------------------------------------------------------
def make_qr_image(payload: str, border: int = DEFAULT_BORDER) -> Image.Image:
    """
    Encode `payload` into a black-on-white PIL image.

    Raises qrcode.exceptions.DataOverflowError when the payload does not
    fit in the largest QR version.
    """
    qr = qrcode.QRCode(
        version=None,  # smallest version that fits
        error_correction=ERROR_CORRECT_M,
        box_size=10,
        border=border,
        image_factory=PilImage,
    )
    qr.add_data(payload)
    try:
        qr.make(fit=True)
    except ValueError as exc:
        # newer qrcode releases report "Invalid version (was 41 ...)" instead
        raise DataOverflowError(str(exc)) from exc
    return qr.make_image(fill_color="black", back_color="white").get_image()


def render_qr_png(
    payload: str,
    size: int = DEFAULT_PIXEL_SIZE,
    border: int = DEFAULT_BORDER,
) -> bytes:
    img = make_qr_image(payload, border=border).convert("L")
    if img.size != (size, size):
        # nearest keeps module edges sharp for scanners
        img = img.resize((size, size), Image.NEAREST)

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def render_qr_data_uri(payload: str, size: int = DEFAULT_PIXEL_SIZE) -> str:
    encoded = base64.b64encode(render_qr_png(payload, size=size)).decode("ascii")
    return f"data:image/png;base64,{encoded}"
