"""QR code rendering for public pet pages."""

from __future__ import annotations

import base64
import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from qrcode.image.svg import SvgPathImage


def public_pet_url(frontend_url: str, slug: str) -> str:
    return f"{frontend_url.rstrip('/')}/pet/{slug}"


def render_qr_code(url: str) -> str:
    """Encode ``url`` as an SVG QR code and return it as base64 text."""
    image = qrcode.make(
        url,
        image_factory=SvgPathImage,
        error_correction=ERROR_CORRECT_M,
    )
    buffer = io.BytesIO()
    image.save(buffer)
    return base64.b64encode(buffer.getvalue()).decode("ascii")
