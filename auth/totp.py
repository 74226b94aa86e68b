"""
auth/totp.py -- TOTP secret generation, provisioning, and verification.

pyotp does the RFC 6238 work (30-second steps, 6 digits, SHA-1). qrcode
renders the otpauth:// URI as an SVG so the SPA can drop it straight into an
<img src>, with no Pillow dependency.

Layer rule: no imports from api/.
"""

from __future__ import annotations

import base64
import io
import re

import pyotp
import qrcode
import qrcode.image.svg

_CODE_RE = re.compile(r"[0-9]{6}")


def generate_secret() -> str:
    """Return a new random base32 TOTP secret."""
    return pyotp.random_base32()


def provisioning_uri(secret: str, email: str, issuer: str) -> str:
    """Return the otpauth:// URI authenticator apps scan."""
    return pyotp.TOTP(secret).provisioning_uri(name=email, issuer_name=issuer)


def qr_data_url(uri: str) -> str:
    """Render uri as a QR code and return it as a base64 SVG data URL."""
    image = qrcode.make(uri, image_factory=qrcode.image.svg.SvgPathImage)
    buf = io.BytesIO()
    image.save(buf)
    encoded = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def verify_code(secret: str, code: str, valid_window: int = 1) -> bool:
    """Return True if code is the current TOTP for secret, within valid_window steps of drift."""
    if not _CODE_RE.fullmatch(code):
        return False
    return pyotp.TOTP(secret).verify(code, valid_window=valid_window)
