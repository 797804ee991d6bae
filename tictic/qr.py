"""Terminal rendering for WhatsApp pairing payloads."""

from __future__ import annotations

import base64
import io
import sys
from typing import TextIO
from urllib.parse import unquote

import qrcode


def decode_pairing_payload(payload: str) -> str:
    """Return the QR content, decoding ``data:`` URLs.

    Raises:
        ValueError: If the data URL holds binary data such as an image.
    """
    if not payload.startswith("data:"):
        return payload
    header, _, encoded = payload.partition(",")
    if not header.endswith(";base64"):
        return unquote(encoded)
    try:
        return base64.b64decode(encoded).decode()
    except UnicodeDecodeError as err:
        media_type = header.removeprefix("data:").removesuffix(";base64")
        raise ValueError(
            f"Unsupported pairing payload media type {media_type!r}"
        ) from err


def render_qr_terminal(payload: str, out: TextIO | None = None) -> None:
    """Print the pairing payload as an ASCII QR code."""
    qr = qrcode.QRCode(border=2)
    qr.add_data(decode_pairing_payload(payload))
    qr.make(fit=True)

    buffer = io.StringIO()
    qr.print_ascii(out=buffer, invert=True)

    stream = out or sys.stdout
    stream.write("\nScan this QR code with WhatsApp:\n\n")
    stream.write(buffer.getvalue())
    stream.write("\nWaiting for scan...\n")
    stream.flush()
