"""Test pairing payload decoding and terminal rendering."""

from __future__ import annotations

import base64
import io

import pytest

from tictic.qr import decode_pairing_payload, render_qr_terminal


def test_plain_payload_unchanged() -> None:
    assert decode_pairing_payload("2@abc,def==") == "2@abc,def=="


def test_data_url_is_base64_decoded() -> None:
    encoded = base64.b64encode(b"2@pairing-ref").decode()

    assert decode_pairing_payload(f"data:text/plain;base64,{encoded}") == "2@pairing-ref"


def test_render_writes_qr_and_prompt() -> None:
    out = io.StringIO()

    render_qr_terminal("QRDATA", out=out)

    text = out.getvalue()
    assert "Scan this QR code with WhatsApp" in text
    assert "Waiting for scan" in text
    # QR body is several lines of block characters
    assert len(text.splitlines()) > 10


def test_binary_data_url_rejected() -> None:
    with pytest.raises(ValueError, match="image/png"):
        decode_pairing_payload("data:image/png;base64,iVBORw0KGgoAAA==")


def test_percent_encoded_data_url() -> None:
    assert decode_pairing_payload("data:,2%40ref%2Ckey") == "2@ref,key"
