"""Endpoint wrappers built on the TicTic transport.

Each client maps one remote capability to a typed call. None of them keep
state between calls or retry on failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import TicTicRemoteError
from .models import PairingCode, SendResult, SessionStatus, UsageSnapshot
from .protocol import (
    AUTH_PATH,
    MESSAGES_PATH,
    QR_PATH,
    STATUS_PATH,
    USAGE_PATH,
)

if TYPE_CHECKING:
    from .http import TicTicHttpClient


class MessagesClient:
    """Outbound WhatsApp messages."""

    def __init__(self, http: TicTicHttpClient) -> None:
        self._http = http

    async def send_text(self, to: str, text: str) -> SendResult:
        """Send a text message.

        Sends are not idempotent; a repeated call may deliver twice.
        """
        if not to:
            raise ValueError("Recipient phone number is required")
        if not text:
            raise ValueError("Message text is required")
        data = await self._http.request(
            MESSAGES_PATH, "POST", {"to": to, "text": text}
        )
        if not isinstance(data, dict) or "id" not in data:
            raise TicTicRemoteError(200, "Send response did not include a message id")
        return SendResult.from_dict(data)


class UsageClient:
    """Message quota lookup."""

    def __init__(self, http: TicTicHttpClient) -> None:
        self._http = http

    async def get_usage(self) -> UsageSnapshot:
        data = await self._http.request(USAGE_PATH)
        return UsageSnapshot.from_dict((data or {}).get("usage") or {})


class SessionClient:
    """Remote WhatsApp session endpoints."""

    def __init__(self, http: TicTicHttpClient) -> None:
        self._http = http

    async def fetch_status(self) -> SessionStatus:
        data = await self._http.request(STATUS_PATH)
        return SessionStatus.from_dict(data or {})

    async def fetch_pairing_code(self) -> PairingCode:
        """Create the session if needed and fetch its pairing payload."""
        data = await self._http.request(QR_PATH)
        return PairingCode.from_dict(data or {})


class AuthClient:
    """Unauthenticated signup by WhatsApp verification code.

    ``request_code`` must precede ``verify_code`` for a phone number; the API
    tracks code validity, the client does not.
    """

    def __init__(self, http: TicTicHttpClient) -> None:
        self._http = http

    async def request_code(self, phone: str) -> None:
        if not phone:
            raise ValueError("Phone number is required")
        await self._http.request(
            AUTH_PATH, "POST", {"phone": phone}, authenticated=False
        )

    async def verify_code(self, phone: str, code: str) -> str:
        """Exchange a verification code for an API key."""
        if not phone:
            raise ValueError("Phone number is required")
        if not code:
            raise ValueError("Verification code is required")
        data = await self._http.request(
            AUTH_PATH,
            "POST",
            {"phone": phone, "verification_code": code},
            authenticated=False,
        )
        api_key = (data or {}).get("api_key")
        if not api_key:
            raise TicTicRemoteError(
                200, "Verification response did not include an API key"
            )
        return api_key
