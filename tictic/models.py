"""Typed payloads exchanged with the TicTic API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import TicTicConfigurationError

DEFAULT_BASE_URL = "https://api.tictic.dev"
API_KEY_ENV = "TICTIC_API_KEY"
BASE_URL_ENV = "TICTIC_BASE_URL"

# Statuses the QR endpoint uses when no pairing is needed
CONNECTED_QR_STATUSES: frozenset[str] = frozenset(
    {"already_connected", "connected", "ready"}
)


def resolve_base_url(base_url: str | None = None) -> str:
    """Return base_url, else TICTIC_BASE_URL, else the public API origin."""
    url = base_url or os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
    return url.rstrip("/")


class SessionPhase(Enum):
    """Client-side view of the pairing lifecycle."""

    UNKNOWN = "unknown"
    CREATING = "creating"
    AWAITING_SCAN = "awaiting_scan"
    POLLING = "polling"
    READY = "ready"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True, slots=True)
class Credential:
    """API key and origin used for every authenticated request."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL

    def __repr__(self) -> str:
        return f"Credential(api_key='***', base_url={self.base_url!r})"

    @classmethod
    def from_env(
        cls, api_key: str | None = None, base_url: str | None = None
    ) -> Credential:
        """Build a credential, falling back to the environment once.

        Raises:
            TicTicConfigurationError: If no API key is passed or configured.
        """
        key = api_key or os.environ.get(API_KEY_ENV, "")
        if not key:
            raise TicTicConfigurationError(
                f"API key required. Set {API_KEY_ENV} or pass api_key."
            )
        return cls(api_key=key, base_url=resolve_base_url(base_url))


@dataclass(frozen=True, slots=True)
class ErrorEnvelope:
    """Error body carried by a failed response."""

    message: str
    code: str | None = None
    type: str | None = None
    help: str | None = None


@dataclass(frozen=True, slots=True)
class UsageSnapshot:
    """Message quota as reported by the API."""

    used: int
    limit: int
    remaining: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UsageSnapshot:
        return cls(
            used=int(data.get("used", 0)),
            limit=int(data.get("limit", 0)),
            remaining=int(data.get("remaining", 0)),
        )


@dataclass(frozen=True, slots=True)
class SendResult:
    """Message accepted by the API."""

    id: str
    to: str
    status: str
    created_at: str | None = None
    usage: UsageSnapshot | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SendResult:
        usage = data.get("usage")
        return cls(
            id=data["id"],
            to=data.get("to", ""),
            status=data.get("status", ""),
            created_at=data.get("created_at") or data.get("timestamp"),
            usage=UsageSnapshot.from_dict(usage) if isinstance(usage, dict) else None,
        )


@dataclass(frozen=True, slots=True)
class SessionStatus:
    """Snapshot of the remote WhatsApp session."""

    ready: bool
    status: str
    phone: str | None = None
    next_step: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionStatus:
        ready = bool(data.get("ready", False))
        status = data.get("status") or ("ready" if ready else "uninitialized")
        return cls(
            ready=ready or status == "ready",
            status=status,
            phone=data.get("phone"),
            next_step=data.get("next_step"),
        )


@dataclass(frozen=True, slots=True)
class PairingCode:
    """Response of the QR endpoint."""

    status: str
    qr: str | None = None
    instructions: tuple[str, ...] = field(default_factory=tuple)

    @property
    def already_connected(self) -> bool:
        return self.status in CONNECTED_QR_STATUSES

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PairingCode:
        return cls(
            status=data.get("status", ""),
            qr=data.get("qr") or None,
            instructions=tuple(data.get("instructions") or ()),
        )
