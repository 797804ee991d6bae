"""Async client for the TicTic WhatsApp messaging API."""

__version__ = "0.1.0"

from .client import TicTic
from .errors import (
    TicTicClientError,
    TicTicConfigurationError,
    TicTicConnectionFailed,
    TicTicConnectionTimeout,
    TicTicError,
    TicTicNetworkError,
    TicTicRemoteError,
    TicTicRequestTimeout,
    TicTicSessionError,
    format_error,
)
from .http import TicTicHttpClient
from .models import (
    Credential,
    ErrorEnvelope,
    PairingCode,
    SendResult,
    SessionPhase,
    SessionStatus,
    UsageSnapshot,
)
from .qr import decode_pairing_payload, render_qr_terminal
from .resources import AuthClient, MessagesClient, SessionClient, UsageClient
from .session import TicTicSessionManager

__all__ = [
    "AuthClient",
    "Credential",
    "ErrorEnvelope",
    "MessagesClient",
    "PairingCode",
    "SendResult",
    "SessionClient",
    "SessionPhase",
    "SessionStatus",
    "TicTic",
    "TicTicClientError",
    "TicTicConfigurationError",
    "TicTicConnectionFailed",
    "TicTicConnectionTimeout",
    "TicTicError",
    "TicTicHttpClient",
    "TicTicNetworkError",
    "TicTicRemoteError",
    "TicTicRequestTimeout",
    "TicTicSessionError",
    "TicTicSessionManager",
    "UsageClient",
    "UsageSnapshot",
    "__version__",
    "decode_pairing_payload",
    "format_error",
    "render_qr_terminal",
]
