"""Wire helpers for the TicTic REST envelope.

Every JSON response is expected to follow ``{"success": bool, "data": ...}``
on success or ``{"success": false, "error": {...}}`` on failure. A few
endpoints still answer with a bare JSON body, which is passed through as-is.
"""

from __future__ import annotations

from typing import Any, Final

from .errors import TicTicRemoteError

API_PREFIX: Final = "/v1/"

MESSAGES_PATH: Final = "/v1/messages"
STATUS_PATH: Final = "/v1/status"
QR_PATH: Final = "/v1/qr"
USAGE_PATH: Final = "/v1/usage"
AUTH_PATH: Final = "/v1/auth"

GENERIC_ERROR_MESSAGE: Final = "Request failed"

# Codes the API uses when no session has been created yet
SESSION_NOT_FOUND_CODES: frozenset[str] = frozenset(
    {"SESSION_NOT_FOUND", "NO_SESSION"}
)


def validate_path(path: str) -> str:
    """Return path unchanged if it targets the versioned API.

    Raises:
        ValueError: If path is not under the versioned prefix.
    """
    if not path.startswith(API_PREFIX):
        raise ValueError(f"Path must start with {API_PREFIX!r}, got {path!r}")
    return path


def build_remote_error(
    status: int, payload: Any, text: str | None = None
) -> TicTicRemoteError:
    """Convert a failed response into a TicTicRemoteError.

    Args:
        status: HTTP status code of the response.
        payload: Decoded JSON body, or None when the body was not JSON.
        text: Raw body text, used when the body carries no error message.

    Returns:
        Error carrying the envelope's message, code, type and help.
    """
    message: str | None = None
    code = help_text = error_type = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            code = error.get("code")
            error_type = error.get("type")
            help_text = error.get("help")
        elif isinstance(error, str):
            message = error
        if not message and isinstance(payload.get("message"), str):
            message = payload["message"]

    if not message:
        message = (text or "").strip() or GENERIC_ERROR_MESSAGE

    return TicTicRemoteError(
        status,
        message,
        code=code,
        help=help_text,
        error_type=error_type,
    )


def unwrap_envelope(status: int, payload: Any, text: str | None = None) -> Any:
    """Return the envelope's data, or the bare body for legacy shapes.

    Raises:
        TicTicRemoteError: If status is not 2xx or the envelope reports
            ``success: false``.
    """
    if not 200 <= status < 300:
        raise build_remote_error(status, payload, text)

    if isinstance(payload, dict) and "success" in payload:
        if payload["success"] is not True:
            raise build_remote_error(status, payload, text)
        return payload.get("data")

    return payload


def is_session_not_found(err: TicTicRemoteError) -> bool:
    """Return True when the error means no remote session exists yet."""
    return err.status == 404 or err.code in SESSION_NOT_FOUND_CODES
