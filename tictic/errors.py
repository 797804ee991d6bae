"""Client error types for TicTic API interactions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ErrorEnvelope


class TicTicError(Exception):
    """Base error for every TicTic failure."""


class TicTicConfigurationError(TicTicError):
    """Client was constructed without a usable API key."""


class TicTicClientError(TicTicError):
    """Base error for request/response failures."""


class TicTicRequestTimeout(TicTicClientError):
    """Timeout while communicating with the API."""


class TicTicNetworkError(TicTicClientError):
    """Network connection to the API failed."""


class TicTicRemoteError(TicTicClientError):
    """Non-success response from the API."""

    def __init__(
        self,
        status: int,
        message: str,
        *,
        code: str | None = None,
        help: str | None = None,  # noqa: A002
        error_type: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.message = message
        self.code = code
        self.help = help
        self.error_type = error_type

    @property
    def status_code(self) -> int:
        return self.status

    @property
    def envelope(self) -> ErrorEnvelope:
        from .models import ErrorEnvelope

        return ErrorEnvelope(
            message=self.message,
            code=self.code,
            type=self.error_type,
            help=self.help,
        )


class TicTicSessionError(TicTicError):
    """Base error for session lifecycle failures."""


class TicTicConnectionFailed(TicTicSessionError):
    """The remote session reported failure while pairing."""


class TicTicConnectionTimeout(TicTicSessionError):
    """Polling budget exhausted before the session became ready."""

    def __init__(self, attempts: int, message: str | None = None) -> None:
        super().__init__(
            message or f"Session not ready after {attempts} status checks"
        )
        self.attempts = attempts


def format_error(err: BaseException) -> str:
    """Render an error for display, appending the remediation hint if any."""
    text = str(err) or type(err).__name__
    hint = getattr(err, "help", None)
    if hint:
        return f"{text}\n{hint}"
    return text
