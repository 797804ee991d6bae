"""Single entry point for the TicTic WhatsApp API."""

from __future__ import annotations

import logging
from types import TracebackType

import aiohttp

from .errors import TicTicRemoteError
from .http import DEFAULT_REQUEST_TIMEOUT, TicTicHttpClient
from .models import (
    Credential,
    SendResult,
    SessionPhase,
    SessionStatus,
    UsageSnapshot,
    resolve_base_url,
)
from .protocol import is_session_not_found
from .qr import render_qr_terminal
from .resources import AuthClient, MessagesClient, SessionClient, UsageClient
from .session import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_POLL_INTERVAL,
    PairingRenderer,
    SleepFunc,
    TicTicSessionManager,
)

_LOGGER = logging.getLogger(__name__)


class TicTic:
    """TicTic client bound to one API key.

    Usage:
        async with TicTic("tk_...") as tictic:
            await tictic.quick_send("5511999887766", "Hello!")
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        session: aiohttp.ClientSession | None = None,
        renderer: PairingRenderer | None = render_qr_terminal,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: SleepFunc | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize client.

        Args:
            api_key: API key, defaults to TICTIC_API_KEY
            base_url: API origin, defaults to TICTIC_BASE_URL or the public API
            session: aiohttp session to use; one is created when omitted
            renderer: Pairing code renderer, terminal QR by default
            poll_interval: Delay between session status checks (seconds)
            max_attempts: Session status checks before timing out
            sleep: Sleep coroutine used between status checks
            request_timeout: Per-request timeout (seconds)

        Raises:
            TicTicConfigurationError: If no API key is available.
        """
        self._credential = Credential.from_env(api_key, base_url)
        self._http = TicTicHttpClient(
            session, self._credential, request_timeout=request_timeout
        )
        self.messages = MessagesClient(self._http)
        self.usage = UsageClient(self._http)
        self.sessions = SessionClient(self._http)
        self.manager = TicTicSessionManager(
            self.sessions,
            renderer=renderer,
            poll_interval=poll_interval,
            max_attempts=max_attempts,
            sleep=sleep,
        )

    @property
    def credential(self) -> Credential:
        return self._credential

    @property
    def phase(self) -> SessionPhase:
        return self.manager.phase

    async def __aenter__(self) -> TicTic:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        await self._http.close()

    async def send_text(self, to: str, text: str) -> SendResult:
        """Send a WhatsApp text message."""
        return await self.messages.send_text(to, text)

    async def get_usage(self) -> UsageSnapshot:
        return await self.usage.get_usage()

    async def status(self) -> SessionStatus:
        """Fetch the session status; all errors propagate."""
        return await self.manager.fetch_status()

    async def is_ready(self) -> bool:
        return await self.manager.is_ready()

    async def connect(self) -> SessionStatus:
        """Connect WhatsApp, showing a QR code if pairing is needed."""
        return await self.manager.connect()

    async def quick_send(self, to: str, text: str) -> SendResult:
        """Send a message, pairing the session first if it is not ready."""
        try:
            current = await self.manager.fetch_status()
        except TicTicRemoteError as err:
            if not is_session_not_found(err):
                raise
            current = None

        if current is None or not current.ready:
            _LOGGER.info("Session not ready, connecting before send")
            await self.manager.connect()

        return await self.messages.send_text(to, text)

    @classmethod
    async def request_code(
        cls,
        phone: str,
        *,
        base_url: str | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Ask the API to send a signup code to phone over WhatsApp."""
        http = _auth_transport(base_url, session)
        try:
            await AuthClient(http).request_code(phone)
        finally:
            await http.close()
        _LOGGER.debug("Verification code sent to %s", _mask_phone(phone))

    @classmethod
    async def verify_code(
        cls,
        phone: str,
        code: str,
        *,
        base_url: str | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> str:
        """Verify the signup code and return the new API key."""
        http = _auth_transport(base_url, session)
        try:
            return await AuthClient(http).verify_code(phone, code)
        finally:
            await http.close()


def _auth_transport(
    base_url: str | None, session: aiohttp.ClientSession | None
) -> TicTicHttpClient:
    credential = Credential(api_key="", base_url=resolve_base_url(base_url))
    return TicTicHttpClient(session, credential)


def _mask_phone(phone: str) -> str:
    return f"***{phone[-4:]}" if len(phone) > 4 else "***"
