"""Pairing lifecycle for the remote WhatsApp session.

The manager drives one session from unknown state to ready:

- fetch the pairing payload (this also creates the remote session)
- hand the payload to a renderer once
- poll status at a fixed interval until ready, failed or out of attempts

The remote API owns the session state. Every poll replaces the previous
snapshot and nothing is kept between ``connect()`` calls.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

from .errors import (
    TicTicConnectionFailed,
    TicTicConnectionTimeout,
    TicTicRemoteError,
)
from .models import SessionPhase, SessionStatus
from .protocol import is_session_not_found
from .resources import SessionClient

_LOGGER = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_MAX_ATTEMPTS = 60

PairingRenderer = Callable[[str], Awaitable[None] | None]
SleepFunc = Callable[[float], Awaitable[None]]


class TicTicSessionManager:
    """Connects the account's WhatsApp session by QR pairing.

    Usage:
        manager = TicTicSessionManager(SessionClient(http), renderer=render_qr_terminal)
        status = await manager.connect()

    Calling ``connect()`` concurrently on one manager is not supported.
    Cancel the awaiting task to abort pairing.
    """

    def __init__(
        self,
        sessions: SessionClient,
        *,
        renderer: PairingRenderer | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: SleepFunc | None = None,
    ) -> None:
        """Initialize manager.

        Args:
            sessions: Session endpoint client
            renderer: Called with the pairing payload; sync or async
            poll_interval: Delay between status checks (seconds)
            max_attempts: Status checks before giving up
            sleep: Sleep coroutine, defaults to asyncio.sleep
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if poll_interval < 0:
            raise ValueError("poll_interval must not be negative")

        self._sessions = sessions
        self._renderer = renderer
        self._poll_interval = poll_interval
        self._max_attempts = max_attempts
        self._sleep: SleepFunc = sleep or asyncio.sleep

        self._phase = SessionPhase.UNKNOWN
        self._attempts = 0
        self._phase_callback: Callable[[SessionPhase], None] | None = None

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def attempts(self) -> int:
        """Status checks made by the current or last ``connect()``."""
        return self._attempts

    def on_phase_changed(self, callback: Callable[[SessionPhase], None]) -> None:
        """Register callback for lifecycle phase changes."""
        self._phase_callback = callback

    def _set_phase(self, phase: SessionPhase) -> None:
        if phase == self._phase:
            return
        _LOGGER.debug("Session phase %s -> %s", self._phase.value, phase.value)
        self._phase = phase
        if self._phase_callback:
            self._phase_callback(phase)

    async def fetch_status(self) -> SessionStatus:
        """Fetch current remote status. Errors propagate unchanged."""
        return await self._sessions.fetch_status()

    async def is_ready(self) -> bool:
        """Return True if the remote session is connected.

        A missing session reads as not ready; other errors propagate.
        """
        try:
            status = await self._sessions.fetch_status()
        except TicTicRemoteError as err:
            if is_session_not_found(err):
                _LOGGER.debug("No remote session yet: %s", err)
                return False
            raise
        return status.ready

    async def connect(self) -> SessionStatus:
        """Pair the WhatsApp session and wait until it is ready.

        Returns:
            The status snapshot that reported ready. When the session was
            already connected, a synthesized ready snapshot.

        Raises:
            TicTicConnectionFailed: The remote session reported failure.
            TicTicConnectionTimeout: No terminal status within the budget.
            TicTicClientError: Any transport or API failure.
        """
        self._attempts = 0
        self._set_phase(SessionPhase.UNKNOWN)
        try:
            return await self._connect()
        except asyncio.CancelledError:
            _LOGGER.info("Session pairing cancelled during %s", self._phase.value)
            self._set_phase(SessionPhase.UNKNOWN)
            raise

    async def _connect(self) -> SessionStatus:
        self._set_phase(SessionPhase.CREATING)
        pairing = await self._sessions.fetch_pairing_code()

        if pairing.already_connected:
            _LOGGER.info("WhatsApp session already connected")
            self._set_phase(SessionPhase.READY)
            return SessionStatus(ready=True, status="ready")

        if pairing.status == "failed":
            self._set_phase(SessionPhase.FAILED)
            raise TicTicConnectionFailed("Session creation failed")

        if pairing.qr:
            self._set_phase(SessionPhase.AWAITING_SCAN)
            await self._render(pairing.qr)

        return await self._poll()

    async def _render(self, payload: str) -> None:
        if self._renderer is None:
            _LOGGER.warning("Pairing code received but no renderer is configured")
            return
        try:
            result = self._renderer(payload)
            if inspect.isawaitable(result):
                await result
        except Exception:  # Renderer failures do not abort pairing
            _LOGGER.exception("Failed to render pairing code")

    async def _poll(self) -> SessionStatus:
        self._set_phase(SessionPhase.POLLING)
        while True:
            self._attempts += 1
            status = await self._sessions.fetch_status()

            if status.ready:
                _LOGGER.info(
                    "WhatsApp session ready (phone=%s, checks=%d)",
                    status.phone,
                    self._attempts,
                )
                self._set_phase(SessionPhase.READY)
                return status

            if status.failed:
                _LOGGER.warning(
                    "WhatsApp session failed after %d checks", self._attempts
                )
                self._set_phase(SessionPhase.FAILED)
                raise TicTicConnectionFailed("Connection failed")

            if self._attempts >= self._max_attempts:
                _LOGGER.warning(
                    "WhatsApp session not ready after %d checks", self._attempts
                )
                self._set_phase(SessionPhase.TIMED_OUT)
                raise TicTicConnectionTimeout(self._attempts)

            _LOGGER.debug(
                "Session %s (check %d/%d), retrying in %.1fs",
                status.status,
                self._attempts,
                self._max_attempts,
                self._poll_interval,
            )
            await self._sleep(self._poll_interval)
