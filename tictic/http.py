"""HTTP transport for TicTic API endpoints."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from .errors import TicTicNetworkError, TicTicRequestTimeout
from .models import Credential
from .protocol import unwrap_envelope, validate_path

_LOGGER = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 30.0


class TicTicHttpClient:
    """Authenticated JSON transport for the TicTic REST API."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None,
        credential: Credential,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize transport.

        Args:
            session: aiohttp session to borrow. When None, one is created on
                first request and closed by close().
            credential: API key and base URL
            request_timeout: Total timeout per request (seconds)
        """
        self._session = session
        self._owns_session = session is None
        self._credential = credential
        self._request_timeout = request_timeout

    @property
    def credential(self) -> Credential:
        return self._credential

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session if this transport created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _url(self, path: str) -> str:
        return f"{self._credential.base_url}{path}"

    def _headers(self, *, authenticated: bool) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if authenticated:
            headers["X-API-Key"] = self._credential.api_key
        return headers

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any | None = None,
        *,
        authenticated: bool = True,
    ) -> Any:
        """Perform one request and return the decoded envelope data.

        Args:
            path: API path, starting with ``/v1/``.
            method: HTTP method.
            body: Optional JSON-serializable request body.
            authenticated: Send the API key header. Auth endpoints pass False.

        Returns:
            The envelope's ``data`` member, or the bare JSON body.

        Raises:
            ValueError: If path is outside the versioned API.
            TicTicRemoteError: If the API answers with a failure.
            TicTicRequestTimeout: If the request times out.
            TicTicNetworkError: If the network request fails.
        """
        url = self._url(validate_path(path))
        kwargs: dict[str, Any] = {
            "headers": self._headers(authenticated=authenticated),
            "timeout": aiohttp.ClientTimeout(total=self._request_timeout),
        }
        if body is not None:
            kwargs["json"] = body

        _LOGGER.debug("%s %s", method, path)
        try:
            async with self._get_session().request(method, url, **kwargs) as resp:
                payload, text = await self._decode(resp)
                _LOGGER.debug("%s %s -> %d", method, path, resp.status)
                return unwrap_envelope(resp.status, payload, text)
        except TimeoutError as err:
            raise TicTicRequestTimeout(f"{method} {path} timed out") from err
        except aiohttp.ClientError as err:
            raise TicTicNetworkError(f"{method} {path} failed: {err}") from err

    @staticmethod
    async def _decode(resp: aiohttp.ClientResponse) -> tuple[Any, str | None]:
        """Return (json payload, raw text); payload is None for non-JSON bodies."""
        text = await resp.text()
        if not text:
            return None, text
        try:
            return json.loads(text), text
        except ValueError:
            return None, text
