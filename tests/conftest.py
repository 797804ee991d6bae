"""Pytest configuration and fixtures for tictic tests."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from tictic.http import TicTicHttpClient
from tictic.models import Credential

BASE_URL = "https://api.test.tictic.dev"


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock aiohttp ClientSession."""
    import aiohttp

    return MagicMock(spec=aiohttp.ClientSession)


@pytest.fixture
def credential() -> Credential:
    return Credential(api_key="k1", base_url=BASE_URL)


@pytest.fixture
def http(mock_session: MagicMock, credential: Credential) -> TicTicHttpClient:
    return TicTicHttpClient(mock_session, credential)


def create_mock_response(
    status: int = 200,
    json_data: Any = None,
    text_data: str | None = None,
) -> AsyncMock:
    """Create a configured mock response.

    Args:
        status: HTTP status code
        json_data: Body to serialize as the response text
        text_data: Raw response text, used when json_data is None

    Returns:
        Configured AsyncMock response
    """
    response = AsyncMock()
    response.status = status

    if json_data is not None:
        response.text.return_value = json.dumps(json_data)
    else:
        response.text.return_value = text_data or ""

    response.__aenter__.return_value = response
    response.__aexit__.return_value = None

    return response


def envelope(data: Any) -> dict[str, Any]:
    """Wrap data in a success envelope."""
    return {"success": True, "data": data}


def ok_response(data: Any) -> AsyncMock:
    return create_mock_response(status=200, json_data=envelope(data))
