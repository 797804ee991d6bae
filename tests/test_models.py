"""Test payload models and error helpers."""

from __future__ import annotations

import pytest

from tictic.errors import (
    TicTicConnectionTimeout,
    TicTicRemoteError,
    format_error,
)
from tictic.models import Credential, PairingCode, SendResult, SessionStatus
from tictic.protocol import build_remote_error, is_session_not_found, unwrap_envelope


class TestCredential:
    def test_from_env_strips_trailing_slash(self) -> None:
        credential = Credential.from_env("k1", "https://api.example.test/")

        assert credential.base_url == "https://api.example.test"

    def test_is_immutable(self) -> None:
        credential = Credential(api_key="k1")

        with pytest.raises(AttributeError):
            credential.api_key = "k2"  # type: ignore[misc]


class TestPayloads:
    def test_send_result_keeps_id(self) -> None:
        result = SendResult.from_dict(
            {"id": "wamid.HBgM==", "to": "5511", "status": "sent"}
        )

        assert result.id == "wamid.HBgM=="
        assert result.created_at is None

    def test_send_result_legacy_timestamp(self) -> None:
        result = SendResult.from_dict(
            {"id": "m_9", "to": "5511", "timestamp": "2024-01-01T00:00:00Z"}
        )

        assert result.created_at == "2024-01-01T00:00:00Z"

    def test_status_defaults(self) -> None:
        assert SessionStatus.from_dict({}) == SessionStatus(
            ready=False, status="uninitialized"
        )

    def test_status_failed(self) -> None:
        status = SessionStatus.from_dict({"ready": False, "status": "failed"})

        assert status.failed
        assert not status.ready

    def test_pairing_code_without_instructions(self) -> None:
        pairing = PairingCode.from_dict({"status": "pending", "qr": ""})

        assert pairing.qr is None
        assert pairing.instructions == ()


class TestProtocol:
    def test_unwrap_returns_none_data(self) -> None:
        assert unwrap_envelope(200, {"success": True}) is None

    def test_remote_error_from_envelope(self) -> None:
        err = build_remote_error(
            400,
            {"success": False, "error": {"message": "bad phone", "code": "INVALID_PHONE"}},
        )

        assert err.status_code == 400
        assert err.code == "INVALID_PHONE"
        assert err.message == "bad phone"

    def test_remote_error_top_level_message(self) -> None:
        err = build_remote_error(429, {"message": "Too many requests"})

        assert err.message == "Too many requests"

    @pytest.mark.parametrize(
        ("err", "expected"),
        [
            (TicTicRemoteError(404, "Not found"), True),
            (TicTicRemoteError(400, "x", code="SESSION_NOT_FOUND"), True),
            (TicTicRemoteError(500, "Server error"), False),
            (TicTicRemoteError(401, "Unauthorized"), False),
        ],
    )
    def test_is_session_not_found(self, err: TicTicRemoteError, expected: bool) -> None:
        assert is_session_not_found(err) is expected


class TestFormatError:
    def test_includes_help(self) -> None:
        err = TicTicRemoteError(
            402, "Quota exceeded", code="QUOTA", help="Upgrade at tictic.dev"
        )

        assert format_error(err) == "Quota exceeded\nUpgrade at tictic.dev"

    def test_without_help(self) -> None:
        assert format_error(TicTicConnectionTimeout(60)) == (
            "Session not ready after 60 status checks"
        )
