"""Unit tests for JWT handling, auth dependencies and the response wrapper."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException
from jose import jwt

from config.settings import settings
from src.rush_common.errors import InvalidCredentialsError, NotAuthorizedError
from src.rush_common.response import error_response, success_response
from src.rush_gateway.auth.dependencies import get_current_player, require_operator
from src.rush_gateway.auth.jwt_handler import create_access_token, decode_token


class TestJwt:
    def test_access_token_claims(self) -> None:
        payload = jwt.get_unverified_claims(create_access_token("0xabc"))
        assert payload["sub"] == "0xabc"
        assert payload["type"] == "access"

    def test_round_trip(self) -> None:
        assert decode_token(create_access_token("player-1"))["sub"] == "player-1"

    def test_expired_token(self) -> None:
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = jwt.encode(
            {"sub": "p", "type": "access", "exp": past}, settings.JWT_SECRET, algorithm="HS256"
        )
        with pytest.raises(InvalidCredentialsError):
            decode_token(token)

    def test_wrong_secret(self) -> None:
        token = jwt.encode({"sub": "p", "type": "access"}, "other-secret", algorithm="HS256")
        with pytest.raises(InvalidCredentialsError):
            decode_token(token)

    def test_non_access_token(self) -> None:
        token = jwt.encode({"sub": "p", "type": "refresh"}, settings.JWT_SECRET, algorithm="HS256")
        with pytest.raises(InvalidCredentialsError):
            decode_token(token)


class TestDependencies:
    async def test_current_player(self) -> None:
        assert await get_current_player(create_access_token("alice")) == "alice"

    async def test_invalid_token_is_401(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_current_player("garbage")
        assert exc_info.value.status_code == 401

    async def test_operator_passes(self) -> None:
        assert await require_operator(settings.OPERATOR_ID) == settings.OPERATOR_ID

    async def test_player_is_not_operator(self) -> None:
        with pytest.raises(NotAuthorizedError):
            await require_operator("alice")


class TestResponse:
    def test_success(self) -> None:
        resp = success_response({"x": 1})
        assert resp.code == 0
        assert resp.data == {"x": 1}
        assert resp.request_id.startswith("req_")

    def test_reuses_request_id(self) -> None:
        request = MagicMock()
        request.state.request_id = "req_fixed"
        assert success_response(None, request).request_id == "req_fixed"

    def test_error(self) -> None:
        resp = error_response(3004, "Bet not found: 9")
        assert resp.code == 3004
        assert resp.data is None
