"""Identity helpers for integration tests: bearer tokens for throwaway players."""

import uuid

from config.settings import settings
from src.rush_gateway.auth.jwt_handler import create_access_token


def bearer(player: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(player)}"}


def fresh_player() -> str:
    return f"0x{uuid.uuid4().hex}{uuid.uuid4().hex[:8]}"


def operator_headers() -> dict[str, str]:
    return bearer(settings.OPERATOR_ID)
