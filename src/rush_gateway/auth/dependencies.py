"""FastAPI dependencies: get_current_player / require_operator.

Usage in any protected router:
    from src.rush_gateway.auth.dependencies import get_current_player

    @router.get("/protected")
    async def protected(player: Annotated[str, Depends(get_current_player)]):
        ...
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from config.settings import settings
from src.rush_common.errors import InvalidCredentialsError, NotAuthorizedError
from src.rush_gateway.auth.jwt_handler import decode_token

# Tokens come from the external wallet sign-in flow
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_player(token: str = Depends(oauth2_scheme)) -> str:
    """Return the player identity from the Bearer token. HTTP 401 when invalid."""
    try:
        payload = decode_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None
    return payload["sub"]


async def require_operator(player: str = Depends(get_current_player)) -> str:
    """Only the configured house operator passes; others get NotAuthorizedError (403)."""
    if player != settings.OPERATOR_ID:
        raise NotAuthorizedError(player)
    return player
