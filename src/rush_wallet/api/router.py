"""rush_wallet REST API: balance and simulated deposit, JWT required."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_common.database import get_db_session
from src.rush_common.response import ApiResponse, success_response
from src.rush_gateway.auth.dependencies import get_current_player
from src.rush_wallet.application.schemas import DepositRequest
from src.rush_wallet.application.service import WalletApplicationService

router = APIRouter(prefix="/wallet", tags=["wallet"])

_service = WalletApplicationService()


@router.get("/balance")
async def get_balance(
    player: Annotated[str, Depends(get_current_player)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, player)
    return success_response(data.model_dump(), request)


@router.post("/deposit")
async def deposit(
    body: DepositRequest,
    player: Annotated[str, Depends(get_current_player)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.deposit(db, player, body.amount, body.asset)
    return success_response(data.model_dump(), request)
