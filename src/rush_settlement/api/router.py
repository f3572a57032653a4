"""Bet placement and resolution REST API.

Placement requires a JWT (the token subject owns the bet). Resolution is open
to any authenticated caller, who pays its oracle fee; the payout always goes to
the bet owner.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_common.database import get_db_session
from src.rush_common.response import ApiResponse, success_response
from src.rush_gateway.auth.dependencies import get_current_player
from src.rush_settlement.application.schemas import PlaceBetRequest, ResolveBetRequest
from src.rush_settlement.application.service import SettlementApplicationService

router = APIRouter(prefix="/bets", tags=["settlement"])

settlement_service = SettlementApplicationService()


@router.post("")
async def place_bet(
    body: PlaceBetRequest,
    player: Annotated[str, Depends(get_current_player)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await settlement_service.place_bet(db, player, body)
    return success_response(data.model_dump(), request)


@router.post("/{bet_id}/resolve")
async def resolve_bet(
    bet_id: int,
    body: ResolveBetRequest,
    player: Annotated[str, Depends(get_current_player)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await settlement_service.resolve_bet(db, player, bet_id, body)
    return success_response(data.model_dump(), request)
