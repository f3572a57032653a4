"""Bet query REST API: public reads, no authentication except /bets/mine."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_common.database import get_db_session
from src.rush_common.response import ApiResponse, success_response
from src.rush_gateway.auth.dependencies import get_current_player
from src.rush_ledger.application.schemas import BetQueryRequest
from src.rush_ledger.application.service import LedgerApplicationService

router = APIRouter(tags=["bets"])

_service = LedgerApplicationService()


@router.get("/bets/mine")
async def my_bets(
    player: Annotated[str, Depends(get_current_player)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.bets_of(db, player)
    return success_response(data.model_dump(), request)


@router.post("/bets/query")
async def query_bets(
    body: BetQueryRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_bets(db, body.ids)
    return success_response(data.model_dump(), request)


@router.get("/bets/{bet_id}")
async def get_bet(
    bet_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_bet(db, bet_id)
    return success_response(data.model_dump(), request)


@router.get("/players/{owner}/bets")
async def player_bets(
    owner: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.bets_of(db, owner)
    return success_response(data.model_dump(), request)
