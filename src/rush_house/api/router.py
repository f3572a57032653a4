"""House pool REST API: public balance, open funding, operator withdrawal."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_common.database import get_db_session
from src.rush_common.response import ApiResponse, success_response
from src.rush_gateway.auth.dependencies import get_current_player, require_operator
from src.rush_house.application.schemas import FundRequest, WithdrawRequest
from src.rush_house.application.service import HouseApplicationService

router = APIRouter(prefix="/house", tags=["house"])

_service = HouseApplicationService()


@router.get("/balance")
async def get_balance(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.balance(db)
    return success_response(data.model_dump(), request)


@router.post("/fund")
async def fund(
    body: FundRequest,
    player: Annotated[str, Depends(get_current_player)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.fund(db, player, body.amount)
    return success_response(data.model_dump(), request)


@router.post("/withdraw")
async def withdraw(
    body: WithdrawRequest,
    operator: Annotated[str, Depends(require_operator)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.withdraw(db, operator, body.amount)
    return success_response(data.model_dump(), request)
