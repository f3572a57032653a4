"""LedgerApplicationService: read-only query surface over the bet ledger."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_ledger.application.schemas import BetIdsResponse, BetItem, BetListResponse
from src.rush_ledger.domain.repository import BetRepositoryProtocol
from src.rush_ledger.infrastructure.persistence import BetRepository


class LedgerApplicationService:
    def __init__(self, repo: BetRepositoryProtocol | None = None) -> None:
        self._repo: BetRepositoryProtocol = repo or BetRepository()

    async def bets_of(self, db: AsyncSession, owner: str) -> BetIdsResponse:
        ids = await self._repo.bets_of(db, owner)
        return BetIdsResponse(owner=owner, bet_ids=ids)

    async def get_bets(self, db: AsyncSession, bet_ids: list[int]) -> BetListResponse:
        bets = await self._repo.get_many(db, bet_ids)
        return BetListResponse(items=[BetItem.from_bet(bet) for bet in bets])

    async def get_bet(self, db: AsyncSession, bet_id: int) -> BetItem:
        return BetItem.from_bet(await self._repo.get(db, bet_id))
