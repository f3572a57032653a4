"""BetRepository: concrete implementation of BetRepositoryProtocol.

bets is append-only apart from the single resolution UPDATE, which is
conditional on resolved = FALSE so a second resolution affects 0 rows.
The owner index is idx_bets_owner (owner, id); ordering by id gives
insertion order.

Transaction ownership: the CALLER commits or rolls back.
"""

from sqlalchemy import bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_common.errors import BetAlreadyResolvedError, BetNotFoundError, InternalError
from src.rush_ledger.domain.models import Bet

_COLUMNS = """id, owner, asset, direction, stake_amount, strike_price, strike_expo,
              placed_at, resolve_at, resolved, won, payout_amount"""

_INSERT_BET_SQL = text(f"""
    INSERT INTO bets
        (owner, asset, direction, stake_amount, strike_price, strike_expo,
         placed_at, resolve_at)
    VALUES
        (:owner, :asset, :direction, :stake_amount, :strike_price, :strike_expo,
         :placed_at, :resolve_at)
    RETURNING {_COLUMNS}
""")

_GET_BET_SQL = text(f"SELECT {_COLUMNS} FROM bets WHERE id = :bet_id")

_GET_BET_FOR_UPDATE_SQL = text(f"SELECT {_COLUMNS} FROM bets WHERE id = :bet_id FOR UPDATE")

_MARK_RESOLVED_SQL = text(f"""
    UPDATE bets
    SET resolved = TRUE,
        won = :won,
        payout_amount = :payout_amount,
        resolved_at = NOW()
    WHERE id = :bet_id AND resolved = FALSE
    RETURNING {_COLUMNS}
""")

_BETS_OF_SQL = text("SELECT id FROM bets WHERE owner = :owner ORDER BY id ASC")

_GET_MANY_SQL = text(f"SELECT {_COLUMNS} FROM bets WHERE id IN :bet_ids").bindparams(
    bindparam("bet_ids", expanding=True)
)

_OPEN_STAKES_SQL = text("""
    SELECT stake_amount FROM bets
    WHERE resolved = FALSE AND resolve_at >= :earliest_resolve_at
""")


def _row_to_bet(row: object) -> Bet:
    return Bet(
        id=row.id,  # type: ignore[attr-defined]
        owner=row.owner,  # type: ignore[attr-defined]
        asset=row.asset,  # type: ignore[attr-defined]
        direction=row.direction,  # type: ignore[attr-defined]
        stake_amount=row.stake_amount,  # type: ignore[attr-defined]
        strike_price=row.strike_price,  # type: ignore[attr-defined]
        strike_expo=row.strike_expo,  # type: ignore[attr-defined]
        placed_at=row.placed_at,  # type: ignore[attr-defined]
        resolve_at=row.resolve_at,  # type: ignore[attr-defined]
        resolved=row.resolved,  # type: ignore[attr-defined]
        won=row.won,  # type: ignore[attr-defined]
        payout_amount=int(row.payout_amount),  # type: ignore[attr-defined]
    )


class BetRepository:
    async def create(
        self,
        db: AsyncSession,
        owner: str,
        asset: str,
        direction: str,
        stake_amount: int,
        strike_price: int,
        strike_expo: int,
        placed_at: int,
        resolve_at: int,
    ) -> Bet:
        result = await db.execute(
            _INSERT_BET_SQL,
            {
                "owner": owner,
                "asset": asset,
                "direction": direction,
                "stake_amount": stake_amount,
                "strike_price": strike_price,
                "strike_expo": strike_expo,
                "placed_at": placed_at,
                "resolve_at": resolve_at,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Bet insert returned no rows")
        return _row_to_bet(row)

    async def get(self, db: AsyncSession, bet_id: int) -> Bet:
        row = (await db.execute(_GET_BET_SQL, {"bet_id": bet_id})).fetchone()
        if row is None:
            raise BetNotFoundError(bet_id)
        return _row_to_bet(row)

    async def get_for_update(self, db: AsyncSession, bet_id: int) -> Bet:
        row = (await db.execute(_GET_BET_FOR_UPDATE_SQL, {"bet_id": bet_id})).fetchone()
        if row is None:
            raise BetNotFoundError(bet_id)
        return _row_to_bet(row)

    async def mark_resolved(
        self, db: AsyncSession, bet_id: int, won: bool, payout_amount: int
    ) -> Bet:
        result = await db.execute(
            _MARK_RESOLVED_SQL,
            {"bet_id": bet_id, "won": won, "payout_amount": payout_amount},
        )
        row = result.fetchone()
        if row is None:
            # Distinguish "never allocated" from "second resolution"
            await self.get(db, bet_id)
            raise BetAlreadyResolvedError(bet_id)
        return _row_to_bet(row)

    async def bets_of(self, db: AsyncSession, owner: str) -> list[int]:
        result = await db.execute(_BETS_OF_SQL, {"owner": owner})
        return [int(bet_id) for bet_id in result.scalars().all()]

    async def get_many(self, db: AsyncSession, bet_ids: list[int]) -> list[Bet]:
        if not bet_ids:
            return []
        result = await db.execute(_GET_MANY_SQL, {"bet_ids": list(set(bet_ids))})
        found = {bet.id: bet for bet in (_row_to_bet(row) for row in result.fetchall())}
        return [found.get(bet_id, Bet.empty()) for bet_id in bet_ids]

    async def open_stakes(self, db: AsyncSession, earliest_resolve_at: int) -> list[int]:
        result = await db.execute(
            _OPEN_STAKES_SQL, {"earliest_resolve_at": earliest_resolve_at}
        )
        return [int(stake) for stake in result.scalars().all()]
