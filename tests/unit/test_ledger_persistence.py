"""Unit tests for BetRepository using MagicMock AsyncSession."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.rush_common.errors import BetAlreadyResolvedError, BetNotFoundError
from src.rush_ledger.infrastructure.persistence import BetRepository


def _make_bet_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", 1)
    row.owner = kwargs.get("owner", "alice")
    row.asset = kwargs.get("asset", "ETH")
    row.direction = kwargs.get("direction", "UP")
    row.stake_amount = kwargs.get("stake_amount", 10_000_000)
    row.strike_price = kwargs.get("strike_price", 300_000_000_000)
    row.strike_expo = kwargs.get("strike_expo", -8)
    row.placed_at = kwargs.get("placed_at", 1_700_000_000)
    row.resolve_at = kwargs.get("resolve_at", 1_700_000_060)
    row.resolved = kwargs.get("resolved", False)
    row.won = kwargs.get("won", False)
    row.payout_amount = kwargs.get("payout_amount", Decimal(0))
    return row


def _result(fetchone=None, fetchall=None, scalars=None):
    result = MagicMock()
    result.fetchone.return_value = fetchone
    result.fetchall.return_value = fetchall or []
    result.scalars.return_value.all.return_value = scalars or []
    return result


@pytest.fixture
def db():
    return MagicMock()


class TestCreate:
    async def test_returns_inserted_bet(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=_make_bet_row(id=7)))
        bet = await BetRepository().create(
            db, owner="alice", asset="ETH", direction="UP", stake_amount=10_000_000,
            strike_price=300_000_000_000, strike_expo=-8,
            placed_at=1_700_000_000, resolve_at=1_700_000_060,
        )
        assert bet.id == 7
        assert bet.resolved is False
        params = db.execute.call_args[0][1]
        assert params["resolve_at"] == 1_700_000_060
        assert params["stake_amount"] == 10_000_000


class TestGet:
    async def test_found(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=_make_bet_row(id=3)))
        bet = await BetRepository().get(db, 3)
        assert bet.id == 3
        assert bet.strike_expo == -8

    async def test_missing_raises(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        with pytest.raises(BetNotFoundError):
            await BetRepository().get(db, 99)

    async def test_for_update_uses_row_lock(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=_make_bet_row()))
        await BetRepository().get_for_update(db, 1)
        assert "FOR UPDATE" in str(db.execute.call_args[0][0])


class TestMarkResolved:
    async def test_updates_once(self, db) -> None:
        row = _make_bet_row(resolved=True, won=True, payout_amount=Decimal(440_000 * 10**18))
        db.execute = AsyncMock(return_value=_result(fetchone=row))
        bet = await BetRepository().mark_resolved(db, 1, True, 440_000 * 10**18)
        assert bet.resolved is True
        assert bet.payout_amount == 440_000 * 10**18
        assert isinstance(bet.payout_amount, int)
        sql = str(db.execute.call_args[0][0])
        assert "resolved = FALSE" in sql

    async def test_second_resolution_raises(self, db) -> None:
        db.execute = AsyncMock(side_effect=[
            _result(fetchone=None),
            _result(fetchone=_make_bet_row(resolved=True)),
        ])
        with pytest.raises(BetAlreadyResolvedError):
            await BetRepository().mark_resolved(db, 1, False, 0)

    async def test_unknown_id_raises_not_found(self, db) -> None:
        db.execute = AsyncMock(side_effect=[_result(fetchone=None), _result(fetchone=None)])
        with pytest.raises(BetNotFoundError):
            await BetRepository().mark_resolved(db, 5, False, 0)


class TestQueries:
    async def test_bets_of_returns_ids(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(scalars=[1, 4, 9]))
        assert await BetRepository().bets_of(db, "alice") == [1, 4, 9]

    async def test_bets_of_unknown_owner_empty(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(scalars=[]))
        assert await BetRepository().bets_of(db, "nobody") == []

    async def test_get_many_keeps_order_and_fills_unknown(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(
            fetchall=[_make_bet_row(id=2), _make_bet_row(id=1)]
        ))
        bets = await BetRepository().get_many(db, [1, 0, 2, 1])
        assert [b.id for b in bets] == [1, 0, 2, 1]
        assert bets[1].owner == ""
        assert bets[1].stake_amount == 0

    async def test_get_many_empty_skips_query(self, db) -> None:
        db.execute = AsyncMock()
        assert await BetRepository().get_many(db, []) == []
        db.execute.assert_not_awaited()

    async def test_open_stakes(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(scalars=[3_000_000, 10_000_000]))
        assert await BetRepository().open_stakes(db, 1_700_000_000) == [3_000_000, 10_000_000]
        assert db.execute.call_args[0][1] == {"earliest_resolve_at": 1_700_000_000}
