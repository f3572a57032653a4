"""Unit tests for HousePoolRepository and WalletRepository with a mocked session."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.rush_common.errors import (
    InsufficientHouseFundsError,
    InsufficientWalletBalanceError,
    InternalError,
)
from src.rush_house.infrastructure.persistence import HousePoolRepository
from src.rush_wallet.infrastructure.persistence import WalletRepository


def _pool_row(stable: int = 100_000_000, payout: int = 0, version: int = 1):
    row = MagicMock()
    row.stable_balance = stable
    row.payout_balance = Decimal(payout)
    row.version = version
    row.updated_at = datetime.now(UTC)
    return row


def _result(fetchone=None, scalar=None):
    result = MagicMock()
    result.fetchone.return_value = fetchone
    result.scalar_one_or_none.return_value = scalar
    return result


@pytest.fixture
def db():
    return MagicMock()


class TestHousePoolRepository:
    async def test_get(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=_pool_row(5_000_000, 7)))
        pool = await HousePoolRepository().get(db)
        assert pool.stable_balance == 5_000_000
        assert pool.payout_balance == 7
        assert isinstance(pool.payout_balance, int)

    async def test_missing_row_is_internal_error(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        with pytest.raises(InternalError):
            await HousePoolRepository().get_for_update(db)

    async def test_credit(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=_pool_row(110_000_000)))
        pool = await HousePoolRepository().credit_stable(db, 10_000_000)
        assert pool.stable_balance == 110_000_000
        assert db.execute.call_args[0][1] == {"amount": 10_000_000}

    async def test_debit_short_raises_with_available(self, db) -> None:
        db.execute = AsyncMock(side_effect=[
            _result(fetchone=None),
            _result(fetchone=_pool_row(4_000_000)),
        ])
        with pytest.raises(InsufficientHouseFundsError) as exc_info:
            await HousePoolRepository().debit_stable(db, 5_000_000)
        assert "available 4000000" in exc_info.value.message

    async def test_record_swap_moves_both_balances(self, db) -> None:
        row = _pool_row(92_400_000, 440_000 * 10**18)
        db.execute = AsyncMock(return_value=_result(fetchone=row))
        pool = await HousePoolRepository().record_swap(db, 17_600_000, 440_000 * 10**18)
        assert pool.payout_balance == 440_000 * 10**18
        assert db.execute.call_args[0][1] == {
            "stable_in": 17_600_000, "payout_out": 440_000 * 10**18,
        }

    async def test_forward_more_than_held(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        with pytest.raises(InternalError):
            await HousePoolRepository().forward_payout(db, 1)


class TestWalletRepository:
    async def test_unknown_holder_has_zero(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(scalar=None))
        assert await WalletRepository().balance_of(db, "carol", "USDC") == 0

    async def test_balance_numeric_to_int(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(scalar=Decimal(10**24)))
        balance = await WalletRepository().balance_of(db, "alice", "CLAWD")
        assert balance == 10**24
        assert isinstance(balance, int)

    async def test_credit_returns_new_balance(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(scalar=Decimal(15_000_000)))
        assert await WalletRepository().credit(db, "alice", "USDC", 5_000_000) == 15_000_000

    async def test_debit_ok(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(scalar=Decimal(0)))
        assert await WalletRepository().debit(db, "alice", "USDC", 5_000_000) == 0

    async def test_debit_short_raises(self, db) -> None:
        db.execute = AsyncMock(side_effect=[_result(scalar=None), _result(scalar=Decimal(2))])
        with pytest.raises(InsufficientWalletBalanceError) as exc_info:
            await WalletRepository().debit(db, "alice", "USDC", 3)
        assert exc_info.value.code == 2002
        assert "available 2" in exc_info.value.message
