"""Unit tests for WalletApplicationService using a mock repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.rush_wallet.application.schemas import DepositRequest, WalletBalanceResponse
from src.rush_wallet.application.service import WalletApplicationService


class TestGetBalance:
    async def test_returns_every_asset(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.balance_of.side_effect = [25_000_000, 440_000 * 10**18, 2 * 10**15]
        svc = WalletApplicationService(repo=mock_repo)

        result = await svc.get_balance(MagicMock(), "alice")

        assert isinstance(result, WalletBalanceResponse)
        assert result.stable_balance == 25_000_000
        assert result.stable_balance_display == "$25.00"
        assert result.payout_balance_display == "440,000.00 CLAWD"
        assert result.native_balance == 2 * 10**15
        assert result.native_balance_display == "0.002000 ETH"
        assets = [call.args[2] for call in mock_repo.balance_of.call_args_list]
        assert assets == ["USDC", "CLAWD", "ETH"]


class TestDeposit:
    async def test_credits_and_commits(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.balance_of.side_effect = [15_000_000, 0, 0]
        db = MagicMock()
        db.commit = AsyncMock()
        db.rollback = AsyncMock()

        result = await WalletApplicationService(repo=mock_repo).deposit(db, "alice", 5_000_000)

        assert result.stable_balance == 15_000_000
        mock_repo.credit.assert_awaited_once_with(db, "alice", "USDC", 5_000_000)
        db.commit.assert_awaited_once()

    async def test_native_deposit_funds_oracle_fees(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.balance_of.side_effect = [0, 0, 1_000]
        db = MagicMock()
        db.commit = AsyncMock()
        db.rollback = AsyncMock()

        result = await WalletApplicationService(repo=mock_repo).deposit(
            db, "alice", 1_000, "ETH"
        )

        assert result.native_balance == 1_000
        mock_repo.credit.assert_awaited_once_with(db, "alice", "ETH", 1_000)

    async def test_rolls_back_on_failure(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.credit.side_effect = RuntimeError("db down")
        db = MagicMock()
        db.commit = AsyncMock()
        db.rollback = AsyncMock()

        with pytest.raises(RuntimeError):
            await WalletApplicationService(repo=mock_repo).deposit(db, "alice", 1)
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestDepositRequest:
    def test_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            DepositRequest(amount=0)

    def test_defaults_to_stable_asset(self) -> None:
        assert DepositRequest(amount=1).asset == "USDC"

    def test_payout_asset_cannot_be_minted(self) -> None:
        with pytest.raises(ValueError):
            DepositRequest(amount=1, asset="CLAWD")
