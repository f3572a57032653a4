"""Unit-test fixtures: in-memory repositories wired into a real engine."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fakes import (
    CLAWD_PER_USDC,
    USDC,
    FakeClock,
    InMemoryBets,
    InMemoryHouse,
    InMemoryWallets,
    make_params,
)

from src.rush_common.serial import OperationGuard
from src.rush_oracle.infrastructure.hermes_oracle import HermesPriceOracle
from src.rush_settlement.engine.engine import SettlementEngine
from src.rush_swap.infrastructure.fixed_rate_venue import FixedRateSwapVenue


@pytest.fixture
def db() -> MagicMock:
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def bets() -> InMemoryBets:
    return InMemoryBets()


@pytest.fixture
def house() -> InMemoryHouse:
    return InMemoryHouse(stable=100 * USDC)


@pytest.fixture
def wallets() -> InMemoryWallets:
    w = InMemoryWallets()
    w.balances[("alice", "USDC")] = 500 * USDC
    w.balances[("bob", "USDC")] = 500 * USDC
    w.balances[("alice", "ETH")] = 1_000
    w.balances[("bob", "ETH")] = 1_000
    return w


@pytest.fixture
def oracle() -> HermesPriceOracle:
    return HermesPriceOracle(fee_per_update=1, max_future_skew=5)


@pytest.fixture
def venue() -> FixedRateSwapVenue:
    return FixedRateSwapVenue(
        rate=CLAWD_PER_USDC, input_asset="USDC", output_asset="CLAWD", input_decimals=6
    )


@pytest.fixture
def engine(bets, house, wallets, oracle, venue, clock) -> SettlementEngine:
    return SettlementEngine(
        bets=bets,
        house=house,
        wallets=wallets,
        oracle=oracle,
        swap=venue,
        params=make_params(),
        clock=clock,
        guard=OperationGuard(),
    )
