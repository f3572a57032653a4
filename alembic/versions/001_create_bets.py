"""001: create bets table

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE bets (
            id              BIGSERIAL       PRIMARY KEY,
            owner           VARCHAR(64)     NOT NULL,
            asset           VARCHAR(16)     NOT NULL,
            direction       VARCHAR(8)      NOT NULL,
            stake_amount    BIGINT          NOT NULL,
            strike_price    BIGINT          NOT NULL,
            strike_expo     INTEGER         NOT NULL,
            placed_at       BIGINT          NOT NULL,
            resolve_at      BIGINT          NOT NULL,
            resolved        BOOLEAN         NOT NULL DEFAULT FALSE,
            won             BOOLEAN         NOT NULL DEFAULT FALSE,
            payout_amount   NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            resolved_at     TIMESTAMPTZ,
            CONSTRAINT ck_bets_asset      CHECK (asset IN ('ETH', 'BTC')),
            CONSTRAINT ck_bets_direction  CHECK (direction IN ('UP', 'DOWN')),
            CONSTRAINT ck_bets_stake_gt_0 CHECK (stake_amount > 0),
            CONSTRAINT ck_bets_resolve_after_placed CHECK (resolve_at >= placed_at),
            CONSTRAINT ck_bets_payout_implies_won CHECK (payout_amount = 0 OR won),
            CONSTRAINT ck_bets_won_implies_resolved CHECK (NOT won OR resolved)
        );
    """)
    # Per-owner index: ORDER BY id gives insertion order
    op.execute("CREATE INDEX idx_bets_owner ON bets (owner, id);")
    op.execute("CREATE INDEX idx_bets_open ON bets (resolve_at) WHERE resolved = FALSE;")
    op.execute(
        "COMMENT ON TABLE bets IS 'Bet ledger: append-only except the single resolution update';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bets CASCADE;")
