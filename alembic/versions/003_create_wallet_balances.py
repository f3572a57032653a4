"""003: create wallet_balances table

Revision ID: 003
Revises: 002
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wallet_balances (
            holder      VARCHAR(64)     NOT NULL,
            asset       VARCHAR(16)     NOT NULL,
            amount      NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            updated_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            PRIMARY KEY (holder, asset),
            CONSTRAINT ck_wallet_amount_gte_0 CHECK (amount >= 0)
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wallet_balances CASCADE;")
