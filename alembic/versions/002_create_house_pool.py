"""002: create house_pool single-row table

Revision ID: 002
Revises: 001
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE house_pool (
            id              SMALLINT        PRIMARY KEY DEFAULT 1,
            stable_balance  BIGINT          NOT NULL DEFAULT 0,
            payout_balance  NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            version         BIGINT          NOT NULL DEFAULT 0,
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_house_pool_single_row   CHECK (id = 1),
            CONSTRAINT ck_house_pool_stable_gte_0 CHECK (stable_balance >= 0),
            CONSTRAINT ck_house_pool_payout_gte_0 CHECK (payout_balance >= 0)
        );
    """)
    op.execute("INSERT INTO house_pool (id) VALUES (1);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS house_pool CASCADE;")
