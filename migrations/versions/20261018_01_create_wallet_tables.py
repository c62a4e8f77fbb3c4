"""create wallets and wallet_transactions

Revision ID: 3f9c2a71d0b4
Revises: 
Create Date: 2026-10-18 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

from ledger_service.infrastructure.database import ExactDecimal


# revision identifiers, used by Alembic.
revision = "3f9c2a71d0b4"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "wallets",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("balance", ExactDecimal(), nullable=False),
    )

    op.create_table(
        "wallet_transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("author_id", sa.String(length=64), sa.ForeignKey("wallets.id"), nullable=False),
        sa.Column("sender_id", sa.String(length=64), sa.ForeignKey("wallets.id"), nullable=False),
        sa.Column("balance", ExactDecimal(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("wallet_transactions")
    op.drop_table("wallets")
