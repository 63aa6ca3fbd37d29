"""create wallet_stats report cache

Revision ID: 3f9c2a7d1b40
Revises: 
Create Date: 2026-10-12 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c2a7d1b40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "wallet_stats",
        sa.Column("wallet_address", sa.String(length=128), primary_key=True),
        sa.Column("chain_stats_all_time", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("failed_chains", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("total_fee", sa.Float(), nullable=False, server_default="0"),
        sa.Column("top_category", sa.String(length=50), nullable=False, server_default="Transfer"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_wallet_stats_updated_at", "wallet_stats", ["updated_at"])


def downgrade() -> None:
    op.drop_index("ix_wallet_stats_updated_at", table_name="wallet_stats")
    op.drop_table("wallet_stats")
