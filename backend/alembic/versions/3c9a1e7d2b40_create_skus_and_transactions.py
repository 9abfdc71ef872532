"""create skus and transactions

Revision ID: 3c9a1e7d2b40
Revises:
Create Date: 2026-10-19 09:12:44.205118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c9a1e7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "skus",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("reorder_level", sa.Integer(), nullable=False, server_default="10"),
        sa.Column("current_quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("unit_price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        # CHECK constraints (current_quantity may go negative)
        sa.CheckConstraint("reorder_level >= 0", name="ck_reorder_level_non_negative"),
        sa.CheckConstraint("unit_price >= 0", name="ck_unit_price_non_negative"),
    )
    op.create_index(op.f("ix_skus_id"), "skus", ["id"], unique=False)
    op.create_index("ix_skus_category", "skus", ["category"], unique=False)

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sku_id", sa.Integer(), sa.ForeignKey("skus.id"), nullable=False),
        sa.Column("transaction_type", sa.String(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "transaction_type IN ('PURCHASE', 'SALE', 'DAMAGE', 'RETURN')",
            name="ck_transaction_type",
        ),
        sa.CheckConstraint("quantity > 0", name="ck_transaction_quantity_positive"),
    )
    op.create_index(op.f("ix_transactions_id"), "transactions", ["id"], unique=False)
    op.create_index(op.f("ix_transactions_sku_id"), "transactions", ["sku_id"], unique=False)
    op.create_index("ix_transactions_created_at", "transactions", ["created_at"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_transactions_created_at", table_name="transactions")
    op.drop_index(op.f("ix_transactions_sku_id"), table_name="transactions")
    op.drop_index(op.f("ix_transactions_id"), table_name="transactions")
    op.drop_table("transactions")

    op.drop_index("ix_skus_category", table_name="skus")
    op.drop_index(op.f("ix_skus_id"), table_name="skus")
    op.drop_table("skus")
