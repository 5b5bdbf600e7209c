"""create items table

Revision ID: 002
Revises: 001
Create Date: 2026-10-18 10:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("author", sa.String(255), nullable=False),
        sa.Column("publication_date", sa.Date(), nullable=True),
        sa.Column("state", sa.String(20), nullable=False, server_default="AVAILABLE"),
        sa.Column("holder", sa.String(320), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        # holder and due_date are set exactly when the item is checked out
        sa.CheckConstraint(
            "(state = 'AVAILABLE' AND holder IS NULL AND due_date IS NULL) OR "
            "(state = 'CHECKED_OUT' AND holder IS NOT NULL AND due_date IS NOT NULL)",
            name="ck_items_state_holder_due_date",
        ),
    )
    op.create_index("ix_items_id", "items", ["id"], unique=False)
    op.create_index("ix_items_code", "items", ["code"], unique=True)
    op.create_index("ix_items_title", "items", ["title"], unique=False)
    op.create_index("ix_items_author", "items", ["author"], unique=False)
    op.create_index("ix_items_holder", "items", ["holder"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_items_holder", table_name="items")
    op.drop_index("ix_items_author", table_name="items")
    op.drop_index("ix_items_title", table_name="items")
    op.drop_index("ix_items_code", table_name="items")
    op.drop_index("ix_items_id", table_name="items")
    op.drop_table("items")
