"""Create users and products tables

Revision ID: 001
Revises: None
Create Date: 2025-01-10 00:00:00.000000+00:00

Ids are 24-hex strings generated by the application (xyfora/models/ids.py),
so neither table has a server-side id default.

Rollback: downgrade() drops both tables (destructive: all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(24), nullable=False, comment="24-hex opaque identifier"),
        sa.Column("fullname", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, comment="Unique login email"),
        sa.Column("password", sa.String(255), nullable=False, comment="Argon2 password hash"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.String(24), nullable=False, comment="24-hex opaque identifier"),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("price", sa.Float(), nullable=False, comment="Non-negative price"),
        sa.Column(
            "author_id",
            sa.String(24),
            nullable=False,
            comment="Owning user; immutable after creation",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    # Serves "my products, newest first"
    op.create_index(
        "idx_products_author_created_at",
        "products",
        ["author_id", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_products_author_created_at", table_name="products")
    op.drop_table("products")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
