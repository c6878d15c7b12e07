"""Initial schema: users, items and item favorites

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATEGORIES = ("Clothing", "Shoes", "Accessories", "Electronics", "Home", "Kids", "Beauty", "Sports", "Other")
CONDITIONS = ("New with tags", "New without tags", "Very good", "Good", "Satisfactory")
STATUSES = ("active", "sold", "reserved", "hidden")


def _in(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join("'" + v + "'" for v in values)
    return f"{column} IN ({quoted})"


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("avatar", sa.String(500), nullable=False, server_default=""),
        sa.Column("bio", sa.String(500), nullable=False, server_default=""),
        sa.Column("location", sa.String(255), nullable=False, server_default=""),
        sa.Column("rating", sa.Float(), nullable=False, server_default="0"),
        sa.Column("review_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_users_rating_range"),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("condition", sa.String(32), nullable=False),
        sa.Column("size", sa.String(50), nullable=False, server_default=""),
        sa.Column("brand", sa.String(100), nullable=False, server_default=""),
        sa.Column("color", sa.String(50), nullable=False, server_default=""),
        sa.Column("location", sa.String(255), nullable=False, server_default=""),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("seller_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="active"),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint("price >= 0", name="ck_items_price_non_negative"),
        sa.CheckConstraint(_in("category", CATEGORIES), name="ck_items_item_category"),
        sa.CheckConstraint(_in("condition", CONDITIONS), name="ck_items_item_condition"),
        sa.CheckConstraint(_in("status", STATUSES), name="ck_items_item_status"),
        sa.ForeignKeyConstraint(
            ["seller_id"], ["users.id"], name="fk_items_seller_id_users", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_items"),
    )
    op.create_index("ix_items_seller_id", "items", ["seller_id"], unique=False)
    op.create_index("ix_items_price", "items", ["price"], unique=False)
    op.create_index("ix_items_created_at", "items", ["created_at"], unique=False)
    op.create_index("ix_items_category_status", "items", ["category", "status"], unique=False)

    op.create_table(
        "item_favorites",
        sa.Column("item_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["item_id"], ["items.id"], name="fk_item_favorites_item_id_items", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_item_favorites_user_id_users", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("item_id", "user_id", name="pk_item_favorites"),
    )


def downgrade() -> None:
    op.drop_table("item_favorites")
    op.drop_index("ix_items_category_status", "items")
    op.drop_index("ix_items_created_at", "items")
    op.drop_index("ix_items_price", "items")
    op.drop_index("ix_items_seller_id", "items")
    op.drop_table("items")
    op.drop_index("ix_users_username", "users")
    op.drop_index("ix_users_email", "users")
    op.drop_table("users")
