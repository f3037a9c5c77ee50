"""init schema

Revision ID: 20261018_01
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


revision = "20261018_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=False)
    op.create_index("ix_users_is_admin", "users", ["is_admin"], unique=False)
    op.create_index("ix_users_is_active", "users", ["is_active"], unique=False)

    op.create_table(
        "sentiment_posts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("source", sa.String(length=32), nullable=False),
        sa.Column("post_id", sa.String(length=128), nullable=False),
        sa.Column("keyword", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("post_date", sa.String(length=10), nullable=False),
        sa.Column("sentiment", sa.String(length=16), nullable=False),
        sa.Column("sentiment_score_positive", sa.Float(), nullable=True),
        sa.Column("sentiment_score_negative", sa.Float(), nullable=True),
        sa.Column("sentiment_score_mixed", sa.Float(), nullable=True),
        sa.Column("sentiment_score_neutral", sa.Float(), nullable=True),
        sa.Column("ingested_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("source", "post_id", name="uq_sentiment_posts_source_post"),
    )
    op.create_index("ix_sentiment_posts_source", "sentiment_posts", ["source"], unique=False)
    op.create_index("ix_sentiment_posts_keyword", "sentiment_posts", ["keyword"], unique=False)
    op.create_index("ix_sentiment_posts_post_date", "sentiment_posts", ["post_date"], unique=False)
    op.create_index("ix_sentiment_posts_sentiment", "sentiment_posts", ["sentiment"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_sentiment_posts_sentiment", table_name="sentiment_posts")
    op.drop_index("ix_sentiment_posts_post_date", table_name="sentiment_posts")
    op.drop_index("ix_sentiment_posts_keyword", table_name="sentiment_posts")
    op.drop_index("ix_sentiment_posts_source", table_name="sentiment_posts")
    op.drop_table("sentiment_posts")

    op.drop_index("ix_users_is_active", table_name="users")
    op.drop_index("ix_users_is_admin", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
