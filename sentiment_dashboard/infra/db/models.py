from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UserTable(SQLModel, table=True):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("username", name="uq_users_username"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, max_length=64)
    password_hash: str = Field(default="")
    is_admin: bool = Field(default=True, index=True)
    is_active: bool = Field(default=True, index=True)
    last_login_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class SentimentPostTable(SQLModel, table=True):
    """One crawled post with its sentiment scores."""

    __tablename__ = "sentiment_posts"
    __table_args__ = (
        UniqueConstraint("source", "post_id", name="uq_sentiment_posts_source_post"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    source: str = Field(index=True, max_length=32)
    post_id: str = Field(max_length=128)
    keyword: str = Field(index=True)
    created_at: datetime
    post_date: str = Field(index=True, max_length=10)
    sentiment: str = Field(index=True, max_length=16)
    sentiment_score_positive: Optional[float] = None
    sentiment_score_negative: Optional[float] = None
    sentiment_score_mixed: Optional[float] = None
    sentiment_score_neutral: Optional[float] = None
    ingested_at: datetime = Field(default_factory=utc_now)
