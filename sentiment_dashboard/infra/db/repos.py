from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from sentiment_dashboard.infra.db.models import SentimentPostTable, UserTable, utc_now


class SentimentPostRepo:
    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert_many(self, posts: Iterable[SentimentPostTable]) -> int:
        # Keep upsert behavior portable across engines without vendor-specific SQL.
        written = 0
        for post in posts:
            existing = self.session.exec(
                select(SentimentPostTable)
                .where(SentimentPostTable.source == post.source)
                .where(SentimentPostTable.post_id == post.post_id)
            ).first()
            if existing is None:
                self.session.add(post)
            else:
                existing.keyword = post.keyword
                existing.created_at = post.created_at
                existing.post_date = post.post_date
                existing.sentiment = post.sentiment
                existing.sentiment_score_positive = post.sentiment_score_positive
                existing.sentiment_score_negative = post.sentiment_score_negative
                existing.sentiment_score_mixed = post.sentiment_score_mixed
                existing.sentiment_score_neutral = post.sentiment_score_neutral
                existing.ingested_at = utc_now()
                self.session.add(existing)
            written += 1
        self.session.flush()
        return written

    def daily_rows(self, start_date: str, end_date: str) -> List[Dict[str, Any]]:
        """Group posts into one row per (keyword, date, sentiment) within the inclusive range."""
        statement = (
            select(
                SentimentPostTable.keyword,
                SentimentPostTable.post_date,
                SentimentPostTable.sentiment,
                func.avg(SentimentPostTable.sentiment_score_positive),
                func.avg(SentimentPostTable.sentiment_score_negative),
                func.avg(SentimentPostTable.sentiment_score_mixed),
                func.avg(SentimentPostTable.sentiment_score_neutral),
                func.count(SentimentPostTable.id),
            )
            .where(SentimentPostTable.post_date >= start_date)
            .where(SentimentPostTable.post_date <= end_date)
            .group_by(
                SentimentPostTable.keyword,
                SentimentPostTable.post_date,
                SentimentPostTable.sentiment,
            )
            .order_by(
                SentimentPostTable.post_date,
                SentimentPostTable.keyword,
                SentimentPostTable.sentiment,
            )
        )
        rows = self.session.exec(statement).all()
        return [
            {
                "keyword": keyword,
                "date": str(post_date),
                "sentiment": sentiment,
                "avg_pos": _as_float(avg_positive),
                "avg_neg": _as_float(avg_negative),
                "avg_mix": _as_float(avg_mixed),
                "avg_neutral": _as_float(avg_neutral),
                "count": int(count or 0),
            }
            for (
                keyword,
                post_date,
                sentiment,
                avg_positive,
                avg_negative,
                avg_mixed,
                avg_neutral,
                count,
            ) in rows
        ]

    def keywords_since(self, since_date: str) -> List[str]:
        statement = (
            select(SentimentPostTable.keyword)
            .where(SentimentPostTable.post_date >= since_date)
            .distinct()
            .order_by(SentimentPostTable.keyword)
        )
        return [str(keyword) for keyword in self.session.exec(statement).all()]

    def count(self) -> int:
        return int(self.session.exec(select(func.count(SentimentPostTable.id))).one())


class UserRepo:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> Optional[UserTable]:
        return self.session.get(UserTable, user_id)

    def has_any(self) -> bool:
        return self.session.exec(select(UserTable.id).limit(1)).first() is not None

    def create(self, username: str, password_hash: str, is_admin: bool = False) -> UserTable:
        now = utc_now()
        user = UserTable(
            username=username,
            password_hash=password_hash,
            is_admin=is_admin,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        self.session.flush()
        self.session.refresh(user)
        return user

    def get_by_username(self, username: str) -> Optional[UserTable]:
        return self.session.exec(
            select(UserTable).where(UserTable.username == username)
        ).first()

    def update_last_login(self, user: UserTable) -> UserTable:
        user.last_login_at = utc_now()
        self.session.add(user)
        self.session.flush()
        self.session.refresh(user)
        return user

    def set_password(self, user: UserTable, password_hash: str) -> UserTable:
        user.password_hash = password_hash
        user.updated_at = utc_now()
        self.session.add(user)
        self.session.flush()
        self.session.refresh(user)
        return user


def _as_float(value: object) -> Optional[float]:
    if value is None:
        return None
    return float(value)
