from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from diskcache import Cache
from pydantic import ValidationError as PydanticValidationError

from sentiment_dashboard.config import AppConfig
from sentiment_dashboard.core.contracts import DailySentimentSource
from sentiment_dashboard.core.dates import format_date_iso, today_utc, validate_date_range
from sentiment_dashboard.core.errors import DataSourceError
from sentiment_dashboard.core.types import DailySentimentData
from sentiment_dashboard.infra.db.repos import SentimentPostRepo
from sentiment_dashboard.infra.db.session import init_db, session_scope
from sentiment_dashboard.modules.daily_data.cache import open_result_cache

logger = logging.getLogger(__name__)

DAILY_DATA_CACHE_PREFIX = "sentiment-daily-data-v1"
KEYWORDS_CACHE_PREFIX = "sentiment-keywords-v1"


def daily_data_cache_key(start_date: str, end_date: str) -> str:
    return f"{DAILY_DATA_CACHE_PREFIX}:from{start_date}-to{end_date}"


class SqlDailySentimentSource:
    """Reads grouped daily rows from the ``sentiment_posts`` table."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        init_db(database_url)

    def fetch_daily(self, start_date: str, end_date: str) -> List[DailySentimentData]:
        with session_scope(self.database_url) as session:
            raw_rows = SentimentPostRepo(session).daily_rows(start_date, end_date)
        logger.debug(
            "daily rows query from %s to %s returned %d rows",
            start_date,
            end_date,
            len(raw_rows),
        )
        return [_validate_row(row) for row in raw_rows]

    def fetch_keywords(self, since_date: str) -> List[str]:
        with session_scope(self.database_url) as session:
            return SentimentPostRepo(session).keywords_since(since_date)


def _validate_row(row: Dict[str, Any]) -> DailySentimentData:
    try:
        return DailySentimentData.model_validate(row)
    except PydanticValidationError as exc:
        logger.warning("rejecting malformed daily row %s: %s", row, exc)
        raise DataSourceError(f"Malformed daily sentiment row: {row}") from exc


class DailySentimentService:
    def __init__(
        self,
        config: AppConfig,
        source: Optional[DailySentimentSource] = None,
        cache: Optional[Cache] = None,
    ) -> None:
        self.config = config
        self.source = source or SqlDailySentimentSource(config.database.url)
        self.cache = cache if cache is not None else open_result_cache(config)

    def _store(self, key: str, value: List[Any], ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        self.cache.set(key, value, expire=ttl_seconds)

    def get_daily_data(
        self, start_date: Optional[str], end_date: Optional[str]
    ) -> List[DailySentimentData]:
        start, end = validate_date_range(start_date, end_date)
        cache_key = daily_data_cache_key(start, end)

        if self.config.cache.enabled:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.info("Cache hit for key: %s", cache_key)
                return list(cached)
            logger.info("Cache miss for key: %s", cache_key)

        try:
            rows = self.source.fetch_daily(start, end)
        except DataSourceError:
            raise
        except Exception as exc:
            logger.warning("daily data query failed for %s: %s", cache_key, exc)
            raise DataSourceError(str(exc)) from exc

        if self.config.cache.enabled:
            ttl = (
                self.config.cache.ttl_seconds
                if rows
                else self.config.cache.empty_ttl_seconds
            )
            self._store(cache_key, list(rows), ttl)
        return rows

    def list_keywords(self, days: Optional[int] = None) -> List[str]:
        lookback = days if days is not None else self.config.dashboard.keyword_lookback_days
        if lookback < 1:
            raise ValueError("days must be a positive integer")
        since = format_date_iso(today_utc() - timedelta(days=lookback))
        cache_key = f"{KEYWORDS_CACHE_PREFIX}:since{since}"

        if self.config.cache.enabled:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return list(cached)

        try:
            keywords = sorted(set(self.source.fetch_keywords(since)))
        except Exception as exc:
            logger.warning("keyword query failed since %s: %s", since, exc)
            raise DataSourceError(str(exc)) from exc

        if self.config.cache.enabled:
            ttl = (
                self.config.cache.ttl_seconds
                if keywords
                else self.config.cache.empty_ttl_seconds
            )
            self._store(cache_key, keywords, ttl)
        return keywords
