from __future__ import annotations

from typing import List, Protocol

from sentiment_dashboard.core.types import DailySentimentData


class DailySentimentSource(Protocol):
    """Anything able to produce daily sentiment rows for a date range."""

    def fetch_daily(self, start_date: str, end_date: str) -> List[DailySentimentData]:
        ...

    def fetch_keywords(self, since_date: str) -> List[str]:
        ...
