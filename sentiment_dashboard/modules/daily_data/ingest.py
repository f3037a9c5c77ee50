from __future__ import annotations

import csv
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sentiment_dashboard.core.errors import DataSourceError
from sentiment_dashboard.core.types import SentimentClass
from sentiment_dashboard.infra.db.models import SentimentPostTable
from sentiment_dashboard.infra.db.repos import SentimentPostRepo
from sentiment_dashboard.infra.db.session import init_db, session_scope

logger = logging.getLogger(__name__)


class SentimentPostRecord(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    source: str = "reddit"
    post_id: str = Field(min_length=1)
    keyword: str = Field(min_length=1)
    created_at: datetime
    sentiment: SentimentClass
    sentiment_score_positive: Optional[float] = None
    sentiment_score_negative: Optional[float] = None
    sentiment_score_mixed: Optional[float] = None
    sentiment_score_neutral: Optional[float] = None

    @field_validator(
        "sentiment_score_positive",
        "sentiment_score_negative",
        "sentiment_score_mixed",
        "sentiment_score_neutral",
        mode="before",
    )
    @classmethod
    def _blank_score_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("sentiment", mode="before")
    @classmethod
    def _upper_sentiment(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def created_at_utc(self) -> datetime:
        # Naive timestamps are taken to be UTC already.
        if self.created_at.tzinfo is None:
            return self.created_at.replace(tzinfo=timezone.utc)
        return self.created_at.astimezone(timezone.utc)

    def to_row(self) -> SentimentPostTable:
        created_at = self.created_at_utc()
        return SentimentPostTable(
            source=self.source.strip().lower(),
            post_id=self.post_id,
            keyword=self.keyword.strip(),
            created_at=created_at,
            post_date=created_at.strftime("%Y-%m-%d"),
            sentiment=self.sentiment.value,
            sentiment_score_positive=self.sentiment_score_positive,
            sentiment_score_negative=self.sentiment_score_negative,
            sentiment_score_mixed=self.sentiment_score_mixed,
            sentiment_score_neutral=self.sentiment_score_neutral,
        )


def load_post_records(path: Path) -> List[SentimentPostRecord]:
    """Read analysed posts from a ``.json`` array or a ``.csv`` with a header row."""
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        raw = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            raw = raw.get("data", [])
        if not isinstance(raw, list):
            raise DataSourceError(f"Expected a JSON array of posts in {path}")
        items: Iterable[Dict[str, Any]] = raw
    elif suffix == ".csv":
        with path.open("r", encoding="utf-8", newline="") as handle:
            items = list(csv.DictReader(handle))
    else:
        raise ValueError(f"Unsupported input format: {path.suffix or '<none>'}")

    records: List[SentimentPostRecord] = []
    for index, item in enumerate(items):
        payload = dict(item)
        if "post_id" not in payload and "id" in payload:
            payload["post_id"] = payload.pop("id")
        try:
            records.append(SentimentPostRecord.model_validate(payload))
        except ValueError as exc:
            raise DataSourceError(f"Invalid post at index {index}: {exc}") from exc
    return records


def ingest_posts(database_url: str, records: Iterable[SentimentPostRecord]) -> int:
    init_db(database_url)
    with session_scope(database_url) as session:
        written = SentimentPostRepo(session).upsert_many(
            record.to_row() for record in records
        )
    logger.info("ingested %d posts into %s", written, database_url)
    return written
