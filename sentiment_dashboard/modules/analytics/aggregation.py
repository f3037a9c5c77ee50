"""Count-weighted aggregation of daily sentiment rows.

Every ``DailySentimentData`` row carries per-class averages over ``count``
posts, so all rollups accumulate ``avg * count`` and divide by the summed
count at the end.  A group whose summed count is zero finalizes to ``0.0``
averages and is never handed to ranking code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Optional, Set

from sentiment_dashboard.core.types import (
    AggregatedSentimentItem,
    DailySentimentData,
    DistributionPoint,
    PeriodAverage,
    SentimentClass,
    SentimentData,
    SentimentListItem,
    TimeSeriesPoint,
)

GroupBy = Literal["keyword", "date", "sentiment", "keyword_date"]
GROUP_BY_OPTIONS = ("keyword", "date", "sentiment", "keyword_date")
KEYWORD_DATE_SEPARATOR = "|"

LEADERBOARD_LIMIT = 20
MIN_TOTAL_COUNT = 20

DISTRIBUTION_LABELS = (
    ("Positive", "avg_pos", "pos_count"),
    ("Negative", "avg_neg", "neg_count"),
    ("Mixed", "avg_mix", "mix_count"),
    ("Neutral", "avg_neutral", "neutral_count"),
)


@dataclass
class _Totals:
    sum_pos: float = 0.0
    sum_neg: float = 0.0
    sum_mix: float = 0.0
    sum_neutral: float = 0.0
    pos_count: int = 0
    neg_count: int = 0
    mix_count: int = 0
    neutral_count: int = 0
    total_count: int = 0
    dates: Set[str] = field(default_factory=set)

    def add(self, item: DailySentimentData) -> None:
        count = item.count
        self.sum_pos += (item.avg_pos or 0.0) * count
        self.sum_neg += (item.avg_neg or 0.0) * count
        self.sum_mix += (item.avg_mix or 0.0) * count
        self.sum_neutral += (item.avg_neutral or 0.0) * count
        if item.sentiment == SentimentClass.POSITIVE:
            self.pos_count += count
        elif item.sentiment == SentimentClass.NEGATIVE:
            self.neg_count += count
        elif item.sentiment == SentimentClass.MIXED:
            self.mix_count += count
        elif item.sentiment == SentimentClass.NEUTRAL:
            self.neutral_count += count
        self.total_count += count
        self.dates.add(item.date)

    def average(self, weighted_sum: float) -> float:
        if self.total_count <= 0:
            return 0.0
        return weighted_sum / self.total_count


def group_key_for(item: DailySentimentData, group_by: GroupBy) -> str:
    if group_by == "date":
        return item.date
    if group_by == "sentiment":
        return item.sentiment.value
    if group_by == "keyword_date":
        return f"{item.keyword}{KEYWORD_DATE_SEPARATOR}{item.date}"
    return item.keyword


def split_keyword_date(group_key: str) -> tuple[str, str]:
    keyword, _, day = group_key.rpartition(KEYWORD_DATE_SEPARATOR)
    return keyword, day


def _accumulate(data: Iterable[DailySentimentData], group_by: GroupBy) -> Dict[str, _Totals]:
    totals: Dict[str, _Totals] = {}
    for item in data:
        key = group_key_for(item, group_by)
        bucket = totals.get(key)
        if bucket is None:
            bucket = _Totals()
            totals[key] = bucket
        bucket.add(item)
    return totals


def aggregate_sentiment_data(
    data: Iterable[DailySentimentData],
    group_by: GroupBy = "keyword",
) -> List[AggregatedSentimentItem]:
    """Fold rows into one item per distinct group key, in first-seen order."""
    if group_by not in GROUP_BY_OPTIONS:
        group_by = "keyword"
    return [
        AggregatedSentimentItem(
            group_key=key,
            avg_pos=totals.average(totals.sum_pos),
            avg_neg=totals.average(totals.sum_neg),
            avg_mix=totals.average(totals.sum_mix),
            avg_neutral=totals.average(totals.sum_neutral),
            pos_count=totals.pos_count,
            neg_count=totals.neg_count,
            mix_count=totals.mix_count,
            neutral_count=totals.neutral_count,
            count=totals.total_count,
            active_days_of_keyword=len(totals.dates),
        )
        for key, totals in _accumulate(data, group_by).items()
    ]


def aggregate_by_keyword(data: Iterable[DailySentimentData]) -> List[SentimentData]:
    return [
        SentimentData(
            keyword=item.group_key,
            avg_pos=item.avg_pos,
            avg_neg=item.avg_neg,
            avg_mix=item.avg_mix,
            avg_neutral=item.avg_neutral,
            pos_count=item.pos_count,
            neg_count=item.neg_count,
            mix_count=item.mix_count,
            neutral_count=item.neutral_count,
            total_count=item.count,
        )
        for item in aggregate_sentiment_data(data, "keyword")
    ]


def calculate_keywords_list(data: Iterable[DailySentimentData]) -> List[str]:
    return sorted({item.keyword for item in data})


def _filter_keyword(
    data: Iterable[DailySentimentData], keyword: Optional[str]
) -> List[DailySentimentData]:
    if not keyword:
        return list(data)
    return [item for item in data if item.keyword == keyword]


def calculate_time_series(
    data: Iterable[DailySentimentData],
    selected_keyword: Optional[str] = None,
) -> List[TimeSeriesPoint]:
    rows = _filter_keyword(data, selected_keyword)
    if selected_keyword:
        points = [
            TimeSeriesPoint(
                day=item.date,
                avg_pos=item.avg_pos,
                avg_neg=item.avg_neg,
                avg_mix=item.avg_mix,
                avg_neutral=item.avg_neutral,
                count=item.count,
            )
            for item in rows
        ]
    else:
        points = []
        for day, totals in _accumulate(rows, "date").items():
            has_posts = totals.total_count > 0
            points.append(
                TimeSeriesPoint(
                    day=day,
                    avg_pos=totals.average(totals.sum_pos) if has_posts else None,
                    avg_neg=totals.average(totals.sum_neg) if has_posts else None,
                    avg_mix=totals.average(totals.sum_mix) if has_posts else None,
                    avg_neutral=totals.average(totals.sum_neutral) if has_posts else None,
                    count=totals.total_count,
                )
            )
    # ISO dates sort chronologically as strings.
    return sorted(points, key=lambda point: point.day)


def calculate_distribution(
    data: Iterable[DailySentimentData],
    selected_keyword: Optional[str],
) -> List[DistributionPoint]:
    if not selected_keyword:
        return []
    aggregated = [
        item
        for item in aggregate_sentiment_data(_filter_keyword(data, selected_keyword), "keyword")
        if item.count > 0
    ]
    if not aggregated:
        return []
    item = aggregated[0]
    return [
        DistributionPoint(
            sentiment=label,
            avg_value=getattr(item, avg_field),
            count=getattr(item, count_field),
        )
        for label, avg_field, count_field in DISTRIBUTION_LABELS
    ]


def calculate_period_averages(
    data: Iterable[DailySentimentData],
    selected_keyword: Optional[str] = None,
) -> List[PeriodAverage]:
    totals = _Totals()
    for item in _filter_keyword(data, selected_keyword):
        totals.add(item)
    if totals.total_count <= 0:
        return []
    return [
        PeriodAverage(
            keyword=selected_keyword or None,
            avg_pos=totals.average(totals.sum_pos),
            avg_neg=totals.average(totals.sum_neg),
            avg_mix=totals.average(totals.sum_mix),
            avg_neutral=totals.average(totals.sum_neutral),
            count=totals.total_count,
        )
    ]


def _leaderboard(
    data: Iterable[DailySentimentData],
    metric: str,
    limit: int,
    min_total_count: int,
) -> List[SentimentListItem]:
    rows = [
        item
        for item in aggregate_sentiment_data(data, "keyword")
        if item.count > min_total_count
    ]

    def sort_key(item: AggregatedSentimentItem) -> tuple[float, str]:
        value = getattr(item, metric, None)
        return (-(value if value is not None else -1.0), item.group_key)

    rows.sort(key=sort_key)
    return [
        SentimentListItem(
            keyword=item.group_key,
            avg_pos=item.avg_pos,
            avg_neg=item.avg_neg,
            avg_mix=item.avg_mix,
            avg_neutral=item.avg_neutral,
            pos_count=item.pos_count,
            neg_count=item.neg_count,
            mix_count=item.mix_count,
            neutral_count=item.neutral_count,
            count=item.count,
        )
        for item in rows[: max(limit, 0)]
    ]


def calculate_positive_list(
    data: Iterable[DailySentimentData],
    limit: int = LEADERBOARD_LIMIT,
    min_total_count: int = MIN_TOTAL_COUNT,
) -> List[SentimentListItem]:
    return _leaderboard(data, "avg_pos", limit=limit, min_total_count=min_total_count)


def calculate_negative_list(
    data: Iterable[DailySentimentData],
    limit: int = LEADERBOARD_LIMIT,
    min_total_count: int = MIN_TOTAL_COUNT,
) -> List[SentimentListItem]:
    return _leaderboard(data, "avg_neg", limit=limit, min_total_count=min_total_count)
