from __future__ import annotations

from typing import Dict, Iterable, List

from sentiment_dashboard.core.types import (
    AggregatedSentimentItem,
    DailySentimentData,
    SentimentDelta,
)
from sentiment_dashboard.modules.analytics.aggregation import (
    LEADERBOARD_LIMIT,
    MIN_TOTAL_COUNT,
    aggregate_sentiment_data,
    split_keyword_date,
)


def calculate_delta_list(
    data: Iterable[DailySentimentData],
    limit: int = LEADERBOARD_LIMIT,
    min_total_count: int = MIN_TOTAL_COUNT,
) -> List[SentimentDelta]:
    """Rank keywords by how much sentiment moved between their first and last day.

    The larger of the positive and negative shifts is reported; equal shifts
    are reported as POSITIVE.
    """
    days_by_keyword: Dict[str, List[AggregatedSentimentItem]] = {}
    for day in aggregate_sentiment_data(data, "keyword_date"):
        keyword, _ = split_keyword_date(day.group_key)
        days_by_keyword.setdefault(keyword, []).append(day)

    deltas: List[SentimentDelta] = []
    for keyword, days in days_by_keyword.items():
        if sum(day.count for day in days) <= min_total_count:
            continue
        active = sorted(
            (day for day in days if day.count > 0),
            key=lambda day: split_keyword_date(day.group_key)[1],
        )
        if not active:
            continue
        first, last = active[0], active[-1]
        pos_delta = last.avg_pos - first.avg_pos
        neg_delta = last.avg_neg - first.avg_neg
        if abs(pos_delta) >= abs(neg_delta):
            deltas.append(SentimentDelta(keyword=keyword, delta=pos_delta, delta_type="POSITIVE"))
        else:
            deltas.append(SentimentDelta(keyword=keyword, delta=neg_delta, delta_type="NEGATIVE"))

    deltas.sort(key=lambda item: (-abs(item.delta), item.keyword))
    return deltas[: max(limit, 0)]
