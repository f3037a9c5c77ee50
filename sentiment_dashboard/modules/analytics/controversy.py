"""Controversy ranking.

Each (keyword, day) is classified by comparing the day's weighted positive and
negative averages.  A keyword scores high when most of its active days are
close battles rather than one-sided.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List

from sentiment_dashboard.core.types import (
    AggregatedSentimentItem,
    ControversyListItem,
    ControversyType,
    DailySentimentData,
    DayDominance,
)
from sentiment_dashboard.modules.analytics.aggregation import (
    LEADERBOARD_LIMIT,
    MIN_TOTAL_COUNT,
    aggregate_sentiment_data,
    split_keyword_date,
)

MARGIN = 0.1
DOMINANT_WEIGHT = 0.275
CLOSE_BATTLE_WEIGHT = 0.45


def classify_day(avg_pos: float | None, avg_neg: float | None) -> DayDominance:
    pos = avg_pos or 0.0
    neg = avg_neg or 0.0
    if pos > neg + MARGIN:
        return DayDominance.POS_DOMINANT
    if neg > pos + MARGIN:
        return DayDominance.NEG_DOMINANT
    return DayDominance.CLOSE_BATTLE


def controversy_score(pos_ratio: float, neg_ratio: float, close_ratio: float) -> float:
    denominator = (
        neg_ratio * DOMINANT_WEIGHT
        + pos_ratio * DOMINANT_WEIGHT
        + close_ratio * CLOSE_BATTLE_WEIGHT
    )
    if denominator <= 0:
        return 0.0
    return min(100.0, (close_ratio * CLOSE_BATTLE_WEIGHT * 100) / denominator)


def controversy_type(pos_ratio: float, neg_ratio: float, close_ratio: float) -> ControversyType:
    if neg_ratio > pos_ratio and neg_ratio > close_ratio:
        return ControversyType.NEGATIVE_DOMINANT
    if pos_ratio > neg_ratio and pos_ratio > close_ratio:
        return ControversyType.POSITIVE_DOMINANT
    return ControversyType.CHAOTIC


def _group_days_by_keyword(
    data: Iterable[DailySentimentData],
) -> Dict[str, List[AggregatedSentimentItem]]:
    grouped: Dict[str, List[AggregatedSentimentItem]] = {}
    for day in aggregate_sentiment_data(data, "keyword_date"):
        keyword, _ = split_keyword_date(day.group_key)
        grouped.setdefault(keyword, []).append(day)
    return grouped


def score_keywords(
    data: Iterable[DailySentimentData],
    min_total_count: int = MIN_TOTAL_COUNT,
) -> List[ControversyListItem]:
    """Score every keyword above the volume threshold, unsorted."""
    results: List[ControversyListItem] = []
    for keyword, days in _group_days_by_keyword(data).items():
        active_days = len(days)
        total_count = sum(day.count for day in days)
        if active_days == 0 or total_count <= min_total_count:
            continue

        tally = Counter(classify_day(day.avg_pos, day.avg_neg) for day in days)
        pos_ratio = tally[DayDominance.POS_DOMINANT] / active_days
        neg_ratio = tally[DayDominance.NEG_DOMINANT] / active_days
        close_ratio = tally[DayDominance.CLOSE_BATTLE] / active_days

        results.append(
            ControversyListItem(
                keyword=keyword,
                count=total_count,
                score=controversy_score(pos_ratio, neg_ratio, close_ratio),
                type=controversy_type(pos_ratio, neg_ratio, close_ratio),
            )
        )
    return results


def calculate_controversy_list(
    data: Iterable[DailySentimentData],
    limit: int = LEADERBOARD_LIMIT,
    min_total_count: int = MIN_TOTAL_COUNT,
) -> List[ControversyListItem]:
    ranked = sorted(
        score_keywords(data, min_total_count=min_total_count),
        key=lambda item: (-item.score, item.keyword),
    )
    return ranked[: max(limit, 0)]
