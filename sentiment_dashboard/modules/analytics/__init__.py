"""Pure analytics over daily sentiment rows: rollups, leaderboards and
controversy ranking."""

from sentiment_dashboard.modules.analytics.aggregation import (
    aggregate_by_keyword,
    aggregate_sentiment_data,
    calculate_distribution,
    calculate_keywords_list,
    calculate_negative_list,
    calculate_period_averages,
    calculate_positive_list,
    calculate_time_series,
)
from sentiment_dashboard.modules.analytics.controversy import calculate_controversy_list
from sentiment_dashboard.modules.analytics.delta import calculate_delta_list

__all__ = [
    "aggregate_by_keyword",
    "aggregate_sentiment_data",
    "calculate_controversy_list",
    "calculate_delta_list",
    "calculate_distribution",
    "calculate_keywords_list",
    "calculate_negative_list",
    "calculate_period_averages",
    "calculate_positive_list",
    "calculate_time_series",
]
