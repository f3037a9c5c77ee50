from __future__ import annotations

import unittest

from sentiment_dashboard.core.types import DailySentimentData
from sentiment_dashboard.modules.analytics.aggregation import (
    GROUP_BY_OPTIONS,
    aggregate_by_keyword,
    aggregate_sentiment_data,
    calculate_distribution,
    calculate_keywords_list,
    calculate_negative_list,
    calculate_period_averages,
    calculate_positive_list,
    calculate_time_series,
)


def _row(
    keyword: str,
    date: str,
    sentiment: str = "POSITIVE",
    count: int = 10,
    avg_pos=None,
    avg_neg=None,
    avg_mix=None,
    avg_neutral=None,
) -> DailySentimentData:
    return DailySentimentData(
        keyword=keyword,
        date=date,
        sentiment=sentiment,
        count=count,
        avg_pos=avg_pos,
        avg_neg=avg_neg,
        avg_mix=avg_mix,
        avg_neutral=avg_neutral,
    )


def _sample() -> list[DailySentimentData]:
    return [
        _row("alpha", "2025-03-01", "POSITIVE", 10, avg_pos=0.8, avg_neg=0.1),
        _row("alpha", "2025-03-01", "NEGATIVE", 5, avg_pos=0.2, avg_neg=0.7),
        _row("alpha", "2025-03-02", "NEUTRAL", 8, avg_pos=0.3, avg_neg=0.2, avg_neutral=0.5),
        _row("beta", "2025-03-01", "MIXED", 4, avg_pos=0.4, avg_neg=0.4, avg_mix=0.2),
        _row("beta", "2025-03-03", "NEGATIVE", 6, avg_pos=0.1, avg_neg=0.9),
    ]


class AggregateSentimentDataTest(unittest.TestCase):
    def test_count_is_conserved_for_every_grouping(self):
        data = _sample()
        total = sum(item.count for item in data)
        for group_by in GROUP_BY_OPTIONS:
            with self.subTest(group_by=group_by):
                grouped = aggregate_sentiment_data(data, group_by)
                self.assertEqual(sum(item.count for item in grouped), total)

    def test_weighted_averages_and_class_counts_by_keyword(self):
        grouped = {item.group_key: item for item in aggregate_sentiment_data(_sample(), "keyword")}

        alpha = grouped["alpha"]
        self.assertEqual(alpha.count, 23)
        self.assertAlmostEqual(alpha.avg_pos, (0.8 * 10 + 0.2 * 5 + 0.3 * 8) / 23)
        self.assertAlmostEqual(alpha.avg_neutral, 0.5 * 8 / 23)
        self.assertEqual(alpha.pos_count, 10)
        self.assertEqual(alpha.neg_count, 5)
        self.assertEqual(alpha.neutral_count, 8)
        self.assertEqual(alpha.mix_count, 0)
        self.assertEqual(alpha.active_days_of_keyword, 2)

    def test_keyword_date_keys_merge_buckets_of_the_same_day(self):
        keys = [item.group_key for item in aggregate_sentiment_data(_sample(), "keyword_date")]
        self.assertEqual(
            keys,
            ["alpha|2025-03-01", "alpha|2025-03-02", "beta|2025-03-01", "beta|2025-03-03"],
        )

    def test_sentiment_grouping_uses_class_names(self):
        keys = {item.group_key for item in aggregate_sentiment_data(_sample(), "sentiment")}
        self.assertEqual(keys, {"POSITIVE", "NEGATIVE", "NEUTRAL", "MIXED"})

    def test_unknown_mode_falls_back_to_keyword(self):
        keys = [item.group_key for item in aggregate_sentiment_data(_sample(), "bogus")]
        self.assertEqual(keys, ["alpha", "beta"])

    def test_zero_count_group_finalizes_to_zero(self):
        grouped = aggregate_sentiment_data([_row("ghost", "2025-03-01", count=0, avg_pos=0.9)])
        self.assertEqual(grouped[0].count, 0)
        self.assertEqual(grouped[0].avg_pos, 0.0)

    def test_aggregation_is_idempotent(self):
        data = _sample()
        first = aggregate_sentiment_data(data, "keyword")
        second = aggregate_sentiment_data(data, "keyword")
        self.assertEqual(first, second)

    def test_empty_input_returns_empty_lists(self):
        for group_by in GROUP_BY_OPTIONS:
            self.assertEqual(aggregate_sentiment_data([], group_by), [])
        self.assertEqual(aggregate_by_keyword([]), [])
        self.assertEqual(calculate_keywords_list([]), [])
        self.assertEqual(calculate_time_series([]), [])
        self.assertEqual(calculate_time_series([], "alpha"), [])
        self.assertEqual(calculate_distribution([], "alpha"), [])
        self.assertEqual(calculate_period_averages([]), [])
        self.assertEqual(calculate_positive_list([]), [])
        self.assertEqual(calculate_negative_list([]), [])

    def test_aggregate_by_keyword_reports_total_count(self):
        rollup = {item.keyword: item for item in aggregate_by_keyword(_sample())}
        self.assertEqual(rollup["beta"].total_count, 10)
        self.assertEqual(rollup["beta"].mix_count, 4)


class DerivedViewsTest(unittest.TestCase):
    def test_keywords_are_distinct_and_sorted(self):
        self.assertEqual(calculate_keywords_list(_sample()), ["alpha", "beta"])

    def test_time_series_without_keyword_merges_same_day_weighted(self):
        data = [
            _row("x", "2025-03-02", count=10, avg_pos=0.8),
            _row("y", "2025-03-02", count=30, avg_pos=0.4),
            _row("x", "2025-03-01", count=5, avg_pos=0.5),
        ]
        points = calculate_time_series(data)

        self.assertEqual([point.day for point in points], ["2025-03-01", "2025-03-02"])
        merged = points[1]
        self.assertEqual(merged.count, 40)
        self.assertAlmostEqual(merged.avg_pos, (0.8 * 10 + 0.4 * 30) / 40)

    def test_time_series_for_keyword_returns_its_records_by_day(self):
        data = [
            _row("x", "2025-03-03", count=3, avg_pos=0.7),
            _row("y", "2025-03-01", count=3, avg_pos=0.1),
            _row("x", "2025-03-01", count=2, avg_pos=0.6),
        ]
        points = calculate_time_series(data, "x")
        self.assertEqual([point.day for point in points], ["2025-03-01", "2025-03-03"])
        self.assertEqual([point.avg_pos for point in points], [0.6, 0.7])

    def test_time_series_zero_count_day_has_no_averages(self):
        points = calculate_time_series([_row("x", "2025-03-01", count=0, avg_pos=0.5)])
        self.assertEqual(len(points), 1)
        self.assertIsNone(points[0].avg_pos)
        self.assertEqual(points[0].count, 0)

    def test_distribution_uses_occurrence_counts_and_weighted_averages(self):
        data = [
            _row("Y", "2025-03-01", "POSITIVE", 10, avg_pos=0.6),
            _row("Y", "2025-03-01", "NEGATIVE", 5, avg_neg=0.7),
        ]
        slices = {point.sentiment: point for point in calculate_distribution(data, "Y")}

        self.assertEqual(list(slices), ["Positive", "Negative", "Mixed", "Neutral"])
        self.assertEqual(slices["Positive"].count, 10)
        self.assertEqual(slices["Negative"].count, 5)
        self.assertAlmostEqual(slices["Positive"].avg_value, 0.4)
        self.assertAlmostEqual(slices["Negative"].avg_value, 0.7 * 5 / 15)
        self.assertEqual(slices["Mixed"].count, 0)

    def test_distribution_without_keyword_is_empty(self):
        self.assertEqual(calculate_distribution(_sample(), None), [])
        self.assertEqual(calculate_distribution(_sample(), "missing"), [])

    def test_period_averages_for_keyword_and_overall(self):
        by_keyword = calculate_period_averages(_sample(), "beta")
        self.assertEqual(len(by_keyword), 1)
        self.assertEqual(by_keyword[0].keyword, "beta")
        self.assertEqual(by_keyword[0].count, 10)
        self.assertAlmostEqual(by_keyword[0].avg_neg, (0.4 * 4 + 0.9 * 6) / 10)

        overall = calculate_period_averages(_sample())
        self.assertIsNone(overall[0].keyword)
        self.assertEqual(overall[0].count, 33)

    def test_period_averages_zero_count_is_empty(self):
        self.assertEqual(calculate_period_averages([_row("x", "2025-03-01", count=0)]), [])


class LeaderboardTest(unittest.TestCase):
    def _many_keywords(self) -> list[DailySentimentData]:
        data = []
        for index in range(30):
            data.append(
                _row(
                    f"kw{index:02d}",
                    "2025-03-01",
                    count=21 + index,
                    avg_pos=index / 30,
                    avg_neg=1 - index / 30,
                )
            )
        return data

    def test_positive_list_invariants(self):
        items = calculate_positive_list(self._many_keywords())
        self.assertEqual(len(items), 20)
        self.assertTrue(all(item.count > 20 for item in items))
        values = [item.avg_pos for item in items]
        self.assertEqual(values, sorted(values, reverse=True))
        self.assertEqual(items[0].keyword, "kw29")

    def test_negative_list_invariants(self):
        items = calculate_negative_list(self._many_keywords())
        values = [item.avg_neg for item in items]
        self.assertEqual(values, sorted(values, reverse=True))
        self.assertEqual(items[0].keyword, "kw00")

    def test_keywords_at_or_below_threshold_are_excluded(self):
        data = [
            _row("small", "2025-03-01", count=15, avg_pos=0.99),
            _row("edge", "2025-03-01", count=20, avg_pos=0.95),
            _row("big", "2025-03-01", count=21, avg_pos=0.1),
        ]
        self.assertEqual([item.keyword for item in calculate_positive_list(data)], ["big"])

    def test_ties_are_broken_by_keyword(self):
        data = [
            _row("zeta", "2025-03-01", count=30, avg_pos=0.5),
            _row("alpha", "2025-03-01", count=30, avg_pos=0.5),
        ]
        self.assertEqual(
            [item.keyword for item in calculate_positive_list(data)],
            ["alpha", "zeta"],
        )

    def test_limit_and_threshold_overrides(self):
        data = self._many_keywords()
        items = calculate_positive_list(data, limit=5, min_total_count=40)
        self.assertEqual(len(items), 5)
        self.assertTrue(all(item.count > 40 for item in items))


if __name__ == "__main__":
    unittest.main()
