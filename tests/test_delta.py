from __future__ import annotations

import unittest

from sentiment_dashboard.core.types import DailySentimentData
from sentiment_dashboard.modules.analytics.delta import calculate_delta_list


def _row(keyword, day, avg_pos, avg_neg, count=15):
    return DailySentimentData(
        keyword=keyword,
        date=day,
        sentiment="NEUTRAL",
        avg_pos=avg_pos,
        avg_neg=avg_neg,
        count=count,
    )


class DeltaListTest(unittest.TestCase):
    def test_reports_the_larger_shift_between_first_and_last_day(self):
        data = [
            _row("rising", "2025-03-01", 0.2, 0.5),
            _row("rising", "2025-03-05", 0.7, 0.4),
            _row("souring", "2025-03-01", 0.5, 0.1),
            _row("souring", "2025-03-02", 0.4, 0.3),
            _row("souring", "2025-03-03", 0.45, 0.4),
        ]

        result = {item.keyword: item for item in calculate_delta_list(data)}

        self.assertEqual(result["rising"].delta_type, "POSITIVE")
        self.assertAlmostEqual(result["rising"].delta, 0.5)
        self.assertEqual(result["souring"].delta_type, "NEGATIVE")
        self.assertAlmostEqual(result["souring"].delta, 0.3)

    def test_orders_by_absolute_change(self):
        data = [
            _row("small", "2025-03-01", 0.5, 0.5),
            _row("small", "2025-03-02", 0.55, 0.5),
            _row("drop", "2025-03-01", 0.9, 0.1),
            _row("drop", "2025-03-02", 0.2, 0.1),
        ]
        result = calculate_delta_list(data)
        self.assertEqual([item.keyword for item in result], ["drop", "small"])
        self.assertAlmostEqual(result[0].delta, -0.7)

    def test_low_volume_keywords_are_skipped(self):
        data = [
            _row("tiny", "2025-03-01", 0.1, 0.1, count=5),
            _row("tiny", "2025-03-02", 0.9, 0.1, count=5),
        ]
        self.assertEqual(calculate_delta_list(data), [])

    def test_single_day_keyword_has_zero_delta(self):
        result = calculate_delta_list([_row("flat", "2025-03-01", 0.4, 0.2, count=30)])
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].delta, 0.0)
        self.assertEqual(result[0].delta_type, "POSITIVE")

    def test_limit(self):
        data = [
            _row(f"kw{index}", day, 0.1 * (index % 5), 0.2)
            for index in range(10)
            for day in ("2025-03-01", "2025-03-02")
        ]
        self.assertEqual(len(calculate_delta_list(data, limit=3)), 3)


if __name__ == "__main__":
    unittest.main()
