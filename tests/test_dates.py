from __future__ import annotations

import unittest
from datetime import date

from sentiment_dashboard.core.dates import (
    date_preset,
    default_date_range,
    list_title,
    parse_iso_date,
    validate_date_range,
)
from sentiment_dashboard.core.errors import ValidationError


class DateRangeValidationTest(unittest.TestCase):
    def test_valid_range_is_returned(self):
        self.assertEqual(
            validate_date_range("2025-03-01", "2025-03-09"),
            ("2025-03-01", "2025-03-09"),
        )
        self.assertEqual(
            validate_date_range("2025-03-01", "2025-03-01"),
            ("2025-03-01", "2025-03-01"),
        )

    def test_missing_or_malformed_dates_are_rejected(self):
        for start, end in [
            (None, "2025-03-01"),
            ("2025-03-01", ""),
            ("2025/03/01", "2025-03-02"),
            ("2025-3-1", "2025-03-02"),
            ("2025-02-30", "2025-03-02"),
        ]:
            with self.subTest(start=start, end=end):
                with self.assertRaises(ValidationError) as ctx:
                    validate_date_range(start, end)
                self.assertIn("YYYY-MM-DD", str(ctx.exception))

    def test_inverted_range_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_date_range("2025-03-09", "2025-03-01")
        self.assertEqual(
            str(ctx.exception),
            "Invalid date range: startDate cannot be after endDate",
        )

    def test_parse_iso_date(self):
        self.assertEqual(parse_iso_date("2025-03-01"), date(2025, 3, 1))
        self.assertIsNone(parse_iso_date("yesterday"))


class DatePresetTest(unittest.TestCase):
    def test_presets_count_back_from_today(self):
        today = date(2025, 3, 31)
        self.assertEqual(date_preset("7d", today), ("2025-03-24", "2025-03-31"))
        self.assertEqual(date_preset("30d", today), ("2025-03-01", "2025-03-31"))
        self.assertEqual(date_preset("90d", today), ("2024-12-31", "2025-03-31"))

    def test_unknown_preset(self):
        with self.assertRaises(ValidationError):
            date_preset("1y", date(2025, 3, 31))

    def test_default_range(self):
        self.assertEqual(
            default_date_range(days=30, today=date(2025, 3, 31)),
            ("2025-03-01", "2025-03-31"),
        )


class ListTitleTest(unittest.TestCase):
    def test_default_range_title(self):
        today = date(2025, 3, 31)
        self.assertEqual(
            list_title("Most Positive", "2025-03-01", "2025-03-31", today),
            "Most Positive (Last 30 Days)",
        )

    def test_single_day_title(self):
        self.assertEqual(
            list_title("Most Positive", "2025-03-01", "2025-03-01", date(2025, 6, 1)),
            "Most Positive (Mar 1, 2025)",
        )

    def test_range_title(self):
        self.assertEqual(
            list_title("Most Negative", "2025-03-01", "2025-03-09", date(2025, 6, 1)),
            "Most Negative (Mar 1, 2025 - Mar 9, 2025)",
        )

    def test_unparseable_range_title(self):
        self.assertEqual(
            list_title("Most Negative", "", "", date(2025, 6, 1)),
            "Most Negative (Custom Range)",
        )


if __name__ == "__main__":
    unittest.main()
