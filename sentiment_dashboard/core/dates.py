from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple

from sentiment_dashboard.core.errors import ValidationError

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
PRESET_DAYS = {"7d": 7, "30d": 30, "90d": 90}


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def format_date_iso(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_iso_date(raw: Optional[str]) -> Optional[date]:
    value = (raw or "").strip()
    if not ISO_DATE_RE.match(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def validate_date_range(start_date: Optional[str], end_date: Optional[str]) -> Tuple[str, str]:
    start = parse_iso_date(start_date)
    end = parse_iso_date(end_date)
    if start is None or end is None:
        raise ValidationError(
            "Missing or invalid required query parameters: "
            "startDate and endDate must be in YYYY-MM-DD format"
        )
    if start > end:
        raise ValidationError("Invalid date range: startDate cannot be after endDate")
    return format_date_iso(start), format_date_iso(end)


def default_date_range(days: int = 30, today: Optional[date] = None) -> Tuple[str, str]:
    end = today or today_utc()
    start = end - timedelta(days=days)
    return format_date_iso(start), format_date_iso(end)


def date_preset(preset: str, today: Optional[date] = None) -> Tuple[str, str]:
    days = PRESET_DAYS.get(preset)
    if days is None:
        raise ValidationError(f"Unknown date preset: {preset}")
    return default_date_range(days=days, today=today)


def _display(value: date) -> str:
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def list_title(
    base_title: str,
    start_date: str,
    end_date: str,
    today: Optional[date] = None,
) -> str:
    if (start_date, end_date) == default_date_range(days=30, today=today):
        return f"{base_title} (Last 30 Days)"
    start = parse_iso_date(start_date)
    end = parse_iso_date(end_date)
    if start is None or end is None:
        return f"{base_title} (Custom Range)"
    if start == end:
        return f"{base_title} ({_display(start)})"
    return f"{base_title} ({_display(start)} - {_display(end)})"
