"""
Query parameter policies for the reporting endpoints.

No parameter ever fails the request: anything unparseable falls back to its
default. An unreadable date bound is treated as absent, and a range whose
start is after its end simply matches nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

DEFAULT_LIMIT = 5

RECENT_ORDER_SORT_FIELDS = ("order_id", "created_at", "total_price", "order_status")
DEFAULT_SORT_FIELD = "created_at"
SORT_DIRECTIONS = ("ASC", "DESC")
DEFAULT_SORT_DIRECTION = "DESC"


@dataclass(frozen=True)
class DateRange:
    start: date | None = None
    end: date | None = None

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None


def parse_limit(raw, default: int = DEFAULT_LIMIT) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value >= 0 else default


def parse_year(raw, default: int) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if 1 <= value <= 9999 else default


def _parse_date(raw: str | None) -> date | None:
    value = (raw or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_date_range(start_raw: str | None, end_raw: str | None) -> DateRange:
    return DateRange(start=_parse_date(start_raw), end=_parse_date(end_raw))


def resolve_sort(field: str | None, direction: str | None) -> tuple[str, str]:
    sort_field = field if field in RECENT_ORDER_SORT_FIELDS else DEFAULT_SORT_FIELD
    sort_direction = (direction or "").strip().upper()
    if sort_direction not in SORT_DIRECTIONS:
        sort_direction = DEFAULT_SORT_DIRECTION
    return sort_field, sort_direction
