from __future__ import annotations

from enum import StrEnum


class ProductSort(StrEnum):
    PRICE_LOW_TO_HIGH = "low-to-high"
    PRICE_HIGH_TO_LOW = "high-to-low"
    NEWEST = "newest"


_ORDERING = {
    ProductSort.PRICE_LOW_TO_HIGH: ("price", "id"),
    ProductSort.PRICE_HIGH_TO_LOW: ("-price", "id"),
    ProductSort.NEWEST: ("-created_at", "-id"),
}


def ordering_for(raw: str | None) -> tuple[str, ...]:
    """Map a client sort option to ORM ordering; unknown options keep natural order."""
    try:
        return _ORDERING[ProductSort((raw or "").strip().lower())]
    except ValueError:
        return ("id",)
