"""Domain models for daily intake tracking."""

from dataclasses import dataclass, field
from datetime import date, datetime

from nutriscan.domain.catalogs import TRACKED_NUTRIENTS


def zero_totals() -> dict[str, float]:
    """Return a totals mapping with every tracked nutrient at zero."""
    return dict.fromkeys(TRACKED_NUTRIENTS, 0.0)


@dataclass(frozen=True)
class LedgerEntry:
    """A product logged against a day's intake."""

    name: str
    barcode: str
    serving_size: float
    timestamp: datetime


@dataclass(frozen=True)
class DailyIntakeLedger:
    """Accumulated nutrient totals for one calendar day."""

    day: date
    totals: dict[str, float] = field(default_factory=zero_totals)
    entries: tuple[LedgerEntry, ...] = ()


@dataclass(frozen=True)
class NutrientProgress:
    """Progress toward a single nutrient goal."""

    current: float
    target: float
    max: float | None
    min: float | None
    percentage: int
    remaining: float | None
    status: str


@dataclass(frozen=True)
class DayStats:
    """Per-day totals used for weekly summaries."""

    day: date
    totals: dict[str, float]
    scanned_count: int
