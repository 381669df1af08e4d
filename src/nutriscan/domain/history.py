"""Domain models for scan history."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HistoryEntry:
    """A previously scanned product."""

    barcode: str
    name: str
    brand: str
    health_score: int | None
    timestamp: datetime
    image_url: str | None = None


@dataclass(frozen=True)
class HistoryStats:
    """Summary of the scan history."""

    total_scans: int
    avg_health_score: int
    recent_activity: int
    recent_scans: list[HistoryEntry]
