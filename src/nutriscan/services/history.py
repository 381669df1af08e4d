"""Scan history service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from nutriscan.domain.history import HistoryEntry, HistoryStats
from nutriscan.domain.products import ProductRecord

RECENT_DAYS = 7
RECENT_SCANS = 5

_logger = logging.getLogger(__name__)


class HistoryRepository(Protocol):
    """Persistence interface for scan history."""

    def list_entries(self) -> list[HistoryEntry]:
        """Return history entries, newest first."""

    def save_entries(self, entries: list[HistoryEntry]) -> None:
        """Replace the stored history."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class HistoryService:
    """Keep a bounded, barcode-unique list of scanned products."""

    repository: HistoryRepository
    max_entries: int = 100
    clock: Callable[[], datetime] = _utc_now

    def get_history(self) -> list[HistoryEntry]:
        """Return all entries, or an empty list when storage fails."""
        try:
            return self.repository.list_entries()
        except Exception:
            _logger.exception("Failed to load scan history")
            return []

    def add(self, product: ProductRecord, health_score: int | None) -> HistoryEntry:
        """Record a scan; a rescanned barcode replaces its entry in place."""
        entry = HistoryEntry(
            barcode=product.barcode,
            name=product.name,
            brand=product.brand,
            health_score=health_score,
            timestamp=self.clock(),
            image_url=product.image_url,
        )
        history = self.get_history()
        for index, existing in enumerate(history):
            if existing.barcode == entry.barcode:
                history[index] = entry
                break
        else:
            history.insert(0, entry)
        self._save(history[: self.max_entries])
        return entry

    def recent(self, limit: int = 10) -> list[HistoryEntry]:
        """Return the most recent entries."""
        return self.get_history()[:limit]

    def search(self, query: str) -> list[HistoryEntry]:
        """Match entries by name, brand or barcode."""
        lowered = query.lower()
        return [
            entry
            for entry in self.get_history()
            if lowered in entry.name.lower()
            or lowered in entry.brand.lower()
            or query in entry.barcode
        ]

    def remove(self, barcode: str) -> bool:
        """Delete an entry; return False when the barcode is not in history."""
        history = self.get_history()
        remaining = [entry for entry in history if entry.barcode != barcode]
        if len(remaining) == len(history):
            return False
        self._save(remaining)
        return True

    def clear(self) -> None:
        """Delete the whole history."""
        self._save([])

    def stats(self) -> HistoryStats:
        """Return totals, the average health score and recent activity."""
        history = self.get_history()
        if not history:
            return HistoryStats(
                total_scans=0, avg_health_score=0, recent_activity=0, recent_scans=[]
            )
        total = len(history)
        average = sum(entry.health_score or 0 for entry in history) / total
        since = self.clock() - timedelta(days=RECENT_DAYS)
        return HistoryStats(
            total_scans=total,
            avg_health_score=round(average),
            recent_activity=sum(1 for entry in history if entry.timestamp >= since),
            recent_scans=history[:RECENT_SCANS],
        )

    def export(self) -> list[dict[str, object]]:
        """Return the history as JSON-serializable documents."""
        return [entry_to_document(entry) for entry in self.get_history()]

    def import_entries(self, documents: object) -> dict[str, int]:
        """Merge exported documents into the history.

        Imported entries win over existing ones with the same barcode. The
        result is sorted newest first and capped.
        """
        if not isinstance(documents, list):
            raise ValueError("Invalid history format")
        imported = [entry_from_document(document) for document in documents]

        merged: dict[str, HistoryEntry] = {}
        for entry in [*imported, *self.get_history()]:
            merged.setdefault(entry.barcode, entry)
        unique = sorted(
            merged.values(), key=lambda entry: entry.timestamp, reverse=True
        )
        limited = unique[: self.max_entries]
        self._save(limited)
        return {"imported": len(imported), "total": len(limited)}

    def _save(self, entries: list[HistoryEntry]) -> None:
        try:
            self.repository.save_entries(entries)
        except Exception:
            _logger.exception("Failed to persist scan history")


def entry_to_document(entry: HistoryEntry) -> dict[str, object]:
    """Serialize a history entry."""
    return {
        "barcode": entry.barcode,
        "name": entry.name,
        "brand": entry.brand,
        "health_score": entry.health_score,
        "timestamp": entry.timestamp.isoformat(),
        "image_url": entry.image_url,
    }


def entry_from_document(document: object) -> HistoryEntry:
    """Parse a serialized history entry."""
    if not isinstance(document, dict) or not document.get("barcode"):
        raise ValueError("Invalid history entry")
    timestamp = datetime.fromisoformat(str(document.get("timestamp")))
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    score = document.get("health_score")
    return HistoryEntry(
        barcode=str(document["barcode"]),
        name=str(document.get("name") or ""),
        brand=str(document.get("brand") or ""),
        health_score=int(score) if isinstance(score, int | float) else None,
        timestamp=timestamp,
        image_url=document.get("image_url"),
    )
