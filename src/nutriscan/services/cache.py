"""In-memory product cache."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from nutriscan.domain.products import ProductRecord

WEEK_SECONDS = 7 * 24 * 60 * 60


class ProductCache(Protocol):
    """Cache interface for looked-up products."""

    def get(self, barcode: str) -> ProductRecord | None:
        """Return a cached product if present and not expired."""

    def set(self, barcode: str, product: ProductRecord) -> None:
        """Store a product."""


@dataclass
class _CacheEntry:
    product: ProductRecord
    stored_at: datetime


class InMemoryProductCache(ProductCache):
    """Bounded cache that drops the oldest entry once full."""

    def __init__(self, ttl_seconds: int = WEEK_SECONDS, max_entries: int = 50) -> None:
        self.ttl = timedelta(seconds=ttl_seconds)
        self.max_entries = max_entries
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, barcode: str) -> ProductRecord | None:
        """Return a cached product if it hasn't expired."""
        entry = self._entries.get(barcode)
        if entry is None:
            return None
        if datetime.now(tz=UTC) - entry.stored_at >= self.ttl:
            self._entries.pop(barcode, None)
            return None
        return entry.product

    def set(self, barcode: str, product: ProductRecord) -> None:
        """Store a product, evicting the oldest entry past capacity."""
        self._entries[barcode] = _CacheEntry(
            product=product, stored_at=datetime.now(tz=UTC)
        )
        while len(self._entries) > self.max_entries:
            oldest = min(self._entries, key=lambda key: self._entries[key].stored_at)
            self._entries.pop(oldest)

    def __len__(self) -> int:
        return len(self._entries)
