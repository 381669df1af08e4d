"""Supabase repository for scan history."""

from dataclasses import dataclass

from nutriscan.adapters.supabase_documents import SupabaseDocumentTable
from nutriscan.domain.history import HistoryEntry
from nutriscan.services.history import (
    HistoryRepository,
    entry_from_document,
    entry_to_document,
)

HISTORY_KEY = "scan_history"


@dataclass
class SupabaseHistoryRepository(HistoryRepository):
    """Supabase implementation for scan history."""

    documents: SupabaseDocumentTable

    def list_entries(self) -> list[HistoryEntry]:
        """Return stored entries, newest first."""
        data = self.documents.get(HISTORY_KEY)
        if not isinstance(data, list):
            return []
        return [entry_from_document(document) for document in data]

    def save_entries(self, entries: list[HistoryEntry]) -> None:
        """Replace the stored history."""
        self.documents.put(HISTORY_KEY, [entry_to_document(entry) for entry in entries])
