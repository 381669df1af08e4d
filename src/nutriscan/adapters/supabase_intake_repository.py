"""Supabase repository for daily intake ledgers."""

from dataclasses import dataclass
from datetime import date, datetime

from nutriscan.adapters.supabase_documents import SupabaseDocumentTable
from nutriscan.domain.intake import DailyIntakeLedger, LedgerEntry, zero_totals
from nutriscan.services.goals import IntakeRepository


def ledger_key(day: date) -> str:
    """Return the document key for a day's ledger."""
    return f"daily_intake:{day.isoformat()}"


@dataclass
class SupabaseIntakeRepository(IntakeRepository):
    """Supabase implementation for day-keyed intake ledgers."""

    documents: SupabaseDocumentTable

    def get_ledger(self, day: date) -> DailyIntakeLedger | None:
        """Return the ledger stored for a day."""
        data = self.documents.get(ledger_key(day))
        if not isinstance(data, dict):
            return None
        totals = zero_totals()
        for nutrient, value in (data.get("totals") or {}).items():
            totals[nutrient] = float(value or 0.0)
        return DailyIntakeLedger(
            day=day,
            totals=totals,
            entries=tuple(_parse_entry(entry) for entry in data.get("entries") or []),
        )

    def save_ledger(self, ledger: DailyIntakeLedger) -> None:
        """Persist a day's ledger."""
        self.documents.put(
            ledger_key(ledger.day),
            {
                "date": ledger.day.isoformat(),
                "totals": dict(ledger.totals),
                "entries": [
                    {
                        "name": entry.name,
                        "barcode": entry.barcode,
                        "serving_size": entry.serving_size,
                        "timestamp": entry.timestamp.isoformat(),
                    }
                    for entry in ledger.entries
                ],
            },
        )


def _parse_entry(row: dict[str, object]) -> LedgerEntry:
    return LedgerEntry(
        name=str(row.get("name", "")),
        barcode=str(row.get("barcode", "")),
        serving_size=float(row.get("serving_size", 0.0)),
        timestamp=datetime.fromisoformat(str(row["timestamp"])),
    )
