"""Business logic services."""

from journal_ledger.services.journal_service import JournalService
from journal_ledger.services.journal_storage import JournalStorage
from journal_ledger.services.journal_export import export_to_csv

__all__ = ["JournalService", "JournalStorage", "export_to_csv"]
