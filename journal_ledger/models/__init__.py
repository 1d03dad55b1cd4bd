"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from journal_ledger.models.base import Base
from journal_ledger.models.enums import (
    JournalEntryType,
    JournalEntryStatus,
    JournalOperation,
    JournalFailure,
    BalanceType,
)
from journal_ledger.models.storage_item import StorageItem

__all__ = [
    "Base",
    "JournalEntryType",
    "JournalEntryStatus",
    "JournalOperation",
    "JournalFailure",
    "BalanceType",
    "StorageItem",
]
