"""
Journal storage: the whole journal as one JSON array.

There are no partial or delta writes: every save replaces the
stored document with the complete collection. The session is
flushed but not committed; the caller owns the transaction.
"""

import json
from typing import Protocol

from pydantic import TypeAdapter
from sqlalchemy.orm import Session

from journal_ledger.config import get_settings
from journal_ledger.models.storage_item import StorageItem
from journal_ledger.schemas.journal import JournalEntry

_entries_adapter = TypeAdapter(list[JournalEntry])


class JournalPersistence(Protocol):
    """What JournalService needs from its storage."""

    def load(self) -> list[JournalEntry] | None: ...

    def save(self, entries: list[JournalEntry]) -> None: ...


class JournalStorage:
    """Key/value backed journal storage on an SQLAlchemy session."""

    def __init__(self, db: Session, key: str | None = None):
        self.db = db
        self.key = key or get_settings().JOURNAL_STORAGE_KEY

    def load(self) -> list[JournalEntry] | None:
        """
        Return the stored entries, or None if nothing is stored yet.

        Raises ValueError if the stored document is not a valid
        journal (bad JSON or wrong shape).
        """
        item = self.db.get(StorageItem, self.key)
        if item is None:
            return None
        return _entries_adapter.validate_json(item.value)

    def save(self, entries: list[JournalEntry]) -> None:
        """Replace the stored document with the given entries."""
        value = json.dumps(
            [
                entry.model_dump(mode="json", by_alias=True, exclude_none=True)
                for entry in entries
            ],
            ensure_ascii=False,
        )
        item = self.db.get(StorageItem, self.key)
        if item is None:
            self.db.add(StorageItem(key=self.key, value=value))
        else:
            item.value = value
        self.db.flush()
