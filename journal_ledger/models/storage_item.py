"""
Key/value storage model.

The journal is persisted the way the browser client kept it:
one JSON document under a fixed key. Each row holds one such
document and is always rewritten as a whole.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from journal_ledger.models.base import Base


class StorageItem(Base):
    __tablename__ = "storage_items"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    def __repr__(self) -> str:
        return f"<StorageItem {self.key} ({len(self.value)} bytes)>"
