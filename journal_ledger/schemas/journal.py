"""
Pydantic schemas for the journal.

JournalEntry and JournalLine are the stored shape: they are
serialized with camelCase names into the persisted JSON array,
which other parts of the application read directly, so field
names and aliases here must not change.

The *Create / *Update schemas are the request side. They carry
the validation the stored shape deliberately does not: stored
data is loaded as-is, new data is checked at the boundary.
"""

from datetime import date, datetime
from typing import Iterable

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from journal_ledger.models.enums import (
    BalanceType,
    JournalEntryStatus,
    JournalEntryType,
)

# Absorbs floating point rounding only, not real differences.
BALANCE_TOLERANCE = 0.01


def compute_totals(lines: Iterable) -> tuple[float, float, bool]:
    """Return (total_debit, total_credit, is_balanced) for a set of lines."""
    lines = list(lines)
    total_debit = sum(line.debit for line in lines)
    total_credit = sum(line.credit for line in lines)
    return (
        total_debit,
        total_credit,
        abs(total_debit - total_credit) < BALANCE_TOLERANCE,
    )


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


# --- Stored Shape ---

class JournalLine(CamelModel):
    """One debit or credit leg of an entry."""
    id: str
    account_number: str
    account_name: str = ""
    debit: float = 0.0
    credit: float = 0.0
    cost_center: str | None = None
    description: str | None = None


class JournalEntry(CamelModel):
    """
    An atomic, dated booking made of lines.

    total_debit, total_credit and is_balanced are derived from
    lines by the journal service; they are stored only because
    readers of the persisted JSON expect them. Entries are frozen,
    so a change always goes through the service as a new copy.
    """
    id: str
    entry_number: str
    entry_date: date = Field(alias="date")
    posting_date: date
    entry_type: JournalEntryType = Field(alias="type")
    status: JournalEntryStatus
    description: str
    reference: str | None = None
    document_number: str | None = None
    lines: tuple[JournalLine, ...] = ()
    total_debit: float
    total_credit: float
    is_balanced: bool
    created_at: datetime
    created_by: str
    posted_at: datetime | None = None
    posted_by: str | None = None


# --- Request Schemas ---

class JournalLineCreate(CamelModel):
    """
    A line as submitted by a client.

    Amounts must be non-negative and exactly one side carries
    a value. The id may be supplied by the client; otherwise the
    service assigns one.
    """
    id: str | None = None
    account_number: str = Field(min_length=1, max_length=20)
    account_name: str = Field(default="", max_length=255)
    debit: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    credit: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    cost_center: str | None = None
    description: str | None = None

    @model_validator(mode="after")
    def exactly_one_side(self) -> "JournalLineCreate":
        if (self.debit > 0) == (self.credit > 0):
            raise ValueError(
                "a line must carry either a debit or a credit amount, "
                "not both and not neither"
            )
        return self


class JournalEntryCreate(CamelModel):
    """Everything about a new entry except what the service derives."""
    entry_date: date = Field(alias="date")
    posting_date: date | None = None
    entry_type: JournalEntryType = Field(
        default=JournalEntryType.STANDARD, alias="type"
    )
    status: JournalEntryStatus = JournalEntryStatus.DRAFT
    description: str = Field(min_length=1, max_length=500)
    reference: str | None = Field(default=None, max_length=100)
    document_number: str | None = Field(default=None, max_length=100)
    lines: list[JournalLineCreate] = Field(default_factory=list)
    created_by: str = Field(min_length=1, max_length=255)
    posted_at: datetime | None = None
    posted_by: str | None = None

    @field_validator("entry_type")
    @classmethod
    def no_manual_reversals(cls, v: JournalEntryType) -> JournalEntryType:
        if v == JournalEntryType.REVERSAL:
            raise ValueError(
                "reversal entries are created by reversing a posted entry"
            )
        return v

    @model_validator(mode="after")
    def check_initial_status(self) -> "JournalEntryCreate":
        if self.status == JournalEntryStatus.REVERSED:
            raise ValueError("an entry cannot be created as reversed")
        if self.status == JournalEntryStatus.POSTED:
            _, _, balanced = compute_totals(self.lines)
            if not balanced:
                raise ValueError(
                    "an entry created as posted must have balanced lines"
                )
        return self


class JournalEntryUpdate(CamelModel):
    """
    Editable content of a draft.

    Identity, numbering, audit fields and status are not part of
    this schema, so an update can never touch them.
    """
    entry_date: date | None = Field(default=None, alias="date")
    posting_date: date | None = None
    entry_type: JournalEntryType | None = Field(default=None, alias="type")
    description: str | None = Field(default=None, min_length=1, max_length=500)
    reference: str | None = Field(default=None, max_length=100)
    document_number: str | None = Field(default=None, max_length=100)
    lines: list[JournalLineCreate] | None = None

    @field_validator("entry_type")
    @classmethod
    def no_manual_reversals(
        cls, v: JournalEntryType | None
    ) -> JournalEntryType | None:
        if v == JournalEntryType.REVERSAL:
            raise ValueError(
                "reversal entries are created by reversing a posted entry"
            )
        return v


class PostEntryRequest(CamelModel):
    posted_by: str = Field(min_length=1, max_length=255)


class ReverseEntryRequest(CamelModel):
    reversed_by: str = Field(min_length=1, max_length=255)
    reversal_date: date


class JournalFilter(CamelModel):
    """Criteria for filter_entries. Unset criteria match everything."""
    start_date: date | None = None
    end_date: date | None = None
    status: JournalEntryStatus | None = None
    search_query: str | None = None


# --- Response Schemas ---

class JournalSummary(CamelModel):
    total_entries: int
    draft_entries: int
    posted_entries: int
    total_debit: float


class NextEntryNumberResponse(CamelModel):
    entry_number: str


class AccountBalance(CamelModel):
    """One row of the trial balance."""
    account_number: str
    account_name: str
    total_debit: float
    total_credit: float
    balance: float
    balance_type: BalanceType


class IntegrityReport(CamelModel):
    total_debit: float
    total_credit: float
    difference: float
    is_balanced: bool
