"""
Journal service, the ledger store.

This service owns the collection of journal entries and is the
only code that changes it. It enforces:
1. Totals and is_balanced are always derived from the lines
2. Only balanced drafts can be posted
3. Only drafts can be edited or deleted
4. Posted entries are corrected by reversal, never by editing
5. Entry numbers are assigned once and never change

Disallowed operations do not raise. They change nothing and
return None or False; failure_reason() tells the caller why.

Every successful mutation builds the new collection, hands it
to storage as a whole, and only then replaces the in-memory
state, so a failed save leaves the service unchanged.
"""

import uuid
from datetime import date, datetime, timezone
from typing import Callable

from journal_ledger.logger_config import logger
from journal_ledger.models.enums import (
    REQUIRED_STATUS,
    BalanceType,
    JournalEntryStatus,
    JournalEntryType,
    JournalFailure,
    JournalOperation,
)
from journal_ledger.schemas.journal import (
    BALANCE_TOLERANCE,
    AccountBalance,
    IntegrityReport,
    JournalEntry,
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalFilter,
    JournalLine,
    JournalLineCreate,
    JournalSummary,
    compute_totals,
)
from journal_ledger.services.demo_entries import demo_entries
from journal_ledger.services.journal_storage import JournalPersistence

# Statuses whose entries are part of the permanent ledger
LEDGER_STATUSES = {JournalEntryStatus.POSTED, JournalEntryStatus.REVERSED}

# Optional fields an update may explicitly clear
CLEARABLE_FIELDS = {"reference", "document_number"}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JournalService:
    """
    All journal operations pass through this service.

    The service takes a storage object as a constructor argument.
    Entries are loaded on first access; an empty storage is seeded
    (with the demo entries unless seed_demo is False) and saved.
    """

    def __init__(
        self,
        storage: JournalPersistence,
        clock: Callable[[], datetime] | None = None,
        seed_demo: bool = True,
    ):
        self.storage = storage
        self.clock = clock or _utcnow
        self.seed_demo = seed_demo
        self._entries: list[JournalEntry] | None = None

    # --- Loading and saving ---

    @property
    def entries(self) -> list[JournalEntry]:
        if self._entries is None:
            self._entries = self._load()
        return self._entries

    def _initial_entries(self) -> list[JournalEntry]:
        return demo_entries() if self.seed_demo else []

    def _load(self) -> list[JournalEntry]:
        try:
            stored = self.storage.load()
        except ValueError:
            # Keep the unreadable document until the next save replaces it
            logger.exception("Error loading journal, using initial entries")
            return self._initial_entries()

        if stored is None:
            entries = self._initial_entries()
            self.storage.save(entries)
            logger.info(f"Journal initialised with {len(entries)} entries")
            return entries
        return stored

    def _commit(self, entries: list[JournalEntry]) -> None:
        self.storage.save(entries)
        self._entries = entries

    # --- State machine ---

    def failure_reason(
        self, entry_id: str, operation: JournalOperation
    ) -> JournalFailure | None:
        """Return why `operation` on `entry_id` would be rejected, or None."""
        entry = self.get_entry(entry_id)
        if entry is None:
            return JournalFailure.NOT_FOUND
        if entry.status != REQUIRED_STATUS[operation]:
            return JournalFailure.INVALID_STATE
        if operation == JournalOperation.POST and not entry.is_balanced:
            return JournalFailure.UNBALANCED
        return None

    def _rejected(self, entry_id: str, operation: JournalOperation) -> bool:
        reason = self.failure_reason(entry_id, operation)
        if reason is None:
            return False
        logger.warning(
            f"Rejected {operation.value} of journal entry {entry_id}: "
            f"{reason.value}"
        )
        return True

    # --- Reads ---

    def list_entries(self) -> list[JournalEntry]:
        """Return all entries in store order."""
        return list(self.entries)

    def get_entry(self, entry_id: str) -> JournalEntry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def get_next_entry_number(self) -> str:
        """
        Compute the number the next created entry would get.

        The sequence is the count of this year's entries plus one.
        Nothing is reserved: the number is derived again on every
        call, so callers that create entries concurrently must be
        serialized.
        """
        year = self.clock().year
        marker = f"-{year}-"
        count = sum(1 for e in self.entries if marker in e.entry_number)
        return f"BU-{year}-{count + 1:04d}"

    def filter_entries(
        self, criteria: JournalFilter | None = None
    ) -> list[JournalEntry]:
        """
        Return the entries matching all given criteria.

        Dates are compared inclusively against the entry date. The
        search term matches description, entry number or any line's
        account number, ignoring case.
        """
        criteria = criteria or JournalFilter()
        query = (criteria.search_query or "").lower()

        result = []
        for entry in self.entries:
            if criteria.start_date and entry.entry_date < criteria.start_date:
                continue
            if criteria.end_date and entry.entry_date > criteria.end_date:
                continue
            if criteria.status and entry.status != criteria.status:
                continue
            if query and not (
                query in entry.description.lower()
                or query in entry.entry_number.lower()
                or any(query in line.account_number.lower()
                       for line in entry.lines)
            ):
                continue
            result.append(entry)
        return result

    def get_summary(self) -> JournalSummary:
        posted = [
            e for e in self.entries if e.status == JournalEntryStatus.POSTED
        ]
        return JournalSummary(
            total_entries=len(self.entries),
            draft_entries=sum(
                1 for e in self.entries if e.status == JournalEntryStatus.DRAFT
            ),
            posted_entries=len(posted),
            total_debit=sum(e.total_debit for e in posted),
        )

    def account_balances(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[AccountBalance]:
        """
        Build the trial balance from the permanent ledger.

        Reversed entries still count: their effect is cancelled by
        the posted reversal, not by dropping them. Drafts are not
        part of the ledger.
        """
        totals: dict[str, dict] = {}
        for entry in self.entries:
            if entry.status not in LEDGER_STATUSES:
                continue
            if start_date and entry.entry_date < start_date:
                continue
            if end_date and entry.entry_date > end_date:
                continue
            for line in entry.lines:
                row = totals.setdefault(line.account_number, {
                    "account_name": line.account_name,
                    "debit": 0.0,
                    "credit": 0.0,
                })
                row["debit"] += line.debit
                row["credit"] += line.credit

        balances = []
        for account_number in sorted(totals):
            row = totals[account_number]
            balance = row["debit"] - row["credit"]
            if abs(balance) < BALANCE_TOLERANCE:
                balance_type = BalanceType.ZERO
            elif balance > 0:
                balance_type = BalanceType.DEBIT
            else:
                balance_type = BalanceType.CREDIT
            balances.append(AccountBalance(
                account_number=account_number,
                account_name=row["account_name"],
                total_debit=row["debit"],
                total_credit=row["credit"],
                balance=balance,
                balance_type=balance_type,
            ))
        return balances

    def check_integrity(self) -> IntegrityReport:
        """Verify that the whole ledger balances."""
        ledger = [e for e in self.entries if e.status in LEDGER_STATUSES]
        total_debit = sum(e.total_debit for e in ledger)
        total_credit = sum(e.total_credit for e in ledger)
        difference = abs(total_debit - total_credit)
        return IntegrityReport(
            total_debit=total_debit,
            total_credit=total_credit,
            difference=difference,
            is_balanced=difference < BALANCE_TOLERANCE,
        )

    # --- Mutations ---

    @staticmethod
    def _to_line(line: JournalLineCreate) -> JournalLine:
        return JournalLine(
            id=line.id or f"l-{uuid.uuid4().hex}",
            **line.model_dump(exclude={"id"}),
        )

    def create_entry(self, data: JournalEntryCreate) -> JournalEntry:
        """
        Create an entry and append it to the journal.

        Totals and is_balanced come from the lines; id, entry number
        and created_at are assigned here. An unbalanced entry is a
        normal draft, it just cannot be posted.
        """
        lines = [self._to_line(line) for line in data.lines]
        total_debit, total_credit, is_balanced = compute_totals(lines)
        now = self.clock()

        posted_at, posted_by = data.posted_at, data.posted_by
        if data.status == JournalEntryStatus.POSTED:
            posted_at = posted_at or now
            posted_by = posted_by or data.created_by

        entry = JournalEntry(
            id=f"je-{uuid.uuid4().hex}",
            entry_number=self.get_next_entry_number(),
            entry_date=data.entry_date,
            posting_date=data.posting_date or data.entry_date,
            entry_type=data.entry_type,
            status=data.status,
            description=data.description,
            reference=data.reference,
            document_number=data.document_number,
            lines=lines,
            total_debit=total_debit,
            total_credit=total_credit,
            is_balanced=is_balanced,
            created_at=now,
            created_by=data.created_by,
            posted_at=posted_at,
            posted_by=posted_by,
        )
        self._commit([*self.entries, entry])
        logger.info(
            f"Created journal entry {entry.entry_number} ({entry.status.value}, "
            f"balanced={entry.is_balanced})"
        )
        return entry

    def update_entry(
        self, entry_id: str, updates: JournalEntryUpdate
    ) -> JournalEntry | None:
        """
        Apply updates to a draft and recompute its totals.

        Returns None if the entry does not exist or is not a draft.
        """
        if self._rejected(entry_id, JournalOperation.UPDATE):
            return None
        entry = self.get_entry(entry_id)

        changes = {
            name: value
            for name, value in updates.model_dump(
                exclude_unset=True, exclude={"lines"}
            ).items()
            if value is not None or name in CLEARABLE_FIELDS
        }
        if updates.lines is not None:
            lines = tuple(self._to_line(line) for line in updates.lines)
        else:
            lines = entry.lines
        total_debit, total_credit, is_balanced = compute_totals(lines)

        updated = entry.model_copy(update={
            **changes,
            "lines": lines,
            "total_debit": total_debit,
            "total_credit": total_credit,
            "is_balanced": is_balanced,
        })
        self._commit([updated if e.id == entry_id else e for e in self.entries])
        logger.info(f"Updated journal entry {updated.entry_number}")
        return updated

    def post_entry(self, entry_id: str, posted_by: str) -> bool:
        """
        Post a balanced draft.

        This is the only way into POSTED for an existing entry.
        Returns False if the entry does not exist, is not a draft,
        or is not balanced.
        """
        if self._rejected(entry_id, JournalOperation.POST):
            return False
        entry = self.get_entry(entry_id)

        posted = entry.model_copy(update={
            "status": JournalEntryStatus.POSTED,
            "posted_at": self.clock(),
            "posted_by": posted_by,
        })
        self._commit([posted if e.id == entry_id else e for e in self.entries])
        logger.info(f"Posted journal entry {entry.entry_number} by {posted_by}")
        return True

    def reverse_entry(
        self, entry_id: str, reversed_by: str, reversal_date: date
    ) -> JournalEntry | None:
        """
        Cancel a posted entry with an offsetting reversal ("Storno").

        The original becomes REVERSED and is otherwise untouched. The
        reversal is created already posted, with every line's debit
        and credit swapped, and references the original's entry
        number. Both changes are saved together.

        Returns the reversal, or None if the entry does not exist or
        is not posted.
        """
        if self._rejected(entry_id, JournalOperation.REVERSE):
            return None
        entry = self.get_entry(entry_id)
        now = self.clock()

        reversal = JournalEntry(
            id=f"je-rev-{uuid.uuid4().hex}",
            entry_number=self.get_next_entry_number(),
            entry_date=reversal_date,
            posting_date=reversal_date,
            entry_type=JournalEntryType.REVERSAL,
            status=JournalEntryStatus.POSTED,
            description=f"Storno: {entry.description}",
            reference=entry.entry_number,
            lines=[
                line.model_copy(update={
                    "id": f"rev-{line.id}",
                    "debit": line.credit,
                    "credit": line.debit,
                })
                for line in entry.lines
            ],
            total_debit=entry.total_credit,
            total_credit=entry.total_debit,
            is_balanced=True,
            created_at=now,
            created_by=reversed_by,
            posted_at=now,
            posted_by=reversed_by,
        )
        reversed_original = entry.model_copy(
            update={"status": JournalEntryStatus.REVERSED}
        )
        self._commit([
            *(reversed_original if e.id == entry_id else e for e in self.entries),
            reversal,
        ])
        logger.info(
            f"Reversed journal entry {entry.entry_number} with "
            f"{reversal.entry_number} by {reversed_by}"
        )
        return reversal

    def delete_entry(self, entry_id: str) -> bool:
        """Remove a draft permanently. Returns False for anything else."""
        if self._rejected(entry_id, JournalOperation.DELETE):
            return False
        entry = self.get_entry(entry_id)

        self._commit([e for e in self.entries if e.id != entry_id])
        logger.info(f"Deleted draft journal entry {entry.entry_number}")
        return True
