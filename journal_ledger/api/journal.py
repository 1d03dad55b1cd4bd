"""
Journal API endpoints.

The API layer is thin: it handles HTTP concerns and delegates
all business logic to the JournalService. The service signals a
rejected operation with None/False; the endpoint then asks it
for the failure reason and turns that into a status code.

Each request loads the journal, changes it and commits as one
unit, serialized behind a process-wide lock. Entry numbers are
derived from the current collection, so two requests creating
entries at once would otherwise compute the same number.
"""

import threading
from contextlib import contextmanager
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from journal_ledger.config import get_settings
from journal_ledger.models.base import get_db
from journal_ledger.models.enums import (
    JournalEntryStatus,
    JournalFailure,
    JournalOperation,
)
from journal_ledger.schemas.journal import (
    AccountBalance,
    IntegrityReport,
    JournalEntry,
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalFilter,
    JournalSummary,
    NextEntryNumberResponse,
    PostEntryRequest,
    ReverseEntryRequest,
)
from journal_ledger.services.journal_export import export_to_csv
from journal_ledger.services.journal_service import JournalService
from journal_ledger.services.journal_storage import JournalStorage

router = APIRouter(prefix="/journal", tags=["Journal"])

_journal_lock = threading.Lock()

FAILURE_STATUS_CODES = {
    JournalFailure.NOT_FOUND: 404,
    JournalFailure.INVALID_STATE: 409,
    JournalFailure.UNBALANCED: 422,
}


@contextmanager
def journal_session(db: Session):
    """
    Yield a JournalService and commit when the block succeeds.

    Reads commit too: the first access to an empty journal seeds
    and saves it.
    """
    with _journal_lock:
        service = JournalService(
            JournalStorage(db),
            seed_demo=get_settings().JOURNAL_SEED_DEMO,
        )
        try:
            yield service
            db.commit()
        except Exception:
            db.rollback()
            raise


def raise_for_failure(
    service: JournalService, entry_id: str, operation: JournalOperation
):
    """Translate a rejected operation into an HTTPException."""
    reason = service.failure_reason(entry_id, operation)
    if reason == JournalFailure.NOT_FOUND:
        detail = f"Journal entry {entry_id} not found"
    elif reason == JournalFailure.UNBALANCED:
        detail = f"Journal entry {entry_id} does not balance"
    else:
        entry = service.get_entry(entry_id)
        detail = (
            f"Cannot {operation.value} journal entry {entry_id} "
            f"in status {entry.status.value}"
        )
    raise HTTPException(
        status_code=FAILURE_STATUS_CODES.get(reason, 409), detail=detail
    )


@router.get("/entries", response_model=list[JournalEntry])
def list_entries(
    start_date: date | None = None,
    end_date: date | None = None,
    status: JournalEntryStatus | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
):
    """List entries, optionally filtered by date range, status and search term."""
    criteria = JournalFilter(
        start_date=start_date,
        end_date=end_date,
        status=status,
        search_query=search,
    )
    with journal_session(db) as service:
        return service.filter_entries(criteria)


@router.post("/entries", response_model=JournalEntry, status_code=201)
def create_entry(
    request: JournalEntryCreate,
    db: Session = Depends(get_db),
):
    """
    Create a journal entry.

    Totals, balance flag, id and entry number are derived by the
    service. Unbalanced drafts are accepted; they cannot be posted
    until corrected.
    """
    with journal_session(db) as service:
        return service.create_entry(request)


@router.get("/entries/{entry_id}", response_model=JournalEntry)
def get_entry(
    entry_id: str,
    db: Session = Depends(get_db),
):
    with journal_session(db) as service:
        entry = service.get_entry(entry_id)
    if entry is None:
        raise HTTPException(
            status_code=404, detail=f"Journal entry {entry_id} not found"
        )
    return entry


@router.patch("/entries/{entry_id}", response_model=JournalEntry)
def update_entry(
    entry_id: str,
    request: JournalEntryUpdate,
    db: Session = Depends(get_db),
):
    """Edit a draft. Posted and reversed entries are immutable."""
    with journal_session(db) as service:
        entry = service.update_entry(entry_id, request)
        if entry is None:
            raise_for_failure(service, entry_id, JournalOperation.UPDATE)
        return entry


@router.post("/entries/{entry_id}/post", response_model=JournalEntry)
def post_entry(
    entry_id: str,
    request: PostEntryRequest,
    db: Session = Depends(get_db),
):
    """Post a balanced draft to the ledger."""
    with journal_session(db) as service:
        if not service.post_entry(entry_id, request.posted_by):
            raise_for_failure(service, entry_id, JournalOperation.POST)
        return service.get_entry(entry_id)


@router.post(
    "/entries/{entry_id}/reverse",
    response_model=JournalEntry,
    status_code=201,
)
def reverse_entry(
    entry_id: str,
    request: ReverseEntryRequest,
    db: Session = Depends(get_db),
):
    """
    Reverse a posted entry.

    Returns the new reversal entry; the original is marked reversed.
    """
    with journal_session(db) as service:
        reversal = service.reverse_entry(
            entry_id, request.reversed_by, request.reversal_date
        )
        if reversal is None:
            raise_for_failure(service, entry_id, JournalOperation.REVERSE)
        return reversal


@router.delete("/entries/{entry_id}", status_code=204)
def delete_entry(
    entry_id: str,
    db: Session = Depends(get_db),
):
    """Delete a draft. Anything already posted must be reversed instead."""
    with journal_session(db) as service:
        if not service.delete_entry(entry_id):
            raise_for_failure(service, entry_id, JournalOperation.DELETE)
    return Response(status_code=204)


@router.get("/next-entry-number", response_model=NextEntryNumberResponse)
def get_next_entry_number(db: Session = Depends(get_db)):
    """Preview the number the next created entry will receive."""
    with journal_session(db) as service:
        return NextEntryNumberResponse(
            entry_number=service.get_next_entry_number()
        )


@router.get("/summary", response_model=JournalSummary)
def get_summary(db: Session = Depends(get_db)):
    with journal_session(db) as service:
        return service.get_summary()


@router.get("/balances", response_model=list[AccountBalance])
def get_account_balances(
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
):
    """
    Trial balance per account.

    Balances are calculated from posted entries, not stored.
    """
    with journal_session(db) as service:
        return service.account_balances(start_date, end_date)


@router.get("/integrity", response_model=IntegrityReport)
def check_integrity(db: Session = Depends(get_db)):
    """Verify that total debits equal total credits across the ledger."""
    with journal_session(db) as service:
        return service.check_integrity()


@router.get("/export")
def export_journal(db: Session = Depends(get_db)):
    """Export every journal line as semicolon-delimited text."""
    with journal_session(db) as service:
        content = export_to_csv(service.list_entries())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="journal.csv"'},
    )
