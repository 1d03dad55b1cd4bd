"""
Shared enumerations for the journal.

Type and status are closed sets. Every lookup table keyed by
one of them must cover all members; _require_total checks that
when this module is imported, so adding a member without a
label fails immediately instead of at export time.
"""

import enum


class JournalEntryType(str, enum.Enum):
    """Kind of booking an entry represents."""
    STANDARD = "standard"
    OPENING = "opening"
    CLOSING = "closing"
    ADJUSTMENT = "adjustment"
    REVERSAL = "reversal"


class JournalEntryStatus(str, enum.Enum):
    """Lifecycle state of an entry."""
    DRAFT = "draft"
    POSTED = "posted"
    REVERSED = "reversed"


class JournalOperation(str, enum.Enum):
    """Mutating operations gated by the entry state machine."""
    UPDATE = "update"
    DELETE = "delete"
    POST = "post"
    REVERSE = "reverse"


class JournalFailure(str, enum.Enum):
    """Why a mutating operation was rejected."""
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    UNBALANCED = "unbalanced"


class BalanceType(str, enum.Enum):
    """Side on which an account balance falls."""
    DEBIT = "debit"
    CREDIT = "credit"
    ZERO = "zero"


def _require_total(mapping: dict, enum_cls: type[enum.Enum]) -> dict:
    missing = set(enum_cls) - set(mapping)
    if missing:
        names = ", ".join(sorted(m.value for m in missing))
        raise RuntimeError(f"{enum_cls.__name__} has no entry for: {names}")
    return mapping


ENTRY_TYPE_LABELS: dict[JournalEntryType, str] = _require_total({
    JournalEntryType.STANDARD: "Standard",
    JournalEntryType.OPENING: "Eröffnung",
    JournalEntryType.CLOSING: "Abschluss",
    JournalEntryType.ADJUSTMENT: "Korrektur",
    JournalEntryType.REVERSAL: "Storno",
}, JournalEntryType)

ENTRY_STATUS_LABELS: dict[JournalEntryStatus, str] = _require_total({
    JournalEntryStatus.DRAFT: "Entwurf",
    JournalEntryStatus.POSTED: "Gebucht",
    JournalEntryStatus.REVERSED: "Storniert",
}, JournalEntryStatus)

# Source status each operation requires
REQUIRED_STATUS: dict[JournalOperation, JournalEntryStatus] = _require_total({
    JournalOperation.UPDATE: JournalEntryStatus.DRAFT,
    JournalOperation.DELETE: JournalEntryStatus.DRAFT,
    JournalOperation.POST: JournalEntryStatus.DRAFT,
    JournalOperation.REVERSE: JournalEntryStatus.POSTED,
}, JournalOperation)
