"""
Demo bookings written on first use of an empty journal.

Kept in the persisted camelCase shape so they read exactly like
what the storage layer writes.
"""

from journal_ledger.schemas.journal import JournalEntry

DEMO_ENTRIES = [
    {
        "id": "je-1",
        "entryNumber": "BU-2024-0001",
        "date": "2024-01-15",
        "postingDate": "2024-01-15",
        "type": "standard",
        "status": "posted",
        "description": "Wareneingang Lieferant Müller",
        "reference": "RE-2024-001",
        "lines": [
            {"id": "l1", "accountNumber": "3000", "accountName": "Waren", "debit": 5000, "credit": 0},
            {"id": "l2", "accountNumber": "1576", "accountName": "Vorsteuer 19%", "debit": 950, "credit": 0},
            {"id": "l3", "accountNumber": "1600", "accountName": "Verbindlichkeiten", "debit": 0, "credit": 5950},
        ],
        "totalDebit": 5950,
        "totalCredit": 5950,
        "isBalanced": True,
        "createdAt": "2024-01-15T10:00:00Z",
        "createdBy": "Max Mustermann",
        "postedAt": "2024-01-15T10:30:00Z",
        "postedBy": "Max Mustermann",
    },
    {
        "id": "je-2",
        "entryNumber": "BU-2024-0002",
        "date": "2024-01-20",
        "postingDate": "2024-01-20",
        "type": "standard",
        "status": "posted",
        "description": "Kundenrechnung Schmidt GmbH",
        "reference": "AR-2024-015",
        "lines": [
            {"id": "l4", "accountNumber": "1200", "accountName": "Forderungen", "debit": 11900, "credit": 0},
            {"id": "l5", "accountNumber": "8400", "accountName": "Erlöse 19%", "debit": 0, "credit": 10000},
            {"id": "l6", "accountNumber": "1776", "accountName": "Umsatzsteuer 19%", "debit": 0, "credit": 1900},
        ],
        "totalDebit": 11900,
        "totalCredit": 11900,
        "isBalanced": True,
        "createdAt": "2024-01-20T14:00:00Z",
        "createdBy": "Max Mustermann",
        "postedAt": "2024-01-20T14:15:00Z",
        "postedBy": "Max Mustermann",
    },
]


def demo_entries() -> list[JournalEntry]:
    """Return fresh copies of the demo entries."""
    return [JournalEntry.model_validate(data) for data in DEMO_ENTRIES]
