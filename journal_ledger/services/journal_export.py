"""
Journal export for spreadsheet tooling.

One semicolon-delimited row per journal line. The description
is written on an entry's first line only, amounts always carry
two decimals, type and status use their German labels.
"""

import csv
import io
from typing import Iterable

from journal_ledger.models.enums import ENTRY_STATUS_LABELS, ENTRY_TYPE_LABELS
from journal_ledger.schemas.journal import JournalEntry

EXPORT_COLUMNS = [
    "Buchungsnr",
    "Datum",
    "Typ",
    "Status",
    "Beschreibung",
    "Konto",
    "Soll",
    "Haben",
]


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def export_to_csv(entries: Iterable[JournalEntry]) -> str:
    """Render entries as semicolon-delimited text, rows joined by newlines."""
    output = io.StringIO()
    writer = csv.writer(output, delimiter=";", lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)

    for entry in entries:
        for index, line in enumerate(entry.lines):
            writer.writerow([
                entry.entry_number,
                entry.entry_date.isoformat(),
                ENTRY_TYPE_LABELS[entry.entry_type],
                ENTRY_STATUS_LABELS[entry.status],
                entry.description if index == 0 else "",
                line.account_number,
                format_amount(line.debit),
                format_amount(line.credit),
            ])

    return output.getvalue().removesuffix("\n")
