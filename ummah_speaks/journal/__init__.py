from ummah_speaks.journal.format import format_relative, islamic_date_label
from ummah_speaks.journal.models import JournalDraft, JournalEntry, JournalPassage
from ummah_speaks.journal.store import MAX_ENTRIES, JournalStore

__all__ = [
    "MAX_ENTRIES",
    "JournalDraft",
    "JournalEntry",
    "JournalPassage",
    "JournalStore",
    "format_relative",
    "islamic_date_label",
]
