from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from ummah_speaks.passages.models import Passage


class JournalPassage(BaseModel):
    """The part of a passage worth keeping in the journal."""

    model_config = ConfigDict(frozen=True)

    text: str
    collection: str = ""
    book_name: str = ""
    chapter_name: str = ""
    number: int | None = None

    @classmethod
    def from_passage(cls, passage: Passage) -> JournalPassage:
        return cls(
            text=passage.text,
            collection=passage.collection,
            book_name=passage.book_name,
            chapter_name=passage.chapter_name,
            number=passage.number,
        )


class JournalDraft(BaseModel):
    """A completed run, before the store gives it an id and timestamp."""

    model_config = ConfigDict(frozen=True)

    date_label: str = ""
    name: str
    feeling: str
    label: str
    passage: JournalPassage
    reflection: str


class JournalEntry(JournalDraft):
    id: str
    timestamp: datetime
