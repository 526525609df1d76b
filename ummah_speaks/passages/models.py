from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

_WS_RE = re.compile(r"\s+")


def _clean(value: str | None) -> str:
    return (value or "").strip()


def _collapse(value: str | None) -> str:
    return _WS_RE.sub(" ", _clean(value))


class Passage(BaseModel):
    """A retrieved hadith plus the metadata shown alongside it."""

    model_config = ConfigDict(frozen=True)

    header: str = ""
    text: str
    reference: str = ""
    source: str = ""
    collection: str = ""
    book_name: str = ""
    chapter_name: str = ""
    number: int | None = None


class RawPassage(BaseModel):
    """One search result as returned by the hadith API."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int | None = None
    header: str | None = None
    hadith_english: str | None = None
    book: str | None = None
    refno: str | None = None
    book_name: str | None = Field(default=None, alias="bookName")
    chapter_name: str | None = Field(default=None, alias="chapterName")
    collection: str | None = None

    def to_passage(self) -> Passage:
        return Passage(
            header=_clean(self.header),
            text=_clean(self.hadith_english),
            reference=self.refno or "",
            source=self.book or "",
            collection=self.collection or "",
            book_name=_collapse(self.book_name),
            chapter_name=_collapse(self.chapter_name),
            number=self.id,
        )
