from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from ummah_speaks.storage.base import KeyValueStorage


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    pass


class KeyValueRow(Base):
    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )


class SQLiteStorage(KeyValueStorage):
    """Key-value storage in a single SQLite table."""

    def __init__(self, path: str = ":memory:") -> None:
        if path == ":memory:":
            url = "sqlite:///:memory:"
        else:
            url = f"sqlite:///{path}"
        self._engine = create_engine(url, echo=False)
        self._session_factory = sessionmaker(bind=self._engine)
        Base.metadata.create_all(self._engine)

    def get(self, key: str) -> str | None:
        with self._session_factory() as session:
            row = session.get(KeyValueRow, key)
            return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory.begin() as session:
            row = session.get(KeyValueRow, key)
            if row is None:
                session.add(KeyValueRow(key=key, value=value))
            else:
                row.value = value

    def remove(self, key: str) -> None:
        with self._session_factory.begin() as session:
            row = session.get(KeyValueRow, key)
            if row is not None:
                session.delete(row)

    def close(self) -> None:
        self._engine.dispose()
