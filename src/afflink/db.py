"""Database engine, ORM models, and connection management."""

from __future__ import annotations

from pathlib import Path

import sqlalchemy as sa
from sqlalchemy import event
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class KeyValue(Base):
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(sa.Text, primary_key=True)
    value: Mapped[str] = mapped_column(sa.Text, nullable=False)
    updated_at: Mapped[str | None] = mapped_column(sa.Text, nullable=True)


def _set_sqlite_pragmas(dbapi_conn, connection_record):  # noqa: N802
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def get_engine(database_url: str) -> sa.engine.Engine:
    """Create a SQLAlchemy engine; SQLite files get their directory created."""
    url = sa.engine.make_url(database_url)
    is_sqlite = url.get_backend_name() == "sqlite"
    if is_sqlite and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = sa.create_engine(url, echo=False)
    if is_sqlite:
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def init_db(engine: sa.engine.Engine) -> None:
    """Create tables that do not exist yet."""
    Base.metadata.create_all(engine)
