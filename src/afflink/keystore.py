"""Single-slot persistent storage for the affiliate API key."""

from __future__ import annotations

from datetime import UTC, datetime

import sqlalchemy as sa

from afflink.db import KeyValue

API_KEY_NAME = "affiliate_api_key"


class KeyStore:
    """Key-value store over the ``kv_store`` table."""

    def __init__(self, engine: sa.engine.Engine, key_name: str = API_KEY_NAME) -> None:
        self.engine = engine
        self.key_name = key_name

    def get(self) -> str | None:
        with self.engine.connect() as conn:
            return conn.execute(
                sa.select(KeyValue.value).where(KeyValue.key == self.key_name)
            ).scalar()

    def set(self, value: str) -> None:
        now = datetime.now(UTC).isoformat()
        with self.engine.begin() as conn:
            updated = conn.execute(
                sa.update(KeyValue)
                .where(KeyValue.key == self.key_name)
                .values(value=value, updated_at=now)
            )
            if updated.rowcount == 0:
                conn.execute(sa.insert(KeyValue).values(key=self.key_name, value=value, updated_at=now))

    def delete(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(sa.delete(KeyValue).where(KeyValue.key == self.key_name))
