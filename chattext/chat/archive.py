"""Persistent archive of delivered messages with SQLite backend."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from chattext.text import codec
from chattext.text.component import TextComponent
from chattext.utils.logging import get_logger

log = get_logger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS messages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    dispatch_id INTEGER NOT NULL,
    channel TEXT NOT NULL DEFAULT 'chat',
    payload TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_messages_dispatch_id ON messages (dispatch_id);
"""


class MessageArchive:
    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def start(self) -> None:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(str(self._db_path))
        await self._db.executescript(_SCHEMA)
        await self._db.commit()
        log.info("archive_opened", path=str(self._db_path))

    async def stop(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    async def save(self, component: TextComponent, channel: str = "chat") -> int:
        """Store ``component`` in its wire encoding; returns the row id."""
        assert self._db is not None
        now = datetime.now(timezone.utc).isoformat()
        cursor = await self._db.execute(
            "INSERT INTO messages (dispatch_id, channel, payload, created_at) "
            "VALUES (?, ?, ?, ?)",
            (component.dispatch_id, channel, codec.dumps(component), now),
        )
        await self._db.commit()
        return cursor.lastrowid

    async def load(self, dispatch_id: int) -> TextComponent | None:
        """Most recently archived message with ``dispatch_id``."""
        assert self._db is not None
        cursor = await self._db.execute(
            "SELECT payload FROM messages WHERE dispatch_id = ? ORDER BY id DESC LIMIT 1",
            (dispatch_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return codec.loads(row[0])

    async def recent(self, limit: int = 20, channel: str | None = None) -> list[TextComponent]:
        """Newest first."""
        assert self._db is not None
        if channel is None:
            cursor = await self._db.execute(
                "SELECT payload FROM messages ORDER BY id DESC LIMIT ?", (limit,)
            )
        else:
            cursor = await self._db.execute(
                "SELECT payload FROM messages WHERE channel = ? ORDER BY id DESC LIMIT ?",
                (channel, limit),
            )
        rows = await cursor.fetchall()
        return [codec.loads(row[0]) for row in rows]

    async def delete(self, dispatch_id: int) -> int:
        assert self._db is not None
        cursor = await self._db.execute(
            "DELETE FROM messages WHERE dispatch_id = ?", (dispatch_id,)
        )
        await self._db.commit()
        return cursor.rowcount
