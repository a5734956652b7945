"""SQLite option store with TTL-bearing transients.

Holds the persisted settings (API key, default informer ID) and the cached
directory snapshots. Transients expire lazily: an entry past its
``expires_at`` is reported as missing on read and is never swept in the
background.

All operations catch ``aiosqlite.Error`` internally and degrade gracefully:
read failures return the caller's default (treated as a cache miss), write
failures are logged and ignored. Infrastructure errors never cross the
OptionStore class boundary.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import Any

import aiosqlite
import structlog

from meteoprog_informers.models.cache import TransientEntry

log = structlog.get_logger()

_CREATE_OPTIONS_TABLE = """
CREATE TABLE IF NOT EXISTS options (
    name   TEXT PRIMARY KEY,
    value  TEXT NOT NULL
)
"""

_CREATE_TRANSIENTS_TABLE = """
CREATE TABLE IF NOT EXISTS transients (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    stored_at   TEXT NOT NULL,
    expires_at  TEXT NOT NULL
)
"""

_CREATE_TRANSIENT_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_transients_expires ON transients(expires_at)"
)


class OptionStore:
    """aiosqlite-backed key-value store for options and transients."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def init_db(self) -> None:
        """Create tables and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_OPTIONS_TABLE)
        await self._db.execute(_CREATE_TRANSIENTS_TABLE)
        await self._db.execute(_CREATE_TRANSIENT_INDEX)
        await self._db.commit()

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    async def get_option(self, name: str, default: str = "") -> str:
        """Read an option. Returns ``default`` when unset or on read failure."""
        try:
            cursor = await self._db.execute("SELECT value FROM options WHERE name = ?", (name,))
            row = await cursor.fetchone()
        except aiosqlite.Error:
            log.warning("option_read_error", name=name, exc_info=True)
            return default
        if row is None:
            return default
        return row[0]

    async def update_option(self, name: str, value: str) -> None:
        """Write an option. Non-fatal on failure."""
        try:
            await self._db.execute(
                "INSERT OR REPLACE INTO options (name, value) VALUES (?, ?)",
                (name, value),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("option_write_error", name=name, exc_info=True)

    async def delete_option(self, name: str) -> None:
        try:
            await self._db.execute("DELETE FROM options WHERE name = ?", (name,))
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("option_delete_error", name=name, exc_info=True)

    # ------------------------------------------------------------------
    # Transients
    # ------------------------------------------------------------------

    async def get_transient_entry(self, key: str) -> TransientEntry | None:
        """Read a live transient. Expired, missing or unreadable entries give ``None``."""
        try:
            cursor = await self._db.execute(
                "SELECT key, value, stored_at, expires_at FROM transients WHERE key = ?",
                (key,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error:
            log.warning("transient_read_error", key=key, exc_info=True)
            return None
        if row is None:
            return None

        expires_at = datetime.fromisoformat(row[3])
        if datetime.now(UTC) >= expires_at:
            return None

        try:
            value = json.loads(row[1])
        except json.JSONDecodeError:
            log.warning("transient_decode_error", key=key)
            return None

        return TransientEntry(
            key=row[0],
            value=value,
            stored_at=datetime.fromisoformat(row[2]),
            expires_at=expires_at,
        )

    async def get_transient(self, key: str) -> Any | None:
        entry = await self.get_transient_entry(key)
        return None if entry is None else entry.value

    async def set_transient(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Write a transient with a TTL. Non-fatal on failure."""
        try:
            now = datetime.now(UTC)
            expires_at = now + timedelta(seconds=ttl_seconds)
            await self._db.execute(
                "INSERT OR REPLACE INTO transients (key, value, stored_at, expires_at) "
                "VALUES (?, ?, ?, ?)",
                (key, json.dumps(value), now.isoformat(), expires_at.isoformat()),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("transient_write_error", key=key, exc_info=True)

    async def delete_transient(self, key: str) -> None:
        try:
            await self._db.execute("DELETE FROM transients WHERE key = ?", (key,))
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("transient_delete_error", key=key, exc_info=True)
