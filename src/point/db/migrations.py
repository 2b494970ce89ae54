"""SQLite migrations for the release store."""

from __future__ import annotations

import aiosqlite

SCHEMA_VERSION = 1


async def apply_migrations(conn: aiosqlite.Connection) -> None:
    """Create release tables if missing and set schema version."""
    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version INTEGER PRIMARY KEY
        )
        """
    )

    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS compiled_releases (
            cpid TEXT NOT NULL,
            ocid TEXT NOT NULL,
            release_date TEXT NOT NULL,
            stage TEXT NOT NULL,
            status TEXT NOT NULL,
            json_data TEXT NOT NULL,
            PRIMARY KEY (cpid, ocid)
        )
        """
    )

    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS release_history (
            cpid TEXT NOT NULL,
            ocid TEXT NOT NULL,
            release_date TEXT NOT NULL,
            stage TEXT NOT NULL,
            status TEXT NOT NULL,
            json_data TEXT NOT NULL
        )
        """
    )

    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS tender_offsets (
            cpid TEXT NOT NULL,
            date TEXT NOT NULL,
            status TEXT NOT NULL
        )
        """
    )

    await conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_release_history_key ON release_history(cpid, ocid)"
    )
    await conn.execute("CREATE INDEX IF NOT EXISTS idx_tender_offsets_date ON tender_offsets(date)")

    await conn.execute("DELETE FROM schema_migrations")
    await conn.execute("INSERT INTO schema_migrations(version) VALUES (?)", (SCHEMA_VERSION,))
    await conn.commit()
