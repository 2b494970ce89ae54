"""Async SQLite access to published releases and offsets."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import aiosqlite

from point.db.migrations import apply_migrations
from point.models.release import OffsetRecord, ReleaseRecord, ReleaseStatus, as_utc

logger = logging.getLogger(__name__)


class StorageUnavailableError(RuntimeError):
    """The release database could not be read."""


def _stamp(value: datetime) -> str:
    # Fixed width keeps lexical order equal to time order.
    return as_utc(value).isoformat(timespec="microseconds")


class SQLiteStore:
    """Query interface over compiled releases, release history and offsets."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._migrated = False

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        try:
            conn = await aiosqlite.connect(self._db_path)
        except aiosqlite.Error as exc:
            logger.warning("cannot open release store %s: %s", self._db_path, exc)
            raise StorageUnavailableError(str(exc)) from exc
        conn.row_factory = aiosqlite.Row
        try:
            if not self._migrated:
                await apply_migrations(conn)
                self._migrated = True
            yield conn
        except aiosqlite.Error as exc:
            logger.warning("release store query failed: %s", exc)
            raise StorageUnavailableError(str(exc)) from exc
        finally:
            await conn.close()

    async def upsert_compiled(self, release: ReleaseRecord) -> None:
        async with self.connection() as conn:
            await conn.execute(
                """
                INSERT INTO compiled_releases(cpid, ocid, release_date, stage, status, json_data)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(cpid, ocid) DO UPDATE SET
                    release_date=excluded.release_date,
                    stage=excluded.stage,
                    status=excluded.status,
                    json_data=excluded.json_data
                """,
                self._release_params(release),
            )
            await conn.commit()

    async def append_release(self, release: ReleaseRecord) -> None:
        async with self.connection() as conn:
            await conn.execute(
                """
                INSERT INTO release_history(cpid, ocid, release_date, stage, status, json_data)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                self._release_params(release),
            )
            await conn.commit()

    async def append_offset(self, offset: OffsetRecord) -> None:
        async with self.connection() as conn:
            await conn.execute(
                "INSERT INTO tender_offsets(cpid, date, status) VALUES (?, ?, ?)",
                (offset.cpid, _stamp(offset.date), offset.status),
            )
            await conn.commit()

    async def find_compiled(self, cpid: str, since: datetime | None = None) -> list[ReleaseRecord]:
        query = "SELECT * FROM compiled_releases WHERE cpid = ?"
        params: list[str] = [cpid]

        if since is not None:
            query += " AND release_date >= ?"
            params.append(_stamp(since))

        query += " ORDER BY release_date ASC, rowid ASC"
        return await self._fetch_releases(query, params)

    async def find_one(self, cpid: str, ocid: str) -> ReleaseRecord | None:
        async with self.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM compiled_releases WHERE cpid = ? AND ocid = ?",
                (cpid, ocid),
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._release_from_row(row)

    async def find_history(
        self,
        cpid: str,
        ocid: str | None = None,
        since: datetime | None = None,
    ) -> list[ReleaseRecord]:
        query = "SELECT * FROM release_history WHERE cpid = ?"
        params: list[str] = [cpid]

        if ocid is not None:
            query += " AND ocid = ?"
            params.append(ocid)

        if since is not None:
            query += " AND release_date >= ?"
            params.append(_stamp(since))

        query += " ORDER BY release_date ASC, rowid ASC"
        return await self._fetch_releases(query, params)

    async def find_offsets(
        self,
        since: datetime,
        limit: int,
        statuses: Iterable[ReleaseStatus] | None = None,
    ) -> list[OffsetRecord]:
        query = "SELECT * FROM tender_offsets WHERE date >= ?"
        params: list[str | int] = [_stamp(since)]

        if statuses is not None:
            values = sorted(status.value for status in statuses)
            query += f" AND status IN ({', '.join('?' for _ in values)})"
            params.extend(values)

        # LIMIT applies after ORDER BY, so the page is the earliest matching rows.
        query += " ORDER BY date ASC, rowid ASC LIMIT ?"
        params.append(limit)

        async with self.connection() as conn:
            cursor = await conn.execute(query, tuple(params))
            rows = await cursor.fetchall()

        return [self._offset_from_row(row) for row in rows]

    async def _fetch_releases(self, query: str, params: list[str]) -> list[ReleaseRecord]:
        async with self.connection() as conn:
            cursor = await conn.execute(query, tuple(params))
            rows = await cursor.fetchall()
        return [self._release_from_row(row) for row in rows]

    @staticmethod
    def _release_params(release: ReleaseRecord) -> tuple[str, ...]:
        return (
            release.cpid,
            release.ocid,
            _stamp(release.release_date),
            release.stage,
            release.status,
            release.json_data,
        )

    @staticmethod
    def _release_from_row(row: aiosqlite.Row) -> ReleaseRecord:
        return ReleaseRecord(
            cpid=str(row["cpid"]),
            ocid=str(row["ocid"]),
            release_date=datetime.fromisoformat(str(row["release_date"])),
            stage=str(row["stage"]),
            status=str(row["status"]),
            json_data=str(row["json_data"]),
        )

    @staticmethod
    def _offset_from_row(row: aiosqlite.Row) -> OffsetRecord:
        return OffsetRecord(
            cpid=str(row["cpid"]),
            date=datetime.fromisoformat(str(row["date"])),
            status=str(row["status"]),
        )
