import sqlite3
from pathlib import Path

import pytest

from point.db.store import SQLiteStore, StorageUnavailableError
from point.models.release import EPOCH, ReleaseStatus
from tests.support.tender_helpers import at, offset, release


@pytest.mark.asyncio
async def test_store_compiled_upsert_and_lookup(tmp_path: Path) -> None:
    store = SQLiteStore(tmp_path / "point.db")
    await store.upsert_compiled(release(ocid="1", minutes=0))
    await store.upsert_compiled(release(ocid="1", minutes=5, stage="AC"))
    await store.upsert_compiled(release(ocid="2", minutes=2))

    compiled = await store.find_compiled("ocds-b3wdp1-MD-1")
    assert [(row.ocid, row.release_date) for row in compiled] == [("2", at(2)), ("1", at(5))]

    fetched = await store.find_one("ocds-b3wdp1-MD-1", "1")
    assert fetched is not None
    assert fetched.stage == "AC"
    assert await store.find_one("ocds-b3wdp1-MD-1", "missing") is None


@pytest.mark.asyncio
async def test_store_compiled_since_is_inclusive(tmp_path: Path) -> None:
    store = SQLiteStore(tmp_path / "point.db")
    await store.upsert_compiled(release(ocid="1", minutes=0))
    await store.upsert_compiled(release(ocid="2", minutes=10))

    rows = await store.find_compiled("ocds-b3wdp1-MD-1", since=at(10))
    assert [row.ocid for row in rows] == ["2"]
    assert await store.find_compiled("ocds-b3wdp1-MD-1", since=at(11)) == []


@pytest.mark.asyncio
async def test_store_history_filters(tmp_path: Path) -> None:
    store = SQLiteStore(tmp_path / "point.db")
    await store.append_release(release(ocid="1", minutes=3))
    await store.append_release(release(ocid="1", minutes=1))
    await store.append_release(release(ocid="2", minutes=2))

    everything = await store.find_history("ocds-b3wdp1-MD-1")
    assert [row.release_date for row in everything] == [at(1), at(2), at(3)]

    scoped = await store.find_history("ocds-b3wdp1-MD-1", "1", since=at(2))
    assert [row.release_date for row in scoped] == [at(3)]


@pytest.mark.asyncio
async def test_store_offsets_order_limit_and_status(tmp_path: Path) -> None:
    store = SQLiteStore(tmp_path / "point.db")
    await store.append_offset(offset("c", 3, status="planning"))
    await store.append_offset(offset("a", 1))
    await store.append_offset(offset("b", 2, status="cancelled"))

    page = await store.find_offsets(EPOCH, limit=2)
    assert [row.cpid for row in page] == ["a", "b"]

    planning = await store.find_offsets(
        EPOCH, limit=10, statuses={ReleaseStatus.PLANNING, ReleaseStatus.PLANNED}
    )
    assert [row.cpid for row in planning] == ["c"]

    assert await store.find_offsets(at(4), limit=10) == []


@pytest.mark.asyncio
async def test_store_reports_unavailable_database(tmp_path: Path) -> None:
    store = SQLiteStore(tmp_path / "missing" / "point.db")
    with pytest.raises(StorageUnavailableError):
        await store.find_compiled("X")


@pytest.mark.asyncio
async def test_store_reads_while_ingestion_holds_write_lock(tmp_path: Path) -> None:
    db_path = tmp_path / "point.db"
    store = SQLiteStore(db_path)
    await store.upsert_compiled(release(ocid="1", minutes=0))

    writer = sqlite3.connect(db_path, isolation_level=None)
    try:
        writer.execute("BEGIN IMMEDIATE")
        rows = await store.find_compiled("ocds-b3wdp1-MD-1")
        offsets = await store.find_offsets(EPOCH, limit=10)
    finally:
        writer.execute("ROLLBACK")
        writer.close()

    assert [row.ocid for row in rows] == ["1"]
    assert offsets == []


@pytest.mark.asyncio
async def test_store_reads_leave_database_unmodified(tmp_path: Path) -> None:
    db_path = tmp_path / "point.db"
    store = SQLiteStore(db_path)
    await store.upsert_compiled(release(ocid="1", minutes=0))

    before = sqlite3.connect(db_path)
    try:
        changes_before = before.execute("PRAGMA data_version").fetchone()[0]
        await store.find_compiled("ocds-b3wdp1-MD-1")
        await store.find_one("ocds-b3wdp1-MD-1", "1")
        await store.find_history("ocds-b3wdp1-MD-1")
        changes_after = before.execute("PRAGMA data_version").fetchone()[0]
    finally:
        before.close()

    assert changes_after == changes_before
