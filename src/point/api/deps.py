"""Shared API dependency providers."""

from __future__ import annotations

from pathlib import Path

from fastapi import Depends

from point.config import OCDSSettings, get_settings
from point.core.tender_service import TenderService
from point.db.store import SQLiteStore

# One store per database file; the schema is created on its first connection only.
_STORES: dict[Path, SQLiteStore] = {}


def get_store(settings: OCDSSettings = Depends(get_settings)) -> SQLiteStore:
    store = _STORES.get(settings.db_path)
    if store is None:
        settings.db_path.parent.mkdir(parents=True, exist_ok=True)
        store = _STORES[settings.db_path] = SQLiteStore(db_path=settings.db_path)
    return store


def get_tender_service(
    store: SQLiteStore = Depends(get_store),
    settings: OCDSSettings = Depends(get_settings),
) -> TenderService:
    return TenderService(store=store, settings=settings)
