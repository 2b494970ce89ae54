from pathlib import Path

from point.api.deps import get_store, get_tender_service
from tests.support.tender_helpers import make_settings


def test_get_store_reuses_store_per_database(tmp_path: Path) -> None:
    settings = make_settings(db_path=tmp_path / "feed" / "point.db")

    first = get_store(settings)
    second = get_store(settings)

    assert first is second
    assert (tmp_path / "feed").is_dir()
    assert get_store(make_settings(db_path=tmp_path / "other.db")) is not first


def test_get_tender_service_uses_given_store(tmp_path: Path) -> None:
    settings = make_settings(db_path=tmp_path / "point.db")
    store = get_store(settings)

    service = get_tender_service(store=store, settings=settings)

    assert service._store is store
