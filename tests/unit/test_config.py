import pytest
from pydantic import ValidationError

from point.config import OCDSSettings
from tests.support.tender_helpers import make_settings


def test_settings_defaults() -> None:
    settings = OCDSSettings(_env_file=None)
    assert settings.def_limit == 100
    assert settings.max_limit == 300
    assert settings.path.endswith("/")


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OCDS_PATH", "https://feed.example")
    monkeypatch.setenv("OCDS_MAX_LIMIT", "500")
    monkeypatch.setenv("OCDS_EXTENSIONS", '["https://ext.example/a.json"]')

    settings = OCDSSettings(_env_file=None)

    assert settings.path == "https://feed.example/"
    assert settings.max_limit == 500
    assert settings.extensions == ["https://ext.example/a.json"]


def test_settings_are_immutable() -> None:
    settings = make_settings()
    with pytest.raises(ValidationError):
        settings.max_limit = 1


def test_settings_reject_max_below_default() -> None:
    with pytest.raises(ValidationError):
        make_settings(def_limit=50, max_limit=10)


def test_tender_uri_and_publisher() -> None:
    settings = make_settings()
    assert settings.tender_uri("X") == "https://point.example/tenders/X"
    assert settings.tender_uri("X", "1") == "https://point.example/tenders/X/1"
    assert settings.publisher.name == "Procurement Agency"
    assert settings.publisher.scheme == "MD-IDNO"
