import pytest

from point.core.limits import InvalidParameterError, resolve_limit
from tests.support.tender_helpers import make_settings


def test_resolve_limit_defaults_when_absent() -> None:
    assert resolve_limit(None, make_settings(def_limit=25)) == 25


def test_resolve_limit_keeps_value_in_range() -> None:
    settings = make_settings()
    assert resolve_limit(0, settings) == 0
    assert resolve_limit(7, settings) == 7
    assert resolve_limit(settings.max_limit, settings) == settings.max_limit


def test_resolve_limit_clamps_to_max() -> None:
    assert resolve_limit(1000, make_settings(max_limit=300)) == 300


def test_resolve_limit_rejects_negative() -> None:
    with pytest.raises(InvalidParameterError, match="Limit invalid"):
        resolve_limit(-1, make_settings())
