"""Page size policy for the offset listing."""

from __future__ import annotations

from point.config import OCDSSettings


class InvalidParameterError(ValueError):
    """A caller-supplied query parameter is out of range."""


def resolve_limit(limit_param: int | None, settings: OCDSSettings) -> int:
    if limit_param is None:
        return settings.def_limit
    if limit_param < 0:
        msg = "Limit invalid."
        raise InvalidParameterError(msg)
    return min(limit_param, settings.max_limit)
