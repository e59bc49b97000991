"""Lenient resolution of session configuration from raw inputs."""

from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import parse_qs, urlsplit

from .state import DEFAULT_SIZE, SUPPORTED_SIZES, GameMode, SessionConfig

__all__ = ["resolve_size", "resolve_mode", "resolve_config", "config_from_mapping", "config_from_query"]

logger = logging.getLogger(__name__)


def resolve_size(raw: Any) -> int:
    """Return ``raw`` as a supported board size, falling back to the default."""

    if raw is None or raw == "":
        return DEFAULT_SIZE
    try:
        size = int(raw)
    except (TypeError, ValueError):
        logger.debug("ignoring non-numeric size %r", raw)
        return DEFAULT_SIZE
    if size not in SUPPORTED_SIZES:
        logger.debug("ignoring unsupported size %r", raw)
        return DEFAULT_SIZE
    return size


def resolve_mode(raw: Any) -> GameMode:
    """Return ``raw`` as a :class:`GameMode`, falling back to classic."""

    if isinstance(raw, GameMode):
        return raw
    if raw is None or raw == "":
        return GameMode.CLASSIC
    try:
        return GameMode(str(raw).strip().lower())
    except ValueError:
        logger.debug("ignoring unsupported mode %r", raw)
        return GameMode.CLASSIC


def resolve_config(size: Any = None, mode: Any = None) -> SessionConfig:
    """Build a :class:`SessionConfig`, silently coercing invalid values."""

    return SessionConfig(size=resolve_size(size), mode=resolve_mode(mode))


def config_from_mapping(values: Mapping[str, Any]) -> SessionConfig:
    """Read ``size`` and ``mode`` keys from any mapping."""

    return resolve_config(values.get("size"), values.get("mode"))


def config_from_query(query: str) -> SessionConfig:
    """Parse a URL or bare query string such as ``size=6&mode=time-attack``."""

    if "://" in query or query.startswith("/"):
        query = urlsplit(query).query
    params = parse_qs(query.lstrip("?"))
    first = {key: values[0] for key, values in params.items() if values}
    return config_from_mapping(first)
