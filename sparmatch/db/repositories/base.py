"""Helpers shared by the SQL repositories."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TypeVar

logger = logging.getLogger(__name__)

EnumT = TypeVar("EnumT", bound=Enum)


def coerce_enum(enum_cls: type[EnumT], value: str | None) -> EnumT | None:
    """Map a stored string onto ``enum_cls``; unknown values become ``None``.

    Rows written by older clients occasionally carry labels that are no longer
    valid. Treating them as "unset" keeps one stale row from failing a search.
    """

    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning("Ignoring unknown %s value %r", enum_cls.__name__, value)
        return None


def coerce_enum_list(enum_cls: type[EnumT], values: list[str] | None) -> list[EnumT]:
    """Map a stored JSON array onto ``enum_cls`` members, dropping unknown labels."""

    coerced = (coerce_enum(enum_cls, value) for value in values or [])
    return [member for member in coerced if member is not None]
