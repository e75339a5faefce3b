"""
Status column helpers shared by the entities.

Rows can carry a status this service never writes itself, e.g. REFUNDED set
by the refund flow of the platform. Such values are kept as plain strings so
a read never fails on them; the idempotency guard treats them as settled.
"""

from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)


def enum_value(value: Enum | str) -> str:
    """Plain string of an enum member or of a raw column value."""
    return value.value if isinstance(value, Enum) else str(value)


def parse_status(enum_cls: type[E], raw: str) -> E | str:
    try:
        return enum_cls(raw)
    except ValueError:
        return raw


def is_known_status(enum_cls: type[Enum], value: Enum | str) -> bool:
    return enum_value(value) in {member.value for member in enum_cls}
