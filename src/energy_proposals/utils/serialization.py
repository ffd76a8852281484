# src/energy_proposals/utils/serialization.py
"""
Wire-format helpers.

Renderers and the progress UI consume camelCase JSON. Internally everything
is snake_case dataclasses; conversion happens only at this boundary.
"""

import dataclasses
from datetime import date, datetime
from enum import Enum
from typing import Any


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_wire(value: Any) -> Any:
    """Recursively convert dataclasses / enums / dates into JSON-ready values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            camel_case(f.name): to_wire(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    return value


def snake_case(name: str) -> str:
    out = []
    for i, ch in enumerate(name):
        if ch.isupper() and i > 0 and not name[i - 1].isupper():
            out.append("_")
        out.append(ch.lower())
    return "".join(out)


def from_wire(record: dict) -> dict:
    """camelCase (or already snake_case) keys -> snake_case keys, one level deep."""
    return {snake_case(k): v for k, v in record.items()}
