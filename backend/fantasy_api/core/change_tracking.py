"""Change Tracking — compute field-level diffs for the change-log tables.

Invariants:
    - Only fields whose value actually differs produce a FieldChange
    - Values are rendered to strings once, here (None stays None)
    - PURE: no ORM objects, plain dicts in, tuples out
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class FieldChange:
    field_name: str
    old_value: str | None
    new_value: str | None


def render_value(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def diff_fields(current: dict[str, Any], changes: dict[str, Any]) -> list[FieldChange]:
    """Return one FieldChange per key of `changes` that differs from `current`."""
    diffs = []
    for name, new in changes.items():
        old = current.get(name)
        if old != new:
            diffs.append(FieldChange(name, render_value(old), render_value(new)))
    return diffs
