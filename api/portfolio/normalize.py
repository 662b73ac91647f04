"""
Coercion of loosely-typed client input into stored values.

Every function here is total: any input yields a valid value.
"""

from __future__ import annotations

import math
from typing import Any


def normalize_technologies(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        items = (str(item).strip() for item in value)
    elif isinstance(value, str):
        items = (part.strip() for part in value.split(","))
    else:
        return []
    return [item for item in items if item]


def clamp_percent(value: Any) -> int:
    try:
        number = float(value if value is not None else 0)
    except (TypeError, ValueError, OverflowError):
        return 0
    if math.isnan(number):
        return 0
    number = max(0.0, min(100.0, number))
    # Half-up rounding (42.5 -> 43), not Python's banker's rounding.
    return int(math.floor(number + 0.5))


def normalize_url(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def text_or_empty(value: Any) -> Any:
    return value or ""
