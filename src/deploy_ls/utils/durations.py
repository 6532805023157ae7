"""Short human-readable rendering of millisecond spans.

``format_ms(90_000) == "2m"`` — the largest unit that fits, rounded
half up, with no space between number and unit.
"""

from __future__ import annotations

import math

SECOND: int = 1000
MINUTE: int = 60 * SECOND
HOUR: int = 60 * MINUTE
DAY: int = 24 * HOUR

_UNITS: tuple[tuple[int, str], ...] = (
    (DAY, "d"),
    (HOUR, "h"),
    (MINUTE, "m"),
    (SECOND, "s"),
)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_ms(span: float) -> str:
    """Render *span* milliseconds as ``"3d"``, ``"5h"``, ``"12s"``, ``"40ms"``."""
    magnitude = abs(span)
    for unit, suffix in _UNITS:
        if magnitude >= unit:
            return f"{_round_half_up(span / unit)}{suffix}"
    return f"{_round_half_up(span)}ms"


def elapsed(span: float) -> str:
    """Render an elapsed-time suffix such as ``"[412ms]"``."""
    return f"[{format_ms(span)}]"
