"""Visit and visa ID generation.

Visit IDs are millisecond timestamps rendered as decimal strings, the
same shape records imported from older exports already carry. Visa IDs
use a ``visa_`` prefix with 8 hex chars of SHA-256 over the visa's
identifying fields plus the creation instant.

INVARIANT: IDs are permanent and never reused. A generated ID is bumped
past any ID it would collide with.
"""

from __future__ import annotations

import hashlib
import time
from collections.abc import Iterable

VISA_PREFIX = "visa_"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def generate_visit_id(existing: Iterable[str] = (), *, now_ms: int | None = None) -> str:
    """Return a timestamp-based visit ID not present in *existing*."""
    taken = set(existing)
    candidate = now_ms if now_ms is not None else _now_ms()
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def generate_visa_id(
    country_code: str,
    expiry: str,
    existing: Iterable[str] = (),
    *,
    now_ms: int | None = None,
) -> str:
    """Return a ``visa_xxxxxxxx`` ID not present in *existing*."""
    taken = set(existing)
    stamp = now_ms if now_ms is not None else _now_ms()
    while True:
        seed = f"{country_code.upper()}|{expiry}|{stamp}"
        candidate = f"{VISA_PREFIX}{hashlib.sha256(seed.encode('utf-8')).hexdigest()[:8]}"
        if candidate not in taken:
            return candidate
        stamp += 1
