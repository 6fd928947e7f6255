from __future__ import annotations

from datetime import timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo


@lru_cache
def zone(name: str) -> tzinfo:
    """UTC without needing a tz database; anything else through zoneinfo."""
    if name.upper() in {"UTC", "Z", "ETC/UTC"}:
        return timezone.utc
    return ZoneInfo(name)
