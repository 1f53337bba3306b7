import math
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

_EPOCH_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")


def parse_timestamp(val: Any) -> datetime:
    """Parse a timestamp into a timezone-aware UTC datetime.

    Accepts datetimes, ISO-8601 strings (a trailing ``Z`` is allowed) and
    epoch seconds as numbers or numeric strings. Naive values are taken as UTC.

    Raises:
        ValueError: if the value is missing or cannot be parsed.
    """
    if val is None:
        raise ValueError("timestamp is required")

    if isinstance(val, datetime):
        parsed = val
    elif isinstance(val, bool):
        raise ValueError(f"unparseable timestamp: {val!r}")
    elif isinstance(val, (int, float)):
        parsed = _from_epoch(float(val))
    elif isinstance(val, str):
        s = val.strip()
        if not s:
            raise ValueError("timestamp is empty")
        if _EPOCH_PATTERN.match(s):
            parsed = _from_epoch(float(s))
        else:
            if s.endswith(("Z", "z")):
                s = s[:-1] + "+00:00"
            try:
                parsed = datetime.fromisoformat(s)
            except ValueError:
                raise ValueError(f"unparseable timestamp: {val!r}")
    else:
        raise ValueError(f"unparseable timestamp: {val!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _from_epoch(seconds: float) -> datetime:
    if not math.isfinite(seconds):
        raise ValueError(f"unparseable timestamp: {seconds!r}")
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise ValueError(f"timestamp out of range: {seconds!r}")


def parse_score(val: Any) -> Optional[float]:
    """Parse a confidence score; out-of-range values are kept as-is."""
    if val is None or isinstance(val, bool):
        return None
    try:
        s = str(val).strip()
        if s.endswith("%"):
            score = float(s[:-1]) / 100.0
        else:
            score = float(s)
    except (ValueError, TypeError):
        return None
    return score if math.isfinite(score) else None


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))


def format_span(span: timedelta) -> str:
    """Render an elapsed span in whole days and hours."""
    total_hours = int(span.total_seconds() // 3600)
    days, hours = divmod(max(total_hours, 0), 24)

    parts = []
    if days:
        parts.append(f"{days} day{'s' if days != 1 else ''}")
    if hours:
        parts.append(f"{hours} hour{'s' if hours != 1 else ''}")
    return " ".join(parts) if parts else "less than an hour"
