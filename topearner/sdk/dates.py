"""Timestamp parsing and the target year rule.

Only the calendar year of a transaction matters. Timestamps with an
offset, date-only ISO strings (UTC midnight) and epoch numbers are
converted to the local timezone before the year is taken; naive
date-times and date objects are already local.
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Optional

# Python < 3.11 fromisoformat only takes 3 or 6 fractional digits
_FRACTION_RE = re.compile(r"\.(\d+)")
_DATE_ONLY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def _normalize_iso(value: str) -> str:
    value = value.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"

    def _pad(match):
        return "." + match.group(1)[:6].ljust(6, "0")

    return _FRACTION_RE.sub(_pad, value, count=1)


def parse_timestamp(value: Any) -> datetime:
    """Parse a transaction timestamp.

    Accepts ISO 8601 strings (date-only, naive, offset or "Z"), datetime and
    date objects, and numbers as milliseconds since the epoch. A date-only
    string means midnight UTC.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValueError(f"Unrecognized timestamp: {value!r}")
    if isinstance(value, str) and value.strip():
        match = _DATE_ONLY_RE.match(value.strip())
        try:
            if match:
                year, month, day = (int(part) for part in match.groups())
                return datetime(year, month, day, tzinfo=timezone.utc)
            return datetime.fromisoformat(_normalize_iso(value))
        except ValueError:
            raise ValueError(f"Unrecognized timestamp: {value!r}")
    raise ValueError(f"Not a timestamp: {value!r}")


def local_year(ts: datetime) -> int:
    """Calendar year of a timestamp in the local timezone."""
    if ts.tzinfo is not None:
        return ts.astimezone().year
    return ts.year


def target_year(reference: Optional[datetime] = None, offset: int = 1) -> int:
    """Year the report covers: reference year minus offset (default: last year).

    Call this once per run and pass the result to every stage.
    """
    if reference is None:
        reference = datetime.now()
    return reference.year - offset
