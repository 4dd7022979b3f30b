"""
Lenient cell parsers for spreadsheet values.

Neither parser raises: an unreadable number is 0 and an unreadable date is None.
"""
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Optional

import pandas as pd


_NON_NUMERIC = re.compile(r"[^\d,.\-]")
_DAY_MONTH_YEAR = re.compile(r"^(\d{1,2})[./-](\d{1,2})[./-](\d{2,4})$")


def parse_number(value: Any) -> float:
    """
    Parse a loosely formatted number.

    - Everything except digits, ',', '.' and '-' is dropped.
    - Comma without a period: the comma is the decimal separator ("1,56" -> 1.56).
    - Comma and period: the right-most one is the decimal separator and the
      other is a thousands separator ("1,234.56" and "1.234,56" -> 1234.56).
    - Anything unparsable -> 0.

    NOTE: "1,234" parses as 1.234, not 1234.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 0.0

    text = str(value).strip()
    if not text:
        return 0.0

    cleaned = _NON_NUMERIC.sub("", text)
    has_comma = "," in cleaned
    has_dot = "." in cleaned

    if has_comma and not has_dot:
        cleaned = cleaned.replace(",", ".", 1)
    elif has_comma and has_dot:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")

    if not cleaned:
        return 0.0
    try:
        number = float(cleaned)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _parse_iso(text: str) -> Optional[datetime]:
    candidate = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        pass
    try:
        return datetime.combine(date.fromisoformat(candidate), datetime.min.time())
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a cell into a calendar date.

    ISO strings are tried first, then D/M/Y with '.', '/' or '-' separators.
    Two digit years are read as 20xx. Timezone-aware values are converted to
    UTC before taking the date.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            return None
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    parsed = _parse_iso(text)
    if parsed is not None:
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.date()

    match = _DAY_MONTH_YEAR.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        if year < 100:
            year += 2000
        try:
            return date(year, month, day)
        except ValueError:
            return None

    return None


def bucket_label(day: date) -> str:
    """Trend bucket key for a calendar day (YYYY-MM-DD)."""
    return day.isoformat()
