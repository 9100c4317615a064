# obsportal/utils/text_tools.py
import html
import re
import sys
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, Optional

from obsportal.models.constants import PLACEHOLDER

_INT_PREFIX = re.compile(r"^\s*([+-]?[0-9]+)")
_MAX_DIGITS = 309


def esc(value: Any) -> str:
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def display(value: Any) -> str:
    """Escaped value, or the placeholder dash when the backend sent nothing."""
    if value is None:
        return PLACEHOLDER
    return esc(value)


def parse_int(raw: Any) -> Optional[int]:
    """
    Lenient integer parse: "12", " 12 ", "12abc" -> 12; "", "abc", None -> None.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    m = _INT_PREFIX.match(str(raw))
    if not m:
        return None
    digits = m.group(1)
    # beyond float range the browser's parseInt gives Infinity, which is not an integer
    if len(digits.lstrip("+-").lstrip("0")) > _MAX_DIGITS:
        return None
    try:
        value = int(digits)
    except ValueError:
        return None
    return value if abs(value) <= sys.float_info.max else None


def parse_date(raw: Any) -> Optional[datetime]:
    text = str(raw).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    # Flask's jsonify writes dates as RFC 2822 ("Fri, 01 Mar 2024 00:00:00 GMT")
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError):
        return None


def format_date(raw: Any, fmt: str) -> str:
    if not raw:
        return PLACEHOLDER
    parsed = parse_date(raw)
    if parsed is None:
        return esc(raw)
    return parsed.strftime(fmt)


def full_name(forename: Any, surname: Any) -> str:
    parts = [p for p in (forename, surname) if p]
    return " ".join(str(p) for p in parts) or PLACEHOLDER
