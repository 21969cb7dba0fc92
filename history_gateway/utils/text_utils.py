"""Free-text numeric field helpers"""

import re
from typing import Any

_NON_DIGITS = re.compile(r"[^0-9]")


def digits_only(value: str) -> str:
    """Strip every non-digit character (input-capture sanitizing)"""
    return _NON_DIGITS.sub("", value or "")


def parse_non_negative_int(value: Any) -> int:
    """
    Parse an already-sanitized numeric field.

    Anything other than a non-negative int or an all-digit string yields 0
    (floats and null included); this never raises.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value > 0 else 0
    text = str(value).strip()
    if not text.isascii() or not text.isdigit():
        return 0
    return int(text)
