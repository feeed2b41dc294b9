"""Fail-soft numeric coercion for user-typed input.

Every value entering the sizing engine passes through ``number_or_zero``.
Empty, malformed or non-finite input becomes ``0.0``; nothing here raises.
"""

import math
import re
from typing import Optional

# Leading decimal literal, the way a form field is read while still being typed
# ("1.2" of "1.2x", "5" of "5 USD").
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _parse(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:  # int beyond float range
            return None
    else:
        match = _LEADING_NUMBER.match(str(value).replace(",", ".", 1))
        if match is None:
            return None
        number = float(match.group(1))
    return number if math.isfinite(number) else None


def number_or_zero(value) -> float:
    """Parse *value* as a float, accepting a comma as decimal separator.

    Numbers pass through unchanged.  In strings the first comma is read as a
    decimal point (``"1,2345"`` → ``1.2345``) and the leading numeric part is
    used.  Anything without a finite numeric prefix returns ``0.0``.
    """
    number = _parse(value)
    return 0.0 if number is None else number


def is_number(value) -> bool:
    """``True`` when *value* parses without falling back to zero."""
    return _parse(value) is not None
