"""Canonical unit suffixes and numeric-or-lexical endpoint ordering."""

import locale
import re
from typing import Optional, Tuple

from config.defaults import SUFFIX_MAX_LENGTH

_TRAILING_DIGITS = re.compile(r"(\d+)$")
_TRAILING_ALNUM = re.compile(r"([^\W_]+)$")
_DIGIT_RUN = re.compile(r"\d+")
_INTEGER = re.compile(r"^[+-]?\d+$")


def trailing_digits(label: Optional[str]) -> Optional[str]:
    """Digit run at the very end of the label, or None."""
    if not label:
        return None
    m = _TRAILING_DIGITS.search(str(label).strip())
    return m.group(1) if m else None


def last_digit_run(text: Optional[str]) -> Optional[str]:
    """Last digit run anywhere in the text, or None."""
    if not text:
        return None
    runs = _DIGIT_RUN.findall(str(text))
    return runs[-1] if runs else None


def _strip_floor_prefix(run: str, floor_code) -> str:
    if floor_code is None:
        return run
    prefix = str(floor_code).strip()
    if prefix.isdecimal() and run.startswith(prefix) and len(run) - len(prefix) >= 2:
        return run[len(prefix):]
    return run


def canonical_suffix(label: Optional[str], floor_code: Optional[str] = None) -> Optional[str]:
    """Reduce a heterogeneous unit label to its comparable trailing identifier.

    "101" -> "101", "A-007" -> "7", "PH-North" -> "orth", "##" -> "##".
    Empty or missing labels yield None and are excluded everywhere.

    With a numeric floor_code, floor-prefixed numbers lose the prefix when at
    least two digits remain: "101" on floor "1" -> "1", "1203" on floor "12" -> "3".
    """
    if label is None:
        return None
    raw = str(label).strip()
    if not raw:
        return None

    digits = _TRAILING_DIGITS.search(raw)
    if digits:
        run = _strip_floor_prefix(digits.group(1), floor_code)
        return run.lstrip("0") or "0"

    alnum = _TRAILING_ALNUM.search(raw)
    if alnum:
        return alnum.group(1)[-SUFFIX_MAX_LENGTH:]

    return raw[-SUFFIX_MAX_LENGTH:]


def parse_int(value) -> Optional[int]:
    """Parse a value that is entirely an integer; anything else is None."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    if not _INTEGER.match(text):
        return None
    return int(text)


def endpoint_sort_key(value) -> Tuple[int, int, str]:
    """Sort key shared by floor codes and unit suffixes.

    Integers order numerically and sort before every non-numeric value;
    the rest order by the current locale's collation.
    """
    number = parse_int(value)
    if number is not None:
        return (0, number, "")
    return (1, 0, locale.strxfrm(str(value)))


def compare_endpoints(a, b) -> int:
    """Return -1, 0 or 1 comparing two range endpoints."""
    ka, kb = endpoint_sort_key(a), endpoint_sort_key(b)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def in_range(value, low, high) -> bool:
    """Inclusive range membership under compare_endpoints. Reversed bounds are swapped."""
    if compare_endpoints(low, high) > 0:
        low, high = high, low
    return compare_endpoints(low, value) <= 0 and compare_endpoints(value, high) <= 0


def sort_endpoints(values) -> list:
    return sorted(values, key=endpoint_sort_key)
