"""
Point-estimate / confidence-interval text format.

Scores are reported as "<point> [<lower>;<upper>]", e.g.
"0.123 [0.110;0.140]". Parsing is delimiter-based: the point estimate is
everything before the first whitespace or '[' character, so leading-zero
free values such as ".85 [.80;.90]" parse the same way as "0.85".
"""

from __future__ import annotations

import math
import re

from pyturnover.core.exceptions import ParseError

_POINT_DELIMITER = re.compile(r"[\s\[]")
_INTERVAL = re.compile(r"\[\s*([^;\]]+?)\s*;\s*([^;\]]+?)\s*\]")
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def format_ci(point: float, lower: float, upper: float, digits: int = 3) -> str:
    """Render an estimate and its interval as "<point> [<lower>;<upper>]"."""
    return f"{point:.{digits}f} [{lower:.{digits}f};{upper:.{digits}f}]"


def _to_float(text: str, source: str) -> float:
    # float() alone also accepts "1_0" and "nan"
    if _DECIMAL.fullmatch(text) is None:
        raise ParseError(
            f"cannot parse a decimal number from {source!r}", text=source,
        )
    value = float(text)
    if not math.isfinite(value):
        raise ParseError(
            f"expected a finite decimal number, got {text!r} in {source!r}",
            text=source,
        )
    return value


def strip_ci(text: str) -> float:
    """Point estimate of a "<point> [<lower>;<upper>]" string.

    >>> strip_ci("0.123 [0.100;0.150]")
    0.123
    >>> strip_ci(".85 [.80;.90]")
    0.85

    Raises
    ------
    ParseError
        If the leading portion is not a finite decimal number.
    """
    if not isinstance(text, str):
        raise ParseError(
            f"expected a string, got {type(text).__name__}", text=repr(text),
        )
    head = _POINT_DELIMITER.split(text.strip(), maxsplit=1)[0]
    if not head:
        raise ParseError(f"no point estimate in {text!r}", text=text)
    return _to_float(head, text)


def parse_ci(text: str) -> tuple[float, float, float]:
    """(point, lower, upper) of a "<point> [<lower>;<upper>]" string.

    Raises
    ------
    ParseError
        If the point or the bracketed interval is missing or malformed.
    """
    point = strip_ci(text)
    match = _INTERVAL.search(text)
    if match is None:
        raise ParseError(f"no '[lower;upper]' interval in {text!r}", text=text)
    lower = _to_float(match.group(1), text)
    upper = _to_float(match.group(2), text)
    return point, lower, upper
