"""Locale-aware numeric parsing for raw dataset values."""

from __future__ import annotations

import math
import re
from typing import Any

from pipelines.registry import ParseRule

_SENTINEL_STRINGS = {"", "NA", "N/A", "-", ".", "null", "Null"}
_WHITESPACE = re.compile(r"\s+")


class MalformedValueError(TypeError):
    """Raised when a numeric field holds something that is neither a string nor a number."""


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _clean(text: str, rule: ParseRule) -> str:
    if rule is ParseRule.BRAZILIAN:
        # Order matters: thousands separators go before the decimal comma becomes a dot.
        return _WHITESPACE.sub("", text).replace(".", "").replace(",", ".")
    if rule is ParseRule.DECIMAL_COMMA:
        return _WHITESPACE.sub("", text).replace(",", ".")
    return text.strip()


def _finite_or_nan(numeric: float) -> float:
    if math.isinf(numeric):
        return math.nan
    return numeric


def parse_number(value: Any, rule: ParseRule = ParseRule.NUMERIC) -> float:
    """Convert ``value`` into a float according to ``rule``.

    Native numbers pass through unchanged. Strings are cleaned for the rule and
    parsed; sentinels and unparseable text become NaN rather than zero so that
    consumers can tell a missing observation from a genuine ``0``. Any other
    type raises ``MalformedValueError``.
    """

    if rule is ParseRule.LABEL:
        raise ValueError("parse_number called for a label field")
    if value is None:
        return math.nan
    if isinstance(value, bool):
        raise MalformedValueError(f"boolean {value!r} is not a numeric value")
    if isinstance(value, (int, float)):
        return _finite_or_nan(float(value))
    if not isinstance(value, str):
        raise MalformedValueError(
            f"expected a string or number, got {type(value).__name__}"
        )

    stripped = value.strip()
    if stripped in _SENTINEL_STRINGS:
        return math.nan
    try:
        numeric = float(_clean(stripped, rule))
    except ValueError:
        return math.nan
    return _finite_or_nan(numeric)


__all__ = ["MalformedValueError", "is_missing", "parse_number"]
