"""Amount parsing and currency formatting.

Analysis payloads carry money as whatever the upstream model happened to
emit: plain numbers, ``"$12,500.00"``, ``"USD 4,100"``, ``"~3k"``.  This
module pulls a number out of those strings and turns numbers back into
USD text.

An amount that cannot be parsed is represented as NaN (``np.nan``).
It is never an error; :func:`average_amount` drops anything
:func:`is_unparseable` reports, and other callers do the same.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable

import numpy as np
import pandas as pd

from finreport.constants import CURRENCY_SYMBOL

logger = logging.getLogger(__name__)

# Anything that cannot be part of a plain decimal number.
_NON_NUMERIC = re.compile(r"[^0-9.\-]")

# Longest leading decimal run of the cleaned text ("12.5.3" -> "12.5").
_DECIMAL_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_amount(value: Any) -> float:
    """Extract a numeric amount from *value*.

    Numbers are returned as floats; integers too large for a float are
    unparseable.  Strings have every character other than digits, ``.``
    and ``-`` removed (currency symbols, thousands separators, whitespace,
    letters) and the leading decimal run of what is left is parsed.  Everything else, including ``None`` and booleans,
    is unparseable.

    Never raises; returns ``np.nan`` when no number can be recovered.
    """
    if isinstance(value, bool):
        return np.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return np.nan
    if not isinstance(value, str):
        return np.nan

    cleaned = _NON_NUMERIC.sub("", value)
    match = _DECIMAL_PREFIX.match(cleaned)
    if match is None:
        return np.nan
    return float(match.group(0))


def is_unparseable(amount: Any) -> bool:
    """True when *amount* is the unparseable state (NaN) or not finite."""
    try:
        return not math.isfinite(amount)
    except (TypeError, OverflowError):
        return True


def average_amount(values: Iterable[Any]) -> float | None:
    """Arithmetic mean of the parseable amounts in *values*.

    Unparseable entries are dropped before averaging.  Returns ``None``
    when nothing parses, so callers can omit the aggregate entirely.
    """
    amounts = (parse_amount(v) for v in values)
    parsed = pd.Series([a for a in amounts if not is_unparseable(a)], dtype=float)
    if parsed.empty:
        return None
    logger.debug("Averaging %d parseable amounts", len(parsed))
    return float(parsed.mean())


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_currency(amount: float) -> str:
    """Format *amount* as USD text, e.g. ``1234.5`` -> ``"$1,234.50"``.

    Negative amounts are written ``-$1,234.50``.  Callers filter
    unparseable values first; if formatting still fails the plain
    two-decimal form is returned.
    """
    try:
        sign = "-" if amount < 0 else ""
        return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"
    except (TypeError, ValueError):
        return f"{CURRENCY_SYMBOL}{float(amount):.2f}"
