"""Derived table rows.

Currently a single aggregate: the average of a "monthly revenue" column,
appended to any table whose headers contain one.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Sequence

from finreport.amounts import average_amount, format_currency
from finreport.constants import AGGREGATE_LABEL, REVENUE_HEADER_TOKENS
from finreport.report.blocks import AggregateRow

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_header(header: Any) -> str:
    """Lower-case *header* and drop all whitespace."""
    return _WHITESPACE.sub("", str(header)).lower()


def is_revenue_header(header: Any) -> bool:
    """True if *header* names a monthly revenue column.

    Matches ``"Monthly Revenue"``, ``"monthly_revenue"``,
    ``"monthlyRevenue"``, ``"Avg Monthly Revenue ($)"`` and so on.
    """
    normalized = normalize_header(header)
    return all(token in normalized for token in REVENUE_HEADER_TOKENS)


def find_revenue_column(headers: Sequence[Any]) -> int | None:
    """Index of the first monthly revenue header, or ``None``.

    Only the first match is used when several headers qualify.
    """
    for index, header in enumerate(headers):
        if is_revenue_header(header):
            return index
    return None


def average_row(column_index: int, values: Iterable[Any]) -> AggregateRow | None:
    """Build the "Total Average" row for one column.

    Returns ``None`` when no value in the column parses as an amount.
    """
    mean = average_amount(values)
    if mean is None:
        logger.debug("No parseable amounts in column %d; no average row", column_index)
        return None
    return AggregateRow(
        column_index=column_index,
        label=f"{AGGREGATE_LABEL}: {format_currency(mean)}",
        value=mean,
    )
