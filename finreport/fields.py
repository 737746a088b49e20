"""Field alias resolution for structured analysis payloads.

The analysis service is not consistent about naming: the same section
shows up as ``monthlyOverview`` in one response and ``monthly_overview``
in the next.  Each canonical section name maps to the literal key
spellings accepted for it, and :func:`resolve_field` picks the first one
present.

Alias ordering matters -- the first alias found on the payload wins.
Lookup is exact and case-sensitive.

Usage:
    from finreport.fields import resolve_section, MISSING
    overview = resolve_section(payload, "monthly_overview")
    if overview is not MISSING:
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Sequence

logger = logging.getLogger(__name__)


class _Missing:
    """Sentinel type for a field that is absent under every alias."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


# ---------------------------------------------------------------------------
# Canonical section name -> accepted key spellings
# ---------------------------------------------------------------------------

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "monthly_overview": ("monthlyOverview", "monthly_overview"),
    "mca_indicators": ("mcaIndicators", "mca_indicators"),
    "funding_sources": ("fundingSources", "funding_sources"),
    "payment_patterns": ("paymentPatterns", "payment_patterns"),
}

# Order in which the structured renderer looks for sections.
SECTION_ORDER: tuple[str, ...] = tuple(FIELD_ALIASES)


def resolve_field(obj: Any, aliases: Sequence[str]) -> Any:
    """Return the value of the first alias present on *obj*.

    A key counts as present when it exists and its value is neither
    ``None`` nor the empty string.
    Returns :data:`MISSING` when no alias matches or when *obj* is not a
    mapping at all; never raises.
    """
    if not isinstance(obj, Mapping):
        return MISSING

    for alias in aliases:
        value = obj.get(alias)
        if value is not None and value != "":
            return value
    return MISSING


def resolve_section(obj: Any, section: str) -> Any:
    """Resolve a canonical section name through :data:`FIELD_ALIASES`.

    Raises
    ------
    KeyError
        If *section* is not a known canonical name.
    """
    value = resolve_field(obj, FIELD_ALIASES[section])
    if value is MISSING:
        logger.debug("Section %s not present", section)
    return value
