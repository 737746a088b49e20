"""Structured (JSON) analysis payload -> report document.

Looks for the four sections an MCA bank-statement analysis can carry,
each under any of its key aliases (see :data:`finreport.fields.FIELD_ALIASES`):

1. monthly overview   -- list of row objects, rendered as a table with a
   "Total Average" row under the monthly revenue column
2. MCA indicators     -- list of ``{title, description, items}`` objects,
   or one object mapping headings to text / bullet lists
3. funding sources    -- list of ``{name|funder, amount, frequency, notes}``
4. payment patterns   -- list of strings, or a single string

Sections are checked independently and in that fixed order.  A section
whose value has an unusable shape is skipped with a warning and does not
affect the others.  When no section produces anything, the whole payload
is shown as pretty-printed JSON.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Callable

from finreport.config_loader import get_section_config
from finreport.constants import (
    DEFAULT_INDICATOR_TITLE,
    FUNDING_SOURCE_HEADERS,
    JSON_INDENT,
)
from finreport.fields import MISSING, SECTION_ORDER, resolve_field, resolve_section
from finreport.report.aggregates import average_row, find_revenue_column
from finreport.report.blocks import (
    SOURCE_RAW,
    SOURCE_STRUCTURED,
    Block,
    Heading,
    ListBlock,
    Paragraph,
    RawPreformatted,
    ReportDocument,
    Table,
)

logger = logging.getLogger(__name__)

_WORD_START = re.compile(r"\b\w")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def humanize_key(key: Any) -> str:
    """``"monthly_revenue"`` -> ``"Monthly Revenue"``."""
    return _WORD_START.sub(lambda m: m.group(0).upper(), str(key).replace("_", " "))


def cell_text(value: Any) -> str:
    """Display text for a payload value; missing values become ``""``."""
    if value is None or value is MISSING:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False, default=str)


def pretty_json(data: Any) -> str:
    """Pretty-printed JSON used by the raw fallback."""
    return json.dumps(data, indent=JSON_INDENT, ensure_ascii=False, default=str)


def _section_heading(name: str, cfg: Mapping[str, Any]) -> Heading:
    return Heading(
        level=int(cfg.get("level", 2)),
        text=str(cfg.get("title", humanize_key(name))),
        icon=cfg.get("icon"),
    )


def _as_list(value: Any) -> list | None:
    if isinstance(value, (list, tuple)):
        return list(value)
    return None


# ---------------------------------------------------------------------------
# Section builders
# ---------------------------------------------------------------------------


def _build_monthly_overview(rows: Any, cfg: Mapping[str, Any]) -> list[Block]:
    rows = _as_list(rows)
    if rows is None:
        logger.warning("monthly overview is not a list; section skipped")
        return []

    first = rows[0] if rows else {}
    keys = list(first) if isinstance(first, Mapping) else []
    headers = tuple(humanize_key(k) for k in keys)

    body = tuple(
        tuple(cell_text(row.get(k)) if isinstance(row, Mapping) else "" for k in keys)
        for row in rows
    )

    # The average is read from the original key, not the display label.
    aggregate = None
    column = find_revenue_column(keys)
    if column is not None:
        key = keys[column]
        values = [row.get(key) for row in rows if isinstance(row, Mapping)]
        aggregate = average_row(column, values)

    return [
        _section_heading("monthly_overview", cfg),
        Table(headers=headers, rows=body, aggregate=aggregate, caption=cfg.get("caption")),
    ]


def _build_mca_indicators(indicators: Any, cfg: Mapping[str, Any]) -> list[Block]:
    blocks: list[Block] = [_section_heading("mca_indicators", cfg)]

    items = _as_list(indicators)
    if items is not None:
        for index, indicator in enumerate(items, start=1):
            if not isinstance(indicator, Mapping):
                indicator = {}
            title = indicator.get("title") or DEFAULT_INDICATOR_TITLE
            blocks.append(Heading(level=3, text=f"{index}. {cell_text(title)}"))

            description = indicator.get("description")
            if description:
                blocks.append(Paragraph(text=cell_text(description)))

            bullets = _as_list(indicator.get("items"))
            if bullets:
                blocks.append(
                    ListBlock(ordered=False, items=tuple(cell_text(b) for b in bullets))
                )
        return blocks

    if isinstance(indicators, Mapping):
        for key, value in indicators.items():
            blocks.append(Heading(level=3, text=str(key)))
            if isinstance(value, str):
                blocks.append(Paragraph(text=value))
            elif _as_list(value):
                blocks.append(
                    ListBlock(ordered=False, items=tuple(cell_text(v) for v in value))
                )
        return blocks

    logger.warning(
        "MCA indicators have unsupported type %s; section skipped",
        type(indicators).__name__,
    )
    return []


def _build_funding_sources(sources: Any, cfg: Mapping[str, Any]) -> list[Block]:
    sources = _as_list(sources)
    if sources is None:
        logger.warning("funding sources is not a list; section skipped")
        return []

    rows = []
    for source in sources:
        if not isinstance(source, Mapping):
            source = {}
        rows.append((
            cell_text(resolve_field(source, ("name", "funder"))),
            cell_text(source.get("amount")),
            cell_text(source.get("frequency")),
            cell_text(source.get("notes")),
        ))

    return [
        _section_heading("funding_sources", cfg),
        Table(
            headers=FUNDING_SOURCE_HEADERS,
            rows=tuple(rows),
            caption=cfg.get("caption"),
        ),
    ]


def _build_payment_patterns(patterns: Any, cfg: Mapping[str, Any]) -> list[Block]:
    if isinstance(patterns, str):
        items: tuple[str, ...] = (patterns,)
    elif _as_list(patterns) is not None:
        items = tuple(cell_text(p) for p in patterns)
    else:
        logger.warning(
            "payment patterns have unsupported type %s; section skipped",
            type(patterns).__name__,
        )
        return []

    return [
        _section_heading("payment_patterns", cfg),
        ListBlock(ordered=False, items=items),
    ]


_SECTION_BUILDERS: dict[str, Callable[[Any, Mapping[str, Any]], list[Block]]] = {
    "monthly_overview": _build_monthly_overview,
    "mca_indicators": _build_mca_indicators,
    "funding_sources": _build_funding_sources,
    "payment_patterns": _build_payment_patterns,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_structured_document(
    data: Any,
    *,
    sections: Mapping[str, Any] | None = None,
) -> ReportDocument:
    """Build a report document from a JSON-like analysis object.

    Parameters
    ----------
    data:
        Parsed analysis payload.  Anything that is not a mapping has no
        sections and goes straight to the raw fallback.
    sections:
        Section titles / icons / captions keyed by canonical section
        name.  Defaults to ``config/sections.yml``.

    Returns
    -------
    ReportDocument
        ``source="structured"`` with the recognised sections, or
        ``source="raw"`` holding a single pretty-printed JSON block.
    """
    config = sections if sections is not None else get_section_config()

    blocks: list[Block] = []
    for name in SECTION_ORDER:
        value = resolve_section(data, name)
        if value is MISSING:
            continue
        try:
            blocks.extend(_SECTION_BUILDERS[name](value, config.get(name) or {}))
        except (TypeError, ValueError, ArithmeticError, AttributeError, KeyError) as exc:
            logger.warning("Section %s could not be built (%s); skipping.", name, exc)

    if not blocks:
        logger.debug("No known sections found; falling back to raw JSON")
        return ReportDocument(blocks=(RawPreformatted(text=pretty_json(data)),), source=SOURCE_RAW)

    return ReportDocument(blocks=tuple(blocks), source=SOURCE_STRUCTURED)
