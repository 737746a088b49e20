"""Top-level entry point: analysis payload -> HTML report fragment.

``render(payload)`` accepts whatever the analysis service handed back and
decides how to read it before any parsing happens:

====================================  ==========================================
payload                               handling
====================================  ==========================================
``None`` or ``""``                    "no data available" notice
string starting with ``<``            returned unchanged (already markup)
object with a ``rawResponse`` string  the string goes through the text cascade
other string                          text cascade
object (or other JSON value)          structured renderer
====================================  ==========================================

Text cascade: parse as JSON (structured renderer on success), else treat
as markdown when it contains ``#`` or ``|``, else show it preformatted.

Note that ``render(render(x))`` is not a re-parse of ``render(x)``: the
rendered fragment starts with ``<`` and is passed through as markup.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from finreport.constants import MARKDOWN_MARKERS, NO_DATA_MESSAGE, RAW_RESPONSE_KEY
from finreport.report.blocks import (
    SOURCE_EMPTY,
    SOURCE_RAW,
    Notice,
    RawPreformatted,
    ReportDocument,
)
from finreport.report.html_renderer import render_document
from finreport.report.markdown_parser import parse_markdown
from finreport.report.structured import build_structured_document

logger = logging.getLogger(__name__)


class PayloadKind(str, Enum):
    """How a payload will be read."""

    EMPTY = "empty"
    MARKUP = "markup"
    STRUCTURED = "structured"
    MARKDOWN = "markdown"
    RAW_TEXT = "raw_text"


_JSON_SCALARS = (list, tuple, int, float, bool)


def looks_like_markdown(text: str) -> bool:
    """True if *text* contains any markdown marker character."""
    return any(marker in text for marker in MARKDOWN_MARKERS)


def _classify_text(text: str) -> tuple[PayloadKind, Any]:
    try:
        return PayloadKind.STRUCTURED, json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Payload text is not JSON; checking for markdown")

    if looks_like_markdown(text):
        return PayloadKind.MARKDOWN, text
    return PayloadKind.RAW_TEXT, text


def classify_payload(payload: Any) -> tuple[PayloadKind, Any]:
    """Decide how *payload* will be rendered.

    Returns
    -------
    (kind, value)
        ``value`` is what the matching builder receives: the parsed JSON
        for ``STRUCTURED``, the text for ``MARKDOWN`` / ``RAW_TEXT`` /
        ``MARKUP``, ``None`` for ``EMPTY``.

    Raises
    ------
    TypeError
        If *payload* is neither ``None``, a string, a mapping, nor
        another JSON value.
    """
    if payload is None or payload == "":
        return PayloadKind.EMPTY, None

    if isinstance(payload, str):
        if payload.strip().startswith("<"):
            return PayloadKind.MARKUP, payload
        return _classify_text(payload)

    if isinstance(payload, Mapping):
        raw = payload.get(RAW_RESPONSE_KEY)
        if isinstance(raw, str) and raw:
            logger.debug("Reading %s field of payload", RAW_RESPONSE_KEY)
            return _classify_text(raw)
        return PayloadKind.STRUCTURED, payload

    if isinstance(payload, _JSON_SCALARS):
        return PayloadKind.STRUCTURED, payload

    raise TypeError(
        f"Unsupported payload type {type(payload).__name__}; "
        "expected None, str, or a JSON value"
    )


def build_document(payload: Any) -> ReportDocument:
    """Classify *payload* and build its report document.

    Raises
    ------
    ValueError
        If *payload* is already markup; it has no document form.
    TypeError
        See :func:`classify_payload`.
    """
    kind, value = classify_payload(payload)
    return _document_for(kind, value)


def _document_for(kind: PayloadKind, value: Any) -> ReportDocument:
    logger.debug("Payload classified as %s", kind.value)

    if kind is PayloadKind.EMPTY:
        return ReportDocument(blocks=(Notice(text=NO_DATA_MESSAGE),), source=SOURCE_EMPTY)
    if kind is PayloadKind.MARKDOWN:
        return parse_markdown(value)
    if kind is PayloadKind.RAW_TEXT:
        return ReportDocument(blocks=(RawPreformatted(text=value),), source=SOURCE_RAW)
    if kind is PayloadKind.STRUCTURED:
        return build_structured_document(value)
    raise ValueError("Payload is pre-rendered markup and has no document form")


def render(payload: Any, *, styles: Mapping[str, Any] | None = None) -> str:
    """Render an analysis payload to a self-contained HTML fragment.

    Never raises for ``None``, strings, or JSON values; pre-rendered markup
    is returned as-is.  ``styles`` overrides ``config/render_styles.yml``.
    """
    kind, value = classify_payload(payload)
    if kind is PayloadKind.MARKUP:
        logger.debug("Payload is already markup; passing through")
        return value
    return render_document(_document_for(kind, value), styles=styles)
