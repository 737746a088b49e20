"""Report normalization and rendering.

Public API:
    - ``render``: analysis payload (JSON value or text) -> HTML fragment.
    - ``build_document`` / ``classify_payload``: the same pipeline, stopping
      at the document model or at the routing decision.
    - ``parse_markdown``, ``build_structured_document``: the two parsers.
    - ``render_document``: document model -> HTML fragment.
    - ``build_standalone_page`` / ``build_print_document``: full-page
      wrappers for viewing and PDF export.
    - ``decode_analysis_response``: HTTP body -> payload.
"""

from finreport.report.formatter import build_document, classify_payload, render
from finreport.report.html_renderer import render_document
from finreport.report.markdown_parser import parse_markdown
from finreport.report.page import build_print_document, build_standalone_page
from finreport.report.response import decode_analysis_response
from finreport.report.structured import build_structured_document

__all__ = [
    "build_document",
    "build_print_document",
    "build_standalone_page",
    "build_structured_document",
    "classify_payload",
    "decode_analysis_response",
    "parse_markdown",
    "render",
    "render_document",
]
