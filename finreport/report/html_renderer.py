"""Report document -> HTML fragment.

Serializes a :class:`~finreport.report.blocks.ReportDocument` block by
block, in document order.  CSS classes come from
``config/render_styles.yml``:

- heading levels 1-6 each map to their own class string
- table rows alternate ``row_even`` / ``row_odd`` by data-row index
- the aggregate row uses ``aggregate_row`` / ``aggregate_cell``

The output always starts with the report stylesheet so the fragment can
be embedded anywhere (screen, print window, PDF export) without extra
assets.  Rendering is pure: the same document and styles always give
byte-identical output.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping
from typing import Any

from finreport.config_loader import get_render_styles
from finreport.report.blocks import (
    AggregateRow,
    Block,
    Heading,
    ListBlock,
    Notice,
    Paragraph,
    RawPreformatted,
    ReportDocument,
    Rule,
    Table,
)

logger = logging.getLogger(__name__)


REPORT_STYLESHEET = """\
<style>
.analysis-report h2 {
  position: relative;
  padding-bottom: 0.5rem;
}
.analysis-report h2::after {
  content: "";
  position: absolute;
  bottom: 0;
  left: 0;
  height: 2px;
  width: 40px;
  background-color: #3b82f6;
}
.analysis-report table {
  border-collapse: separate;
  border-spacing: 0;
  width: 100%;
  margin: 1rem 0;
  box-shadow: 0 1px 3px rgba(0,0,0,0.1);
  border-radius: 0.5rem;
  overflow: hidden;
}
.analysis-report th {
  position: sticky;
  top: 0;
  z-index: 10;
}
</style>"""


def _text(value: str) -> str:
    return html.escape(value, quote=False)


def _cls(value: Any) -> str:
    return html.escape(str(value or ""), quote=True)


class HtmlRenderer:
    """Renders blocks with one fixed set of styles."""

    def __init__(self, styles: Mapping[str, Any]) -> None:
        self._styles = styles

    def _style(self, *path: Any) -> str:
        node: Any = self._styles
        for key in path:
            if not isinstance(node, Mapping):
                return ""
            node = node.get(key)
        return _cls(node)

    # -- documents ----------------------------------------------------------

    def render(self, document: ReportDocument) -> str:
        wrapper = self._style("wrapper", document.source)
        parts = [REPORT_STYLESHEET, f'<div class="{wrapper}">']
        parts.extend(self.render_block(block) for block in document.blocks)
        parts.append("</div>")
        return "\n".join(parts)

    def render_block(self, block: Block) -> str:
        if isinstance(block, Heading):
            return self._heading(block)
        if isinstance(block, Paragraph):
            return f'<p class="{self._style("paragraph")}">{_text(block.text)}</p>'
        if isinstance(block, ListBlock):
            return self._list(block)
        if isinstance(block, Table):
            return self._table(block)
        if isinstance(block, Rule):
            return f'<hr class="{self._style("rule")}">'
        if isinstance(block, RawPreformatted):
            return f'<pre class="{self._style("preformatted")}">{_text(block.text)}</pre>'
        if isinstance(block, Notice):
            return f'<div class="{self._style("notice")}">{_text(block.text)}</div>'
        raise TypeError(f"Unknown block type: {type(block).__name__}")

    # -- blocks -------------------------------------------------------------

    def _heading(self, block: Heading) -> str:
        tag = f"h{block.level}"
        css = self._style("headings", block.level)
        if block.icon:
            css = f'{css} {self._style("heading_with_icon")}'.strip()
            icon = f'<span class="{self._style("heading_icon")}">{_text(block.icon)}</span> '
            return f'<{tag} class="{css}">{icon}{_text(block.text)}</{tag}>'
        return f'<{tag} class="{css}">{_text(block.text)}</{tag}>'

    def _list(self, block: ListBlock) -> str:
        tag = "ol" if block.ordered else "ul"
        kind = "ordered" if block.ordered else "unordered"
        item_css = self._style("list", "item")
        items = "".join(f'<li class="{item_css}">{_text(item)}</li>' for item in block.items)
        return f'<{tag} class="{self._style("list", kind)}">{items}</{tag}>'

    def _table(self, block: Table) -> str:
        width = len(block.headers)
        parts = [
            f'<div class="{self._style("table", "container")}">',
            f'<table class="{self._style("table", "table")}">',
        ]
        if block.caption:
            parts.append(
                f'<caption class="{self._style("table", "caption")}">{_text(block.caption)}</caption>'
            )

        th_css = self._style("table", "header_cell")
        header_cells = "".join(
            f'<th scope="col" class="{th_css}">{_text(h)}</th>' for h in block.headers
        )
        parts.append(f'<thead class="{self._style("table", "head")}"><tr>{header_cells}</tr></thead>')
        parts.append(f'<tbody class="{self._style("table", "body")}">')

        td_css = self._style("table", "cell")
        for index, row in enumerate(block.rows):
            shade = self._style("table", "row_even" if index % 2 == 0 else "row_odd")
            cells = "".join(f'<td class="{td_css}">{_text(c)}</td>' for c in row[:width])
            parts.append(f'<tr class="{shade}">{cells}</tr>')

        if block.aggregate is not None:
            parts.append(self._aggregate_row(block.aggregate, width))

        parts.append("</tbody></table></div>")
        return "".join(parts)

    def _aggregate_row(self, aggregate: AggregateRow, width: int) -> str:
        value_css = self._style("table", "aggregate_cell")
        blank_css = self._style("table", "aggregate_blank")
        cells = []
        for column in range(width):
            if column == aggregate.column_index:
                cells.append(f'<td class="{value_css}">{_text(aggregate.label)}</td>')
            else:
                cells.append(f'<td class="{blank_css}"></td>')
        return f'<tr class="{self._style("table", "aggregate_row")}">{"".join(cells)}</tr>'


def render_document(
    document: ReportDocument,
    *,
    styles: Mapping[str, Any] | None = None,
) -> str:
    """Render *document* to an HTML fragment.

    Parameters
    ----------
    document:
        Document from the markdown parser or the structured renderer.
    styles:
        Style contract overriding ``config/render_styles.yml``.
    """
    renderer = HtmlRenderer(styles if styles is not None else get_render_styles())
    markup = renderer.render(document)
    logger.debug("Rendered %d blocks (%s) to %d chars", len(document), document.source, len(markup))
    return markup
