"""Line-oriented markdown parser.

Converts the markdown an analysis model returns into a
:class:`~finreport.report.blocks.ReportDocument`.  Only the block syntax
those reports use is recognised:

- ATX headings (``#`` to ``######`` followed by a space)
- horizontal rules (``---``, ``***``, ``___``)
- pipe tables, with an optional ``|---|---|`` separator row
- bulleted (``-``/``*``) and numbered (``1.``) lists
- everything else non-blank becomes a paragraph, one per line

Parsing is a single pass over the lines, driven by :class:`ParserState`.
Block boundaries are decided by the state the parser is in when a line
arrives; a line that ends a table or list is handed back to the
``SCANNING`` state rather than skipped.  Reaching the end of input closes
whatever block is still open.

Parsing never fails: unrecognised syntax degrades to a paragraph.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

from finreport.report.aggregates import average_row, find_revenue_column
from finreport.report.blocks import (
    SOURCE_MARKDOWN,
    Block,
    Heading,
    ListBlock,
    Paragraph,
    ReportDocument,
    Rule,
    Table,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Line patterns
# ---------------------------------------------------------------------------

_HEADING = re.compile(r"^(#{1,6}) (.*)$")
_RULES = frozenset({"---", "***", "___"})
_UNORDERED_ITEM = re.compile(r"^[-*] ")
_ORDERED_ITEM = re.compile(r"^\d+\.\s")
_SEPARATOR_CHARS = re.compile(r"^[\s|:\-]+$")


class ParserState(str, Enum):
    """States of the block parser."""

    SCANNING = "scanning"
    IN_TABLE_HEADER = "in_table_header"
    IN_TABLE_ROWS = "in_table_rows"
    IN_LIST = "in_list"


def is_table_separator(line: str) -> bool:
    """True for a pipe row made only of dashes, colons and spaces."""
    return (
        "|" in line
        and "-" in line
        and _SEPARATOR_CHARS.match(line) is not None
    )


def split_table_cells(line: str) -> tuple[str, ...]:
    """Split a pipe row into trimmed cells, dropping empty ones.

    Empty cells come from the leading and trailing pipes; blank cells in
    the middle of a row are dropped as well.
    """
    return tuple(cell.strip() for cell in line.split("|") if cell.strip())


def _list_item(line: str, ordered: bool) -> str | None:
    """Item text if *line* is an item of the given list kind, else None."""
    if ordered:
        if _ORDERED_ITEM.match(line):
            return _ORDERED_ITEM.sub("", line, count=1)
        return None
    if _UNORDERED_ITEM.match(line):
        return line[2:]
    return None


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class MarkdownParser:
    """Single-use parser; create one per input text."""

    def __init__(self, text: str) -> None:
        self._lines = text.split("\n")
        self._blocks: list[Block] = []
        self._state = ParserState.SCANNING
        self._headers: tuple[str, ...] = ()
        self._rows: list[tuple[str, ...]] = []
        self._list_ordered = False
        self._list_items: list[str] = []

    @property
    def state(self) -> ParserState:
        return self._state

    def parse(self) -> ReportDocument:
        """Run the state machine over every line and return the document."""
        i = 0
        while i < len(self._lines):
            line = self._lines[i].strip()
            if self._step(line):
                i += 1

        # End of input: close any open table or list.
        self._close_open_block()

        logger.debug(
            "Parsed %d markdown lines into %d blocks",
            len(self._lines), len(self._blocks),
        )
        return ReportDocument(blocks=tuple(self._blocks), source=SOURCE_MARKDOWN)

    # -- transitions --------------------------------------------------------

    def _step(self, line: str) -> bool:
        """Feed one line.  Returns False if the line must be re-read."""
        if self._state is ParserState.SCANNING:
            self._scan(line)
            return True

        if self._state is ParserState.IN_TABLE_HEADER:
            if is_table_separator(line):
                self._state = ParserState.IN_TABLE_ROWS
                return True
            if "|" in line:
                self._state = ParserState.IN_TABLE_ROWS
                return False
            self._close_open_block()
            return False

        if self._state is ParserState.IN_TABLE_ROWS:
            if "|" in line:
                if not is_table_separator(line):
                    self._rows.append(split_table_cells(line))
                return True
            self._close_open_block()
            return False

        # IN_LIST
        item = _list_item(line, self._list_ordered)
        if item is not None:
            self._list_items.append(item)
            return True
        self._close_open_block()
        return False

    def _scan(self, line: str) -> None:
        if not line:
            return

        heading = _HEADING.match(line)
        if heading:
            self._blocks.append(
                Heading(level=len(heading.group(1)), text=heading.group(2).strip())
            )
            return

        if line in _RULES:
            self._blocks.append(Rule())
            return

        if "|" in line:
            self._headers = split_table_cells(line)
            self._rows = []
            self._state = ParserState.IN_TABLE_HEADER
            return

        for ordered in (False, True):
            item = _list_item(line, ordered)
            if item is not None:
                self._list_ordered = ordered
                self._list_items = [item]
                self._state = ParserState.IN_LIST
                return

        self._blocks.append(Paragraph(text=line))

    # -- block closing ------------------------------------------------------

    def _close_open_block(self) -> None:
        if self._state in (ParserState.IN_TABLE_HEADER, ParserState.IN_TABLE_ROWS):
            self._blocks.append(self._build_table())
            self._headers = ()
            self._rows = []
        elif self._state is ParserState.IN_LIST:
            self._blocks.append(
                ListBlock(ordered=self._list_ordered, items=tuple(self._list_items))
            )
            self._list_items = []
        self._state = ParserState.SCANNING

    def _build_table(self) -> Table:
        aggregate = None
        column = find_revenue_column(self._headers)
        if column is not None:
            values = [row[column] if column < len(row) else None for row in self._rows]
            aggregate = average_row(column, values)
        return Table(headers=self._headers, rows=tuple(self._rows), aggregate=aggregate)


def parse_markdown(text: str) -> ReportDocument:
    """Parse markdown *text* into a report document."""
    return MarkdownParser(text or "").parse()
