"""Report document model.

Both parsing paths (markdown text and structured JSON) produce a
:class:`ReportDocument`: an ordered, immutable sequence of blocks.  The
HTML renderer is the only consumer.

All sequence fields are tuples so a built document cannot be changed
after the fact.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# ---------------------------------------------------------------------------
# Block kinds
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Heading:
    """Section heading, ``level`` 1-6."""

    level: int
    text: str
    icon: str | None = None

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class ListBlock:
    """Bulleted (``ordered=False``) or numbered list."""

    ordered: bool
    items: tuple[str, ...]


@dataclass(frozen=True)
class AggregateRow:
    """Synthetic summary row appended below a table's data rows.

    ``value`` is the computed amount; ``label`` is the display text placed
    in column ``column_index``.  Every other column of the row is blank.
    """

    column_index: int
    label: str
    value: float


@dataclass(frozen=True)
class Table:
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    aggregate: AggregateRow | None = None
    caption: str | None = None


@dataclass(frozen=True)
class Rule:
    """Horizontal rule."""


@dataclass(frozen=True)
class RawPreformatted:
    """Text shown verbatim (pretty-printed JSON or unrecognised text)."""

    text: str


@dataclass(frozen=True)
class Notice:
    """Informational message shown instead of a report."""

    text: str


Block = Union[Heading, Paragraph, ListBlock, Table, Rule, RawPreformatted, Notice]


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

SOURCE_STRUCTURED = "structured"
SOURCE_MARKDOWN = "markdown"
SOURCE_RAW = "raw"
SOURCE_EMPTY = "empty"


@dataclass(frozen=True)
class ReportDocument:
    """Ordered blocks plus the kind of input they were built from."""

    blocks: tuple[Block, ...] = field(default_factory=tuple)
    source: str = SOURCE_STRUCTURED

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)
