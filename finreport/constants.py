"""Global constants for the finreport rendering engine."""

# ---------------------------------------------------------------------------
# Payload classification
# ---------------------------------------------------------------------------

# Key under which the analysis service returns non-JSON text bodies.
RAW_RESPONSE_KEY: str = "rawResponse"

# Characters whose presence marks a plain string as markdown.
MARKDOWN_MARKERS: tuple[str, ...] = ("#", "|")

# ---------------------------------------------------------------------------
# Notices
# ---------------------------------------------------------------------------
NO_DATA_MESSAGE: str = "No analysis data available."

# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

# A header qualifies for the average row when its normalized form
# contains every one of these tokens.
REVENUE_HEADER_TOKENS: tuple[str, ...] = ("monthly", "revenue")

AGGREGATE_LABEL: str = "Total Average"

CURRENCY_SYMBOL: str = "$"

# ---------------------------------------------------------------------------
# Structured payload sections
# ---------------------------------------------------------------------------
FUNDING_SOURCE_HEADERS: tuple[str, ...] = (
    "Funder / Source",
    "Amount",
    "Frequency",
    "Notes",
)

DEFAULT_INDICATOR_TITLE: str = "Indicator"

JSON_INDENT: int = 2

# ---------------------------------------------------------------------------
# Page templates
# ---------------------------------------------------------------------------
VIEWER_TITLE: str = "Financial Analysis"
PRINT_TITLE: str = "Financial Analysis Report"
