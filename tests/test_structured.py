"""Tests for finreport.report.structured -- JSON payload sections."""

from __future__ import annotations

import json
import unittest
from unittest.mock import patch

import pytest

from finreport.report import render, structured
from finreport.report.blocks import (
    Heading,
    ListBlock,
    Paragraph,
    RawPreformatted,
    Table,
)
from finreport.report.structured import (
    build_structured_document,
    cell_text,
    humanize_key,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _blocks_of(doc, kind) -> list:
    return [b for b in doc.blocks if isinstance(b, kind)]


def _make_overview(revenues: list) -> list[dict]:
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
    return [
        {"month": months[i], "monthly_revenue": rev, "ending_balance": "$500"}
        for i, rev in enumerate(revenues)
    ]


def _make_indicators() -> list[dict]:
    return [
        {
            "title": "Recurring daily debits",
            "description": "Fixed ACH withdrawals every business day.",
            "items": ["ACME FUNDING $450/day", "BLUEVINE $300/day"],
        },
        {"description": "Untitled indicator"},
    ]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_humanize_key(self):
        assert humanize_key("monthly_revenue") == "Monthly Revenue"
        assert humanize_key("avg_daily_balance") == "Avg Daily Balance"
        assert humanize_key("monthlyRevenue") == "MonthlyRevenue"

    def test_cell_text(self):
        assert cell_text(None) == ""
        assert cell_text("$1,000") == "$1,000"
        assert cell_text(1200.0) == "1200"
        assert cell_text(12.5) == "12.5"
        assert cell_text(0) == "0"
        assert cell_text(True) == "true"
        assert cell_text({"a": 1}) == '{"a": 1}'


# ---------------------------------------------------------------------------
# Monthly overview
# ---------------------------------------------------------------------------


class TestMonthlyOverview(unittest.TestCase):
    """Table built from the monthly overview rows."""

    def _table(self, payload) -> Table:
        doc = build_structured_document(payload)
        tables = _blocks_of(doc, Table)
        self.assertEqual(len(tables), 1)
        return tables[0]

    def test_headers_from_first_row(self) -> None:
        table = self._table({"monthly_overview": _make_overview(["$1"])})
        self.assertEqual(table.headers, ("Month", "Monthly Revenue", "Ending Balance"))

    def test_average_of_parseable_values(self) -> None:
        rows = _make_overview(["$10,000", "$20,000", "pending"])
        table = self._table({"monthlyOverview": rows})
        self.assertEqual(len(table.rows), 3)
        self.assertIsNotNone(table.aggregate)
        self.assertEqual(table.aggregate.column_index, 1)
        self.assertAlmostEqual(table.aggregate.value, 15000.0)
        self.assertEqual(table.aggregate.label, "Total Average: $15,000.00")

    def test_numeric_revenues(self) -> None:
        table = self._table({"monthly_overview": _make_overview([1000, 2500.5])})
        self.assertAlmostEqual(table.aggregate.value, 1750.25)
        self.assertEqual(table.rows[1][1], "2500.5")

    def test_no_parseable_values_no_average(self) -> None:
        table = self._table({"monthly_overview": _make_overview(["n/a", "tbd"])})
        self.assertEqual(len(table.rows), 2)
        self.assertIsNone(table.aggregate)

    def test_camel_case_revenue_key(self) -> None:
        rows = [{"month": "Jan", "monthlyRevenue": "$100"}, {"month": "Feb", "monthlyRevenue": "$300"}]
        table = self._table({"monthly_overview": rows})
        self.assertEqual(table.headers[1], "MonthlyRevenue")
        self.assertAlmostEqual(table.aggregate.value, 200.0)

    def test_missing_fields_render_empty(self) -> None:
        rows = [{"month": "Jan", "deposits": "$5"}, {"month": "Feb"}, "not a row"]
        table = self._table({"monthly_overview": rows})
        self.assertEqual(table.rows, (("Jan", "$5"), ("Feb", ""), ("", "")))

    def test_heading_and_caption(self) -> None:
        doc = build_structured_document({"monthly_overview": _make_overview(["$1"])})
        heading = doc.blocks[0]
        self.assertEqual(heading, Heading(level=2, text="Monthly Overview", icon="\U0001F4CA"))
        self.assertEqual(doc.blocks[1].caption, "Monthly financial summary")

    def test_empty_overview_gives_empty_table(self) -> None:
        table = self._table({"monthly_overview": []})
        self.assertEqual(table.headers, ())
        self.assertEqual(table.rows, ())


# ---------------------------------------------------------------------------
# MCA indicators
# ---------------------------------------------------------------------------


class TestMcaIndicators:
    def test_list_form(self):
        doc = build_structured_document({"mca_indicators": _make_indicators()})
        assert doc.blocks == (
            Heading(level=2, text="Indicators of MCA Funding", icon="\U0001F4A1"),
            Heading(level=3, text="1. Recurring daily debits"),
            Paragraph(text="Fixed ACH withdrawals every business day."),
            ListBlock(ordered=False, items=("ACME FUNDING $450/day", "BLUEVINE $300/day")),
            Heading(level=3, text="2. Indicator"),
            Paragraph(text="Untitled indicator"),
        )

    def test_object_form(self):
        doc = build_structured_document({
            "mcaIndicators": {
                "Stacking": "Three funders active at once.",
                "Lenders": ["Acme", "Beta"],
            },
        })
        assert doc.blocks[1:] == (
            Heading(level=3, text="Stacking"),
            Paragraph(text="Three funders active at once."),
            Heading(level=3, text="Lenders"),
            ListBlock(ordered=False, items=("Acme", "Beta")),
        )

    def test_alias_spellings_give_identical_documents(self):
        indicators = _make_indicators()
        snake = build_structured_document({"mca_indicators": indicators})
        camel = build_structured_document({"mcaIndicators": indicators})
        assert snake == camel


# ---------------------------------------------------------------------------
# Funding sources / payment patterns
# ---------------------------------------------------------------------------


class TestFundingSources:
    def test_fixed_headers_and_missing_cells(self):
        doc = build_structured_document({
            "funding_sources": [
                {"funder": "Acme Capital", "amount": "$5,000"},
                {"name": "Beta Funding", "frequency": "Weekly", "notes": "Renewed in March"},
            ],
        })
        table = _blocks_of(doc, Table)[0]
        assert table.headers == ("Funder / Source", "Amount", "Frequency", "Notes")
        assert table.rows == (
            ("Acme Capital", "$5,000", "", ""),
            ("Beta Funding", "", "Weekly", "Renewed in March"),
        )
        assert table.aggregate is None

    def test_name_preferred_over_funder(self):
        doc = build_structured_document({"fundingSources": [{"name": "A", "funder": "B"}]})
        assert _blocks_of(doc, Table)[0].rows[0][0] == "A"


class TestPaymentPatterns:
    def test_list(self):
        doc = build_structured_document({"payment_patterns": ["Daily debits", "Weekly debits"]})
        assert doc.blocks[-1] == ListBlock(ordered=False, items=("Daily debits", "Weekly debits"))

    def test_single_string(self):
        doc = build_structured_document({"paymentPatterns": "Daily debits"})
        assert doc.blocks == (
            Heading(level=3, text="MCA Payment Patterns:"),
            ListBlock(ordered=False, items=("Daily debits",)),
        )


# ---------------------------------------------------------------------------
# Document assembly
# ---------------------------------------------------------------------------


class TestDocumentAssembly:
    def test_sections_in_fixed_order(self):
        doc = build_structured_document({
            "payment_patterns": ["p"],
            "funding_sources": [{"name": "f"}],
            "mca_indicators": {"k": "v"},
            "monthly_overview": _make_overview(["$1"]),
        })
        titles = [b.text for b in _blocks_of(doc, Heading) if b.text != "k"]
        assert titles == [
            "Monthly Overview",
            "Indicators of MCA Funding",
            "Large/Unusual Deposits and Repayments",
            "MCA Payment Patterns:",
        ]
        assert doc.source == "structured"

    def test_empty_object_falls_back_to_json(self):
        doc = build_structured_document({})
        assert doc.source == "raw"
        assert len(doc.blocks) == 1
        assert isinstance(doc.blocks[0], RawPreformatted)
        assert json.loads(doc.blocks[0].text) == {}

    def test_unknown_keys_fall_back_to_pretty_json(self):
        payload = {"summary": "ok", "score": 7}
        doc = build_structured_document(payload)
        assert doc.blocks[0].text == json.dumps(payload, indent=2)

    def test_non_object_payload_falls_back(self):
        doc = build_structured_document([1, 2])
        assert json.loads(doc.blocks[0].text) == [1, 2]

    def test_unusable_section_shape_is_skipped(self):
        doc = build_structured_document({"monthly_overview": "oops", "payment_patterns": ["x"]})
        assert _blocks_of(doc, Table) == []
        assert doc.blocks[-1] == ListBlock(ordered=False, items=("x",))

    def test_only_unusable_sections_fall_back(self):
        doc = build_structured_document({"monthly_overview": "oops"})
        assert doc.source == "raw"

    def test_failing_section_does_not_affect_others(self):
        def _boom(value, cfg):
            raise ValueError("bad section")

        with patch.dict(structured._SECTION_BUILDERS, {"monthly_overview": _boom}):
            doc = build_structured_document({
                "monthly_overview": _make_overview(["$1"]),
                "payment_patterns": "still here",
            })
        assert _blocks_of(doc, Table) == []
        assert doc.blocks[-1].items == ("still here",)

    def test_integer_too_large_for_float_does_not_abort_render(self):
        payload = json.loads(
            '{"monthly_overview": [{"month": "Jan", "monthly_revenue": 1' + "0" * 400 + "}],"
            ' "payment_patterns": ["daily"]}'
        )
        doc = build_structured_document(payload)
        table = _blocks_of(doc, Table)[0]
        assert table.aggregate is None
        assert doc.blocks[-1] == ListBlock(ordered=False, items=("daily",))

        markup = render(payload)
        assert "Monthly Overview" in markup
        assert ">daily</li>" in markup

    def test_arithmetic_error_in_section_is_skipped(self):
        def _overflow(value, cfg):
            raise OverflowError("too large")

        with patch.dict(structured._SECTION_BUILDERS, {"monthly_overview": _overflow}):
            doc = build_structured_document({
                "monthly_overview": _make_overview(["$1"]),
                "payment_patterns": "still here",
            })
        assert _blocks_of(doc, Table) == []
        assert doc.blocks[-1].items == ("still here",)

    def test_empty_string_section_is_absent(self):
        doc = build_structured_document({"paymentPatterns": ""})
        assert doc.source == "raw"
        assert json.loads(doc.blocks[0].text) == {"paymentPatterns": ""}

    def test_section_config_override(self):
        doc = build_structured_document(
            {"payment_patterns": "x"},
            sections={"payment_patterns": {"title": "Patterns", "level": 4}},
        )
        assert doc.blocks[0] == Heading(level=4, text="Patterns")

    def test_document_is_immutable(self):
        doc = build_structured_document({"payment_patterns": "x"})
        with pytest.raises(AttributeError):
            doc.blocks = ()
