#!/usr/bin/env python3
"""finreport -- CLI entry point.

Usage:
    python main.py analysis.json
    python main.py analysis.md -o report.html --page standalone
    curl -s "$ANALYSIS_URL" | python main.py - --content-type application/json
    python main.py --help

Reads an analysis result (JSON, markdown, plain text or pre-rendered
HTML), renders it to an HTML report and writes it to a file or stdout.
Fetching the analysis and producing PDFs are left to other tools.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Early setup: configure logging before any finreport imports
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("finreport.main")


PAGE_CHOICES = ("fragment", "standalone", "print")


def _read_input(source: str) -> str | None:
    """Read the input text from a path, or stdin for ``-``."""
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.exists():
        logger.error("Input file not found: %s", path)
        return None
    return path.read_text(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> int:
    """Render one analysis result to HTML."""

    parser = argparse.ArgumentParser(
        description="finreport -- render financial analysis results to HTML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  python main.py analysis.json
  python main.py analysis.md -o report.html --page standalone
  python main.py response.txt --content-type text/plain --page print
""",
    )
    parser.add_argument(
        "input",
        help="Analysis result file, or '-' to read from stdin",
    )
    parser.add_argument(
        "--output", "-o", type=str, default="",
        help="Write the HTML here instead of stdout",
    )
    parser.add_argument(
        "--page", choices=PAGE_CHOICES, default="fragment",
        help=(
            "fragment: embeddable report markup (default); "
            "standalone: complete viewer page; "
            "print: landscape A4 export template"
        ),
    )
    parser.add_argument(
        "--content-type", type=str, default="",
        help="Content-Type the analysis service returned with the body",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    text = _read_input(args.input)
    if text is None:
        return 1

    from finreport.report import (
        build_print_document,
        build_standalone_page,
        decode_analysis_response,
        render,
    )

    payload = decode_analysis_response(text, args.content_type or None)
    markup = render(payload)

    if args.page == "standalone":
        markup = build_standalone_page(markup)
    elif args.page == "print":
        markup = build_print_document(markup)

    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(markup, encoding="utf-8")
        logger.info("Report saved to %s", out)
    else:
        sys.stdout.write(markup)
        sys.stdout.write("\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
