"""finreport -- financial analysis report normalization and rendering.

Takes the result of a document analysis run (loosely structured JSON or
free-form markdown, shape unknown in advance) and turns it into a
self-contained HTML report fragment.
"""

__version__ = "0.1.0"
