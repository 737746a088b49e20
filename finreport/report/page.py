"""Full-page wrappers around a rendered report fragment.

- :func:`build_standalone_page` -- a complete HTML document for viewing
  a report on its own (full-screen window, saved ``.html`` file), with
  font-size controls and print rules.
- :func:`build_print_document` -- the fixed landscape A4 template handed
  to the PDF export step.  The fragment is embedded unchanged, so node
  order is preserved.

Both are pure string templates; nothing here touches a browser or a PDF
library.
"""

from __future__ import annotations

import html
from string import Template

from finreport.constants import PRINT_TITLE, VIEWER_TITLE

# Only added when the fragment brings no stylesheet of its own.
_DEFAULT_REPORT_CSS = """
    .analysis-report h2 {
      color: var(--color-gray-900);
      border-bottom: 2px solid var(--color-primary);
      padding-bottom: 0.5rem;
      margin-bottom: 1rem;
      font-size: 1.5rem;
    }
    .analysis-report h3 {
      color: var(--color-gray-800);
      margin-top: 1.5rem;
      margin-bottom: 0.75rem;
      font-size: 1.25rem;
    }
    .analysis-report table {
      border-collapse: separate;
      border-spacing: 0;
      width: 100%;
      margin: 1.5rem 0;
      box-shadow: 0 1px 3px rgba(0,0,0,0.1);
      border-radius: 0.5rem;
      overflow: hidden;
    }
    .analysis-report th {
      background-color: var(--color-primary-light);
      font-weight: 600;
      text-align: left;
      padding: 0.75rem 1rem;
      font-size: 0.75rem;
      text-transform: uppercase;
      letter-spacing: 0.05em;
      color: var(--color-primary);
    }
    .analysis-report td {
      padding: 0.75rem 1rem;
      font-size: 0.875rem;
      border-top: 1px solid var(--color-gray-200);
    }
    .analysis-report tr:nth-child(even) {
      background-color: var(--color-gray-50);
    }
"""

_STANDALONE_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>$title</title>
  <style>
    :root {
      --color-primary: #0369a1;
      --color-primary-light: #e0f2fe;
      --color-gray-50: #f9fafb;
      --color-gray-100: #f3f4f6;
      --color-gray-200: #e5e7eb;
      --color-gray-700: #374151;
      --color-gray-800: #1f2937;
      --color-gray-900: #111827;
    }
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: 'Inter', -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
      line-height: 1.6;
      color: var(--color-gray-800);
      background-color: var(--color-gray-50);
      padding: 1rem;
    }
    .container {
      max-width: 1100px;
      margin: 0 auto;
      background: white;
      padding: 2rem;
      border-radius: 12px;
      box-shadow: 0 4px 20px rgba(0,0,0,0.08);
    }
    pre {
      background-color: var(--color-gray-100);
      padding: 1rem;
      border-radius: 6px;
      overflow: auto;
      font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace;
      white-space: pre-wrap;
      word-break: break-word;
      font-size: 0.875rem;
    }
    .controls {
      position: fixed;
      top: 1rem;
      right: 1rem;
      z-index: 100;
      padding: 0.5rem;
      border-radius: 8px;
      display: flex;
      gap: 0.5rem;
      background-color: rgba(255, 255, 255, 0.8);
      border: 1px solid var(--color-gray-200);
    }
    .control-btn {
      background: var(--color-gray-100);
      border: 1px solid var(--color-gray-200);
      border-radius: 4px;
      padding: 0.5rem 0.75rem;
      cursor: pointer;
      font-size: 0.875rem;
      color: var(--color-gray-700);
    }
    .control-btn.primary {
      background-color: var(--color-primary);
      border-color: var(--color-primary);
      color: white;
    }
    @media print {
      body { background: white; padding: 0; }
      .container { box-shadow: none; padding: 0; }
      .controls { display: none; }
    }
$report_css  </style>
</head>
<body>
  <div class="controls">
    <button class="control-btn" id="decreaseFont" title="Decrease font size">A-</button>
    <button class="control-btn" id="increaseFont" title="Increase font size">A+</button>
    <button class="control-btn primary" id="printBtn" title="Print report">Print</button>
  </div>
  <div class="container" id="contentContainer">
$content
  </div>
  <script>
    let currentFontSize = 16;
    const container = document.getElementById('contentContainer');
    container.style.fontSize = currentFontSize + 'px';
    document.getElementById('decreaseFont').addEventListener('click', () => {
      if (currentFontSize > 12) {
        currentFontSize -= 1;
        container.style.fontSize = currentFontSize + 'px';
      }
    });
    document.getElementById('increaseFont').addEventListener('click', () => {
      if (currentFontSize < 24) {
        currentFontSize += 1;
        container.style.fontSize = currentFontSize + 'px';
      }
    });
    document.getElementById('printBtn').addEventListener('click', () => window.print());
  </script>
</body>
</html>
""")

_PRINT_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>$title</title>
  <style>
    @page { size: A4 landscape; margin: 5mm; }
    table {
      width: 100% !important;
      table-layout: fixed !important;
      border-collapse: collapse !important;
      margin: 8px 0 !important;
      page-break-inside: avoid !important;
      font-size: 10px !important;
    }
    table, th, td { border: 1px solid #e5e7eb !important; }
    th {
      background: #f3f4f6 !important;
      padding: 6px !important;
      text-align: left !important;
      font-weight: bold !important;
      color: #1f2937 !important;
      white-space: normal !important;
      word-wrap: break-word !important;
    }
    td {
      padding: 6px !important;
      vertical-align: top !important;
      color: #374151 !important;
      word-wrap: break-word !important;
    }
    tr:nth-child(even) { background-color: #f9fafb !important; }
    h2 {
      color: #1f2937 !important;
      font-size: 16px !important;
      margin: 16px 0 8px 0 !important;
      border-bottom: 1px solid #e5e7eb !important;
      padding-bottom: 6px !important;
    }
    h3 { color: #374151 !important; font-size: 14px !important; margin: 12px 0 8px 0 !important; }
    p { margin: 6px 0 !important; line-height: 1.4 !important; }
    ul { margin: 6px 0 !important; padding-left: 16px !important; }
    li { margin: 3px 0 !important; line-height: 1.3 !important; }
    .analysis-report { max-width: none !important; width: 100% !important; overflow-x: visible !important; }
    * { -webkit-print-color-adjust: exact !important; print-color-adjust: exact !important; }
  </style>
</head>
<body>
  <div style="padding: 12px; font-family: Arial, sans-serif;">
    <h1 style="color: #1f2937; font-size: 20px; margin-bottom: 16px; border-bottom: 2px solid #3b82f6; padding-bottom: 8px;">$title</h1>
    <div style="color: #374151; font-size: 12px;">
$content
    </div>
  </div>
</body>
</html>
""")


def build_standalone_page(content: str, *, title: str = VIEWER_TITLE) -> str:
    """Wrap a rendered fragment in a complete, printable HTML page.

    The default report stylesheet is included only when *content* has no
    ``style`` of its own.
    """
    report_css = "" if "style" in content else _DEFAULT_REPORT_CSS
    return _STANDALONE_TEMPLATE.substitute(
        title=html.escape(title),
        report_css=report_css,
        content=content,
    )


def build_print_document(content: str, *, title: str = PRINT_TITLE) -> str:
    """Wrap a rendered fragment in the landscape A4 export template."""
    return _PRINT_TEMPLATE.substitute(title=html.escape(title), content=content)
