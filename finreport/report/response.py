"""Decode the analysis service's HTTP body into a renderable payload.

The service answers with JSON most of the time, but some deployments
return markdown or plain text with a ``text/plain`` content type.  Text
that does not parse as JSON is kept under ``rawResponse`` so
:func:`finreport.report.formatter.render` can sort it out later.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from finreport.constants import RAW_RESPONSE_KEY

logger = logging.getLogger(__name__)


def decode_analysis_response(body: str | bytes, content_type: str | None = None) -> Any:
    """Turn a response body into an analysis payload.

    Parameters
    ----------
    body:
        Response body.  Bytes are decoded as UTF-8; undecodable bytes are
        replaced rather than rejected.
    content_type:
        Value of the ``Content-Type`` header, if known.  Only used for
        logging -- JSON is attempted for every body.

    Returns
    -------
    The parsed JSON value, or ``{"rawResponse": text}`` when the body is
    not JSON.
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")

    declared_json = bool(content_type) and "application/json" in content_type.lower()

    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        if declared_json:
            logger.warning("Response declared as JSON but did not parse: %s", exc)
        else:
            logger.debug("Response body is not JSON; keeping as raw text")
        return {RAW_RESPONSE_KEY: body}
