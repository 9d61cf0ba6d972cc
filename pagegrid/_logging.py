import hashlib
import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger("pagegrid")

# Library code never configures output; applications attach their own handlers.
logger.addHandler(logging.NullHandler())


def _digest(value: Any) -> str:
    return hashlib.sha256(str(value).encode("utf-8")).hexdigest()[:8]


def redact_filters(filters: Mapping[str, Any] | str) -> str:
    """
    Returns a log-safe rendering of filter keywords.

    Column names stay readable; each keyword becomes the first 8 hex digits
    of its sha256, so equal searches can be matched up across log lines
    without the typed text ever reaching the logs.
    """
    try:
        if isinstance(filters, Mapping):
            return str({column: _digest(keyword) for column, keyword in filters.items()})
        return _digest(filters)
    except Exception:
        return "<redaction_failed>"
