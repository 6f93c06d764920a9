"""Response envelope wrapping every JSON payload."""
from __future__ import annotations

from datetime import datetime
from typing import Any

STATUS_SUCCESS = "SUCCESS"
STATUS_FAILURE = "FAILURE"


def _envelope(status: str, message: str, data: Any) -> dict:
    return {
        "status": status,
        "message": message,
        "data": data,
        "timestamp": datetime.now().isoformat(timespec="seconds"),
    }


def success(message: str, data: Any = None) -> dict:
    return _envelope(STATUS_SUCCESS, message, data)


def failure(message: str, data: Any = None) -> dict:
    return _envelope(STATUS_FAILURE, message, data)


def listing(items: list, *, found: str, empty: str) -> dict:
    """SUCCESS envelope whose message depends on whether anything was found."""
    return success(found if items else empty, items)
