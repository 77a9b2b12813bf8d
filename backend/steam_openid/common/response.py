"""
Unified response format
"""

from datetime import datetime, timezone
from typing import Any


def _timestamp() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def success_response(
    data: Any = None,
    message: str = "Success",
    code: int = 200,
) -> dict:
    """Success response"""
    return {
        "success": True,
        "code": code,
        "message": message,
        "data": data,
        "timestamp": _timestamp(),
    }


def error_response(
    message: str = "Error",
    code: int = 400,
    data: Any = None,
) -> dict:
    """Error response"""
    return {
        "success": False,
        "code": code,
        "message": message,
        "data": data,
        "timestamp": _timestamp(),
    }
