"""Response envelope helpers.

Every webhook answer is HTTP 200 with exactly one of ``success`` or
``error``; the envelope, not the status code, carries the outcome.
"""

from typing import Any

from fastapi.responses import JSONResponse


def success_response(data: Any = None) -> JSONResponse:
    """Build ``{"success": data}``, with ``true`` when data is None."""
    if data is None:
        data = True
    return JSONResponse(status_code=200, content={"success": data})


def error_response(message: Any = None) -> JSONResponse:
    """Build ``{"error": message}``, with ``true`` when message is None."""
    if message is None:
        message = True
    return JSONResponse(status_code=200, content={"error": message})
