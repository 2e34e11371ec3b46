"""Webhook key middleware for the webhook app."""

import hmac
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from cloudhooks.api.responses import error_response
from cloudhooks.config import DEFAULT_HEADER

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized Request."


class WebhookKeyMiddleware(BaseHTTPMiddleware):
    """Middleware that rejects requests without the shared webhook key.

    Runs before routing, so it guards every path of the app. A missing or
    wrong key is answered with ``{"error": "Unauthorized Request."}`` and
    status 200; the request never reaches a handler.
    """

    def __init__(self, app, webhook_key: str, header_name: str = DEFAULT_HEADER):
        """Initialize middleware with the expected key.

        Args:
            app: The ASGI application
            webhook_key: Shared secret every request must present
            header_name: Header carrying the key
        """
        super().__init__(app)
        self._webhook_key = webhook_key.encode()
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next) -> Response:
        if not self.is_authorized(request):
            logger.warning("Unauthorized webhook request to %s", request.url.path)
            return error_response(UNAUTHORIZED_MESSAGE)
        return await call_next(request)

    def is_authorized(self, request: Request) -> bool:
        provided = request.headers.get(self._header_name)
        if provided is None:
            return False
        return hmac.compare_digest(provided.encode(), self._webhook_key)
