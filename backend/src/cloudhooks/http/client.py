"""Outbound HTTP helper for handlers.

Uses httpx. One best-effort attempt per call: no retry, no backoff, and no
timeout unless the caller passes one.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Result of an outbound call.

    Attributes:
        status_code: HTTP status (4xx/5xx responses are still results)
        headers: Response headers
        text: Raw response body
        data: Body parsed as JSON, or None when it is not JSON
    """

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    text: str = ""
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HttpRequestError(Exception):
    """Raised when the call fails at the transport level.

    ``response`` is the partial response when one was received, else None.
    """

    def __init__(self, message: str, response: HttpResponse | None = None):
        super().__init__(message)
        self.response = response


def _to_response(response: httpx.Response) -> HttpResponse:
    try:
        data = response.json()
    except ValueError:
        data = None
    return HttpResponse(
        status_code=response.status_code,
        headers=dict(response.headers),
        text=response.text,
        data=data,
    )


async def http_request(
    url: str,
    method: str = "GET",
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    body: Any = None,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> HttpResponse:
    """Perform one outbound HTTP call, interpreting the reply as JSON.

    Args:
        url: URL to call
        method: HTTP method (GET, POST, etc.)
        params: Query parameters
        headers: HTTP headers (``Accept: application/json`` is added)
        body: JSON-serializable request body
        timeout: Timeout in seconds; None means no timeout
        client: Client to use instead of a short-lived one

    Returns:
        HttpResponse for any HTTP status

    Raises:
        HttpRequestError: If the request could not be completed
    """
    request_headers = {"Accept": "application/json", **(headers or {})}
    kwargs: dict[str, Any] = {"params": params, "headers": request_headers}
    if body is not None:
        kwargs["json"] = body

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=timeout)
    elif timeout is not None:
        kwargs["timeout"] = timeout

    try:
        response = await client.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        logger.error("http_request %s %s failed: %s", method, url, e)
        raise HttpRequestError(f"{method} {url} failed: {e}") from e
    finally:
        if owns_client:
            await client.aclose()

    return _to_response(response)
