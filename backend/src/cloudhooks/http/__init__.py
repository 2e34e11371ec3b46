"""Outbound HTTP for handlers."""

from cloudhooks.http.client import HttpRequestError, HttpResponse, http_request

__all__ = ["HttpRequestError", "HttpResponse", "http_request"]
