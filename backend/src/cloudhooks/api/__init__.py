"""HTTP layer: the webhook router and response envelopes."""

from cloudhooks.api.responses import error_response, success_response

__all__ = ["error_response", "success_response"]
