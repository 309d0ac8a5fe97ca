"""
Gateway error taxonomy.

Every failure raised inside the chat pipeline derives from GatewayError.
The route layer maps `status_code` to the HTTP response and only ever
returns `public_message`; the underlying detail is for the server log.
"""

from typing import Optional


class GatewayError(Exception):
    """Base class for all chat gateway failures."""

    status_code: int = 500
    public_message: str = "Failed to generate response"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(GatewayError):
    """Inbound request is missing fields or carries malformed messages."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        # Validation problems are the caller's own input, safe to echo back
        self.public_message = message


class NotFoundError(GatewayError):
    """The application identifier does not resolve to a record."""

    status_code = 404
    public_message = "Job not found"


class ConfigurationError(GatewayError):
    """Provider credential (or other required setting) is absent."""


class UpstreamError(GatewayError):
    """The provider answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class InvalidResponseError(GatewayError):
    """The provider answered 2xx but without choices[0].message.content."""
