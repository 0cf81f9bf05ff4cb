"""
Token exchange transport exceptions.

These describe what happened on the wire. TokenExchangeService translates
them into the authentication error taxonomy before they leave the module.
"""

from typing import Optional

from shared.exceptions import IdpAuthError


class TransportError(IdpAuthError):
    """Base exception for transport-level failures (no usable HTTP response)."""

    def __init__(self, message: str, code: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message, code=code or "TRANSPORT_ERROR", details={"url": url} if url else None)
        self.url = url


class HTTPStatusError(TransportError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(self, status: int, body: Optional[bytes] = None, url: Optional[str] = None):
        super().__init__(f"HTTP error: {status}", code="HTTP_ERROR", url=url)
        self.status = status
        self.body = body
        self.details["status"] = status

    @property
    def body_text(self) -> Optional[str]:
        if self.body is None:
            return None
        return self.body.decode("utf-8", errors="replace")


class TransportTimeoutError(TransportError):
    """Raised when the request timed out."""

    def __init__(self, url: Optional[str] = None):
        super().__init__("Request timed out", code="TIMEOUT", url=url)


class NoConnectionError(TransportError):
    """Raised when the host could not be reached."""

    def __init__(self, url: Optional[str] = None):
        super().__init__("No internet connection", code="NO_CONNECTION", url=url)


class InsecureTransportError(TransportError):
    """Raised when asked to send a request over a non-https URL."""

    def __init__(self, url: str):
        super().__init__("SSL connection error: https is required", code="SSL_ERROR", url=url)
