"""HTTP transport over httpx."""

import logging
from typing import Optional
from urllib.parse import urlparse

import httpx

from .interfaces import ITransport
from .exceptions import (
    HTTPStatusError,
    InsecureTransportError,
    NoConnectionError,
    TransportError,
    TransportTimeoutError,
)

logger = logging.getLogger(__name__)


class HttpxTransport(ITransport):
    """
    Sends requests through a shared httpx.AsyncClient.

    Only https URLs are accepted; anything else is refused before any
    I/O happens.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._timeout = timeout

    async def send(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        form: Optional[dict[str, str]] = None,
    ) -> bytes:
        if urlparse(url).scheme != "https":
            raise InsecureTransportError(url)

        try:
            response = await self._client.request(
                method,
                url,
                headers=headers,
                data=form,
                timeout=self._timeout,
            )
        except httpx.TimeoutException:
            raise TransportTimeoutError(url)
        except httpx.ConnectError:
            raise NoConnectionError(url)
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {type(e).__name__}", url=url)

        if not response.is_success:
            logger.debug(f"{method} {url} returned HTTP {response.status_code}")
            raise HTTPStatusError(response.status_code, response.content, url=url)

        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()
