from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_URL = "https://api.ipify.org?format=json"


class PublicAddressLookup:
    """Asks an external echo service which public address the worker egresses from."""

    def __init__(
        self,
        *,
        url: str = DEFAULT_LOOKUP_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the lookup.

        Args:
            url: Endpoint returning ``{"ip": "<address>"}``
            transport: Optional httpx transport (used to stub the network)
        """
        self.url = url
        self._transport = transport

    async def fetch(self) -> str:
        """Return the public address.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx status
            ValueError: When the body is not JSON or has no ``ip`` string
        """
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            data = response.json()

        ip = data.get("ip") if isinstance(data, dict) else None
        if not isinstance(ip, str):
            raise ValueError(f"Unexpected lookup response: {data!r}")

        logger.debug("Fetched public address", extra={"lookup_url": self.url})
        return ip


__all__ = ["DEFAULT_LOOKUP_URL", "PublicAddressLookup"]
