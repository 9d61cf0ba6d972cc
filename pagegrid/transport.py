"""
HTTP transport for remote grid sources.

The DataProvider only depends on the Transport protocol: anything with an
async ``get(url, params)`` returning a PageResult can be injected, which is
how retry or authentication policies are added without touching the core.
"""

from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from ._logging import logger
from .config import DEFAULT_TOTAL_COUNT_HEADER
from .exceptions import TransportError, handle_transport_errors
from .pagination import PageResult


class Transport(Protocol):
    async def get(self, url: str, params: Mapping[str, Any]) -> PageResult: ...


class HttpTransport:
    """
    Issues GET requests with httpx and turns the response into a PageResult.

    Response handling:
        - the body is decoded as JSON; a list body is the records themselves,
          otherwise records are read from ``body[records_key]``
          (``"items"`` when no key is configured)
        - the total count is read from the ``total_count_header`` response
          header when present, then from ``body[total_count_key]``,
          and falls back to the number of records received

    Architectural Note:
    -------------------
    An injected ``httpx.AsyncClient`` is used as-is and never closed here,
    its lifecycle belongs to the caller. Without one, a short-lived client
    is opened per request.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
        records_key: str | None = None,
        total_count_key: str = "total_count",
        total_count_header: str | None = DEFAULT_TOTAL_COUNT_HEADER,
    ) -> None:
        self.client = client
        self.timeout = timeout
        self.records_key = records_key
        self.total_count_key = total_count_key
        self.total_count_header = total_count_header

    async def get(self, url: str, params: Mapping[str, Any]) -> PageResult:
        logger.debug(
            "Sending page request",
            extra={"url": url, "operation": "get", "param_names": sorted(params)},
        )

        with handle_transport_errors(url=url):
            if self.client is not None:
                response = await self.client.get(url, params=dict(params))
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=dict(params))
            response.raise_for_status()
            body = response.json()

        return self._parse(url, response, body)

    def _parse(self, url: str, response: httpx.Response, body: Any) -> PageResult:
        if isinstance(body, list):
            records = body
        elif isinstance(body, Mapping):
            key = self.records_key or "items"
            if key not in body:
                raise TransportError(
                    f"Response body has no '{key}' field", url=url, status_code=response.status_code
                )
            records = body[key]
        else:
            raise TransportError(
                f"Unexpected response body of type {type(body).__name__}",
                url=url,
                status_code=response.status_code,
            )

        if not isinstance(records, list):
            raise TransportError(
                "Response records are not a list", url=url, status_code=response.status_code
            )

        total_count = self._total_count(url, response, body, records)
        return PageResult(records=records, total_count=total_count)

    def _total_count(
        self, url: str, response: httpx.Response, body: Any, records: list[Any]
    ) -> int:
        raw: Any = None
        if self.total_count_header and self.total_count_header in response.headers:
            raw = response.headers[self.total_count_header]
        elif isinstance(body, Mapping) and self.total_count_key in body:
            raw = body[self.total_count_key]

        if raw is None:
            return len(records)

        try:
            return int(raw)
        except (TypeError, ValueError) as e:
            raise TransportError(
                f"Invalid total count {raw!r}",
                url=url,
                status_code=response.status_code,
                original_error=e,
            ) from e
