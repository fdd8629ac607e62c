"""Base async HTTP client for upstream APIs."""
import logging
from typing import Any, Optional
from abc import ABC, abstractmethod

import httpx

logger = logging.getLogger(__name__)


class BaseAPIClient(ABC):
    """Base class for API clients.

    Requests are not retried: a failed call is reported to the caller once and
    the next client request decides whether to try again.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @abstractmethod
    def get_headers(self) -> dict[str, str]:
        """Return headers for API requests. Override in subclasses."""
        pass

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and return the decoded JSON body."""
        request_headers = self.get_headers()
        if headers:
            request_headers.update(headers)

        try:
            response = await self.client.request(
                method=method,
                url=path,
                params=params,
                headers=request_headers,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            # 404 는 호출 측에서 "데이터 없음"으로 처리하는 정상 케이스
            level = logging.DEBUG if e.response.status_code == 404 else logging.WARNING
            logger.log(level, f"HTTP error {e.response.status_code} for {method} {path}")
            raise
        except httpx.RequestError as e:
            logger.warning(f"Request error for {method} {path}: {e!r}")
            raise

    async def get(
        self,
        path: str,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> Any:
        return await self._request("GET", path, params=params, headers=headers)
