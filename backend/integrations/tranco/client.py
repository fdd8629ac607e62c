"""Tranco 랭킹 API 클라이언트."""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from core.config import get_settings
from core.exceptions import UpstreamError
from integrations.base_client import BaseAPIClient
from schemas.ranking import TrancoResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    """업스트림에서 랭킹 데이터를 받음."""
    data: TrancoResponse


@dataclass(frozen=True)
class NotFound:
    """Tranco 에 순위가 없는 도메인 (HTTP 404)."""
    domain: str


@dataclass(frozen=True)
class Failed:
    """타임아웃, 네트워크 오류, 비정상 응답 등."""
    domain: str
    reason: str


FetchResult = Union[Found, NotFound, Failed]


class TrancoClient(BaseAPIClient):
    """Tranco 랭킹 API 클라이언트.

    GET {base}/{domain} → {"domain": str, "ranks": [{"date": "YYYY-MM-DD", "rank": int}, ...]}

    fetch_ranking()은 예외를 던지지 않고 Found / NotFound / Failed 중 하나를 반환한다.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        super().__init__(
            base_url=base_url or settings.tranco_api_base,
            timeout=timeout if timeout is not None else settings.request_timeout_seconds,
            transport=transport,
        )

    def get_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
        }

    async def _get_ranking(self, domain: str) -> TrancoResponse:
        body = await self.get(f"/{quote(domain, safe='')}")
        try:
            return TrancoResponse.model_validate(body)
        except ValidationError as e:
            raise UpstreamError(domain, f"unexpected response shape ({e.error_count()} errors)")

    async def fetch_ranking(self, domain: str) -> FetchResult:
        """도메인의 랭킹 이력 조회.

        전체 호출은 self.timeout 초로 제한되며, 타임아웃은 다른 실패와 동일하게 Failed 로 처리.
        재시도는 하지 않는다.
        """
        try:
            data = await asyncio.wait_for(self._get_ranking(domain), timeout=self.timeout)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return NotFound(domain)
            return Failed(domain, f"HTTP {e.response.status_code}")
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(f"{domain}: Tranco 응답 시간 초과 ({self.timeout}s)")
            return Failed(domain, "timeout")
        except httpx.RequestError as e:
            return Failed(domain, f"request error: {e.__class__.__name__}")
        except ValueError as e:
            # JSON 디코딩 실패
            return Failed(domain, f"invalid JSON: {e}")
        except UpstreamError as e:
            return Failed(domain, e.reason)

        return Found(data)


# 싱글톤 인스턴스
_tranco_client: Optional[TrancoClient] = None


def get_tranco_client() -> TrancoClient:
    """Tranco 클라이언트 싱글톤 반환."""
    global _tranco_client
    if _tranco_client is None:
        _tranco_client = TrancoClient()
    return _tranco_client


async def close_tranco_client() -> None:
    global _tranco_client
    if _tranco_client is not None:
        await _tranco_client.close()
        _tranco_client = None
