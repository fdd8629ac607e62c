"""도메인 랭킹 read-through 캐시 서비스.

처리 흐름:
  1. 쉼표 구분 입력 → 도메인 정규화 (하나라도 실패하면 요청 전체 실패)
  2. 도메인별 최근 updated_at 을 한 번에 조회해 신선/만료 분류
  3. 신선한 도메인: DB 에서 한 번에 조회
  4. 만료된 도메인: Tranco API 동시 조회 → 도메인별 트랜잭션으로 이력 교체
  5. 결과 병합. 아무 도메인도 남지 않으면 NoRankedDomainsError
"""
import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional, Sequence

from core.config import get_settings
from core.exceptions import NoRankedDomainsError, StoreError
from core.timezone import to_naive_utc, utcnow
from integrations.tranco import Failed, FetchResult, Found, NotFound, TrancoClient
from schemas.ranking import TimeSeries
from services.ranking_store import RankingStore, unique_by_date
from utils.domain import parse_domain_list

logger = logging.getLogger(__name__)


class RankingService:
    """랭킹 캐시 오케스트레이터.

    저장소와 업스트림 클라이언트는 생성자로 주입받는다.
    """

    def __init__(
        self,
        store: RankingStore,
        upstream: TrancoClient,
        cache_ttl: Optional[timedelta] = None,
        max_concurrent: Optional[int] = None,
    ):
        settings = get_settings()
        self.store = store
        self.upstream = upstream
        self.cache_ttl = cache_ttl if cache_ttl is not None else settings.cache_ttl
        if max_concurrent is None:
            max_concurrent = settings.max_concurrent_fetches
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be >= 1, got {max_concurrent}")
        self.max_concurrent = max_concurrent

    def is_fresh(self, updated_at: Optional[datetime], now: datetime) -> bool:
        """마지막 저장 시각이 TTL 이내면 신선."""
        if updated_at is None:
            return False
        return now - to_naive_utc(updated_at) < self.cache_ttl

    def partition(
        self, domains: Sequence[str], now: Optional[datetime] = None
    ) -> tuple[list[str], list[str]]:
        """(cached, stale) 분류. 저장소 조회는 한 번."""
        now = now or utcnow()
        latest = self.store.find_latest_per_domain(domains)

        cached: list[str] = []
        stale: list[str] = []
        for domain in domains:
            if self.is_fresh(latest.get(domain), now):
                cached.append(domain)
            else:
                stale.append(domain)
        return cached, stale

    def load_cached(self, domains: Sequence[str]) -> dict[str, TimeSeries]:
        """저장된 이력으로 시계열 구성 (날짜 오름차순)."""
        grouped: dict[str, TimeSeries] = {}
        for record in self.store.find_all_records(domains):
            if record.domain not in grouped:
                grouped[record.domain] = TimeSeries(domain=record.domain)
            grouped[record.domain].labels.append(record.date)
            grouped[record.domain].ranks.append(record.rank)
        return grouped

    async def fetch_all(self, domains: Sequence[str]) -> list[FetchResult]:
        """만료된 도메인들을 동시에 조회 (세마포어로 동시성 제한)."""
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def fetch_single(domain: str) -> FetchResult:
            async with semaphore:
                try:
                    return await self.upstream.fetch_ranking(domain)
                except Exception as e:
                    logger.warning(f"{domain}: Tranco 조회 중 예외 - {e!r}")
                    return Failed(domain, repr(e))

        return list(await asyncio.gather(*[fetch_single(d) for d in domains]))

    def apply_fetch(self, domain: str, result: FetchResult) -> Optional[TimeSeries]:
        """조회 결과 하나를 저장하고 응답용 시계열을 반환. 건너뛸 도메인이면 None.

        저장 실패는 StoreError 로 전파되며 기존 이력은 유지된다.
        """
        if isinstance(result, NotFound):
            logger.info(f"{domain}: Tranco 순위 없음 (404)")
            return None
        if isinstance(result, Failed):
            logger.warning(f"{domain}: Tranco 조회 실패 - {result.reason}")
            return None

        ranks = unique_by_date(result.data.ranks)
        if not ranks:
            logger.info(f"{domain}: 랭킹 데이터 비어 있음, 스킵")
            return None

        saved = self.store.replace_all(domain, ranks)
        logger.info(f"{domain}: {saved}건 랭킹 갱신 완료")
        return TimeSeries(
            domain=domain,
            labels=[r.date for r in ranks],
            ranks=[r.rank for r in ranks],
        )

    async def refresh(self, domains: Sequence[str]) -> tuple[dict[str, TimeSeries], int]:
        """만료 도메인 갱신.

        Returns:
            (도메인별 시계열, 저장 실패 건수)
        """
        if not domains:
            return {}, 0

        results = await self.fetch_all(domains)

        output: dict[str, TimeSeries] = {}
        write_failures = 0
        # 도메인마다 별도 트랜잭션, 세션 하나를 쓰므로 순차 처리
        for domain, result in zip(domains, results):
            try:
                series = self.apply_fetch(domain, result)
            except StoreError:
                write_failures += 1
                continue
            if series is not None:
                output[domain] = series
        return output, write_failures

    async def get_rankings(self, raw_domains: str) -> dict[str, TimeSeries]:
        """쉼표 구분 도메인 목록의 랭킹 시계열 조회.

        Raises:
            InvalidDomainError: 정규화 실패 (저장소/업스트림 작업 전에 발생)
            NoDomainsProvidedError: 유효한 도메인 토큰이 없음
            NoRankedDomainsError: 모든 도메인이 404/빈 데이터/조회 실패
            StoreError: DB 조회 실패, 또는 저장 실패로 결과가 하나도 없을 때
        """
        domains = parse_domain_list(raw_domains)

        cached, stale = self.partition(domains)
        logger.info(f"랭킹 요청 {len(domains)}개: 캐시 {len(cached)}, 갱신 필요 {len(stale)}")

        output = self.load_cached(cached)
        refreshed, write_failures = await self.refresh(stale)
        output.update(refreshed)

        if not output:
            if write_failures:
                raise StoreError(f"Failed to store rankings for {write_failures} domain(s)")
            raise NoRankedDomainsError()

        # 요청 순서 유지
        return {d: output[d] for d in domains if d in output}
