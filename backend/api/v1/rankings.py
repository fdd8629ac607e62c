"""도메인 랭킹 API."""
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import InvalidDomainError, NoDomainsProvidedError, NoRankedDomainsError
from integrations.tranco import TrancoClient, get_tranco_client
from schemas.ranking import TimeSeries
from services.ranking_service import RankingService
from services.ranking_store import RankingStore

router = APIRouter()


def get_ranking_service(
    db: Session = Depends(get_db),
    tranco: TrancoClient = Depends(get_tranco_client),
) -> RankingService:
    return RankingService(store=RankingStore(db), upstream=tranco)


async def _get_rankings(service: RankingService, domains: str) -> Dict[str, TimeSeries]:
    try:
        return await service.get_rankings(domains)
    except (InvalidDomainError, NoDomainsProvidedError, NoRankedDomainsError) as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("", response_model=Dict[str, TimeSeries])
async def get_rankings_by_query(
    domains: str = Query(default="", description="쉼표로 구분된 도메인 목록 (예: google.com,github.com)"),
    service: RankingService = Depends(get_ranking_service),
):
    """도메인 랭킹 이력 조회 (쿼리 파라미터)."""
    return await _get_rankings(service, domains)


@router.get("/{domains}", response_model=Dict[str, TimeSeries])
async def get_rankings(
    domains: str,
    service: RankingService = Depends(get_ranking_service),
):
    """
    도메인 랭킹 이력 조회 API

    DB 에 저장된 데이터가 CACHE_HOURS 이내면 그대로 반환하고,
    아니면 Tranco API 에서 새로 받아 저장한 뒤 반환합니다.

    Examples:
        - /rankings/google.com
        - /rankings/google.com,https://www.github.com/about
    """
    return await _get_rankings(service, domains)
