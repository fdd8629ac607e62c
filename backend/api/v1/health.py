"""API 헬스체크 엔드포인트."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.config import get_settings
from core.database import get_db
from core.exceptions import StoreError
from integrations.tranco import Found, NotFound, TrancoClient, get_tranco_client
from services.ranking_store import RankingStore

router = APIRouter()


@router.get("/db")
def check_db(db: Session = Depends(get_db)):
    """랭킹 DB 연결 상태 확인."""
    store = RankingStore(db)
    try:
        store.ping()
        return {"connected": True, "cached_domains": store.count_domains(), "error": None}
    except StoreError as e:
        return {"connected": False, "cached_domains": None, "error": e.message[:100]}


@router.get("/tranco")
async def check_tranco(
    domain: str = Query(default="google.com"),
    client: TrancoClient = Depends(get_tranco_client),
):
    """Tranco API 연결 상태 확인 (캐시를 거치지 않고 직접 호출)."""
    settings = get_settings()
    result = await client.fetch_ranking(domain)

    if isinstance(result, Found):
        return {
            "base_url": settings.tranco_api_base,
            "connected": True,
            "ranked": bool(result.data.ranks),
            "error": None,
        }
    if isinstance(result, NotFound):
        return {"base_url": settings.tranco_api_base, "connected": True, "ranked": False, "error": None}
    return {
        "base_url": settings.tranco_api_base,
        "connected": False,
        "ranked": False,
        "error": result.reason[:100],
    }
