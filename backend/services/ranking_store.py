"""랭킹 저장소.

rankings 테이블에 대한 배치 조회와 도메인 단위 트랜잭션 교체를 담당합니다.
요청 하나에서 신선도 확인과 캐시 조회는 각각 한 번의 쿼리로 처리합니다 (N+1 방지).
"""
import logging
import uuid
from datetime import datetime
from typing import Iterable, Optional, Sequence

from sqlalchemy import select, delete, insert, func, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import StoreError
from core.timezone import utcnow
from models import Ranking
from schemas.ranking import TrancoRank

logger = logging.getLogger(__name__)


def unique_by_date(ranks: Iterable[TrancoRank]) -> list[TrancoRank]:
    """같은 날짜가 여러 번 오면 처음 것만 남깁니다 ((domain, date) 유니크 제약)."""
    seen: set[str] = set()
    result: list[TrancoRank] = []
    for r in ranks:
        if r.date in seen:
            continue
        seen.add(r.date)
        result.append(r)
    return result


class RankingStore:
    """rankings 테이블 접근 계층."""

    def __init__(self, db: Session):
        self.db = db

    def find_latest_per_domain(self, domains: Sequence[str]) -> dict[str, datetime]:
        """도메인별 가장 최근 updated_at 조회.

        저장된 레코드가 없는 도메인은 결과에 포함되지 않습니다.
        """
        if not domains:
            return {}

        stmt = (
            select(Ranking.domain, func.max(Ranking.updated_at))
            .where(Ranking.domain.in_(list(domains)))
            .group_by(Ranking.domain)
        )
        try:
            rows = self.db.execute(stmt).all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read ranking freshness: {e}") from e
        return {domain: updated_at for domain, updated_at in rows}

    def find_all_records(self, domains: Sequence[str]) -> list[Ranking]:
        """도메인들의 전체 레코드를 (domain, date) 오름차순으로 조회."""
        if not domains:
            return []

        stmt = (
            select(Ranking)
            .where(Ranking.domain.in_(list(domains)))
            .order_by(Ranking.domain.asc(), Ranking.date.asc())
        )
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read rankings: {e}") from e

    def _insert_ignoring_duplicates(self):
        """(domain, date) 충돌 시 건너뛰는 INSERT.

        동시에 같은 도메인을 갱신하는 다른 요청이 먼저 넣은 행과 부딪혀도 실패하지 않는다.
        """
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(Ranking).on_conflict_do_nothing(index_elements=["domain", "date"])
        if dialect == "sqlite":
            return sqlite.insert(Ranking).on_conflict_do_nothing(index_elements=["domain", "date"])
        return insert(Ranking)

    def replace_all(
        self,
        domain: str,
        ranks: Sequence[TrancoRank],
        now: Optional[datetime] = None,
    ) -> int:
        """도메인의 랭킹 이력을 통째로 교체합니다.

        삭제와 삽입은 하나의 트랜잭션으로 묶입니다. 도중에 실패하면 롤백되어
        기존 이력이 그대로 남고 StoreError 가 발생합니다.

        Returns:
            저장된 레코드 수
        """
        now = now or utcnow()
        rows = [
            {
                "id": uuid.uuid4(),
                "domain": domain,
                "date": r.date,
                "rank": r.rank,
                "created_at": now,
                "updated_at": now,
            }
            for r in unique_by_date(ranks)
        ]

        try:
            self.db.execute(delete(Ranking).where(Ranking.domain == domain))
            if rows:
                self.db.execute(self._insert_ignoring_duplicates(), rows)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{domain}: 랭킹 교체 실패, 롤백 - {e}")
            raise StoreError(f"Failed to replace rankings for {domain}") from e

        return len(rows)

    def count_domains(self) -> int:
        """저장된 도메인 수."""
        stmt = select(func.count(func.distinct(Ranking.domain)))
        try:
            return self.db.execute(stmt).scalar() or 0
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to count domains: {e}") from e

    def ping(self) -> bool:
        try:
            self.db.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            raise StoreError(f"Database unreachable: {e}") from e
