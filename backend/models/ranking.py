"""도메인 랭킹 이력 모델."""
import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime, Integer, Index, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID

from core.database import Base
from core.timezone import utcnow


class Ranking(Base):
    """도메인의 특정 날짜 Tranco 순위.

    도메인 이력 갱신은 병합이 아닌 전체 교체(삭제 후 재삽입)로 이루어진다.
    - 업스트림이 과거 순위를 수정할 수 있음
    - updated_at 은 캐시 신선도 판단에만 사용
    """
    __tablename__ = "rankings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    domain = Column(String(253), nullable=False)  # 정규화된 호스트명
    date = Column(String(10), nullable=False)  # YYYY-MM-DD (문자열로 정렬/비교만 함)
    rank = Column(Integer, nullable=False)  # 낮을수록 인기

    __table_args__ = (
        UniqueConstraint("domain", "date", name="uq_rankings_domain_date"),
        Index("ix_rankings_domain", "domain"),
        Index("ix_rankings_date", "date"),
    )

    def __repr__(self):
        return f"<Ranking {self.domain} {self.date} #{self.rank}>"
