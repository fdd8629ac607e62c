"""UTC 시간 유틸리티.

rankings.updated_at 은 타임존 정보 없는 UTC 로 저장된다 (SQLite/PostgreSQL 공통).
신선도 비교도 같은 기준이어야 하므로 datetime.now() 대신 utcnow()를 사용할 것.
"""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """현재 UTC 시간 (naive) 반환."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """aware datetime 이면 UTC 로 변환 후 tzinfo 제거."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
