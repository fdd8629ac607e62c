from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from .config import get_settings

settings = get_settings()


def _engine_options(database_url: str) -> dict:
    """DB 종류별 엔진 옵션.

    SQLite(로컬 실행/테스트)는 풀 크기 옵션을 받지 않으므로 분기합니다.
    """
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # 인메모리 DB는 커넥션 하나를 공유해야 테이블이 유지됨
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 1800,
    }


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """동기 DB 세션 의존성."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
