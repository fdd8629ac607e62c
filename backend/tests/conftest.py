"""pytest 설정 및 fixtures."""
import os

# 앱 import 전에 설정해야 get_settings() 캐시에 반영됨
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base, get_db
from core.timezone import utcnow
from integrations.tranco import Found, NotFound, get_tranco_client
from models import Ranking
from schemas.ranking import TrancoResponse
from main import app


# 테스트용 인메모리 SQLite DB
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """테스트용 DB 세션."""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


class FakeTranco:
    """Tranco 클라이언트 대역.

    results 에 없는 도메인은 NotFound 를 반환하고, 호출된 도메인을 calls 에 기록한다.
    """

    def __init__(self):
        self.results = {}
        self.calls = []

    def set_ranks(self, domain: str, points: list[tuple[str, int]]):
        self.results[domain] = Found(
            TrancoResponse.model_validate(
                {"domain": domain, "ranks": [{"date": d, "rank": r} for d, r in points]}
            )
        )

    def set_result(self, domain: str, result):
        self.results[domain] = result

    async def fetch_ranking(self, domain: str):
        self.calls.append(domain)
        result = self.results.get(domain, NotFound(domain))
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self):
        pass


def seed_rankings(db, domain: str, points: list[tuple[str, int]], updated_at=None):
    """테스트용 랭킹 레코드 생성."""
    updated_at = updated_at or utcnow()
    for date, rank in points:
        db.add(Ranking(domain=domain, date=date, rank=rank, created_at=updated_at, updated_at=updated_at))
    db.commit()


@pytest.fixture(scope="function")
def db():
    """각 테스트마다 새로운 DB 생성."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def seed(db):
    """랭킹 레코드 생성 함수."""
    def _seed(domain, points, updated_at=None):
        seed_rankings(db, domain, points, updated_at=updated_at)
    return _seed


@pytest.fixture(scope="function")
def tranco():
    return FakeTranco()


@pytest.fixture(scope="function")
def client(db, tranco):
    """테스트 클라이언트."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_tranco_client] = lambda: tranco
    Base.metadata.create_all(bind=engine)

    with TestClient(app) as c:
        yield c

    Base.metadata.drop_all(bind=engine)
    app.dependency_overrides.clear()
