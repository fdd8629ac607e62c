from typing import List

from pydantic import BaseModel, Field


class TrancoRank(BaseModel):
    """Tranco API 응답의 날짜별 순위."""
    date: str
    rank: int


class TrancoResponse(BaseModel):
    """GET {TRANCO_API_BASE}/{domain} 응답."""
    domain: str
    ranks: List[TrancoRank] = Field(default_factory=list)


class TimeSeries(BaseModel):
    """도메인별 랭킹 시계열. labels[i] 는 ranks[i] 의 날짜."""
    domain: str
    labels: List[str] = Field(default_factory=list)
    ranks: List[int] = Field(default_factory=list)
