"""랭킹 서비스 예외 정의.

클라이언트 입력 오류(InvalidDomainError, NoDomainsProvidedError, NoRankedDomainsError)와
서버 측 오류(StoreError)를 구분한다. UpstreamError 는 도메인 단위로 처리되어
요청 전체 오류로 전파되지 않는다.
"""
from typing import Optional


class RankingError(Exception):
    """랭킹 서비스 기본 예외."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidDomainError(RankingError):
    """유효한 호스트명으로 정규화할 수 없는 입력."""

    def __init__(self, domain: str, message: Optional[str] = None):
        super().__init__(message or f"Invalid domain: {domain}")
        self.domain = domain


class NoDomainsProvidedError(RankingError):
    def __init__(self):
        super().__init__("No domains provided")


class NoRankedDomainsError(RankingError):
    def __init__(self):
        super().__init__(
            "None of the provided domains are ranked within Tranco's Top 1M domains."
        )


class UpstreamError(RankingError):
    """Tranco API 호출 실패 (도메인 단위로 처리됨)."""

    def __init__(self, domain: str, reason: str):
        super().__init__(f"Tranco request failed for {domain}: {reason}")
        self.domain = domain
        self.reason = reason


class StoreError(RankingError):
    """랭킹 저장소(DB) 오류."""
    pass
