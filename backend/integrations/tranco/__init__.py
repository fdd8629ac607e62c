# Tranco (도메인 인기 순위) API Integration
from integrations.tranco.client import (
    Failed,
    FetchResult,
    Found,
    NotFound,
    TrancoClient,
    close_tranco_client,
    get_tranco_client,
)

__all__ = [
    "Failed",
    "FetchResult",
    "Found",
    "NotFound",
    "TrancoClient",
    "close_tranco_client",
    "get_tranco_client",
]
