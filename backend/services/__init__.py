from .ranking_store import RankingStore
from .ranking_service import RankingService

__all__ = [
    "RankingStore",
    "RankingService",
]
