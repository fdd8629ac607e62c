from .ranking import Ranking

__all__ = [
    "Ranking",
]
