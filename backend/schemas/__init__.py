from .ranking import TrancoRank, TrancoResponse, TimeSeries

__all__ = [
    "TrancoRank",
    "TrancoResponse",
    "TimeSeries",
]
