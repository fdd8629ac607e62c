from . import rankings, health

__all__ = [
    "rankings",
    "health",
]
