from .stocktracker_error import StockTrackerError

__all__ = [
    "StockTrackerError",
]
