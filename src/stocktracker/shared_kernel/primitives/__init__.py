"""
Shared Kernel primitives.

Re-exports the identifiers shared between contexts:

    from stocktracker.shared_kernel.primitives import UserId
"""

from .user_id import UserId

__all__ = [
    "UserId",
]
