"""
Repository layer for actor storage and lookup.
"""

from .actor_repository import ActorRepository
from .user_select_query_builder import UserSelectQueryBuilder

__all__ = [
    "ActorRepository",
    "UserSelectQueryBuilder",
]
