"""
Data models module for actorstore.

Defines Pydantic models for actor identities and the enums used to
configure actor queries.
"""

from __future__ import annotations

from .actor import ActorCreate, UserIdentity
from .enums import SortDirection, SortField

__all__ = [
    "ActorCreate",
    "SortDirection",
    "SortField",
    "UserIdentity",
]
