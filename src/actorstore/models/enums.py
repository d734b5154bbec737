"""
Enums for actorstore models.

Defines enumeration types used by the query builder for consistent
type safety and validation.
"""

from __future__ import annotations

from enum import Enum


class SortDirection(str, Enum):
    """Direction of a query builder sort."""

    ASC = "ASC"
    DESC = "DESC"


class SortField(str, Enum):
    """Field a query builder result is ordered by."""

    NONE = "none"
    NAME = "name"
    USER_ID = "user_id"
