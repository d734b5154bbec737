"""
Database layer for actorstore.

Contains the SQLAlchemy models and Alembic migrations for the actor table.
"""

from __future__ import annotations

from .models import Actor, Base

__all__ = ["Actor", "Base"]
