"""
Database models for actorstore.

This module contains the SQLAlchemy model for the actor relation. An actor
row exists for every registered user and for every anonymous (IP-addressed)
editor that has ever been attributed an action.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class Actor(Base):
    """Actor identity row linking a user id (or none) to a unique name."""

    __tablename__ = "actor"

    # Primary key, dense and unrelated to the user id
    actor_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # NULL for anonymous actors
    actor_user: Mapped[Optional[int]] = mapped_column(Integer, unique=True)

    # Normalized user name, or canonical IP literal for anonymous actors
    actor_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Actor(actor_id={self.actor_id}, actor_user={self.actor_user}, "
            f"actor_name={self.actor_name!r})>"
        )
