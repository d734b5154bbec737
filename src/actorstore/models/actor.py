"""
Actor identity models.

Defines the UserIdentity value type returned by actor lookups and the
Pydantic models used to insert new actor rows.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from actorstore.utils.user_names import normalize_user_name


class UserIdentity(BaseModel):
    """
    Identity of a single actor.

    ``id`` is 0 for anonymous actors, whose ``name`` is a canonical IP
    literal. ``actor_id`` is the unique actor key and is unrelated to ``id``.
    An ``actor_id`` of 0 marks an identity that has not been stored yet.
    """

    id: int = Field(default=0, ge=0, description="User id, 0 for anonymous actors")
    name: str = Field(..., min_length=1, description="User name or IP literal")
    actor_id: int = Field(default=0, ge=0, description="Actor key, 0 if unsaved")

    model_config = ConfigDict(frozen=True)

    @property
    def is_registered(self) -> bool:
        """Whether this identity belongs to a registered user."""
        return self.id != 0

    def is_same_actor(self, other: UserIdentity) -> bool:
        """
        Check whether two identities denote the same actor.

        Stored identities compare by ``actor_id``. When either side is
        unsaved, the normalized names are compared instead.
        """
        if self.actor_id and other.actor_id:
            return self.actor_id == other.actor_id
        return normalize_user_name(self.name) == normalize_user_name(other.name)


class ActorCreate(BaseModel):
    """Model for creating actor rows."""

    actor_user: Optional[int] = Field(
        default=None, gt=0, description="User id, omitted for anonymous actors"
    )
    actor_name: str = Field(..., min_length=1, max_length=255)

    @field_validator("actor_name")
    @classmethod
    def normalize_actor_name(cls, v: str) -> str:
        """Store names in their normalized form."""
        normalized = normalize_user_name(v)
        if not normalized:
            raise ValueError("actor_name must not be blank")
        return normalized
