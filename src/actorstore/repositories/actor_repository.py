"""
Actor repository for identity storage and lookup.

Owns the actor table: single-row lookups by actor id, user id or name,
actor id acquisition for new identities, and construction of
UserSelectQueryBuilder instances for everything else.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from actorstore.db.models import Actor as ActorDB
from actorstore.exceptions import DataSourceError, ValidationError
from actorstore.models.actor import ActorCreate, UserIdentity
from actorstore.repositories.user_select_query_builder import UserSelectQueryBuilder
from actorstore.utils.user_names import is_ip_address, normalize_user_name

logger = logging.getLogger(__name__)


class ActorRepository:
    """Repository for actor rows and UserIdentity lookups."""

    def __init__(self) -> None:
        self.model = ActorDB

    def new_select_query_builder(self, session: AsyncSession) -> UserSelectQueryBuilder:
        """
        Start a new actor query bound to ``session``.

        Parameters
        ----------
        session : AsyncSession
            Database session the query will run in.

        Returns
        -------
        UserSelectQueryBuilder
            A fresh, unconfigured builder.
        """
        return UserSelectQueryBuilder(session)

    async def create(self, session: AsyncSession, *, obj_in: ActorCreate) -> ActorDB:
        """Insert an actor row and flush it so the actor id is assigned."""
        actor = ActorDB(**obj_in.model_dump())
        session.add(actor)
        await session.flush()
        await session.refresh(actor)
        return actor

    async def get(self, session: AsyncSession, id: int) -> Optional[ActorDB]:
        """Get actor row by actor id."""
        result = await session.execute(select(ActorDB).where(ActorDB.actor_id == id))
        return result.scalar_one_or_none()

    async def get_multi(
        self, session: AsyncSession, *, skip: int = 0, limit: int = 100
    ) -> List[ActorDB]:
        """Get actor rows in actor id order with pagination."""
        result = await session.execute(
            select(ActorDB).order_by(ActorDB.actor_id).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def exists(self, session: AsyncSession, id: int) -> bool:
        """Check if an actor row exists for the actor id."""
        result = await session.execute(
            select(ActorDB.actor_id).where(ActorDB.actor_id == id)
        )
        return result.first() is not None

    async def count(self, session: AsyncSession) -> int:
        """Count stored actors."""
        result = await session.execute(select(func.count()).select_from(ActorDB))
        return result.scalar() or 0

    async def get_user_identity_by_actor_id(
        self, session: AsyncSession, actor_id: int
    ) -> Optional[UserIdentity]:
        """
        Look up an identity by actor id.

        Parameters
        ----------
        session : AsyncSession
            Database session.
        actor_id : int
            Actor key; must be positive.

        Returns
        -------
        Optional[UserIdentity]
            The identity, or ``None`` if no actor has this id.
        """
        if actor_id < 1:
            raise ValidationError(
                f"Actor id must be positive, got {actor_id}",
                field_name="actor_id",
                invalid_value=actor_id,
            )
        return (
            await self.new_select_query_builder(session)
            .conds({"actor_id": actor_id})
            .caller("ActorRepository.get_user_identity_by_actor_id")
            .fetch_user_identity()
        )

    async def get_user_identity_by_name(
        self, session: AsyncSession, name: str
    ) -> Optional[UserIdentity]:
        """Look up an identity by user name or IP literal."""
        if not normalize_user_name(name):
            raise ValidationError(
                "User name must not be blank", field_name="name", invalid_value=name
            )
        return (
            await self.new_select_query_builder(session)
            .user_names(name)
            .caller("ActorRepository.get_user_identity_by_name")
            .fetch_user_identity()
        )

    async def get_user_identity_by_user_id(
        self, session: AsyncSession, user_id: int
    ) -> Optional[UserIdentity]:
        """Look up a registered user's identity by user id."""
        if user_id < 1:
            raise ValidationError(
                f"User id must be positive, got {user_id}",
                field_name="user_id",
                invalid_value=user_id,
            )
        return (
            await self.new_select_query_builder(session)
            .user_ids(user_id)
            .caller("ActorRepository.get_user_identity_by_user_id")
            .fetch_user_identity()
        )

    async def find_actor_id(
        self, session: AsyncSession, identity: UserIdentity
    ) -> Optional[int]:
        """
        Find the stored actor id for an identity.

        Registered identities are matched by user id, anonymous ones by
        normalized name.

        Returns
        -------
        Optional[int]
            The actor id, or ``None`` if the identity has no actor row yet.
        """
        if identity.is_registered:
            stored = await self.get_user_identity_by_user_id(session, identity.id)
        else:
            stored = await self.get_user_identity_by_name(session, identity.name)
        return stored.actor_id if stored is not None else None

    async def acquire_actor_id(self, session: AsyncSession, identity: UserIdentity) -> int:
        """
        Return the actor id for an identity, inserting an actor row if needed.

        Parameters
        ----------
        session : AsyncSession
            Database session; the new row is flushed, not committed.
        identity : UserIdentity
            Identity to store. Anonymous identities must be named by an IP
            literal, registered ones must not be.

        Returns
        -------
        int
            The existing or newly assigned actor id.

        Raises
        ------
        ValidationError
            If the name does not fit the kind of identity, or another actor
            already uses it.
        DataSourceError
            If the database fails while storing the actor.
        """
        name = normalize_user_name(identity.name)
        if not name or identity.is_registered == is_ip_address(name):
            kind = "registered user" if identity.is_registered else "anonymous actor"
            raise ValidationError(
                f"{name!r} is not a valid name for a {kind}",
                field_name="name",
                invalid_value=identity.name,
            )

        existing = await self.find_actor_id(session, identity)
        if existing is not None:
            return existing

        # Anonymous actors were already looked up by name above
        if identity.is_registered:
            owner = await self.get_user_identity_by_name(session, name)
            if owner is not None:
                raise ValidationError(
                    f"Name {name!r} already belongs to actor {owner.actor_id}",
                    field_name="name",
                    invalid_value=identity.name,
                )

        actor_create = ActorCreate(
            actor_user=identity.id if identity.is_registered else None,
            actor_name=name,
        )
        try:
            actor = await self.create(session, obj_in=actor_create)
        except IntegrityError as e:
            # Another session stored the same name or user id first
            raise ValidationError(
                f"Actor {name!r} conflicts with a stored actor",
                field_name="name",
                invalid_value=identity.name,
            ) from e
        except SQLAlchemyError as e:
            raise DataSourceError(
                f"Failed to store actor {name!r}: {e}",
                operation="insert",
                original_error=e,
            ) from e

        logger.info("Assigned actor id %d to %s", actor.actor_id, name)
        return actor.actor_id
