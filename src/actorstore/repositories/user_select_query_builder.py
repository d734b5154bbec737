"""
Fluent query builder for actor identities.

A builder accumulates filters, a sort order, a row cap and a caller tag,
then runs exactly one SELECT against the actor table::

    identities = await (
        actor_repository.new_select_query_builder(session)
        .user_name_prefix("Test")
        .registered()
        .order_by_name(SortDirection.DESC)
        .limit(10)
        .caller("recent-editors")
        .fetch_user_identities()
    )

Filters combine conjunctively and are never removed. Builders are
single-use and must not be shared between tasks.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, Optional, Union

from sqlalchemy import ColumnElement, Row, Select, asc, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from actorstore.db.models import Actor
from actorstore.exceptions import DataSourceError, ValidationError
from actorstore.models.actor import UserIdentity
from actorstore.models.enums import SortDirection, SortField
from actorstore.utils.user_names import normalize_user_name

logger = logging.getLogger(__name__)

DirectionLike = Union[SortDirection, str]


class UserSelectQueryBuilder:
    """Single-use builder resolving actor rows into UserIdentity values."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._conditions: list[ColumnElement[bool]] = []
        self._sort_field = SortField.NONE
        self._sort_direction = SortDirection.ASC
        self._limit: Optional[int] = None
        self._caller: Optional[str] = None
        self._executed = False

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def user_ids(self, ids: Union[int, Iterable[int]]) -> UserSelectQueryBuilder:
        """
        Restrict results to the given user ids.

        Parameters
        ----------
        ids : int | Iterable[int]
            One user id or a collection of them. 0 selects anonymous actors.

        Returns
        -------
        UserSelectQueryBuilder
            This builder.
        """
        values = [ids] if isinstance(ids, int) else list(ids)
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError(
                    f"User ids must be non-negative integers, got {value!r}",
                    field_name="user_ids",
                    invalid_value=value,
                )
        self._conditions.append(self._user_id_condition(list(dict.fromkeys(values))))
        return self

    def user_names(self, names: Union[str, Iterable[str]]) -> UserSelectQueryBuilder:
        """
        Restrict results to the given user names.

        Names are trimmed and IP literals canonicalized before matching,
        so "2001:db8::1" and "2001:DB8:0:0:0:0:0:1" select the same actor.

        Parameters
        ----------
        names : str | Iterable[str]
            One name or a collection of them.

        Returns
        -------
        UserSelectQueryBuilder
            This builder.
        """
        values = [names] if isinstance(names, str) else list(names)
        for value in values:
            if not isinstance(value, str):
                raise ValidationError(
                    f"User names must be strings, got {value!r}",
                    field_name="user_names",
                    invalid_value=value,
                )
        normalized = [normalize_user_name(value) for value in values]
        unique_names = list(dict.fromkeys(name for name in normalized if name))
        self._conditions.append(Actor.actor_name.in_(unique_names))
        return self

    def user_name_prefix(self, prefix: str) -> UserSelectQueryBuilder:
        """
        Restrict results to names starting with ``prefix``.

        The match is case-sensitive and ``%``/``_`` are taken literally.
        An empty prefix matches every name.
        """
        if not isinstance(prefix, str):
            raise ValidationError(
                f"User name prefix must be a string, got {prefix!r}",
                field_name="user_name_prefix",
                invalid_value=prefix,
            )
        if prefix:
            # LIKE is case-insensitive on some engines
            self._conditions.append(
                Actor.actor_name.startswith(prefix, autoescape=True)
            )
            self._conditions.append(
                func.substr(Actor.actor_name, 1, len(prefix)) == prefix
            )
        return self

    def registered(self) -> UserSelectQueryBuilder:
        """Only return registered users."""
        self._conditions.append(Actor.actor_user.is_not(None))
        return self

    def anon(self) -> UserSelectQueryBuilder:
        """Only return anonymous actors."""
        self._conditions.append(Actor.actor_user.is_(None))
        return self

    def conds(
        self, *conditions: Union[Mapping[str, Any], ColumnElement[bool]]
    ) -> UserSelectQueryBuilder:
        """
        Add raw conditions on actor table columns.

        Each argument is either a SQLAlchemy boolean expression or a mapping
        of column name to value. Any non-string iterable becomes ``IN``,
        ``None`` becomes ``IS NULL`` and anything else an equality test.
        As with :meth:`user_ids`, an ``actor_user`` value of 0 matches
        anonymous actors.

        Parameters
        ----------
        *conditions : Mapping[str, Any] | ColumnElement[bool]
            Conditions to AND with the existing filters.

        Returns
        -------
        UserSelectQueryBuilder
            This builder.

        Raises
        ------
        ValidationError
            If a mapping names a column the actor table does not have.

        Examples
        --------
        >>> builder.conds({"actor_id": [42, 44]})
        >>> builder.conds(Actor.actor_name != "Spammer")
        """
        for condition in conditions:
            if isinstance(condition, Mapping):
                for column_name, value in condition.items():
                    self._conditions.append(self._column_condition(column_name, value))
            elif isinstance(condition, ColumnElement):
                self._conditions.append(condition)
            else:
                raise ValidationError(
                    f"Unsupported condition type: {type(condition).__name__}",
                    field_name="conds",
                    invalid_value=condition,
                )
        return self

    # ------------------------------------------------------------------
    # Shape of the result
    # ------------------------------------------------------------------

    def limit(self, limit: int) -> UserSelectQueryBuilder:
        """Cap the number of returned rows, replacing any earlier cap."""
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError(
                f"Limit must be a positive integer, got {limit!r}",
                field_name="limit",
                invalid_value=limit,
            )
        self._limit = limit
        return self

    def order_by_name(
        self, direction: DirectionLike = SortDirection.ASC
    ) -> UserSelectQueryBuilder:
        """Order results by user name, replacing any earlier ordering."""
        self._sort_field = SortField.NAME
        self._sort_direction = self._parse_direction(direction)
        return self

    def order_by_user_id(
        self, direction: DirectionLike = SortDirection.ASC
    ) -> UserSelectQueryBuilder:
        """Order results by user id, replacing any earlier ordering."""
        self._sort_field = SortField.USER_ID
        self._sort_direction = self._parse_direction(direction)
        return self

    def caller(self, caller: str) -> UserSelectQueryBuilder:
        """Attach a diagnostic tag reported when the query runs."""
        if not isinstance(caller, str):
            raise ValidationError(
                f"Caller must be a string, got {caller!r}",
                field_name="caller",
                invalid_value=caller,
            )
        self._caller = caller
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def fetch_user_identities(self) -> Iterator[UserIdentity]:
        """
        Run the query and return matching identities in result order.

        Returns
        -------
        Iterator[UserIdentity]
            A forward-only iterator; build a new query to read again.

        Raises
        ------
        DataSourceError
            If the database cannot execute the query.
        """
        rows = await self._execute(self.build_select())
        return (self._row_to_identity(row) for row in rows)

    async def fetch_user_identity(self) -> Optional[UserIdentity]:
        """Run the query with a limit of 1 and return the first identity, or None."""
        rows = await self._execute(self.build_select(limit=1))
        if not rows:
            return None
        return self._row_to_identity(rows[0])

    async def fetch_user_names(self) -> set[str]:
        """Run the query and return the distinct names of matching actors."""
        statement = self.build_select().with_only_columns(Actor.actor_name)
        rows = await self._execute(statement)
        return {row.actor_name for row in rows}

    def build_select(self, limit: Optional[int] = None) -> Select[Any]:
        """
        Build the SELECT statement for the current configuration.

        Parameters
        ----------
        limit : int | None, optional
            Row cap to apply in addition to the configured one; the
            smaller of the two wins.

        Returns
        -------
        Select
            Statement selecting ``actor_id``, ``actor_user`` and ``actor_name``.
        """
        statement = select(Actor.actor_id, Actor.actor_user, Actor.actor_name)
        if self._conditions:
            statement = statement.where(*self._conditions)
        statement = statement.order_by(*self._order_by_clauses())

        effective_limit = self._limit
        if limit is not None:
            effective_limit = limit if effective_limit is None else min(limit, effective_limit)
        if effective_limit is not None:
            statement = statement.limit(effective_limit)
        return statement

    async def _execute(self, statement: Select[Any]) -> Sequence[Row[Any]]:
        if self._executed:
            raise ValidationError(
                "Query builder has already been executed; create a new one",
                field_name="builder",
            )
        self._executed = True

        logger.debug(
            "Running actor query for %s (sort=%s %s, limit=%s, conditions=%d)",
            self._caller or "unknown caller",
            self._sort_field.value,
            self._sort_direction.value,
            self._limit,
            len(self._conditions),
        )
        try:
            result = await self._session.execute(statement)
            return result.all()
        except SQLAlchemyError as e:
            raise DataSourceError(
                f"Actor query failed: {e}",
                original_error=e,
                caller=self._caller,
            ) from e

    def _order_by_clauses(self) -> list[ColumnElement[Any]]:
        order = asc if self._sort_direction == SortDirection.ASC else desc
        clauses: list[ColumnElement[Any]] = []
        if self._sort_field == SortField.NAME:
            clauses.append(order(Actor.actor_name))
        elif self._sort_field == SortField.USER_ID:
            # Anonymous actors sort as user id 0
            clauses.append(order(func.coalesce(Actor.actor_user, 0)))
        # Ties keep table scan order
        clauses.append(asc(Actor.actor_id))
        return clauses

    @staticmethod
    def _column_condition(column_name: str, value: Any) -> ColumnElement[bool]:
        column = Actor.__table__.columns.get(column_name)
        if column is None:
            raise ValidationError(
                f"Unknown actor column: {column_name!r}",
                field_name="conds",
                invalid_value=column_name,
            )
        if value is None:
            return column.is_(None)
        is_collection = isinstance(value, Iterable) and not isinstance(value, (str, bytes))
        values = list(value) if is_collection else [value]
        if column_name == "actor_user":
            return UserSelectQueryBuilder._user_id_condition(values)
        return column.in_(values) if is_collection else column == value

    @staticmethod
    def _user_id_condition(user_ids: list[Any]) -> ColumnElement[bool]:
        # Anonymous actors store NULL and report user id 0
        registered_ids = [user_id for user_id in user_ids if user_id != 0]
        condition: ColumnElement[bool] = Actor.actor_user.in_(registered_ids)
        if len(registered_ids) != len(user_ids):
            condition = condition | Actor.actor_user.is_(None)
        return condition

    @staticmethod
    def _parse_direction(direction: DirectionLike) -> SortDirection:
        if isinstance(direction, SortDirection):
            return direction
        try:
            return SortDirection(str(direction).upper())
        except ValueError as e:
            raise ValidationError(
                f"Sort direction must be ASC or DESC, got {direction!r}",
                field_name="direction",
                invalid_value=direction,
            ) from e

    @staticmethod
    def _row_to_identity(row: Row[Any]) -> UserIdentity:
        return UserIdentity(
            id=row.actor_user or 0,
            name=row.actor_name,
            actor_id=row.actor_id,
        )
