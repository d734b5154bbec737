"""
Tests for actor identity models.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from actorstore.models.actor import ActorCreate, UserIdentity
from actorstore.models.enums import SortDirection, SortField


class TestUserIdentity:
    """Tests for the UserIdentity value type."""

    def test_fields(self) -> None:
        identity = UserIdentity(id=24, name="TestUser", actor_id=42)
        assert identity.id == 24
        assert identity.name == "TestUser"
        assert identity.actor_id == 42

    def test_defaults_describe_unsaved_anonymous_actor(self) -> None:
        identity = UserIdentity(name="127.0.0.1")
        assert identity.id == 0
        assert identity.actor_id == 0
        assert identity.is_registered is False

    def test_is_registered(self) -> None:
        assert UserIdentity(id=1, name="Someone").is_registered is True

    def test_frozen(self) -> None:
        identity = UserIdentity(id=24, name="TestUser", actor_id=42)
        with pytest.raises(ValidationError):
            identity.name = "Other"  # type: ignore[misc]

    def test_hashable_and_equal_by_value(self) -> None:
        first = UserIdentity(id=24, name="TestUser", actor_id=42)
        second = UserIdentity(id=24, name="TestUser", actor_id=42)
        assert first == second
        assert len({first, second}) == 1

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"id": -1, "name": "TestUser"},
            {"id": 1, "name": ""},
            {"id": 1, "name": "TestUser", "actor_id": -5},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ValidationError):
            UserIdentity(**kwargs)

    def test_same_actor_by_actor_id(self) -> None:
        first = UserIdentity(id=24, name="TestUser", actor_id=42)
        renamed = UserIdentity(id=24, name="RenamedUser", actor_id=42)
        other = UserIdentity(id=25, name="TestUser", actor_id=44)
        assert first.is_same_actor(renamed) is True
        assert first.is_same_actor(other) is False

    def test_same_actor_unsaved_compares_normalized_names(self) -> None:
        stored = UserIdentity(id=0, name="2001:DB8:0:0:0:0:0:1", actor_id=43)
        unsaved = UserIdentity(id=0, name="2001:db8::1")
        assert stored.is_same_actor(unsaved) is True
        assert unsaved.is_same_actor(UserIdentity(name="10.0.0.1")) is False


class TestActorCreate:
    """Tests for ActorCreate."""

    def test_normalizes_name(self) -> None:
        actor = ActorCreate(actor_name=" 2001:db8::1 ")
        assert actor.actor_name == "2001:DB8:0:0:0:0:0:1"
        assert actor.actor_user is None

    def test_registered(self) -> None:
        actor = ActorCreate(actor_user=24, actor_name="TestUser")
        assert actor.model_dump() == {"actor_user": 24, "actor_name": "TestUser"}

    def test_rejects_blank_name(self) -> None:
        with pytest.raises(ValidationError):
            ActorCreate(actor_name="   ")

    def test_rejects_zero_user_id(self) -> None:
        with pytest.raises(ValidationError):
            ActorCreate(actor_user=0, actor_name="TestUser")


class TestEnums:
    """Tests for query builder enums."""

    def test_sort_direction_values(self) -> None:
        assert SortDirection("ASC") is SortDirection.ASC
        assert SortDirection("DESC") is SortDirection.DESC

    def test_sort_field_values(self) -> None:
        assert {field.value for field in SortField} == {"none", "name", "user_id"}
