"""
Tests for custom exceptions module.

This module tests all custom exception classes, their attributes,
inheritance hierarchy, and exit codes.
"""

from __future__ import annotations

import pytest

from actorstore.exceptions import (
    EXIT_CODE_DATA_SOURCE_UNAVAILABLE,
    EXIT_CODE_GENERAL_ERROR,
    EXIT_CODE_INVALID_ARGS,
    EXIT_CODE_SUCCESS,
    ActorStoreError,
    DataSourceError,
    RepositoryError,
    ValidationError,
)


class TestActorStoreError:
    """Tests for base ActorStoreError exception."""

    def test_base_error_with_message(self) -> None:
        """Test base error stores message correctly."""
        error = ActorStoreError("Test error message")
        assert error.message == "Test error message"
        assert str(error) == "Test error message"

    def test_base_error_can_be_raised(self) -> None:
        """Test ActorStoreError can be raised and caught."""
        with pytest.raises(ActorStoreError, match="Test error"):
            raise ActorStoreError("Test error")


class TestValidationError:
    """Tests for ValidationError."""

    def test_default_values(self) -> None:
        error = ValidationError()
        assert error.message == "Validation failed"
        assert error.field_name is None
        assert error.invalid_value is None

    def test_custom_values(self) -> None:
        error = ValidationError("Bad limit", field_name="limit", invalid_value=-1)
        assert error.field_name == "limit"
        assert error.invalid_value == -1
        assert isinstance(error, ActorStoreError)


class TestRepositoryErrors:
    """Tests for RepositoryError and DataSourceError."""

    def test_repository_error_defaults(self) -> None:
        error = RepositoryError()
        assert error.message == "Repository operation failed"
        assert error.operation is None
        assert error.entity_type is None
        assert error.original_error is None

    def test_data_source_error_defaults(self) -> None:
        error = DataSourceError()
        assert error.message == "Data source unavailable"
        assert error.operation == "select"
        assert error.entity_type == "Actor"
        assert error.caller is None

    def test_data_source_error_is_repository_error(self) -> None:
        original = ConnectionError("refused")
        error = DataSourceError("down", original_error=original, caller="tests")
        assert isinstance(error, RepositoryError)
        assert error.original_error is original
        assert error.caller == "tests"

    def test_data_source_error_is_not_validation_error(self) -> None:
        assert not issubclass(DataSourceError, ValidationError)


def test_exit_codes_are_distinct() -> None:
    """Test exit codes map to different process statuses."""
    codes = [
        EXIT_CODE_SUCCESS,
        EXIT_CODE_GENERAL_ERROR,
        EXIT_CODE_INVALID_ARGS,
        EXIT_CODE_DATA_SOURCE_UNAVAILABLE,
    ]
    assert codes == [0, 1, 2, 3]
