"""
Custom exceptions for the actorstore application.

This module defines domain-specific exceptions for error handling
throughout the application, including validation errors raised while a
query is being built and data source failures raised while it executes.
"""

from __future__ import annotations


class ActorStoreError(Exception):
    """Base exception for all actorstore errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize ActorStoreError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class ValidationError(ActorStoreError):
    """
    Exception raised for malformed input.

    Raised by query builder methods as soon as they receive an argument
    they cannot turn into a predicate (a non-positive limit, a negative
    user id, an unknown column name), and by repository lookups given
    invalid keys.

    Attributes
    ----------
    message : str
        Human-readable error message.
    field_name : str | None
        The name of the field that failed validation.
    invalid_value : object
        The value that failed validation.

    Examples
    --------
    >>> try:
    ...     builder.limit(0)
    ... except ValidationError as e:
    ...     print(f"Invalid {e.field_name}: {e.invalid_value}")
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_name: str | None = None,
        invalid_value: object = None,
    ) -> None:
        """
        Initialize ValidationError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Validation failed").
        field_name : str | None, optional
            The name of the field that failed validation (default: None).
        invalid_value : object, optional
            The value that failed validation (default: None).
        """
        self.field_name: str | None = field_name
        self.invalid_value: object = invalid_value
        super().__init__(message)


class RepositoryError(ActorStoreError):
    """
    Exception raised for repository/database operation failures.

    Attributes
    ----------
    message : str
        Human-readable error message.
    operation : str | None
        The database operation that failed (e.g., "select", "insert").
    entity_type : str | None
        The type of entity involved (e.g., "Actor").
    original_error : Exception | None
        The original database exception that caused this error.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: str | None = None,
        entity_type: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize RepositoryError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Repository operation failed").
        operation : str | None, optional
            The database operation that failed (default: None).
        entity_type : str | None, optional
            The type of entity involved (default: None).
        original_error : Exception | None, optional
            The original database exception (default: None).
        """
        self.operation: str | None = operation
        self.entity_type: str | None = entity_type
        self.original_error: Exception | None = original_error
        super().__init__(message)


class DataSourceError(RepositoryError):
    """
    Exception raised when the underlying data source cannot serve a query.

    Wraps connectivity failures, timeouts and malformed generated SQL.
    It is never retried by actorstore; retry policy belongs to the caller
    or to the engine configuration.

    Attributes
    ----------
    caller : str | None
        Diagnostic tag of the query that failed, if one was attached.

    Examples
    --------
    >>> try:
    ...     identities = await builder.fetch_user_identities()
    ... except DataSourceError as e:
    ...     print(f"{e.caller}: {e.original_error}")
    """

    def __init__(
        self,
        message: str = "Data source unavailable",
        operation: str | None = "select",
        entity_type: str | None = "Actor",
        original_error: Exception | None = None,
        caller: str | None = None,
    ) -> None:
        """
        Initialize DataSourceError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Data source unavailable").
        operation : str | None, optional
            The database operation that failed (default: "select").
        entity_type : str | None, optional
            The type of entity involved (default: "Actor").
        original_error : Exception | None, optional
            The original database exception (default: None).
        caller : str | None, optional
            Diagnostic caller tag of the failing query (default: None).
        """
        self.caller: str | None = caller
        super().__init__(
            message,
            operation=operation,
            entity_type=entity_type,
            original_error=original_error,
        )


# =============================================================================
# CLI Exit Codes
# =============================================================================

EXIT_CODE_SUCCESS = 0
EXIT_CODE_GENERAL_ERROR = 1
EXIT_CODE_INVALID_ARGS = 2
EXIT_CODE_DATA_SOURCE_UNAVAILABLE = 3
