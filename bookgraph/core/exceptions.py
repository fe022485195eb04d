"""
Exception hierarchy for the book graph.

Provides the write-path error taxonomy. Every exception carries a details
dict naming the offending field or relationship and the violated rule, so
a caller can correct the input and retry.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class BookGraphException(Exception):
    """Base exception for all book graph errors."""

    code = "book_graph_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(BookGraphException):
    """Raised when input validation fails."""

    code = "validation_error"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        rule: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            rule: Short name of the violated rule (e.g. "min_length")
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        if rule:
            details["rule"] = rule
        self.field = field
        self.rule = rule
        super().__init__(message, details)


class NotFound(BookGraphException):
    """Raised when the target of a read, update or delete does not exist."""

    code = "not_found"

    def __init__(
        self,
        entity: str,
        entity_id: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            entity: Entity type name ("Author", "Book")
            entity_id: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        details["entity"] = entity
        details["id"] = entity_id
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} does not exist", details)


class ReferenceNotFound(BookGraphException):
    """Raised when a Book would reference an Author that does not exist."""

    code = "reference_not_found"

    def __init__(
        self,
        field: str,
        reference_id: int,
        referenced_entity: str = "Author",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize reference not found error.

        Args:
            field: Referencing field (e.g. "author_id")
            reference_id: Identifier that could not be resolved
            referenced_entity: Entity type the field points at
            details: Additional context
        """
        details = details or {}
        details["field"] = field
        details["rule"] = "reference_must_exist"
        details["reference_id"] = reference_id
        details["referenced_entity"] = referenced_entity
        self.field = field
        self.reference_id = reference_id
        super().__init__(
            f"{field} references {referenced_entity} {reference_id}, which does not exist",
            details,
        )


class DependencyConflict(BookGraphException):
    """Raised when deleting an Author that still has referencing Books."""

    code = "dependency_conflict"

    def __init__(
        self,
        author_id: int,
        dependent_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize dependency conflict error.

        Args:
            author_id: Author whose deletion was blocked
            dependent_count: Number of Books still referencing the Author
            details: Additional context
        """
        details = details or {}
        details["relationship"] = "Book.author_id"
        details["rule"] = "no_dependent_books"
        details["author_id"] = author_id
        details["dependent_count"] = dependent_count
        self.author_id = author_id
        self.dependent_count = dependent_count
        super().__init__(
            f"Author {author_id} is referenced by {dependent_count} book(s); "
            "delete or reassign the books first",
            details,
        )


class DuplicateKey(BookGraphException):
    """Raised when a unique value is already held by another record."""

    code = "duplicate_key"

    def __init__(
        self,
        field: str,
        value: str,
        existing_id: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize duplicate key error.

        Args:
            field: Field that must be unique
            value: Conflicting value
            existing_id: Identifier of the record already holding value
            details: Additional context
        """
        details = details or {}
        details["field"] = field
        details["rule"] = "unique"
        details["value"] = value
        details["existing_id"] = existing_id
        self.field = field
        self.value = value
        self.existing_id = existing_id
        super().__init__(f"{field} {value!r} is already used by another author", details)
