"""
Exception hierarchy for the agent RAG service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AgentRAGException(Exception):
    """Base exception for all agent RAG errors."""

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


class ConfigError(AgentRAGException):
    """Raised when a component is constructed or called with invalid parameters."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            field: Parameter name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ContentTooLargeError(AgentRAGException):
    """Raised when document content exceeds the ingestion limit."""

    def __init__(
        self,
        length: int,
        max_length: int,
        source_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize content size error.

        Args:
            length: Actual content length in characters
            max_length: Configured maximum length
            source_id: Source the content belongs to
            details: Additional context
        """
        details = details or {}
        details["length"] = length
        details["max_length"] = max_length
        if source_id:
            details["source_id"] = source_id
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Content exceeds maximum length of {max_length} characters", details
        )


class EmptyQueryError(AgentRAGException):
    """Raised when a retrieval query is blank."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("Query cannot be empty", details)


class ServiceError(AgentRAGException):
    """Raised when an external provider fails (auth, quota, network, timeout)."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Provider name (embeddings, vector_store, llm, web_search)
            operation: Operation that failed (generate, upsert, query, search)
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        if operation:
            details["operation"] = operation
        self.provider = provider
        self.operation = operation
        super().__init__(message, details)


class NotFoundError(AgentRAGException):
    """Raised when an owner, namespace or source cannot be found."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Kind of resource (agent, namespace, source)
            identifier: ID of the missing resource
            details: Additional context
        """
        details = details or {}
        details[f"{resource}_id"] = identifier
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource.capitalize()} not found: {identifier}", details)
