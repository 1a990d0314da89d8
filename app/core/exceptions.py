"""Custom exception classes for the application."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""
    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error

class APIClientError(AppError):
    """Raised when an external API call fails."""
    pass

class APITimeoutError(APIClientError):
    """Raised when an external API call times out."""
    pass

class DocumentStoreError(APIClientError):
    """Raised when the Craft document store is unreachable or rejects a call."""
    pass

class KnowledgeServiceError(APIClientError):
    """Raised when the knowledge service (Gemini) cannot answer."""
    pass

class MalformedReplyError(AppError):
    """Raised when a knowledge service reply cannot be decoded."""
    pass

class NotFoundError(AppError):
    """Raised when a requested entity does not exist upstream."""
    pass

class CollectionNotFoundError(NotFoundError):
    """Raised when the call sheet collection is missing from the store."""
    pass

class ProductionNotFoundError(NotFoundError):
    """Raised when no production item matches the requested id."""
    pass

class ConfigurationError(AppError):
    """Raised when configuration is invalid or missing."""
    pass

class ValidationError(AppError):
    """Raised when input validation fails."""
    pass
