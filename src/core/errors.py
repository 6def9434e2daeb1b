from __future__ import annotations


class ContextGeneratorError(Exception):
    """Base error for the context generator."""


class ValidationError(ContextGeneratorError):
    """Raised when a source configuration or user input is invalid."""


class AccessDeniedError(ContextGeneratorError):
    """Raised when an operation tries to access data outside allowed scope."""


class ExternalServiceError(ContextGeneratorError):
    """Raised when an external service (GitHub/URL host) fails."""


class NotFoundError(ContextGeneratorError):
    """Raised when a requested resource is not found."""


class DiscoveryError(ContextGeneratorError):
    """Raised when local discovery cannot enumerate a source."""
