"""
Service Exceptions

Raised by services and translated to HTTP errors by the endpoints.
"""


class ServiceError(Exception):
    """Base exception for service errors (bad request)."""
    pass


class NotFoundError(ServiceError):
    """Entity not found."""
    pass


class PermissionDeniedError(ServiceError):
    """The current user may not modify this entity."""
    pass
