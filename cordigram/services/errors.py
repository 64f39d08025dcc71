class ServiceError(Exception):
    """Base class for errors the API layer maps onto HTTP responses."""


class ValidationError(ServiceError):
    """Request was well-formed but rejected by a business rule (HTTP 400)."""


class NotFoundError(ServiceError):
    """Referenced profile or company does not exist (HTTP 404)."""
