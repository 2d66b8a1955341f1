class ServiceError(Exception):
    """Base class for errors raised by compass services."""


class ValidationError(ServiceError):
    """Raised when caller input fails validation."""


class NotFoundError(ServiceError):
    """Raised when a record the caller depends on does not exist."""


class ExternalDependencyError(ServiceError):
    """Raised when an external dependency (text generation) fails."""


class PlanParseFailure(ServiceError):
    """Raised by a single plan parse strategy; absorbed by the extraction cascade."""
