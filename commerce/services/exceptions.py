# commerce/services/exceptions.py

class ServiceError(Exception):
    """Base class for service-layer errors."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class DomainValidationError(ServiceError):
    """Invalid domain input."""
    pass


class ResourceNotFoundError(ServiceError):
    """Referenced resource does not exist."""
    pass
