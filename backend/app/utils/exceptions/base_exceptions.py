"""
Business Exception Classes - Base Exception Definitions

Contains all business logic related exception types.
"""

from typing import Optional, Any


class BusinessException(Exception):
    """
    Business Logic Exception

    Used to handle exceptions in business logic. `code` is also the HTTP status.
    """

    def __init__(self, message: str, code: int = 400, data: Any = None):
        self.message = message
        self.code = code
        self.data = data
        super().__init__(self.message)


class ValidationException(BusinessException):
    """
    Data Validation Exception

    Raised for input the request models cannot reject on their own
    (malformed path identifiers, empty update sets).
    """

    def __init__(self, message: str = "Validation failed", errors: Any = None):
        self.errors = errors
        super().__init__(message=message, code=400, data={"details": errors} if errors else None)


class NotFoundError(BusinessException):
    """
    Resource Not Found Exception

    Used when a requested resource is not found or not owned by the caller.
    """

    def __init__(self, message: str = "Resource not found", resource_type: Optional[str] = None, resource_id: Optional[str] = None):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message=message, code=404)


class AIServiceError(BusinessException):
    """
    AI Provider Exception

    Carries the provider failure class; the HTTP status is derived from it.
    """

    STATUS_BY_TYPE = {
        "not_configured": 503,
        "rate_limited": 429,
        "timeout": 504,
    }

    def __init__(self, message: str, error_type: Optional[str] = None):
        self.error_type = error_type
        code = self.STATUS_BY_TYPE.get(error_type, 500)
        super().__init__(message=message, code=code, data={"error_type": error_type})
