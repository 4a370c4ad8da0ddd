"""
Utilities Module

Common utilities, exceptions, and response models.
"""

from .exceptions import (
    BusinessException,
    ValidationException,
    NotFoundError,
    AIServiceError,
    register_exception_handlers,
)
from .model import (
    ResponseCode,
    BaseResponse,
    ListResponse,
)
from .validators import is_valid_uuid, parse_uuid

__all__ = [
    # Exceptions
    "BusinessException",
    "ValidationException",
    "NotFoundError",
    "AIServiceError",
    "register_exception_handlers",
    # Response models
    "ResponseCode",
    "BaseResponse",
    "ListResponse",
    # Validators
    "is_valid_uuid",
    "parse_uuid",
]
