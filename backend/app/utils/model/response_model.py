"""
Unified Response Model

Provides standardized API response format for all endpoints.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field
from .response_code import ResponseCode


class BaseResponse(BaseModel):
    """Base response model for all API endpoints"""

    code: int = Field(200, description="API status code")
    message: str = Field("success", description="API status message")
    data: Optional[Any] = Field(None, description="API data")

    model_config = {
        "arbitrary_types_allowed": True,
        "json_schema_extra": {
            "example": {
                "code": 200,
                "message": "Success",
                "data": None
            }
        }
    }

    @classmethod
    def success(cls, data: Optional[Any] = None, message: str = None):
        """
        Create success response

        Args:
            data: Response data
            message: Custom success message

        Returns:
            BaseResponse with success status
        """
        if message is None:
            message = ResponseCode.get_message(ResponseCode.SUCCESS)
        return cls(code=ResponseCode.SUCCESS, message=message, data=data)

    @classmethod
    def error(cls, data: Optional[Any] = None, message: str = None, code: int = None):
        """
        Create error response

        Args:
            data: Response data
            message: Custom error message
            code: Error status code

        Returns:
            BaseResponse with error status
        """
        if code is None:
            code = ResponseCode.INTERNAL_SERVER_ERROR
        if message is None:
            message = ResponseCode.get_message(code)
        return cls(code=code, message=message, data=data)

    @classmethod
    def created(cls, data: Optional[Any] = None, message: str = None):
        """Create response for resource creation"""
        if message is None:
            message = ResponseCode.get_message(ResponseCode.CREATED)
        return cls(code=ResponseCode.CREATED, message=message, data=data)

    @classmethod
    def not_found(cls, data: Optional[Any] = None, message: str = None):
        """Create response for resource not found"""
        if message is None:
            message = ResponseCode.get_message(ResponseCode.NOT_FOUND)
        return cls(code=ResponseCode.NOT_FOUND, message=message, data=data)

    @classmethod
    def bad_request(cls, data: Optional[Any] = None, message: str = None):
        """Create response for bad request"""
        if message is None:
            message = ResponseCode.get_message(ResponseCode.BAD_REQUEST)
        return cls(code=ResponseCode.BAD_REQUEST, message=message, data=data)

    @classmethod
    def validation_error(cls, data: Optional[Any] = None, message: str = None):
        """Create response for request validation failure"""
        if message is None:
            message = "Validation failed"
        return cls(code=ResponseCode.BAD_REQUEST, message=message, data=data)


class ListResponse(BaseResponse):
    """Response model for list endpoints"""

    @classmethod
    def success(cls, items: List[Any], total: int = None, message: str = None):
        """
        Create success response for list data

        Args:
            items: List of items
            total: Total count, defaults to len(items)
            message: Custom message
        """
        if message is None:
            message = ResponseCode.get_message(ResponseCode.SUCCESS)

        data = {
            "items": items,
            "total": total if total is not None else len(items)
        }
        return cls(code=ResponseCode.SUCCESS, message=message, data=data)
