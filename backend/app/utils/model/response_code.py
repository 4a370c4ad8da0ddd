"""
Response Status Codes

Envelope codes mirror the HTTP status of the response.
"""


class ResponseCode:
    """Standard response status codes"""

    # Success codes (2xx)
    SUCCESS = 200
    CREATED = 201

    # Client error codes (4xx)
    BAD_REQUEST = 400
    NOT_FOUND = 404
    TOO_MANY_REQUESTS = 429

    # Server error codes (5xx)
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504

    @classmethod
    def get_message(cls, code: int) -> str:
        """Get default message for status code"""
        messages = {
            cls.SUCCESS: "Success",
            cls.CREATED: "Created successfully",

            cls.BAD_REQUEST: "Bad request",
            cls.NOT_FOUND: "Resource not found",
            cls.TOO_MANY_REQUESTS: "Too many requests",

            cls.INTERNAL_SERVER_ERROR: "Internal server error",
            cls.SERVICE_UNAVAILABLE: "Service unavailable",
            cls.GATEWAY_TIMEOUT: "Gateway timeout",
        }
        return messages.get(code, "Unknown error")
