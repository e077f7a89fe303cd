"""
Shared enum definitions for the shake gateway.
"""

from enum import Enum


class HttpMethod(Enum):
    """HTTP methods the backend accepts"""
    GET = "GET"
    POST = "POST"


class ErrorCode(Enum):
    """Stable error codes exposed in GraphQL error extensions"""
    UNAUTHENTICATED = "UNAUTHENTICATED"
    BACKEND_ERROR = "BACKEND_ERROR"
    UNKNOWN_OPERATION = "UNKNOWN_OPERATION"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    BROKER_CLOSED = "BROKER_CLOSED"
