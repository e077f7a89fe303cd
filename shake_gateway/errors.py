"""
Error taxonomy for the gateway.

Every error raised from a resolver is a GatewayError. Strawberry reports
str(error) as the GraphQL error message, and graphql-core copies
`extensions` onto the located error.
"""

from shake_gateway.enums import ErrorCode

GENERIC_FAILURE_MESSAGE = "request failed"


class GatewayError(Exception):
    code: ErrorCode = ErrorCode.BACKEND_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict[str, str]:
        return {"code": self.code.value}


class AuthMissingError(GatewayError):
    """Credential required by the operation is absent from the request"""
    code = ErrorCode.UNAUTHENTICATED

    def __init__(self, operation_name: str) -> None:
        super().__init__("Authorization header is missing")
        self.operation_name = operation_name


class BackendError(GatewayError):
    """Backend answered with a failure; message is the extracted reason only"""
    code = ErrorCode.BACKEND_ERROR

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class UnknownOperationError(GatewayError):
    """Operation is missing from the registry or disabled for this deployment"""
    code = ErrorCode.UNKNOWN_OPERATION

    def __init__(self, operation_name: str) -> None:
        super().__init__(f"Unknown operation: {operation_name}")
        self.operation_name = operation_name


class TransportError(GatewayError):
    """Backend unreachable or timed out"""
    code = ErrorCode.TRANSPORT_ERROR

    def __init__(self) -> None:
        super().__init__(GENERIC_FAILURE_MESSAGE)


class BrokerClosedError(GatewayError):
    code = ErrorCode.BROKER_CLOSED

    def __init__(self) -> None:
        super().__init__("Operation broker is closed")
